from abc import ABC, abstractmethod

from frame_core.models.brand_profile import BrandProfile


class IBrandResearcher(ABC):
    @abstractmethod
    async def research(self, company_name: str) -> BrandProfile:
        ...
