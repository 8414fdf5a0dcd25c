from abc import ABC, abstractmethod
from typing import List

from frame_core.models.brand_profile import BrandProfile
from frame_core.models.layout_idea import LayoutIdea


class ILayoutIdeator(ABC):
    @abstractmethod
    async def ideate(self, brand_profile: BrandProfile) -> List[LayoutIdea]:
        ...
