from abc import ABC, abstractmethod

from frame_core.models.brand_profile import BrandProfile
from frame_core.models.event_brief import DEFAULT_PHOTO_SIZE
from frame_core.models.image_payload import ImagePayload


class IFrameGenerator(ABC):
    @abstractmethod
    async def generate(
        self,
        layout_description: str,
        brand_profile: BrandProfile,
        photo_size: str = DEFAULT_PHOTO_SIZE,
        has_logo: bool = False,
        event_title: str = ""
    ) -> ImagePayload:
        ...
