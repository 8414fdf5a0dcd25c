from abc import ABC, abstractmethod

from frame_core.models.image_payload import ImagePayload


class IImageEditor(ABC):
    @abstractmethod
    async def edit(self, image: ImagePayload, instruction: str) -> ImagePayload:
        ...
