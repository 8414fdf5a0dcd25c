from abc import ABC, abstractmethod

from frame_core.models.image_payload import ImagePayload


# Single remote round trip each; retrying is the caller's job.
class IImageModel(ABC):
    @abstractmethod
    async def synthesize(self, prompt: str, aspect_ratio: str = "16:9") -> ImagePayload:
        ...

    @abstractmethod
    async def edit(self, image: ImagePayload, instruction: str) -> ImagePayload:
        ...
