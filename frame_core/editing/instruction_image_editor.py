from frame_core.interfaces.image_editor import IImageEditor
from frame_core.interfaces.image_model import IImageModel
from frame_core.models.image_payload import ImagePayload
from frame_core.resilience.retry import RetryPolicy, with_retry


class InstructionImageEditor(IImageEditor):
    def __init__(self, image_model: IImageModel, retry_policy: RetryPolicy | None = None) -> None:
        self._image_model = image_model
        self._retry_policy = retry_policy or RetryPolicy()

    async def edit(self, image: ImagePayload, instruction: str) -> ImagePayload:
        return await with_retry(
            lambda: self._image_model.edit(image, instruction),
            policy=self._retry_policy
        )
