from frame_core.frame_generation.frame_prompts import build_frame_prompt
from frame_core.interfaces.frame_generator import IFrameGenerator
from frame_core.interfaces.image_model import IImageModel
from frame_core.models.brand_profile import BrandProfile
from frame_core.models.event_brief import DEFAULT_PHOTO_SIZE
from frame_core.models.image_payload import ImagePayload
from frame_core.resilience.retry import RetryPolicy, with_retry

FRAME_ASPECT_RATIO = "16:9"


class PromptedFrameGenerator(IFrameGenerator):
    def __init__(self, image_model: IImageModel, retry_policy: RetryPolicy | None = None) -> None:
        self._image_model = image_model
        self._retry_policy = retry_policy or RetryPolicy()

    async def generate(
        self,
        layout_description: str,
        brand_profile: BrandProfile,
        photo_size: str = DEFAULT_PHOTO_SIZE,
        has_logo: bool = False,
        event_title: str = ""
    ) -> ImagePayload:
        prompt = build_frame_prompt(
            layout_description=layout_description,
            brand_profile=brand_profile,
            photo_size=photo_size,
            has_logo=has_logo,
            event_title=event_title
        )
        return await with_retry(
            lambda: self._image_model.synthesize(prompt, aspect_ratio=FRAME_ASPECT_RATIO),
            policy=self._retry_policy
        )
