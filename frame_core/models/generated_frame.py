from pydantic import BaseModel

from frame_core.models.image_payload import ImagePayload


class GeneratedFrame(BaseModel):
    index: int
    title: str
    description: str
    image_uri: str

    def image_payload(self) -> ImagePayload:
        return ImagePayload.from_data_uri(self.image_uri)

    def with_image(self, payload: ImagePayload) -> "GeneratedFrame":
        # index/title/description are carried over untouched
        return self.model_copy(update={"image_uri": payload.to_data_uri()})
