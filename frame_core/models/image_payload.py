import base64
import binascii
import re

from pydantic import BaseModel, ConfigDict

from frame_core.errors import InvalidImagePayloadError

DATA_URI_PATTERN = re.compile(r"^data:(image/[a-zA-Z+]+);base64,(.+)$", re.DOTALL)


class ImagePayload(BaseModel):
    """Raw image bytes plus MIME type, as they cross the provider boundary."""
    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("utf-8")

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"

    @classmethod
    def from_data_uri(cls, uri: str) -> "ImagePayload":
        match = DATA_URI_PATTERN.match(uri)
        if not match:
            raise InvalidImagePayloadError("Invalid image format")
        try:
            data = base64.b64decode(match.group(2), validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidImagePayloadError("Invalid image format") from e
        return cls(data=data, mime_type=match.group(1))
