from typing import Optional
from pydantic import BaseModel

from frame_core.models.generated_frame import GeneratedFrame


class EditRequest(BaseModel):
    frame_index: int
    instruction: str


class EditOutcome(BaseModel):
    success: bool
    frame: Optional[GeneratedFrame] = None
    message: Optional[str] = None
