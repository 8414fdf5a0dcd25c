from typing import List, Optional
from pydantic import BaseModel

from frame_core.models.brand_profile import BrandProfile
from frame_core.models.generated_frame import GeneratedFrame
from frame_core.models.layout_idea import LayoutIdea
from frame_core.models.run_status import RunStatus


class PipelineSnapshot(BaseModel):
    run_id: Optional[str]
    status: RunStatus
    brand_profile: Optional[BrandProfile]
    layout_ideas: List[LayoutIdea]
    frames: List[GeneratedFrame]
    generated_count: int
    total_concepts: int
    error_message: Optional[str]
    edit_in_flight: bool
