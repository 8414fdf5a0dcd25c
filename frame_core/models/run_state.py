from typing import List, Optional
from pydantic import BaseModel, PrivateAttr

from frame_core.models.brand_profile import BrandProfile
from frame_core.models.generated_frame import GeneratedFrame
from frame_core.models.image_payload import ImagePayload
from frame_core.models.layout_idea import LayoutIdea
from frame_core.models.pipeline_snapshot import PipelineSnapshot
from frame_core.models.run_status import RunStatus


# Every run-scoped update takes the run id it was issued for. Updates from a
# superseded run are dropped (return False) instead of touching the active run.
class RunState(BaseModel):
    _run_id: Optional[str] = PrivateAttr(default=None)
    _status: RunStatus = PrivateAttr(default=RunStatus.IDLE)
    _brand_profile: Optional[BrandProfile] = PrivateAttr(default=None)
    _layout_ideas: List[LayoutIdea] = PrivateAttr(default_factory=list)
    _frames: List[GeneratedFrame] = PrivateAttr(default_factory=list)
    _generated_count: int = PrivateAttr(default=0)
    _error_message: Optional[str] = PrivateAttr(default=None)
    _edit_in_flight: bool = PrivateAttr(default=False)

    # -- Transitions --
    def begin_run(self, run_id: str) -> None:
        self._run_id = run_id
        self._status = RunStatus.RESEARCHING
        self._brand_profile = None
        self._layout_ideas = []
        self._frames = []
        self._generated_count = 0
        self._error_message = None

    def complete_research(self, run_id: str, brand_profile: BrandProfile) -> bool:
        if not self.is_active_run(run_id):
            return False
        self._require_status(RunStatus.RESEARCHING)
        self._brand_profile = brand_profile
        self._status = RunStatus.IDEATING
        return True

    def complete_ideation(self, run_id: str, layout_ideas: List[LayoutIdea]) -> bool:
        if not self.is_active_run(run_id):
            return False
        self._require_status(RunStatus.IDEATING)
        self._layout_ideas = list(layout_ideas)
        self._status = RunStatus.GENERATING
        return True

    def complete_concept(self, run_id: str, frame: Optional[GeneratedFrame]) -> bool:
        """Records one concept attempt; `frame` is None when the attempt failed."""
        if not self.is_active_run(run_id):
            return False
        self._require_status(RunStatus.GENERATING)
        if frame is not None:
            frames = [f for f in self._frames if f.index != frame.index]
            frames.append(frame)
            frames.sort(key=lambda f: f.index)
            self._frames = frames
        self._generated_count += 1
        return True

    def complete_run(self, run_id: str) -> bool:
        if not self.is_active_run(run_id):
            return False
        self._require_status(RunStatus.GENERATING)
        self._status = RunStatus.DONE
        return True

    def fail_run(self, run_id: str, message: str) -> bool:
        if not self.is_active_run(run_id):
            return False
        if not self._status.in_progress:
            raise RuntimeError(f"cannot fail a run that is not in progress (status: {self._status.value})")
        self._error_message = message
        self._status = RunStatus.ERROR
        return True

    def begin_edit(self) -> bool:
        if self._edit_in_flight:
            return False
        self._edit_in_flight = True
        return True

    def finish_edit(self) -> None:
        self._edit_in_flight = False

    def complete_edit(self, run_id: str, frame_index: int, payload: ImagePayload) -> Optional[GeneratedFrame]:
        if not self.is_active_run(run_id):
            return None
        if self._status not in (RunStatus.DONE, RunStatus.ERROR):
            raise RuntimeError(f"edits are only applied to finished runs (status: {self._status.value})")
        for pos, frame in enumerate(self._frames):
            if frame.index == frame_index:
                edited = frame.with_image(payload)
                frames = list(self._frames)
                frames[pos] = edited
                self._frames = frames
                return edited.model_copy(deep=True)
        return None

    # -- Getters --
    def is_active_run(self, run_id: str) -> bool:
        return self._run_id is not None and self._run_id == run_id

    def get_run_id(self) -> Optional[str]:
        return self._run_id

    def get_status(self) -> RunStatus:
        return self._status

    def get_frame(self, frame_index: int) -> Optional[GeneratedFrame]:
        for frame in self._frames:
            if frame.index == frame_index:
                return frame.model_copy(deep=True)
        return None

    def snapshot(self) -> PipelineSnapshot:
        # deep copy for immutability
        return PipelineSnapshot(
            run_id=self._run_id,
            status=self._status,
            brand_profile=self._brand_profile,
            layout_ideas=list(self._layout_ideas),
            frames=[f.model_copy(deep=True) for f in self._frames],
            generated_count=self._generated_count,
            total_concepts=len(self._layout_ideas),
            error_message=self._error_message,
            edit_in_flight=self._edit_in_flight,
        )

    def _require_status(self, expected: RunStatus) -> None:
        if self._status != expected:
            raise RuntimeError(f"expected status '{expected.value}' but run is '{self._status.value}'")
