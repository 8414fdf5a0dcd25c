import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from frame_core.errors import (
    ConceptFailureError,
    EditFailureError,
    InvalidRunRequestError,
    StageFatalError,
)
from frame_core.interfaces.brand_researcher import IBrandResearcher
from frame_core.interfaces.frame_generator import IFrameGenerator
from frame_core.interfaces.image_editor import IImageEditor
from frame_core.interfaces.layout_ideator import ILayoutIdeator
from frame_core.models.brand_profile import BrandProfile
from frame_core.models.edit_request import EditOutcome, EditRequest
from frame_core.models.event_brief import EventBrief
from frame_core.models.generated_frame import GeneratedFrame
from frame_core.models.image_payload import ImagePayload
from frame_core.models.layout_idea import LayoutIdea
from frame_core.models.pipeline_snapshot import PipelineSnapshot
from frame_core.models.run_config import RunConfig
from frame_core.models.run_state import RunState
from frame_core.models.run_status import RunStatus

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[PipelineSnapshot], None]

FALLBACK_ERROR_MESSAGE = "An error occurred"


def _describe(error: BaseException) -> str:
    return str(error) or FALLBACK_ERROR_MESSAGE


class EventFrameSession:
    """
    Runs research -> ideation -> per-concept frame generation for one company
    at a time, and applies edits to finished frames.

    The session is the only writer of its RunState. Callers read snapshots
    (directly or through `subscribe`) and request runs/edits.
    """

    def __init__(
        self,
        researcher: IBrandResearcher,
        ideator: ILayoutIdeator,
        frame_generator: IFrameGenerator,
        image_editor: IImageEditor,
        run_config: Optional[RunConfig] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        # injected dependencies
        self._researcher = researcher
        self._ideator = ideator
        self._frame_generator = frame_generator
        self._image_editor = image_editor
        self._sleep = sleep

        # config / state
        self._cfg: RunConfig = run_config or RunConfig()
        self._state: RunState = RunState()
        self._listeners: List[SnapshotListener] = []
        self._next_run_seq = 1

    # -- Presentation-facing --
    def snapshot(self) -> PipelineSnapshot:
        return self._state.snapshot()

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def start_run(self, brief: EventBrief) -> PipelineSnapshot:
        company_name = brief.company_name.strip()
        if not company_name:
            raise InvalidRunRequestError("company name must not be empty")

        # the run is visible as RESEARCHING before anything is awaited
        run_id = self._new_run_id()
        self._state.begin_run(run_id)
        logger.info("Run %s started for '%s'", run_id, company_name)
        self._notify()

        try:
            # ==== RESEARCH ====
            brand_profile = await self._research(company_name)
            if not self._apply(self._state.complete_research(run_id, brand_profile), run_id):
                return self.snapshot()

            # ==== IDEATION ====
            layout_ideas = await self._ideate(brand_profile)
            if not self._apply(self._state.complete_ideation(run_id, layout_ideas), run_id):
                return self.snapshot()
        except StageFatalError as e:
            logger.error("Run %s failed during %s: %s", run_id, e.stage, e.message)
            self._apply(self._state.fail_run(run_id, e.message), run_id)
            return self.snapshot()

        # ==== FRAME GENERATION ====
        await self._generate_frames(run_id, brief, brand_profile, layout_ideas)

        if self._apply(self._state.complete_run(run_id), run_id):
            snapshot = self.snapshot()
            logger.info(
                "Run %s done: %d/%d frames generated",
                run_id, len(snapshot.frames), snapshot.total_concepts
            )
        return self.snapshot()

    async def edit_frame(self, frame_index: int, instruction: str) -> EditOutcome:
        instruction = instruction.strip()
        if not instruction:
            return EditOutcome(success=False, message="Edit instruction must not be empty")

        status = self._state.get_status()
        if status not in (RunStatus.DONE, RunStatus.ERROR):
            return EditOutcome(success=False, message=f"Edits are only available once the run has finished (status: {status.value})")

        frame = self._state.get_frame(frame_index)
        if frame is None:
            return EditOutcome(success=False, message=f"No frame at index {frame_index}")

        if not self._state.begin_edit():
            return EditOutcome(success=False, message="Another edit is already in progress")

        run_id = self._state.get_run_id()
        self._notify()
        try:
            edited_payload = await self._edit(frame, instruction)
        except EditFailureError as e:
            logger.error("Failed to edit frame %d: %s", frame_index, e.message)
            return EditOutcome(success=False, frame=frame, message=f"Failed to edit image: {e.message}")
        finally:
            self._state.finish_edit()
            self._notify()

        edited = self._state.complete_edit(run_id, frame_index, edited_payload)
        if edited is None:
            logger.debug("Dropping edit of frame %d from superseded run %s", frame_index, run_id)
            return EditOutcome(success=False, message="A new run was started while the edit was in progress")

        logger.info("Frame %d edited", frame_index)
        self._notify()
        return EditOutcome(success=True, frame=edited)

    async def apply_edit(self, request: EditRequest) -> EditOutcome:
        return await self.edit_frame(request.frame_index, request.instruction)

    # -- Stages --
    async def _research(self, company_name: str) -> BrandProfile:
        try:
            return await self._researcher.research(company_name)
        except Exception as e:
            raise StageFatalError("research", _describe(e)) from e

    async def _ideate(self, brand_profile: BrandProfile) -> List[LayoutIdea]:
        try:
            layout_ideas = await self._ideator.ideate(brand_profile)
        except Exception as e:
            raise StageFatalError("ideation", _describe(e)) from e

        if len(layout_ideas) != self._cfg.expected_concepts:
            logger.warning(
                "Ideation produced %d concepts (expected %d); generating all of them",
                len(layout_ideas), self._cfg.expected_concepts
            )
        return layout_ideas

    async def _generate_frames(
        self,
        run_id: str,
        brief: EventBrief,
        brand_profile: BrandProfile,
        layout_ideas: List[LayoutIdea],
    ) -> None:
        last_index = len(layout_ideas) - 1
        for index, idea in enumerate(layout_ideas):
            if not self._state.is_active_run(run_id):
                logger.debug("Run %s was superseded; skipping remaining concepts", run_id)
                return

            frame: Optional[GeneratedFrame] = None
            try:
                frame = await self._generate_concept(index, idea, brief, brand_profile)
            except ConceptFailureError as e:
                logger.error("Failed to generate image for concept %d: %s", e.index, e.message, exc_info=e.__cause__)

            self._apply(self._state.complete_concept(run_id, frame), run_id)

            # pacing between remote calls, not after the last one
            if index < last_index:
                await self._sleep(self._cfg.pacing_delay_seconds)

    async def _generate_concept(
        self,
        index: int,
        idea: LayoutIdea,
        brief: EventBrief,
        brand_profile: BrandProfile,
    ) -> GeneratedFrame:
        logger.info("Generating frame %d: %s", index, idea.title)
        try:
            payload = await self._frame_generator.generate(
                layout_description=idea.description,
                brand_profile=brand_profile,
                photo_size=brief.photo_size,
                has_logo=brief.has_logo,
                event_title=brief.event_title
            )
        except Exception as e:
            raise ConceptFailureError(index, _describe(e)) from e

        return GeneratedFrame(
            index=index,
            title=idea.title,
            description=idea.description,
            image_uri=payload.to_data_uri()
        )

    async def _edit(self, frame: GeneratedFrame, instruction: str) -> ImagePayload:
        try:
            return await self._image_editor.edit(frame.image_payload(), instruction)
        except Exception as e:
            raise EditFailureError(frame.index, _describe(e)) from e

    # -- Internals --
    def _apply(self, changed: bool, run_id: str) -> bool:
        if changed:
            self._notify()
        else:
            logger.debug("Dropping update from superseded run %s", run_id)
        return changed

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self._state.snapshot()
        # a failing listener must not cut a state transition short
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Snapshot listener failed")

    def _new_run_id(self) -> str:
        run_id = f"run_{self._next_run_seq:03d}"
        self._next_run_seq += 1
        return run_id
