from frame_core.adapters.gemini_image_adapter import GeminiImageAdapter
from frame_core.editing.instruction_image_editor import InstructionImageEditor
from frame_core.frame_generation.prompted_frame_generator import PromptedFrameGenerator
from frame_core.interfaces.brand_researcher import IBrandResearcher
from frame_core.interfaces.frame_generator import IFrameGenerator
from frame_core.interfaces.image_editor import IImageEditor
from frame_core.interfaces.image_model import IImageModel
from frame_core.interfaces.layout_ideator import ILayoutIdeator
from frame_core.langgraph_agents.lg_brand_researcher import LGBrandResearcher
from frame_core.langgraph_agents.lg_layout_ideator import LGLayoutIdeator
from frame_core.models.run_config import RunConfig
from frame_core.session.eventframe_session import EventFrameSession
from systems.settings import AppSettings


def build_session(settings: AppSettings) -> EventFrameSession:
    run_config: RunConfig = settings.run_config()
    retry_policy = run_config.retry_policy

    # Research & ideation
    researcher: IBrandResearcher = LGBrandResearcher(
        settings.text_model_spec(settings.brand_research_model),
        use_web_search=settings.use_web_search,
        retry_policy=retry_policy
    )
    ideator: ILayoutIdeator = LGLayoutIdeator(
        settings.text_model_spec(settings.layout_ideation_model),
        num_ideas=run_config.expected_concepts,
        retry_policy=retry_policy
    )

    # Image synthesis & editing share one client
    image_model: IImageModel = GeminiImageAdapter(api_key=settings.gemini_api_key, model=settings.image_model)
    frame_generator: IFrameGenerator = PromptedFrameGenerator(image_model, retry_policy=retry_policy)
    image_editor: IImageEditor = InstructionImageEditor(image_model, retry_policy=retry_policy)

    return EventFrameSession(
        researcher=researcher,
        ideator=ideator,
        frame_generator=frame_generator,
        image_editor=image_editor,
        run_config=run_config
    )
