import logging
from typing import List, cast

from pydantic import ValidationError

from frame_core.interfaces.layout_ideator import ILayoutIdeator
from frame_core.langgraph_agents.utils import to_langgraph_spec
from frame_core.models.ai_model_spec import AIModelSpec
from frame_core.models.brand_profile import BrandProfile
from frame_core.models.layout_idea import LayoutIdea
from frame_core.resilience.retry import RetryPolicy, with_retry

from langgraphs.layout_ideation.layout_ideation_graph import (
    compile_graph as compile_layout_ideation_graph,
    LayoutIdeationState
)

logger = logging.getLogger(__name__)


class LGLayoutIdeator(ILayoutIdeator):
    def __init__(self, ai_model_spec: AIModelSpec, num_ideas: int = 3, retry_policy: RetryPolicy | None = None):
        self._ai_model_spec = ai_model_spec
        self._num_ideas = num_ideas
        self._retry_policy = retry_policy or RetryPolicy()
        self._graph = compile_layout_ideation_graph()

    async def ideate(self, brand_profile: BrandProfile) -> List[LayoutIdea]:
        input_state: LayoutIdeationState = {
            "model_spec": to_langgraph_spec(self._ai_model_spec),
            "industry": brand_profile.industry,
            "personality": brand_profile.personality,
            "colors": list(brand_profile.colors),
            "num_ideas": self._num_ideas,
            "layout_ideas": None
        }

        final_state = await with_retry(
            lambda: self._graph.ainvoke(input_state),
            policy=self._retry_policy
        )
        final_state = cast(LayoutIdeationState, final_state)

        raw_ideas = final_state.get("layout_ideas") or []
        try:
            ideas = [LayoutIdea.model_validate(idea) for idea in raw_ideas]
        except ValidationError as e:
            raise ValueError("Layout ideation returned a malformed layout idea") from e

        # the count is a request to the model, not something we can enforce
        if len(ideas) != self._num_ideas:
            logger.warning("Expected %d layout ideas but received %d", self._num_ideas, len(ideas))
        return ideas
