import logging
from typing import cast

from pydantic import ValidationError

from frame_core.interfaces.brand_researcher import IBrandResearcher
from frame_core.langgraph_agents.utils import to_langgraph_spec
from frame_core.models.ai_model_spec import AIModelSpec
from frame_core.models.brand_profile import BrandProfile
from frame_core.resilience.retry import RetryPolicy, with_retry

from langgraphs.brand_research.brand_research_graph import (
    compile_graph as compile_brand_research_graph,
    BrandResearchState
)

logger = logging.getLogger(__name__)


class LGBrandResearcher(IBrandResearcher):
    def __init__(self, ai_model_spec: AIModelSpec, use_web_search: bool = False, retry_policy: RetryPolicy | None = None):
        self._ai_model_spec = ai_model_spec
        self._use_web_search = use_web_search
        self._retry_policy = retry_policy or RetryPolicy()
        self._graph = compile_brand_research_graph()

    async def research(self, company_name: str) -> BrandProfile:
        input_state: BrandResearchState = {
            "model_spec": to_langgraph_spec(self._ai_model_spec),
            "company_name": company_name,
            "use_web_search": self._use_web_search,
            "brand_profile": None
        }

        final_state = await with_retry(
            lambda: self._graph.ainvoke(input_state),
            policy=self._retry_policy
        )
        final_state = cast(BrandResearchState, final_state)

        # an empty/unparseable reply arrives here as {} and fails validation
        payload = final_state.get("brand_profile") or {}
        try:
            return BrandProfile.model_validate(payload)
        except ValidationError as e:
            logger.error("Brand research for '%s' returned an incomplete profile: %s", company_name, payload)
            raise ValueError(f"Brand research returned an incomplete brand profile for '{company_name}'") from e
