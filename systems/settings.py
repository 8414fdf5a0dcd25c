import os
from typing import Mapping, Optional

from dotenv import load_dotenv, find_dotenv
from pydantic import BaseModel

from frame_core.adapters.gemini_image_adapter import DEFAULT_IMAGE_MODEL
from frame_core.models.ai_model_spec import AIModelSpec
from frame_core.models.run_config import RunConfig
from frame_core.resilience.retry import RetryPolicy

DEFAULT_TEXT_MODEL = "google_genai:gemini-3-flash-preview"
DEFAULT_OUTPUT_ROOT = "./eventframe_results"


class AppSettings(BaseModel):
    gemini_api_key: str
    brand_research_model: str = DEFAULT_TEXT_MODEL
    layout_ideation_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    use_web_search: bool = False
    max_retries: int = 3
    pacing_delay_seconds: float = 2.0
    output_root: str = DEFAULT_OUTPUT_ROOT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppSettings":
        if environ is None:
            load_dotenv(find_dotenv())
            environ = os.environ

        api_key = environ.get("GEMINI_API_KEY")
        if not api_key:
            raise RuntimeError("environment variable 'GEMINI_API_KEY' is not set")

        return cls(
            gemini_api_key=api_key,
            brand_research_model=environ.get("BRAND_RESEARCH_LLM_MODEL") or DEFAULT_TEXT_MODEL,
            layout_ideation_model=environ.get("LAYOUT_IDEATION_LLM_MODEL") or DEFAULT_TEXT_MODEL,
            image_model=environ.get("FRAME_IMAGE_MODEL") or DEFAULT_IMAGE_MODEL,
            # the Tavily tool reads TAVILY_API_KEY itself
            use_web_search=bool(environ.get("TAVILY_API_KEY")),
            max_retries=int(environ.get("EVENTFRAME_MAX_RETRIES") or 3),
            pacing_delay_seconds=float(environ.get("EVENTFRAME_PACING_SECONDS") or 2.0),
            output_root=environ.get("EVENTFRAME_OUTPUT_ROOT") or DEFAULT_OUTPUT_ROOT,
        )

    def text_model_spec(self, model_str: str) -> AIModelSpec:
        spec = AIModelSpec.parse(model_str)
        # one key for the whole provider; other providers bring their own env vars
        if spec.provider == "google_genai":
            spec.params = {**spec.params, "api_key": self.gemini_api_key}
        return spec

    def run_config(self) -> RunConfig:
        return RunConfig(
            pacing_delay_seconds=self.pacing_delay_seconds,
            retry_policy=RetryPolicy(max_retries=self.max_retries)
        )
