from pydantic import BaseModel, Field

from frame_core.resilience.retry import RetryPolicy


class RunConfig(BaseModel):
    pacing_delay_seconds: float = 2.0
    expected_concepts: int = 3
    retry_policy: RetryPolicy = Field(default_factory=RetryPolicy)
