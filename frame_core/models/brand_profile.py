from typing import List
from pydantic import BaseModel, ConfigDict, Field


class BrandProfile(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    industry: str
    personality: str
    target_audience: str = Field(alias="targetAudience")
    colors: List[str]
    design_style: str = Field(alias="designStyle")
    typography: str
    marketing_tone: str = Field(alias="marketingTone")

    def colors_text(self) -> str:
        return ", ".join(self.colors)
