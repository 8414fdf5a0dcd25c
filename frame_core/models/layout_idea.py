from pydantic import BaseModel, ConfigDict


class LayoutIdea(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
