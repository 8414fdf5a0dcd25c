from pydantic import BaseModel

DEFAULT_PHOTO_SIZE = "1440x700"


class EventBrief(BaseModel):
    company_name: str
    photo_size: str = DEFAULT_PHOTO_SIZE
    event_title: str = ""
    has_logo: bool = False
