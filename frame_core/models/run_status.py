from enum import Enum


class RunStatus(str, Enum):
    IDLE = "idle"
    RESEARCHING = "researching"
    IDEATING = "ideating"
    GENERATING = "generating"
    DONE = "done"
    ERROR = "error"

    @property
    def in_progress(self) -> bool:
        return self in (RunStatus.RESEARCHING, RunStatus.IDEATING, RunStatus.GENERATING)
