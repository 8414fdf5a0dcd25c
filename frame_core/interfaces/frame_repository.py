from abc import ABC, abstractmethod
from typing import Dict, Optional

from frame_core.models.pipeline_snapshot import PipelineSnapshot


class IFrameRepository(ABC):
    @abstractmethod
    def init_layout(self, run_dir: str) -> None:
        ...

    @abstractmethod
    def save_snapshot(
        self,
        run_dir: str,
        snapshot: PipelineSnapshot,
        company_name: str,
        logo_bytes: Optional[bytes] = None,
        event_title: str = "",
    ) -> Dict[int, str]:
        ...
