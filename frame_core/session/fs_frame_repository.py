from typing import Any, Dict, Optional
from pathlib import Path
from datetime import datetime
import json
import logging

from frame_core.compositing.frame_compositor import composite_frame
from frame_core.interfaces.frame_repository import IFrameRepository
from frame_core.models.pipeline_snapshot import PipelineSnapshot

logger = logging.getLogger(__name__)

MIME_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
}


class FSFrameRepository(IFrameRepository):
    def init_layout(self, run_dir: str) -> None:
        (Path(run_dir) / "frames").mkdir(parents=True, exist_ok=True)

    def save_snapshot(
        self,
        run_dir: str,
        snapshot: PipelineSnapshot,
        company_name: str,
        logo_bytes: Optional[bytes] = None,
        event_title: str = "",
    ) -> Dict[int, str]:
        """
        Writes brand profile, layout ideas and every frame image of a finished
        run. Returns frame index -> path of the image to show (the composited
        one when a logo or title was applied).
        """
        self.init_layout(run_dir)
        base = Path(run_dir)

        summary = {
            "company_name": company_name,
            "run_id": snapshot.run_id,
            "status": snapshot.status.value,
            "error_message": snapshot.error_message,
            "generated_count": snapshot.generated_count,
            "total_concepts": snapshot.total_concepts,
            "timestamp": datetime.now().isoformat(),
        }
        self._write_json(base / "run.json", summary)

        if snapshot.brand_profile is not None:
            self._write_json(base / "brand_profile.json", snapshot.brand_profile.model_dump(by_alias=True))
        self._write_json(base / "layout_ideas.json", [idea.model_dump() for idea in snapshot.layout_ideas])

        saved: Dict[int, str] = {}
        for frame in snapshot.frames:
            payload = frame.image_payload()
            ext = MIME_EXTENSIONS.get(payload.mime_type, "png")
            frame_path = base / "frames" / f"frame_{frame.index:02d}.{ext}"
            frame_path.write_bytes(payload.data)
            shown = frame_path

            if logo_bytes or event_title.strip():
                composited_path = base / "frames" / f"frame_{frame.index:02d}_composited.png"
                composited_path.write_bytes(composite_frame(payload.data, logo_bytes=logo_bytes, event_title=event_title))
                shown = composited_path

            self._append_jsonl(base / "frames.jsonl", {
                "index": frame.index,
                "title": frame.title,
                "description": frame.description,
                "mime_type": payload.mime_type,
                "image_path": str(frame_path),
                "display_path": str(shown),
            })
            saved[frame.index] = str(shown)

        logger.info("Saved %d frames to %s", len(saved), run_dir)
        return saved

    @staticmethod
    def _write_json(path: Path, data: Any) -> None:
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    @staticmethod
    def _append_jsonl(path: Path, entry: Dict[str, Any]) -> None:
        with path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")
