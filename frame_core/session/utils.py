from datetime import datetime, timezone
from pathlib import Path


def make_run_dir(results_root: str, run_name: str | None) -> str:
    root = Path(results_root)
    root.mkdir(parents=True, exist_ok=True)
    base = run_name or f"run_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}"
    run_dir = root / base
    i = 1
    while run_dir.exists():
        run_dir = root / f"{base}_{i:02d}"
        i += 1
    return str(run_dir)


def slugify(text: str) -> str:
    slug = "".join(ch.lower() if ch.isalnum() else "-" for ch in text)
    while "--" in slug:
        slug = slug.replace("--", "-")
    return slug.strip("-") or "company"
