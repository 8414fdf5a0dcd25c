import argparse
import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from frame_core.models.edit_request import EditRequest
from frame_core.models.event_brief import DEFAULT_PHOTO_SIZE, EventBrief
from frame_core.models.pipeline_snapshot import PipelineSnapshot
from frame_core.models.run_status import RunStatus
from frame_core.session.eventframe_session import EventFrameSession
from frame_core.session.fs_frame_repository import FSFrameRepository
from frame_core.session.utils import make_run_dir, slugify
from systems.eventframe import build_session
from systems.settings import AppSettings

console = Console()

STAGE_LABELS = {
    RunStatus.RESEARCHING: "Researching Brand",
    RunStatus.IDEATING: "Generating Layouts",
    RunStatus.GENERATING: "Creating Images",
    RunStatus.DONE: "Done",
    RunStatus.ERROR: "Failed",
}


class ProgressPrinter:
    """Prints one line whenever the stage or the generated count changes."""

    def __init__(self) -> None:
        self._last: Optional[Tuple[RunStatus, int]] = None

    def __call__(self, snapshot: PipelineSnapshot) -> None:
        key = (snapshot.status, snapshot.generated_count)
        if key == self._last or snapshot.status not in STAGE_LABELS:
            return
        self._last = key

        label = STAGE_LABELS[snapshot.status]
        if snapshot.status == RunStatus.GENERATING:
            label += f" ({snapshot.generated_count}/{snapshot.total_concepts})"
        console.print(f"[bold magenta]>>[/] {label}")


def print_brand_profile(company_name: str, snapshot: PipelineSnapshot) -> None:
    profile = snapshot.brand_profile
    if profile is None:
        return
    table = Table(title=f"Brand Analysis: {company_name}", show_header=False)
    table.add_row("Industry", profile.industry)
    table.add_row("Personality", profile.personality)
    table.add_row("Target Audience", profile.target_audience)
    table.add_row("Colors", profile.colors_text())
    table.add_row("Design Style", profile.design_style)
    table.add_row("Typography", profile.typography)
    table.add_row("Marketing Tone", profile.marketing_tone)
    console.print(table)


async def run_single(
    session: EventFrameSession,
    brief: EventBrief,
    edits: List[EditRequest],
    output_root: Optional[str],
    logo_bytes: Optional[bytes],
) -> PipelineSnapshot:
    session.subscribe(ProgressPrinter())
    snapshot = await session.start_run(brief)

    if snapshot.status == RunStatus.ERROR:
        console.print(f"[bold red]Error:[/] {snapshot.error_message}")
        return snapshot

    print_brand_profile(brief.company_name, snapshot)
    for frame in snapshot.frames:
        console.print(f"[bold]Frame {frame.index}[/] {frame.title}: {frame.description}")

    for edit in edits:
        console.print(f"\n=== Editing frame {edit.frame_index}: {edit.instruction} ===")
        outcome = await session.apply_edit(edit)
        if not outcome.success:
            console.print(f"[yellow]{outcome.message}[/]")

    snapshot = session.snapshot()
    if output_root is not None:
        repo = FSFrameRepository()
        run_dir = make_run_dir(output_root, slugify(brief.company_name))
        saved = repo.save_snapshot(
            run_dir,
            snapshot,
            company_name=brief.company_name,
            logo_bytes=logo_bytes,
            event_title=brief.event_title
        )
        for index, path in sorted(saved.items()):
            console.print(f"Frame {index} -> {path}")
    return snapshot


def main():
    parser = argparse.ArgumentParser(description="Research a brand and generate branded event photo frames.")
    parser.add_argument("--company", type=str, required=True, help="Company name to research")
    parser.add_argument("--photo-size", type=str, default=DEFAULT_PHOTO_SIZE, help="Photo cutout size, e.g. 1440x700")
    parser.add_argument("--event-title", type=str, default="", help="Event title to place in the bottom border")
    parser.add_argument("--logo", type=Path, default=None, help="Logo image to place in the top tab")
    parser.add_argument("--output-root", type=str, default=None, help="Where exported frames are written")
    parser.add_argument("--no-export", action="store_true", help="Do not write frames to disk")
    parser.add_argument("--edit", nargs=2, action="append", default=[], metavar=("INDEX", "INSTRUCTION"),
                        help="Edit a frame after the run (repeatable)")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()
    if not args.company.strip():
        parser.error("--company must not be empty")
    edits = []
    for index, instruction in args.edit:
        if not index.isdigit():
            parser.error(f"--edit INDEX must be a non-negative integer, got '{index}'")
        edits.append(EditRequest(frame_index=int(index), instruction=instruction))

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)]
    )

    settings = AppSettings.from_env()
    session = build_session(settings)

    logo_bytes = args.logo.read_bytes() if args.logo else None
    brief = EventBrief(
        company_name=args.company,
        photo_size=args.photo_size,
        event_title=args.event_title,
        has_logo=logo_bytes is not None
    )
    output_root = None if args.no_export else (args.output_root or settings.output_root)

    snapshot = asyncio.run(run_single(
        session=session,
        brief=brief,
        edits=edits,
        output_root=output_root,
        logo_bytes=logo_bytes,
    ))
    if snapshot.status == RunStatus.ERROR:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
