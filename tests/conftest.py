"""Shared fakes and fixtures for the event frame pipeline tests.

Every remote-facing interface has an in-memory fake here; no test touches the
network.
"""

import asyncio
import io
from typing import Dict, List, Optional, Set

import pytest
from PIL import Image

from frame_core.errors import NoImageProducedError
from frame_core.interfaces.brand_researcher import IBrandResearcher
from frame_core.interfaces.frame_generator import IFrameGenerator
from frame_core.interfaces.image_editor import IImageEditor
from frame_core.interfaces.image_model import IImageModel
from frame_core.interfaces.layout_ideator import ILayoutIdeator
from frame_core.models.brand_profile import BrandProfile
from frame_core.models.image_payload import ImagePayload
from frame_core.models.layout_idea import LayoutIdea
from frame_core.models.run_config import RunConfig
from frame_core.session.eventframe_session import EventFrameSession


class RateLimitError(Exception):
    """Looks like a provider 429 to the retry predicate."""

    def __init__(self, message: str = "429 Too Many Requests"):
        super().__init__(message)
        self.code = 429


def make_brand_profile(industry: str = "Payments") -> BrandProfile:
    return BrandProfile(
        industry=industry,
        personality="Confident, precise",
        targetAudience="Developers and finance teams",
        colors=["#635BFF", "#0A2540", "white"],
        designStyle="Clean gradients",
        typography="Geometric sans-serif",
        marketingTone="Technical and optimistic",
    )


def make_layout_ideas(count: int = 3) -> List[LayoutIdea]:
    return [LayoutIdea(title=f"Layout {i}", description=f"desc {i}") for i in range(count)]


def frame_payload(label: str) -> ImagePayload:
    return ImagePayload(data=f"image:{label}".encode(), mime_type="image/png")


class EventLog:
    def __init__(self) -> None:
        self.events: List[str] = []


class RecordingSleep:
    def __init__(self, log: Optional[EventLog] = None) -> None:
        self.delays: List[float] = []
        self._log = log

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        if self._log is not None:
            self._log.events.append(f"sleep:{delay}")


class FakeResearcher(IBrandResearcher):
    def __init__(self, profile: Optional[BrandProfile] = None, error: Optional[Exception] = None) -> None:
        self.profile = profile or make_brand_profile()
        self.error = error
        self.calls: List[str] = []
        self.gates: Dict[str, asyncio.Event] = {}
        self.profiles: Dict[str, BrandProfile] = {}
        self.on_call = None

    async def research(self, company_name: str) -> BrandProfile:
        self.calls.append(company_name)
        if self.on_call is not None:
            self.on_call(company_name)
        gate = self.gates.get(company_name)
        if gate is not None:
            await gate.wait()
        if self.error is not None:
            raise self.error
        return self.profiles.get(company_name, self.profile)


class FakeIdeator(ILayoutIdeator):
    def __init__(self, ideas: Optional[List[LayoutIdea]] = None, error: Optional[Exception] = None) -> None:
        self.ideas = make_layout_ideas() if ideas is None else ideas
        self.error = error
        self.calls: List[BrandProfile] = []

    async def ideate(self, brand_profile: BrandProfile) -> List[LayoutIdea]:
        self.calls.append(brand_profile)
        if self.error is not None:
            raise self.error
        return list(self.ideas)


class FakeFrameGenerator(IFrameGenerator):
    def __init__(self, log: Optional[EventLog] = None, failing: Optional[Set[str]] = None) -> None:
        self.log = log or EventLog()
        self.failing = failing or set()
        self.calls: List[dict] = []
        # one-shot holds keyed by layout description
        self.gates: Dict[str, asyncio.Event] = {}

    async def generate(
        self,
        layout_description: str,
        brand_profile: BrandProfile,
        photo_size: str = "1440x700",
        has_logo: bool = False,
        event_title: str = ""
    ) -> ImagePayload:
        self.calls.append({
            "layout_description": layout_description,
            "photo_size": photo_size,
            "has_logo": has_logo,
            "event_title": event_title,
            "industry": brand_profile.industry,
        })
        self.log.events.append(f"generate:{layout_description}")
        gate = self.gates.pop(layout_description, None)
        if gate is not None:
            await gate.wait()
        if layout_description in self.failing:
            raise NoImageProducedError("No image generated")
        return frame_payload(layout_description)


class FakeImageEditor(IImageEditor):
    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.calls: List[tuple] = []
        self.gate: Optional[asyncio.Event] = None

    async def edit(self, image: ImagePayload, instruction: str) -> ImagePayload:
        self.calls.append((image, instruction))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return ImagePayload(data=image.data + b"|" + instruction.encode(), mime_type="image/jpeg")


class FakeImageModel(IImageModel):
    """Fails with queued errors first, then returns a fixed payload."""

    def __init__(self, errors: Optional[List[Exception]] = None) -> None:
        self.errors = list(errors or [])
        self.synthesize_calls: List[tuple] = []
        self.edit_calls: List[tuple] = []

    async def synthesize(self, prompt: str, aspect_ratio: str = "16:9") -> ImagePayload:
        self.synthesize_calls.append((prompt, aspect_ratio))
        if self.errors:
            raise self.errors.pop(0)
        return frame_payload("synth")

    async def edit(self, image: ImagePayload, instruction: str) -> ImagePayload:
        self.edit_calls.append((image, instruction))
        if self.errors:
            raise self.errors.pop(0)
        return frame_payload("edited")


@pytest.fixture
def event_log():
    return EventLog()


@pytest.fixture
def recording_sleep(event_log):
    return RecordingSleep(event_log)


@pytest.fixture
def researcher():
    return FakeResearcher()


@pytest.fixture
def ideator():
    return FakeIdeator()


@pytest.fixture
def frame_generator(event_log):
    return FakeFrameGenerator(log=event_log)


@pytest.fixture
def image_editor():
    return FakeImageEditor()


@pytest.fixture
def session(researcher, ideator, frame_generator, image_editor, recording_sleep):
    return EventFrameSession(
        researcher=researcher,
        ideator=ideator,
        frame_generator=frame_generator,
        image_editor=image_editor,
        run_config=RunConfig(),
        sleep=recording_sleep,
    )


@pytest.fixture
def png_bytes():
    def _make(size=(320, 180), color=(10, 37, 64)) -> bytes:
        buf = io.BytesIO()
        Image.new("RGB", size, color=color).save(buf, format="PNG")
        return buf.getvalue()
    return _make
