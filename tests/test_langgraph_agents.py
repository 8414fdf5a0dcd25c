"""Tests for the LangGraph-backed researcher and ideator.

The compiled graphs are swapped for a stub so no model is ever called.
"""

import logging
from typing import Any, Dict, List, Optional

import pytest
from langchain_core.messages import AIMessage, HumanMessage

from frame_core.langgraph_agents.lg_brand_researcher import LGBrandResearcher
from frame_core.langgraph_agents.lg_layout_ideator import LGLayoutIdeator
from frame_core.models.ai_model_spec import AIModelSpec
from frame_core.models.layout_idea import LayoutIdea
from frame_core.resilience.retry import RetryPolicy
from langgraphs.brand_research.brand_research_graph import BrandProfileResponse
from langgraphs.layout_ideation.layout_ideation_graph import as_idea_list
from langgraphs.utils import extract_structured_payload, parse_json_payload

from conftest import RateLimitError, make_brand_profile

FAST_RETRY = RetryPolicy(max_retries=2, backoff_base=0.0, max_jitter=0.0)
MODEL = AIModelSpec(provider="google_genai", name="gemini-3-flash-preview", params={"api_key": "test"})


class StubGraph:
    def __init__(self, final_state: Dict[str, Any], errors: Optional[List[Exception]] = None):
        self.final_state = final_state
        self.errors = list(errors or [])
        self.inputs: List[Dict[str, Any]] = []

    async def ainvoke(self, input_state):
        self.inputs.append(input_state)
        if self.errors:
            raise self.errors.pop(0)
        return {**input_state, **self.final_state}


class TestPayloadParsing:
    @pytest.mark.unit
    def test_parse_json_payload(self):
        assert parse_json_payload('{"industry": "Payments"}', default={}) == {"industry": "Payments"}
        assert parse_json_payload('```json\n[{"title": "A"}]\n```', default=[]) == [{"title": "A"}]
        assert parse_json_payload("", default={}) == {}
        assert parse_json_payload("not json at all", default={}) == {}
        assert parse_json_payload(None, default=[]) == []

    @pytest.mark.unit
    def test_structured_response_preferred(self):
        structured = BrandProfileResponse(
            industry="Payments",
            personality="Precise",
            target_audience="Developers",
            colors=["#635BFF"],
            design_style="Gradients",
            typography="Sans",
            marketing_tone="Optimistic"
        )
        raw = {"structured_response": structured, "messages": [AIMessage(content="ignored")]}
        assert extract_structured_payload(raw, default={})["target_audience"] == "Developers"

    @pytest.mark.unit
    def test_falls_back_to_last_ai_message(self):
        raw = {"messages": [
            HumanMessage(content="Analyze Stripe"),
            AIMessage(content='```json\n{"industry": "Payments"}\n```'),
        ]}
        assert extract_structured_payload(raw, default={}) == {"industry": "Payments"}
        assert extract_structured_payload({"messages": [AIMessage(content="")]}, default={}) == {}
        assert extract_structured_payload({}, default=[]) == []

    @pytest.mark.unit
    def test_idea_list_shapes(self):
        ideas = [{"title": "A", "description": "a"}]
        assert as_idea_list({"ideas": ideas}) == ideas
        assert as_idea_list(ideas + ["junk"]) == ideas
        assert as_idea_list({}) == []
        assert as_idea_list("nope") == []


class TestLGBrandResearcher:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_snake_case_profile(self):
        researcher = LGBrandResearcher(MODEL, retry_policy=FAST_RETRY)
        expected = make_brand_profile()
        researcher._graph = StubGraph({"brand_profile": expected.model_dump()})

        profile = await researcher.research("Stripe")

        assert profile == expected
        sent = researcher._graph.inputs[0]
        assert sent["company_name"] == "Stripe"
        assert sent["use_web_search"] is False
        assert sent["model_spec"] == {"name": "gemini-3-flash-preview", "provider": "google_genai", "params": {"api_key": "test"}}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_camel_case_profile(self):
        researcher = LGBrandResearcher(MODEL, retry_policy=FAST_RETRY)
        researcher._graph = StubGraph({"brand_profile": make_brand_profile().model_dump(by_alias=True)})

        profile = await researcher.research("Stripe")
        assert profile.target_audience == "Developers and finance teams"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_empty_reply_is_an_error(self):
        researcher = LGBrandResearcher(MODEL, retry_policy=FAST_RETRY)
        researcher._graph = StubGraph({"brand_profile": {}})

        with pytest.raises(ValueError, match="incomplete brand profile for 'Stripe'"):
            await researcher.research("Stripe")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_rate_limit_retried(self):
        researcher = LGBrandResearcher(MODEL, retry_policy=FAST_RETRY)
        researcher._graph = StubGraph(
            {"brand_profile": make_brand_profile().model_dump()},
            errors=[RateLimitError(), RateLimitError()]
        )

        await researcher.research("Stripe")
        assert len(researcher._graph.inputs) == 3

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_rate_limit_budget_exhausted(self):
        researcher = LGBrandResearcher(MODEL, retry_policy=FAST_RETRY)
        researcher._graph = StubGraph({}, errors=[RateLimitError() for _ in range(3)])

        with pytest.raises(RateLimitError):
            await researcher.research("Stripe")
        assert len(researcher._graph.inputs) == 3


class TestLGLayoutIdeator:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_ideas_in_order(self):
        ideator = LGLayoutIdeator(MODEL, retry_policy=FAST_RETRY)
        raw = [{"title": f"Idea {i}", "description": f"layout {i}"} for i in range(3)]
        ideator._graph = StubGraph({"layout_ideas": raw})

        ideas = await ideator.ideate(make_brand_profile())

        assert ideas == [LayoutIdea(title=f"Idea {i}", description=f"layout {i}") for i in range(3)]
        sent = ideator._graph.inputs[0]
        assert sent["industry"] == "Payments"
        assert sent["colors"] == ["#635BFF", "#0A2540", "white"]
        assert sent["num_ideas"] == 3

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_count_mismatch_only_warns(self, caplog):
        ideator = LGLayoutIdeator(MODEL, num_ideas=3, retry_policy=FAST_RETRY)
        ideator._graph = StubGraph({"layout_ideas": [{"title": "Only", "description": "one"}]})

        with caplog.at_level(logging.WARNING):
            ideas = await ideator.ideate(make_brand_profile())

        assert len(ideas) == 1
        assert "Expected 3 layout ideas but received 1" in caplog.text

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_malformed_idea(self):
        ideator = LGLayoutIdeator(MODEL, retry_policy=FAST_RETRY)
        ideator._graph = StubGraph({"layout_ideas": [{"title": "No description"}]})

        with pytest.raises(ValueError, match="malformed layout idea"):
            await ideator.ideate(make_brand_profile())
