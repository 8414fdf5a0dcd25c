from typing import TypedDict, Dict, List, Any, Optional
from pydantic import BaseModel, Field
from rich import print

from langgraph.graph import StateGraph, START, END
from langgraph.prebuilt import create_react_agent

from langgraphs.layout_ideation import prompts
from langgraphs.types import LGModelSpec
from langgraphs.utils import build_chat_model, extract_structured_payload


class LayoutIdeaResponse(BaseModel):
    title: str = Field(description="Short name for the layout")
    description: str = Field(description="Full description of the layout")


class LayoutIdeasResponse(BaseModel):
    ideas: List[LayoutIdeaResponse] = Field(description="The layout ideas, in order")


class LayoutIdeationState(TypedDict):
    model_spec: LGModelSpec
    industry: str
    personality: str
    colors: List[str]
    num_ideas: int
    layout_ideas: Optional[List[Dict[str, Any]]]


def as_idea_list(payload: Any) -> List[Dict[str, Any]]:
    # structured output is wrapped in an object; a raw JSON reply may be a bare array
    if isinstance(payload, dict):
        payload = payload.get("ideas", [])
    if not isinstance(payload, list):
        return []
    return [idea for idea in payload if isinstance(idea, dict)]


async def generate_layout_ideas(state: LayoutIdeationState) -> Dict:
    ideator = create_react_agent(
        model=build_chat_model(state["model_spec"]),
        tools=[],
        prompt=prompts.create_layout_ideation_system_prompt(num_ideas=state["num_ideas"]),
        response_format=LayoutIdeasResponse
    )

    user_prompt = prompts.create_user_layout_ideation_prompt(
        industry=state["industry"],
        personality=state["personality"],
        colors=state["colors"],
        num_ideas=state["num_ideas"]
    )
    input = {"messages": [user_prompt]}

    print(f"\n\n==== Generating LAYOUT IDEAS. Prompt: ==== \n{user_prompt.content}\n")

    raw_response = await ideator.ainvoke(input)
    layout_ideas = as_idea_list(extract_structured_payload(raw_response, default=[]))
    print(f"\n\n==== {len(layout_ideas)} LAYOUT IDEAS ====\n")

    return {"layout_ideas": layout_ideas}


def compile_graph():
    builder = StateGraph(LayoutIdeationState)

    builder.add_node("generate_layout_ideas", generate_layout_ideas)

    builder.add_edge(START, "generate_layout_ideas")
    builder.add_edge("generate_layout_ideas", END)

    return builder.compile()
