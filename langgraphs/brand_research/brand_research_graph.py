from typing import TypedDict, Dict, List, Any, Optional
from pydantic import BaseModel, Field
from rich import print

from langgraph.graph import StateGraph, START, END
from langgraph.prebuilt import create_react_agent
from langchain_tavily import TavilySearch

from langgraphs.brand_research import prompts
from langgraphs.types import LGModelSpec
from langgraphs.utils import build_chat_model, extract_structured_payload

WEB_SEARCH_MAX_RESULTS = 5


class BrandProfileResponse(BaseModel):
    industry: str = Field(description="The industry the company operates in")
    personality: str = Field(description="The brand personality")
    target_audience: str = Field(description="Who the brand speaks to")
    colors: List[str] = Field(description="Main brand colors, each a hex code or color name")
    design_style: str = Field(description="Recurring design style patterns")
    typography: str = Field(description="Typography style")
    marketing_tone: str = Field(description="Marketing tone of voice")


class BrandResearchState(TypedDict):
    model_spec: LGModelSpec
    company_name: str
    use_web_search: bool
    brand_profile: Optional[Dict[str, Any]]


async def research_brand(state: BrandResearchState) -> Dict:
    tools = [TavilySearch(max_results=WEB_SEARCH_MAX_RESULTS)] if state["use_web_search"] else []
    researcher = create_react_agent(
        model=build_chat_model(state["model_spec"]),
        tools=tools,
        prompt=prompts.create_brand_research_system_prompt(use_web_search=state["use_web_search"]),
        response_format=BrandProfileResponse
    )

    user_prompt = prompts.create_user_brand_research_prompt(state["company_name"])
    input = {"messages": [user_prompt]}

    print(f"\n\n==== Researching BRAND for: {state['company_name']} ====\n")

    raw_response = await researcher.ainvoke(input)
    brand_profile = extract_structured_payload(raw_response, default={})
    print(f"\n==== BRAND PROFILE: ====\n{brand_profile}\n")

    return {"brand_profile": brand_profile}


def compile_graph():
    builder = StateGraph(BrandResearchState)

    builder.add_node("research_brand", research_brand)

    builder.add_edge(START, "research_brand")
    builder.add_edge("research_brand", END)

    return builder.compile()
