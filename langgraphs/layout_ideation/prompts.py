from typing import List

from langchain_core.messages import HumanMessage

IDEATION_IMAGE_SIZE = "1920x1080"


def create_layout_ideation_system_prompt(num_ideas: int) -> str:
    return f"""**ROLE**
You are a professional graphic designer who specialises in event photo booth frames.

**TASK**
Given a brand profile, create {num_ideas} different photo layout ideas for an event frame.
Each idea has a short title and a description. Describe each layout clearly, including:
- Background style
- Text placement
- Image placement
- Color usage
- Mood

**GUARDRAILS**
- Every layout keeps a large empty area in the middle for the guest's photo; decoration belongs in the borders.
- The {num_ideas} ideas MUST be clearly different from each other.
- Output EXACTLY {num_ideas} ideas, in the structured JSON schema you are provided."""


def create_user_layout_ideation_prompt(
    industry: str,
    personality: str,
    colors: List[str],
    num_ideas: int,
) -> HumanMessage:
    return HumanMessage(content=f"""Based on:
Industry: {industry}
Personality: {personality}
Colors: {', '.join(colors)}
Image size: {IDEATION_IMAGE_SIZE}

Create {num_ideas} different photo layout ideas for an event frame.

Return as a JSON array of objects.""")
