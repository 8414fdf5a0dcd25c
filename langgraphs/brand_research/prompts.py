from langchain_core.messages import HumanMessage


def create_brand_research_system_prompt(use_web_search: bool) -> str:
    prompt = """**ROLE**
You are a branding expert. Your job is to build an accurate, concise profile of a company's brand identity, which will later be used by a designer to create branded event photo frames.

**WHAT TO PRODUCE**
For the company you are given, provide:
- Industry
- Brand personality
- Target audience
- Main brand colors (provide specific hex codes or color names)
- Design style patterns
- Typography style
- Marketing tone

**GUIDANCE**
- Prefer the company's real, current brand guidelines over guesses.
- Colors MUST be a list of individual colors, each a hex code (e.g. #635BFF) or a plain color name.
- Keep every text field to one or two sentences.
"""
    if use_web_search:
        prompt += """
**RESEARCH**
- Search the web for the most accurate and up-to-date information about the company before answering.
"""
    prompt += """
Return your answer in the structured JSON schema you are provided."""
    return prompt


def create_user_brand_research_prompt(company_name: str) -> HumanMessage:
    return HumanMessage(content=f"""Research the brand identity of the company: {company_name}.

Return in structured JSON.""")
