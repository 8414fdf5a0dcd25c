import json
from typing import Any, Dict

from langchain.chat_models import init_chat_model
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage
from pydantic import BaseModel

from langgraphs.types import LGModelSpec


def build_chat_model(model_spec: LGModelSpec) -> BaseChatModel:
    # params carry provider kwargs such as api_key / temperature
    return init_chat_model(
        model_spec["name"],
        model_provider=model_spec.get("provider"),
        **model_spec.get("params", {})
    )


def parse_json_payload(text: Any, default: Any) -> Any:
    """
    Lenient JSON parsing for model output: empty text, non-JSON text and
    ```json fenced blocks that still don't parse all give back `default`.
    """
    if not isinstance(text, str) or not text.strip():
        return default
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`")
        if cleaned.lower().startswith("json"):
            cleaned = cleaned[4:]
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        return default


def _message_text(message: Any) -> str:
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        # gemini can hand back a list of content blocks
        chunks = []
        for block in content:
            if isinstance(block, str):
                chunks.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                chunks.append(block.get("text", ""))
        return "".join(chunks)
    return ""


def extract_structured_payload(raw_response: Dict[str, Any], default: Any) -> Any:
    """
    Pull the structured answer out of a react agent's final state. Falls back
    to parsing the last AI message as JSON when no structured response exists.
    """
    structured = raw_response.get("structured_response")
    if isinstance(structured, BaseModel):
        return structured.model_dump()
    if structured is not None:
        return structured

    for message in reversed(raw_response.get("messages", [])):
        if isinstance(message, AIMessage):
            return parse_json_payload(_message_text(message), default)
    return default
