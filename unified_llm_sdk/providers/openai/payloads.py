import json
from typing import Any, Dict, List, Optional

from ...models.generation import EmbeddingRequest
from ...models.messages import ChatRequest, ToolDeclaration


def build_tools(tools: Optional[List[ToolDeclaration]]) -> Optional[List[Dict[str, Any]]]:
    """Wrap tool declarations as Chat Completions function tools."""
    if not tools:
        return None
    return [
        {
            "type": "function",
            "function": {
                "name": tool.name,
                "description": tool.description,
                "parameters": tool.parameters,
            },
        }
        for tool in tools
    ]


def format_message(message: Any) -> Dict[str, Any]:
    """Translate one canonical message into a Chat Completions message."""
    if message.role == "tool":
        return {
            "role": "tool",
            "content": message.content,
            "tool_call_id": message.tool_call_id,
        }

    if message.role == "assistant" and message.tool_calls:
        return {
            "role": "assistant",
            # Chat Completions expects null content on pure tool-call turns
            "content": message.content or None,
            "tool_calls": [
                {
                    "id": call.id or call.name,
                    "type": "function",
                    "function": {
                        "name": call.name,
                        "arguments": json.dumps(call.arguments),
                    },
                }
                for call in message.tool_calls
            ],
        }

    return {"role": message.role, "content": message.content}


def build_chat_payload(request: ChatRequest) -> Dict[str, Any]:
    """Build keyword arguments for ``chat.completions.create``.

    Vendor options from ``request.options`` are merged last and may
    override anything built here.
    """
    payload: Dict[str, Any] = {
        "model": request.model,
        "messages": [format_message(message) for message in request.messages],
    }
    tools = build_tools(request.tools)
    if tools is not None:
        payload["tools"] = tools
    payload.update(request.options)
    return payload


def build_embeddings_payload(request: EmbeddingRequest) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "model": request.model,
        "input": request.input,
    }
    if request.dimensions is not None:
        payload["dimensions"] = request.dimensions
    return payload
