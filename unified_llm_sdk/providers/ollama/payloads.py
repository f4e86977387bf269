from typing import Any, Dict, List, Optional

from ...models.generation import EmbeddingRequest
from ...models.messages import ChatRequest, ToolDeclaration, tool_names_by_call_id


def build_tools(tools: Optional[List[ToolDeclaration]]) -> Optional[List[Dict[str, Any]]]:
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


def format_messages(messages: List[Any]) -> List[Dict[str, Any]]:
    """Translate canonical messages into Ollama chat messages.

    Ollama has no tool-call ids: assistant calls carry only name and
    arguments, and tool results are correlated by ``tool_name``, resolved
    here from the assistant call the result answers.
    """
    call_names = tool_names_by_call_id(messages)
    formatted = []
    for message in messages:
        if message.role == "tool":
            formatted.append({
                "role": "tool",
                "content": message.content,
                "tool_name": call_names.get(message.tool_call_id, message.tool_call_id),
            })
        elif message.role == "assistant":
            entry: Dict[str, Any] = {"role": "assistant", "content": message.content}
            if message.reasoning:
                entry["thinking"] = message.reasoning
            if message.tool_calls:
                entry["tool_calls"] = [
                    {"function": {"name": call.name, "arguments": call.arguments}}
                    for call in message.tool_calls
                ]
            formatted.append(entry)
        else:
            formatted.append({"role": message.role, "content": message.content})
    return formatted


def build_chat_payload(request: ChatRequest) -> Dict[str, Any]:
    """Build keyword arguments for ``AsyncClient.chat``.

    ``request.options`` is merged last, so ``options``, ``think``,
    ``format`` and ``keep_alive`` pass straight through.
    """
    payload: Dict[str, Any] = {
        "model": request.model,
        "messages": format_messages(request.messages),
    }
    tools = build_tools(request.tools)
    if tools is not None:
        payload["tools"] = tools
    payload.update(request.options)
    return payload


def build_embed_payload(request: EmbeddingRequest) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "model": request.model,
        "input": request.input,
    }
    if request.dimensions is not None:
        payload["dimensions"] = request.dimensions
    return payload
