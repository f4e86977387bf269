import json
from typing import Any, Dict, List, Optional

from google.genai import types

from ...models.generation import EmbeddingRequest
from ...models.messages import ChatRequest, ToolDeclaration, tool_names_by_call_id


def function_response_payload(content: str) -> Dict[str, Any]:
    """Gemini wants a JSON object as the function response; wrap anything else."""
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError:
        return {"result": content}
    return parsed if isinstance(parsed, dict) else {"result": parsed}


def build_contents(messages: List[Any]) -> List[types.Content]:
    """Translate non-system messages into Gemini contents.

    The assistant role is ``model``; tool results are user-role
    ``function_response`` parts named after the call they answer.
    """
    call_names = tool_names_by_call_id(messages)
    contents = []
    for message in messages:
        if message.role == "user":
            contents.append(types.Content(role="user", parts=[types.Part.from_text(text=message.content)]))
        elif message.role == "assistant":
            parts = []
            if message.content:
                parts.append(types.Part.from_text(text=message.content))
            for call in message.tool_calls or []:
                parts.append(types.Part.from_function_call(name=call.name, args=call.arguments))
            if parts:
                contents.append(types.Content(role="model", parts=parts))
        elif message.role == "tool":
            contents.append(types.Content(
                role="user",
                parts=[types.Part.from_function_response(
                    name=call_names.get(message.tool_call_id, message.tool_call_id),
                    response=function_response_payload(message.content),
                )],
            ))
    return contents


def build_tools(tools: Optional[List[ToolDeclaration]]) -> Optional[List[types.Tool]]:
    if not tools:
        return None
    return [types.Tool(function_declarations=[
        types.FunctionDeclaration(
            name=tool.name,
            description=tool.description,
            parameters=tool.parameters,
        )
        for tool in tools
    ])]


def build_config(request: ChatRequest) -> types.GenerateContentConfig:
    """Build the generation config.

    System messages become ``system_instruction``. ``request.options`` is
    merged into the config, so any GenerateContentConfig field (temperature,
    thinking_config, ...) passes through.
    """
    config_kwargs: Dict[str, Any] = {}
    system_instruction = [m.content for m in request.messages if m.role == "system"]
    if system_instruction:
        config_kwargs["system_instruction"] = system_instruction
    tools = build_tools(request.tools)
    if tools is not None:
        config_kwargs["tools"] = tools
    config_kwargs.update(request.options)
    return types.GenerateContentConfig(**config_kwargs)


def build_generate_payload(request: ChatRequest) -> Dict[str, Any]:
    return {
        "model": request.model,
        "contents": build_contents(request.messages),
        "config": build_config(request),
    }


def build_embed_payload(request: EmbeddingRequest, vertexai: bool = False) -> Dict[str, Any]:
    """Build keyword arguments for ``embed_content``.

    ``auto_truncate`` is only accepted by Vertex AI; the Gemini API
    truncates silently and rejects the flag.
    """
    config_kwargs: Dict[str, Any] = {}
    if vertexai:
        config_kwargs["auto_truncate"] = True
    if request.dimensions is not None:
        config_kwargs["output_dimensionality"] = request.dimensions
    return {
        "model": request.model,
        "contents": request.input,
        "config": types.EmbedContentConfig(**config_kwargs),
    }
