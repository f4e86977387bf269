from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class ToolCall(BaseModel):
    """A model-issued request to invoke a named function.

    ``id`` is vendor-scoped. Vendors without explicit call ids get the tool
    name as a fallback correlation key, so two same-named calls in one turn
    share an id.
    """
    id: str = ""
    name: str
    arguments: Any = Field(default_factory=dict, description="Structured arguments")


class ToolDeclaration(BaseModel):
    """Function made available to the model. Passed through unmodified."""
    name: str
    description: str = ""
    parameters: Optional[Dict[str, Any]] = None


class SystemMessage(BaseModel):
    role: Literal["system"] = "system"
    content: str


class UserMessage(BaseModel):
    role: Literal["user"] = "user"
    content: str


class AssistantMessage(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: str = ""
    reasoning: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None


class ToolMessage(BaseModel):
    """Result of a tool call, correlated by ``tool_call_id``."""
    role: Literal["tool"] = "tool"
    content: str
    tool_call_id: str


Message = Annotated[
    Union[SystemMessage, UserMessage, AssistantMessage, ToolMessage],
    Field(discriminator="role"),
]


class ChatRequest(BaseModel):
    """Provider-agnostic chat request."""
    model: str = Field(..., description="Model identifier")
    messages: List[Message]
    tools: Optional[List[ToolDeclaration]] = None
    options: Dict[str, Any] = Field(
        default_factory=dict,
        description="Vendor-specific parameters merged into the request as-is"
    )


def tool_names_by_call_id(messages: List[Any]) -> Dict[str, str]:
    """Map every assistant tool call id seen in ``messages`` to its tool name."""
    names: Dict[str, str] = {}
    for message in messages:
        if message.role != "assistant" or not message.tool_calls:
            continue
        for call in message.tool_calls:
            names[call.id or call.name] = call.name
    return names
