from pydantic import BaseModel, Field, model_validator

from constants import UTF8
from enums import Role


class ChatMessage(BaseModel):
    role: Role = Field(default=..., description="The role of the message")
    content: str = Field(default=..., description="The content of the message")


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(
        default=..., min_length=1, description="The conversation, oldest first"
    )

    @model_validator(mode="after")
    def validate_conversation(self) -> "ChatRequest":
        if self.messages[-1].role != Role.USER:
            msg = "The last message must come from the user"
            raise ValueError(msg)

        if any(message.role == Role.SYSTEM for message in self.messages):
            msg = "System messages are not accepted in the conversation"
            raise ValueError(msg)

        return self


class ChatContext(BaseModel):
    data_points: list[str] = Field(
        default_factory=list, description="The retrieved passages"
    )
    thoughts: str = Field(default="", description="The processing details")


class ChatCompletion(BaseModel):
    message: ChatMessage = Field(default=..., description="The assistant message")
    context: ChatContext = Field(default=..., description="The answer context")


class ChatDelta(BaseModel):
    role: Role | None = Field(default=None, description="The role of the message")
    content: str | None = Field(default=None, description="The content chunk")


class ChatCompletionDelta(BaseModel):
    delta: ChatDelta = Field(default=..., description="The partial message")
    context: ChatContext | None = Field(default=None, description="The context")

    def model_dump_bytes(self) -> bytes:
        return self.model_dump_json(exclude_none=True).encode(UTF8) + b"\n"
