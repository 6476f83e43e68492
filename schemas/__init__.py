from schemas.chat import (
    ChatCompletion,
    ChatCompletionDelta,
    ChatContext,
    ChatDelta,
    ChatMessage,
    ChatRequest,
)
from schemas.health import HealthResponse, ServiceHealthResponse

__all__ = [
    "HealthResponse",
    "ServiceHealthResponse",
    "ChatCompletion",
    "ChatCompletionDelta",
    "ChatContext",
    "ChatDelta",
    "ChatMessage",
    "ChatRequest",
]
