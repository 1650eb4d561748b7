from .chat import (
    ChatMessage,
    ProviderReply,
    AiRequestConfig,
    SendMessageRequest,
    SendMessageResult,
)
from .prompt import (
    PromptData,
    PromptCreated,
    PromptSummary,
    MessageView,
    PromptCostView,
)

__all__ = [
    "ChatMessage",
    "ProviderReply",
    "AiRequestConfig",
    "SendMessageRequest",
    "SendMessageResult",
    "PromptData",
    "PromptCreated",
    "PromptSummary",
    "MessageView",
    "PromptCostView",
]
