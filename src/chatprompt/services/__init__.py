from .history import load_history
from .chat_service import ChatService
from .prompt_service import PromptService

__all__ = ["load_history", "ChatService", "PromptService"]
