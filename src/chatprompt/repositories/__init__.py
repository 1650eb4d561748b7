"""
Repository layer.

Repositories wrap SQLAlchemy queries for one model each and never commit;
services group their writes and decide when to commit.

Usage:
    from chatprompt.repositories import PromptRepository, MessageRepository
"""

from .base_repository import BaseRepository
from .prompt_repository import PromptRepository
from .message_repository import MessageRepository
from .prompt_cost_repository import PromptCostRepository
from .user_prompt_repository import UserPromptRepository

__all__ = [
    "BaseRepository",
    "PromptRepository",
    "MessageRepository",
    "PromptCostRepository",
    "UserPromptRepository",
]
