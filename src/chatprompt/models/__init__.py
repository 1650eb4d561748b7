r"""
Centralized access to all database models.

Importing this package registers every model with `Base.metadata`, which is
what `create_all()` (tests, bootstrap scripts) relies on.

    from chatprompt.models import Prompt, Message, MessageRole
"""

from .prompt import Prompt
from .message import Message, MessageRole
from .prompt_message import PromptMessage
from .prompt_cost import PromptCost
from .user_prompt import UserPrompt

__all__ = [
    "Prompt",
    "Message",
    "MessageRole",
    "PromptMessage",
    "PromptCost",
    "UserPrompt",
]
