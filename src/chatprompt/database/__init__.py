# Session/engine objects live in `chatprompt.database.session` and are not
# re-exported here, so importing models never creates an engine.
from .base import Base

__all__ = ["Base"]
