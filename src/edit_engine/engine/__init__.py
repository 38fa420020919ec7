"""Edit engine: session state, actions and the command dispatcher."""

from .context import EditResult, EditSession, EngineBus
from .dispatcher import EditEngine

__all__ = ["EditEngine", "EditResult", "EditSession", "EngineBus"]
