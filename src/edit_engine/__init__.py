"""UI-agnostic line-buffer editing engine."""

__all__ = [
    "adapters",
    "buffer",
    "collaborators",
    "commands",
    "config",
    "engine",
    "keymaps",
    "runtime",
]

__version__ = "0.1.0"
