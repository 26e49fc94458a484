"""Pure text-editing core for a journaling application."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "keymaps",
    "markup",
    "runtime",
    "session",
]

__version__ = "0.1.0"
