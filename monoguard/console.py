from __future__ import annotations

from rich.console import Console

console_err = Console(stderr=True)

__all__ = ["console_err"]
