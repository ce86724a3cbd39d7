"""Notifier protocol - user-visible alerts."""

from __future__ import annotations

from typing import Protocol


class Notifier(Protocol):
    """Shows a message to the user (alert dialog, stderr line, ...)."""

    def alert(self, message: str) -> None:
        ...
