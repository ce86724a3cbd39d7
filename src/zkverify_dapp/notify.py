"""User-visible alert sinks."""

from __future__ import annotations

import logging

import click

log = logging.getLogger(__name__)


class LogNotifier:
    """Routes alerts to the log when no interactive surface is attached."""

    def alert(self, message: str) -> None:
        log.warning("ALERT: %s", message)


class ClickNotifier:
    """Prints alerts to stderr, highlighted, for the command-line surface."""

    def alert(self, message: str) -> None:
        click.secho(message, err=True, fg="yellow")
