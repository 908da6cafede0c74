"""Interactive confirmation backed by ``click.confirm``."""

from __future__ import annotations

import logging
import sys

import click

logger = logging.getLogger(__name__)


class ClickConfirmer:
    """Asks the operator on the terminal; the default answer is no.

    Without a terminal on stdin nothing is asked and the answer is no.
    """

    def confirm(self, prompt: str) -> bool:
        if not sys.stdin.isatty():
            logger.info("No terminal — answering no to: %s", prompt)
            return False
        return click.confirm(prompt, default=False)
