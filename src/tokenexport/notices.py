"""
User-facing notices.

Notices are what the host shows the user (a toast in the design tool).
They are not exceptions: an export that fails with a notice simply
returns no document.
"""

import logging
from typing import Callable, List


logger = logging.getLogger(__name__)


SELECT_COLLECTION_AND_MODE = "Please select a collection and mode to export."
COLLECTION_FETCH_FAILED = "Failed to fetch variable collection."
SELECT_MINIMIZED_MODES = "Please select a structure mode and a value mode for the minimized set."
TOKENS_COPIED = "Copied {} tokens to clipboard."


Notifier = Callable[[str], None]


class NoticeLog:
    """
    Notifier that records every notice.

    Example:
        notices = NoticeLog()
        export_tokens(..., notifier=notices)
        notices.messages  # ["Copied 3 tokens to clipboard."]
    """

    def __init__(self):
        self.messages: List[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)

    @property
    def last(self) -> str:
        return self.messages[-1] if self.messages else ""


def log_notice(message: str) -> None:
    """Default notifier: send the notice to the log."""
    logger.info(message)
