"""
User-facing notices.

WHAT: Toast-style messages raised by the controllers
WHY: Validation and upstream failures are reported, never fatal
HOW: Append-only list of Notice records the UI drains
"""

from dataclasses import dataclass
from typing import List, Literal, Optional

NoticeVariant = Literal["default", "destructive"]


@dataclass(frozen=True)
class Notice:
    title: str
    description: str
    variant: NoticeVariant = "default"


class NotificationCenter:
    """Collects notices in the order they were raised."""

    def __init__(self):
        self.notices: List[Notice] = []

    def info(self, title: str, description: str) -> Notice:
        notice = Notice(title, description)
        self.notices.append(notice)
        return notice

    def error(self, title: str, description: str) -> Notice:
        notice = Notice(title, description, "destructive")
        self.notices.append(notice)
        return notice

    @property
    def last(self) -> Optional[Notice]:
        return self.notices[-1] if self.notices else None

    def clear(self) -> None:
        self.notices.clear()
