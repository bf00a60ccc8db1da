# app/ticket/pagination.py
from __future__ import annotations

import enum
import math
from dataclasses import dataclass


class PageState(str, enum.Enum):
    COMPACT = "Compact"
    START = "Start"
    CENTER = "Center"
    END = "End"


@dataclass
class PaginationMetadata:
    """Page window and counts for a ticket list.

    ``current`` is 1-based and clamped to the available pages. The window is half the page size wide; lists short
    enough to fit inside one window are rendered in full.
    """

    current: int
    page_size: int
    total_items: int
    total_open_items: int = 0
    total_in_progress_items: int = 0
    total_closed_items: int = 0

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError("page_size must be greater than 0")
        if self.total_items < 0:
            raise ValueError("total_items must not be negative")
        # Requests past either end land on the nearest real page
        self.current = min(max(self.current, 1), max(self.total_pages, 1))

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size)

    @property
    def window_size(self) -> int:
        return max(self.page_size // 2, 1)

    @property
    def page_state(self) -> PageState:
        if self.total_pages <= self.window_size:
            return PageState.COMPACT
        if self.current <= self.window_size:
            return PageState.START
        if self.current > self.total_pages - self.window_size:
            return PageState.END
        return PageState.CENTER

    @property
    def has_previous(self) -> bool:
        return self.current > 1

    @property
    def has_next(self) -> bool:
        return self.current < self.total_pages

    @property
    def skip(self) -> int:
        return max(self.current - 1, 0) * self.page_size

    @property
    def take(self) -> int:
        return self.page_size

    def page_list(self) -> list[int]:
        total = self.total_pages
        half = self.window_size // 2
        state = self.page_state

        if state in (PageState.COMPACT, PageState.START):
            return list(range(1, total + 1))
        if state == PageState.END:
            return list(range(max(1, self.current - half), total + 1))
        return list(range(self.current - half, self.current + half + 1))
