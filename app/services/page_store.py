"""In-memory registry of mounted report pages."""

from __future__ import annotations

import logging
from collections import OrderedDict

from ulid import ULID

from app.config import get_settings
from app.services.page_state import PageState

logger = logging.getLogger(__name__)


class PageNotFound(KeyError):
    pass


class PageStore:
    """LRU cache of page states keyed by page id.

    Each mount gets a fresh id; pages that fall off the end are simply
    forgotten, the browser re-mounts on its next load.
    """

    def __init__(self, max_size: int = 256):
        self._pages: OrderedDict[str, PageState] = OrderedDict()
        self._max_size = max_size

    def create(self) -> PageState:
        page = PageState(page_id=str(ULID()))
        self._pages[page.page_id] = page

        # Evict oldest if over capacity
        if len(self._pages) > self._max_size:
            evicted_id, _ = self._pages.popitem(last=False)
            logger.debug(f"Evicted page {evicted_id}")

        return page

    def get(self, page_id: str) -> PageState:
        if page_id not in self._pages:
            raise PageNotFound(page_id)
        self._pages.move_to_end(page_id)
        return self._pages[page_id]

    def __len__(self) -> int:
        return len(self._pages)


page_store = PageStore(max_size=get_settings().page_store.max_pages)
