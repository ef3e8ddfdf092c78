"""
PriceBoard: the single owner of board state.

The load pipeline is the only writer. It swaps in a fully built record tuple
in one assignment, so readers only ever see a complete collection.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional, Tuple

from .errors import LoadError
from .icons import IconIndex
from .log import get_logger
from .models import BoardResponse, BoardRow, LoadErrorInfo, PriceRecord
from .normalize import parse_price_csv
from .query import category_choices, category_options, query

log = get_logger(__name__)


class PriceBoard:
    def __init__(self, icons: Optional[IconIndex] = None) -> None:
        self.records: Tuple[PriceRecord, ...] = ()
        self.categories: list[str] = []
        self.icons = icons or IconIndex.empty()
        self.error: Optional[LoadError] = None
        self.loaded_at: Optional[datetime] = None
        self._lock = asyncio.Lock()

    @property
    def ready(self) -> bool:
        return self.loaded_at is not None

    @asynccontextmanager
    async def loading(self) -> AsyncIterator["PriceBoard"]:
        """Serialize loads: a second reload waits for the running one."""
        async with self._lock:
            yield self

    def set_icons(self, icons: IconIndex) -> None:
        self.icons = icons

    def fail(self, error: LoadError) -> None:
        self.error = error
        log.error("price_load_failed", kind=error.kind, error=error.message, kept_records=len(self.records))

    def load_text(self, text: str) -> bool:
        """Parse and swap in a new collection; on failure keep the previous one."""
        try:
            records = parse_price_csv(text)
        except LoadError as e:
            self.fail(e)
            return False

        categories = category_options(records)
        self.records, self.categories = records, categories
        self.error = None
        self.loaded_at = datetime.now(timezone.utc)
        log.info("board_loaded", records=len(records), categories=len(categories))
        return True

    def diagnostic(self) -> Optional[str]:
        if self.error is not None:
            return self.error.message
        if not self.ready:
            return "Price list not loaded yet"
        return None

    def view(self, search: str = "", category: str = "") -> BoardResponse:
        matched = query(self.records, search, category)
        rows = [
            BoardRow(**r.model_dump(), icon=self.icons.lookup_icon(r.mc_id))
            for r in matched
        ]
        error = None
        message = self.diagnostic()
        if message is not None:
            kind = self.error.kind if self.error is not None else "not_loaded"
            error = LoadErrorInfo(kind=kind, message=message)
        return BoardResponse(
            records=rows,
            categories=category_choices(self.categories),
            total=len(self.records),
            matched=len(rows),
            search=search or "",
            category=category or "",
            error=error,
            loaded_at=self.loaded_at.isoformat() if self.loaded_at else None,
        )
