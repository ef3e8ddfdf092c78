"""Network side of the board: price CSV and icon index retrieval."""

from __future__ import annotations

import asyncio
import json

import httpx

from .board import PriceBoard
from .config import Settings
from .errors import FetchFailure, IconIndexFailure
from .icons import IconIndex
from .log import get_logger
from .normalize import decode_payload

log = get_logger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


async def fetch_price_csv(client: httpx.AsyncClient, url: str) -> str:
    if not url:
        raise FetchFailure("No price list URL configured (PRICEBOARD_CSV_URL)")
    log.debug("fetch_started", resource="price_csv", url=url)
    try:
        response = await client.get(url, headers=NO_CACHE_HEADERS)
    except httpx.HTTPError as e:
        raise FetchFailure(f"Could not load price list: {e}") from e
    if not response.is_success:
        raise FetchFailure(f"Could not load price list: HTTP {response.status_code}")
    return decode_payload(response.content)


async def fetch_icon_index(client: httpx.AsyncClient, url: str, base_url: str = "") -> IconIndex:
    if not url:
        return IconIndex.empty()
    log.debug("fetch_started", resource="icon_index", url=url)
    try:
        response = await client.get(url)
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise IconIndexFailure(f"Could not load icon index: {e}") from e
    return IconIndex.from_payload(data, base_url=base_url)


async def _icons_or_empty(client: httpx.AsyncClient, settings: Settings) -> IconIndex:
    try:
        return await fetch_icon_index(client, settings.icon_index_url, settings.icon_base_url)
    except IconIndexFailure as e:
        log.warning("icon_index_unavailable", error=e.message)
        return IconIndex.empty()


async def _price_text(client: httpx.AsyncClient, settings: Settings) -> str | FetchFailure:
    try:
        return await fetch_price_csv(client, settings.csv_url)
    except FetchFailure as e:
        return e


async def initialize(board: PriceBoard, settings: Settings, client: httpx.AsyncClient) -> bool:
    """
    Fetch price list and icon index concurrently and load the board.

    Only the price list decides readiness; the icon index is best-effort.
    Returns True when the board holds fresh data afterwards.
    """
    async with board.loading():
        text, icons = await asyncio.gather(
            _price_text(client, settings),
            _icons_or_empty(client, settings),
        )
        board.set_icons(icons)
        if isinstance(text, FetchFailure):
            board.fail(text)
            return False
        return board.load_text(text)
