import asyncio

from priceboard.board import PriceBoard
from priceboard.errors import FetchFailure
from priceboard.icons import IconIndex

CSV = (
    "Item;Kategorie;Preis;mc_id;last_updated\n"
    "Diamond Sword;Weapons;50;diamond_sword;2024-05-01\n"
    "Stone;Blocks;1;;\n"
    ";Weapons;10;;\n"
)


def test_load_text_replaces_collection():
    board = PriceBoard()
    assert not board.ready
    assert board.load_text(CSV)
    assert board.ready
    assert [r.item for r in board.records] == ["Diamond Sword", "Stone"]
    assert board.categories == ["Blocks", "Weapons"]
    assert board.error is None


def test_failed_load_keeps_previous_collection():
    board = PriceBoard()
    board.load_text(CSV)
    before = board.records

    assert not board.load_text("item,kategorie\nStone,Blocks\n")
    assert board.records is before
    assert board.error.kind == "missing_columns"

    view = board.view()
    assert view.total == 2
    assert view.error.kind == "missing_columns"


def test_fail_before_any_load_gives_diagnostic():
    board = PriceBoard()
    board.fail(FetchFailure("Could not load price list: HTTP 404"))
    view = board.view()
    assert view.records == []
    assert view.total == 0
    assert view.error.kind == "fetch_failure"
    assert "404" in view.error.message


def test_view_not_loaded_yet():
    view = PriceBoard().view()
    assert view.error.kind == "not_loaded"


def test_view_filters_and_resolves_icons():
    board = PriceBoard(IconIndex.from_payload({"minecraft:diamond_sword": "https://img.test/ds.png"}))
    board.load_text(CSV)

    view = board.view("SWORD", "Weapons")
    assert view.matched == 1
    row = view.records[0]
    assert row.icon == "https://img.test/ds.png"
    assert row.last_updated == "2024-05-01"
    assert view.categories[0].value == ""
    assert view.error is None
    assert view.loaded_at is not None


def test_view_without_icon_index():
    board = PriceBoard()
    board.load_text(CSV)
    assert all(r.icon is None for r in board.view().records)


def test_loading_serializes_loads():
    board = PriceBoard()
    order = []

    async def load(name, text):
        async with board.loading():
            order.append(f"{name}-start")
            await asyncio.sleep(0)
            board.load_text(text)
            order.append(f"{name}-end")

    async def run():
        await asyncio.gather(load("a", CSV), load("b", CSV))

    asyncio.run(run())
    assert order == ["a-start", "a-end", "b-start", "b-end"]
