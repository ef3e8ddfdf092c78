import pytest

from priceboard.errors import IconIndexFailure
from priceboard.icons import IconIndex, normalize_icon_id


def test_normalize_icon_id_adds_default_namespace():
    assert normalize_icon_id(" Diamond_Sword ") == "minecraft:diamond_sword"


def test_normalize_icon_id_keeps_namespace():
    assert normalize_icon_id("Create:Cogwheel") == "create:cogwheel"


@pytest.mark.parametrize("value", [None, "", "   ", "none", "NONE"])
def test_normalize_icon_id_absent(value):
    assert normalize_icon_id(value) is None


def test_lookup_from_mapping_with_base_url():
    index = IconIndex.from_payload(
        {"minecraft:stone": "block/stone.png", "dirt": "./block/dirt.png"},
        base_url="https://cdn.test/textures/",
    )
    assert index.lookup_icon("STONE") == "https://cdn.test/textures/block/stone.png"
    assert index.lookup_icon("minecraft:dirt") == "https://cdn.test/textures/block/dirt.png"
    assert index.lookup_icon("gravel") is None


def test_lookup_from_list_payload():
    index = IconIndex.from_payload([
        {"id": "minecraft:apple", "texture": "https://img.test/apple.png"},
        {"name": "bread", "icon": "/static/bread.png"},
        {"id": "broken"},
    ])
    assert len(index) == 2
    assert index.lookup_icon("apple") == "https://img.test/apple.png"
    assert index.lookup_icon("Bread") == "/static/bread.png"


def test_lookup_none_id_is_absent():
    index = IconIndex.from_payload({"minecraft:none": "x.png"})
    assert index.lookup_icon("none") is None


def test_empty_index():
    assert IconIndex.empty().lookup_icon("stone") is None


def test_unsupported_payload_raises():
    with pytest.raises(IconIndexFailure):
        IconIndex.from_payload("not an index")
    with pytest.raises(IconIndexFailure):
        IconIndex.from_payload([1, 2])
