"""
Icon index: maps `namespace:name` identifiers to icon references.

The index is optional. When it is missing or broken every lookup answers
None and the board renders rows without icons.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .errors import IconIndexFailure
from .rules import DEFAULT_ICON_NAMESPACE, NO_ICON_IDS

_ID_KEYS = ("id", "name")
_REF_KEYS = ("texture", "icon", "url", "path")


def normalize_icon_id(mc_id: Optional[str]) -> Optional[str]:
    key = (mc_id or "").strip().lower()
    if key in NO_ICON_IDS:
        return None
    if ":" not in key:
        key = f"{DEFAULT_ICON_NAMESPACE}:{key}"
    return key


def _first_str(entry: Dict[str, Any], keys) -> Optional[str]:
    for k in keys:
        value = entry.get(k)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


class IconIndex:
    def __init__(self, icons: Optional[Dict[str, str]] = None, base_url: str = ""):
        self._icons = dict(icons or {})
        self.base_url = base_url

    @classmethod
    def empty(cls) -> "IconIndex":
        return cls()

    @classmethod
    def from_payload(cls, data: Any, base_url: str = "") -> "IconIndex":
        """
        Build an index from decoded JSON.

        Accepted shapes:
        - {"minecraft:stone": "block/stone.png", ...}
        - [{"id": "minecraft:stone", "texture": "block/stone.png"}, ...]
        """
        entries: list[tuple[Any, Any]] = []
        if isinstance(data, dict):
            entries = list(data.items())
        elif isinstance(data, list):
            for entry in data:
                if not isinstance(entry, dict):
                    raise IconIndexFailure(f"Icon index entry is not an object: {entry!r}")
                entries.append((_first_str(entry, _ID_KEYS), _first_str(entry, _REF_KEYS)))
        else:
            raise IconIndexFailure(f"Unsupported icon index payload: {type(data).__name__}")

        icons: Dict[str, str] = {}
        for raw_id, ref in entries:
            if not isinstance(raw_id, str) or not isinstance(ref, str) or not ref:
                continue
            key = normalize_icon_id(raw_id)
            if key is not None:
                icons.setdefault(key, ref)
        return cls(icons, base_url=base_url)

    def __len__(self) -> int:
        return len(self._icons)

    def lookup_icon(self, mc_id: Optional[str]) -> Optional[str]:
        key = normalize_icon_id(mc_id)
        if key is None:
            return None
        ref = self._icons.get(key)
        if ref is None:
            return None
        if self.base_url and "://" not in ref and not ref.startswith("/"):
            return f"{self.base_url.rstrip('/')}/{ref.removeprefix('./')}"
        return ref
