from __future__ import annotations

from typing import Sequence


class LoadError(Exception):
    """A failure that prevents the board from showing price data."""

    kind = "load_failed"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FetchFailure(LoadError):
    kind = "fetch_failure"


class MalformedPayload(LoadError):
    kind = "malformed_payload"


class MissingColumns(LoadError):
    kind = "missing_columns"

    def __init__(self, missing: Sequence[str], headers: Sequence[str]):
        self.missing = list(missing)
        self.headers = list(headers)
        super().__init__(
            f"Missing required columns: {', '.join(self.missing)} "
            f"(found: {', '.join(self.headers) or '-'})"
        )


class IconIndexFailure(LoadError):
    """Non-fatal: the board keeps working without icons."""

    kind = "icon_index_failure"
