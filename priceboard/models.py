from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class PriceRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    item: str
    kategorie: str = ""
    preis: str = ""
    mc_id: str = ""
    last_updated: str = ""


class ColumnMap(BaseModel):
    """Column index per canonical name; optional columns may be absent."""

    model_config = ConfigDict(frozen=True)

    item: int
    kategorie: int
    preis: int
    mc_id: Optional[int] = None
    last_updated: Optional[int] = None


class CategoryChoice(BaseModel):
    value: str
    label: str


class BoardRow(PriceRecord):
    icon: Optional[str] = Field(default=None, examples=[None])


class LoadErrorInfo(BaseModel):
    kind: str
    message: str


class BoardResponse(BaseModel):
    records: List[BoardRow] = Field(default_factory=list)
    categories: List[CategoryChoice] = Field(default_factory=list)
    total: int = 0
    matched: int = 0
    search: str = ""
    category: str = ""
    error: Optional[LoadErrorInfo] = None
    loaded_at: Optional[str] = None


class CategoriesResponse(BaseModel):
    categories: List[CategoryChoice] = Field(default_factory=list)


class HealthResponse(BaseModel):
    ok: bool = True
    ready: bool = False
    records: int = 0
