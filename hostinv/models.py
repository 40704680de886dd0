"""Request and result types for field value enumeration."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ValuesOrderBy(str, Enum):
    VALUE = "VALUE"
    COUNT = "COUNT"


# Terms aggregation sort keys
ORDER_BY_MAPPING = {
    ValuesOrderBy.VALUE: "_key",
    ValuesOrderBy.COUNT: "_count",
}


# Request Models

class SearchFilter(BaseModel):
    """Restricts which bucket keys the aggregation returns."""
    eq: Optional[str] = Field(None, description="Exact key to include")
    regex: Optional[str] = Field(None, description="Key pattern to include")


class EnumerationFilter(BaseModel):
    search: Optional[SearchFilter] = None


class EnumerationArgs(BaseModel):
    """Arguments for a single field enumeration.

    limit and offset are bounds-checked by the enumerator, not here, so that
    a rejected request never reaches the backend.
    """
    limit: Optional[int] = Field(None, description="Page size (default 10)")
    offset: Optional[int] = Field(None, description="Page start (default 0)")
    order_by: ValuesOrderBy = Field(ValuesOrderBy.COUNT, description="Primary sort key")
    order_how: str = Field("DESC", description="Sort direction, passed to the backend verbatim")
    filter: Optional[EnumerationFilter] = None


# Result Types

@dataclass(slots=True, frozen=True)
class Bucket:
    """A distinct field value and its document count."""
    key: Any
    doc_count: int

    @classmethod
    def from_dict(cls, data: dict) -> "Bucket":
        return cls(key=data["key"], doc_count=data["doc_count"])


@dataclass(slots=True)
class ResultItem(Generic[T]):
    value: T
    count: int

    def to_dict(self) -> dict:
        return {"value": self.value, "count": self.count}


@dataclass(slots=True)
class PageMeta:
    count: int
    total: int


@dataclass(slots=True)
class ResultPage(Generic[T]):
    """One page of enumerated values.

    meta.count is the size of this page; meta.total is the number of buckets
    the aggregation returned before paging.
    """
    data: list[ResultItem[T]] = field(default_factory=list)
    meta: PageMeta = field(default_factory=lambda: PageMeta(count=0, total=0))

    def to_dict(self) -> dict:
        return {
            "data": [item.to_dict() for item in self.data],
            "meta": {"count": self.meta.count, "total": self.meta.total},
        }
