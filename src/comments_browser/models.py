from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field


class Comment(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    id: int
    name: str
    email: str
    body: str
    post_id: int | None = Field(default=None, alias="postId")


class CommentPage(BaseModel):
    rows: list[Comment] = Field(default_factory=list)
    total: int | None = None
    request_id: str | None = None


class TableMode(str, Enum):
    BROWSE = "browse"
    SEARCH = "search"


class SortOrder(str, Enum):
    ASCEND = "ascend"
    DESCEND = "descend"

    @classmethod
    def parse(cls, value: str | SortOrder | None) -> SortOrder | None:
        if value is None or isinstance(value, SortOrder):
            return value
        normalized = value.strip().lower()
        if normalized in {"ascend", "asc"}:
            return cls.ASCEND
        if normalized in {"descend", "desc"}:
            return cls.DESCEND
        return None


@dataclass(frozen=True)
class Pagination:
    current: int = 1
    page_size: int = 5
    total: int | None = None

    def with_total(self, total: int | None) -> Pagination:
        return replace(self, total=total)


@dataclass(frozen=True)
class SortState:
    field: str | None = None
    order: SortOrder | None = None


@dataclass(frozen=True)
class TableState:
    mode: TableMode = TableMode.BROWSE
    pagination: Pagination = field(default_factory=Pagination)
    sort: SortState = field(default_factory=SortState)
    filters: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    @property
    def is_search(self) -> bool:
        return self.mode is TableMode.SEARCH


def initial_state(page_size: int = 5) -> TableState:
    return TableState(pagination=Pagination(current=1, page_size=page_size))
