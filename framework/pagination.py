"""
Paging and sorting value types used by repositories.

Page numbers are zero-based.
"""

from enum import Enum
from typing import Any, Generic, List, Sequence, TypeVar, Union
from pydantic import BaseModel, ConfigDict, Field
from framework.exceptions.errors import InvalidArgument

T = TypeVar("T")


class Direction(str, Enum):
    """Sort direction."""
    ASC = "ASC"
    DESC = "DESC"


class SortOrder(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    direction: Direction = Direction.ASC

    @property
    def is_descending(self) -> bool:
        return self.direction == Direction.DESC

    @classmethod
    def parse(cls, spec: str) -> "SortOrder":
        """Parse "name", "-name", "name,desc" or "name,asc"."""
        if not isinstance(spec, str) or not spec.strip():
            raise InvalidArgument("Sort property must be a non-empty string", {"sort": spec})

        text = spec.strip()
        direction = Direction.ASC
        if "," in text:
            text, _, raw_direction = text.partition(",")
            try:
                direction = Direction(raw_direction.strip().upper())
            except ValueError:
                raise InvalidArgument("Unknown sort direction", {"sort": spec}) from None
        elif text.startswith("-"):
            text = text[1:]
            direction = Direction.DESC

        text = text.strip()
        if not text:
            raise InvalidArgument("Sort property must be a non-empty string", {"sort": spec})
        return cls(field=text, direction=direction)


SortLike = Union[None, str, Sequence[str], "Sort"]


class Sort(BaseModel):
    """Ordered list of sort orders; empty means storage order."""
    model_config = ConfigDict(frozen=True)

    orders: List[SortOrder] = Field(default_factory=list)

    @classmethod
    def by(cls, *properties: str) -> "Sort":
        return cls(orders=[SortOrder.parse(p) for p in properties])

    @classmethod
    def unsorted(cls) -> "Sort":
        return cls()

    @classmethod
    def of(cls, value: SortLike) -> "Sort":
        """Normalize None, a property spec, a sequence of specs or a Sort."""
        if value is None:
            return cls.unsorted()
        if isinstance(value, Sort):
            return value
        if isinstance(value, str):
            return cls.by(value)
        if isinstance(value, (list, tuple)):
            return cls.by(*value)
        raise InvalidArgument("Unsupported sort value", {"sort": value})

    @property
    def is_sorted(self) -> bool:
        return bool(self.orders)


class PageRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int
    size: int
    sort: Sort = Field(default_factory=Sort)

    @classmethod
    def of(cls, page: int, size: int, sort: SortLike = None) -> "PageRequest":
        """Validated constructor; page must be >= 0 and size >= 1."""
        if isinstance(page, bool) or not isinstance(page, int) or page < 0:
            raise InvalidArgument("Page index must be a non-negative integer", {"page": page})
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise InvalidArgument("Page size must be an integer of at least 1", {"size": size})
        return cls(page=page, size=size, sort=Sort.of(sort))

    @property
    def offset(self) -> int:
        return self.page * self.size

    def next(self) -> "PageRequest":
        return PageRequest(page=self.page + 1, size=self.size, sort=self.sort)


class Page(BaseModel, Generic[T]):
    """A bounded slice of records plus total-count metadata."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    content: List[T] = Field(default_factory=list)
    number: int = 0
    size: int = 1
    total_elements: int = 0
    sort: Sort = Field(default_factory=Sort)

    @classmethod
    def create(cls, content: List[Any], request: PageRequest, total_elements: int) -> "Page":
        return cls(
            content=list(content),
            number=request.page,
            size=request.size,
            total_elements=total_elements,
            sort=request.sort,
        )

    @property
    def total_pages(self) -> int:
        return (self.total_elements + self.size - 1) // self.size if self.total_elements > 0 else 0

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    @property
    def is_first(self) -> bool:
        return not self.has_previous

    @property
    def is_last(self) -> bool:
        return not self.has_next

    def __len__(self) -> int:
        return len(self.content)
