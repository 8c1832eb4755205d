"""Club directory value types."""

from dataclasses import dataclass
from typing import List, Optional

from core.boxers.models import ClubRecord


@dataclass
class ClubSearchFilters:
    """Case-insensitive substring filters; unset fields do not filter."""
    name: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


@dataclass
class PaginatedClubs:
    clubs: List[ClubRecord]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0
