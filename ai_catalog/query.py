"""Filtering, grouping and labelling of catalog collections.

Everything here is a pure function of its arguments; nothing reads or writes
application state.
"""

from dataclasses import dataclass
from typing import List
from typing import Sequence
from typing import TypeVar

from ai_catalog.models import CatalogRecord
from ai_catalog.models import Tool

ALL_CATEGORIES = "all"

R = TypeVar("R", bound=CatalogRecord)


@dataclass(frozen=True)
class ToolViews:
    """Filtered tools split into the favourites grid and the general grid."""

    favourites: List[Tool]
    general: List[Tool]

    @property
    def is_empty(self) -> bool:
        return not self.favourites and not self.general


@dataclass(frozen=True)
class CatalogStats:
    total_tools: int
    free_tools: int
    categories: int


def matches(record: CatalogRecord, category: str = ALL_CATEGORIES, search: str = "") -> bool:
    """True when the record passes both the category filter and the search term."""
    if category != ALL_CATEGORIES and record.category != category:
        return False
    if search:
        needle = search.lower()
        return (
            needle in record.name.lower()
            or needle in record.description.lower()
            or needle in record.category.lower()
        )
    return True


def filter_records(records: Sequence[R], category: str = ALL_CATEGORIES, search: str = "") -> List[R]:
    """Return the records matching category and search, in their original order."""
    return [record for record in records if matches(record, category, search)]


def partition_favourites(tools: Sequence[Tool]):
    """Split tools into (favourites, others), keeping relative order in each."""
    favourites = []
    others = []
    for tool in tools:
        (favourites if tool.is_favourite else others).append(tool)
    return favourites, others


def filter_tools(tools: Sequence[Tool], category: str = ALL_CATEGORIES, search: str = "") -> ToolViews:
    favourites, others = partition_favourites(tools)
    return ToolViews(
        favourites=filter_records(favourites, category, search),
        general=filter_records(others, category, search),
    )


def get_categories(records: Sequence[CatalogRecord]) -> List[str]:
    """Distinct categories present in the collection, sorted."""
    return sorted({record.category for record in records})


def format_category_name(category: str) -> str:
    """Turn a slug like 'machine-learning' into 'Machine Learning'."""
    return " ".join(word[:1].upper() + word[1:] for word in category.split("-"))


def catalog_stats(tools: Sequence[Tool]) -> CatalogStats:
    return CatalogStats(
        total_tools=len(tools),
        free_tools=sum(1 for tool in tools if tool.pricing in ("free", "freemium")),
        categories=len(get_categories(tools)),
    )
