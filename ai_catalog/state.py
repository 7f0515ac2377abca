"""Application state and the state-change dispatch that drives re-rendering."""

import logging
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Dict
from typing import List
from typing import Mapping
from typing import Optional

from ai_catalog.models import CatalogRecord
from ai_catalog.models import Dataset
from ai_catalog.query import ALL_CATEGORIES
from ai_catalog.storage import LoadResult

logger = logging.getLogger(__name__)


class Section(str, Enum):
    TOOLS = "tools"
    LEARNING = "learning"
    MCP_SERVERS = "mcp-servers"
    ADMIN = "admin"

    @property
    def dataset(self) -> Optional[Dataset]:
        if self is Section.ADMIN:
            return None
        return Dataset(self.value)

    @classmethod
    def for_dataset(cls, dataset: Dataset) -> "Section":
        return cls(dataset.value)


class ChangeKind(str, Enum):
    SEARCH = "search"
    CATEGORY = "category"
    SECTION = "section"
    COLLECTION = "collection"


@dataclass(frozen=True)
class StateChange:
    """A single user or editor action.

    `section` is the section the action came from (or, for SECTION changes,
    the section being switched to). `value` carries the new search term or
    category; it is unused for the other kinds.
    """

    kind: ChangeKind
    section: Section
    value: str = ""


@dataclass
class CatalogStore:
    collections: Dict[Dataset, List[CatalogRecord]] = field(
        default_factory=lambda: {dataset: [] for dataset in Dataset}
    )

    def get(self, dataset: Dataset) -> List[CatalogRecord]:
        return self.collections[dataset]

    def replace(self, dataset: Dataset, records: List[CatalogRecord]) -> None:
        self.collections[dataset] = list(records)

    def append(self, dataset: Dataset, record: CatalogRecord) -> None:
        self.collections[dataset].append(record)


@dataclass
class SelectionState:
    active_section: Section = Section.TOOLS
    active_category: str = ALL_CATEGORIES
    search_term: str = ""

    def reset_filters(self) -> None:
        self.active_category = ALL_CATEGORIES
        self.search_term = ""


@dataclass
class AppState:
    store: CatalogStore = field(default_factory=CatalogStore)
    selection: SelectionState = field(default_factory=SelectionState)
    load_errors: Dict[Dataset, str] = field(default_factory=dict)
    loaded: bool = False

    def apply_load(self, results: Mapping[Dataset, LoadResult]) -> None:
        """Populate the store from the initial concurrent load."""
        for dataset, result in results.items():
            if result.ok:
                self.store.replace(dataset, result.records)
                self.load_errors.pop(dataset, None)
            else:
                self.load_errors[dataset] = result.error
        self.loaded = True

    def is_active(self, section: Section) -> bool:
        return self.selection.active_section is section

    def dispatch(self, change: StateChange) -> Optional[Section]:
        """Apply a change and return the section to re-render, or None if nothing is visible."""
        selection = self.selection

        if change.kind is ChangeKind.SECTION:
            logger.debug(f"Switching section {selection.active_section.value} -> {change.section.value}")
            selection.active_section = change.section
            selection.reset_filters()
            return change.section

        if change.kind is ChangeKind.COLLECTION:
            # Hidden sections render from the store when shown again; callers use
            # the returned section to refresh views derived from the collection.
            logger.debug(f"Collection {change.section.value} changed")
            return change.section

        if not self.is_active(change.section):
            # Inputs of hidden sections are ignored
            return None

        if change.kind is ChangeKind.SEARCH:
            selection.search_term = change.value
        elif change.kind is ChangeKind.CATEGORY:
            selection.active_category = change.value or ALL_CATEGORIES
        return change.section
