"""In-memory editing of the catalog collections.

The editor is the only component that changes collection contents. Every
operation returns a status instead of raising, and leaves the previous state
untouched when it fails.
"""

import html
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Dict
from typing import Mapping
from typing import Optional
from typing import Tuple

from pydantic import ValidationError

from ai_catalog.models import DEFAULT_CATEGORY
from ai_catalog.models import DEFAULT_ICON
from ai_catalog.models import DIFFICULTY_OPTIONS
from ai_catalog.models import FAVOURITE_OPTIONS
from ai_catalog.models import PRICING_OPTIONS
from ai_catalog.models import RECORD_MODELS
from ai_catalog.models import REQUIRED_FIELDS
from ai_catalog.models import TYPE_OPTIONS
from ai_catalog.models import CatalogRecord
from ai_catalog.models import CollectionFormatError
from ai_catalog.models import Dataset
from ai_catalog.models import describe_validation_error
from ai_catalog.state import AppState
from ai_catalog.state import ChangeKind
from ai_catalog.state import Section
from ai_catalog.state import StateChange
from ai_catalog.storage import decode_collection
from ai_catalog.storage import encode_collection
from ai_catalog.storage import write_collection

logger = logging.getLogger(__name__)

PREVIEW_SIZE = 3

COMMON_FIELDS = ("name", "icon", "link", "description", "category")
DATASET_FIELDS: Dict[Dataset, Tuple[str, ...]] = {
    Dataset.TOOLS: ("pricing", "pricingNote", "personal_favourite"),
    Dataset.LEARNING: ("difficulty", "type"),
    Dataset.MCP_SERVERS: ("pricing",),
}

# Select-style fields and their options; blank submissions fall back to the first option
FIELD_OPTIONS: Dict[str, Tuple[str, ...]] = {
    "pricing": PRICING_OPTIONS,
    "personal_favourite": FAVOURITE_OPTIONS,
    "difficulty": DIFFICULTY_OPTIONS,
    "type": TYPE_OPTIONS,
}


@dataclass
class AdminResult:
    ok: bool
    message: str


@dataclass
class SaveResult(AdminResult):
    method: str = "disk"
    filename: str = ""


@dataclass
class Preview:
    dataset: Dataset
    count: int
    json_text: str

    @property
    def html(self) -> str:
        return html.escape(self.json_text)


def slugify_category(value: str) -> str:
    return "-".join(value.lower().split())


def form_fields(dataset: Dataset) -> Tuple[str, ...]:
    """Fields the add form shows for a dataset."""
    return COMMON_FIELDS + DATASET_FIELDS[dataset]


class AdminEditor:
    def __init__(self, state: AppState, save_dir: Optional[Path] = None) -> None:
        self.state = state
        self.save_dir = save_dir
        self.dataset = Dataset.TOOLS
        self.status: Optional[AdminResult] = None
        # Section whose collection changed since the web layer last asked
        self.changed: Optional[Section] = None

    def _report(self, result: AdminResult) -> AdminResult:
        if result.ok:
            logger.info(result.message)
        else:
            logger.warning(result.message)
        self.status = result
        return result

    def _collection_changed(self) -> None:
        self.changed = self.state.dispatch(StateChange(ChangeKind.COLLECTION, Section.for_dataset(self.dataset)))

    def take_change(self) -> Optional[Section]:
        changed, self.changed = self.changed, None
        return changed

    def select_dataset(self, name: str) -> AdminResult:
        try:
            self.dataset = Dataset(name)
        except ValueError:
            return self._report(AdminResult(False, f"Unknown dataset: {name}"))
        self.status = None
        return AdminResult(True, f"Editing {self.dataset.label}")

    def build_record(self, values: Mapping[str, str]) -> CatalogRecord:
        """Build a record from trimmed form values, filling defaults for blanks."""
        fields: Dict[str, Any] = {
            "name": values.get("name", ""),
            "link": values.get("link", ""),
            "description": values.get("description", ""),
            "icon": values.get("icon") or DEFAULT_ICON,
            "category": slugify_category(values.get("category", "")) or DEFAULT_CATEGORY,
        }
        for key in DATASET_FIELDS[self.dataset]:
            value = values.get(key, "")
            if key in FIELD_OPTIONS:
                fields[key] = value or FIELD_OPTIONS[key][0]
            elif value:
                fields[key] = value
        if self.dataset is Dataset.MCP_SERVERS:
            fields["personal_favourite"] = "no"
        return RECORD_MODELS[self.dataset].model_validate(fields)

    def add_record(self, form: Mapping[str, Any]) -> AdminResult:
        values = {key: str(form.get(key) or "").strip() for key in form_fields(self.dataset)}
        missing = [key for key in REQUIRED_FIELDS if not values[key]]
        if missing:
            return self._report(AdminResult(False, f"Please fill in the required fields: {', '.join(missing)}"))

        try:
            record = self.build_record(values)
        except ValidationError as e:
            return self._report(AdminResult(False, f"Could not add entry: {describe_validation_error(e)}"))

        self.state.store.append(self.dataset, record)
        self.state.load_errors.pop(self.dataset, None)
        self._collection_changed()
        return self._report(
            AdminResult(
                True,
                f"Added '{record.name}' to {self.dataset.label}. Not saved yet: save or export to keep it.",
            )
        )

    def load_from_file(self, content: bytes, filename: Optional[str] = None) -> AdminResult:
        """Replace the selected collection with the records in an uploaded JSON file."""
        if not filename and not content:
            return self._report(AdminResult(False, "No file selected, nothing was loaded."))

        try:
            records = decode_collection(self.dataset, content)
        except CollectionFormatError as e:
            return self._report(AdminResult(False, f"Invalid format in {filename or 'file'}: {e}"))

        self.state.store.replace(self.dataset, records)
        self.state.load_errors.pop(self.dataset, None)
        self._collection_changed()
        return self._report(
            AdminResult(True, f"Loaded {len(records)} items from {filename or 'file'} into {self.dataset.label}.")
        )

    def export_payload(self, dataset: Optional[Dataset] = None) -> str:
        return encode_collection(self.state.store.get(dataset or self.dataset))

    def save(self) -> SaveResult:
        """Write the selected collection to the save directory, or fall back to a download."""
        records = self.state.store.get(self.dataset)
        filename = self.dataset.filename

        if self.save_dir is None:
            result = SaveResult(
                True,
                f"Downloaded {filename} ({len(records)} items). Replace the file in your data folder to publish it.",
                method="download",
                filename=filename,
            )
            return self._report(result)

        path = self.save_dir / filename
        try:
            write_collection(path, records)
        except OSError as e:
            return self._report(SaveResult(False, f"Failed to save {filename}: {e}", method="disk", filename=filename))
        return self._report(SaveResult(True, f"Saved {len(records)} items to {path}", method="disk", filename=filename))

    def preview(self, limit: int = PREVIEW_SIZE) -> Preview:
        records = self.state.store.get(self.dataset)
        recent = [record.to_json() for record in records[-limit:]] if limit > 0 else []
        return Preview(
            dataset=self.dataset,
            count=len(records),
            json_text=json.dumps(recent, indent=2, ensure_ascii=False),
        )
