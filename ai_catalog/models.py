"""Record models for the three catalog collections."""

from enum import Enum
from typing import Any
from typing import Dict
from typing import List
from typing import Literal
from typing import Optional
from typing import Type

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError
from pydantic import field_validator

from ai_catalog.config import LEARNING_FILE
from ai_catalog.config import MCP_SERVERS_FILE
from ai_catalog.config import TOOLS_FILE

DEFAULT_ICON = "🔧"
DEFAULT_CATEGORY = "misc"

# Form options; the first entry is the default for a blank field
PRICING_OPTIONS = ("free", "paid", "freemium")
FAVOURITE_OPTIONS = ("no", "yes")
DIFFICULTY_OPTIONS = ("beginner", "intermediate", "advanced")
TYPE_OPTIONS = ("article", "video", "course", "tutorial", "documentation", "book")

REQUIRED_FIELDS = ("name", "link", "description")


class Dataset(str, Enum):
    TOOLS = "tools"
    LEARNING = "learning"
    MCP_SERVERS = "mcp-servers"

    @property
    def filename(self) -> str:
        return DATASET_FILES[self]

    @property
    def label(self) -> str:
        return DATASET_LABELS[self]


DATASET_FILES = {
    Dataset.TOOLS: TOOLS_FILE,
    Dataset.LEARNING: LEARNING_FILE,
    Dataset.MCP_SERVERS: MCP_SERVERS_FILE,
}

DATASET_LABELS = {
    Dataset.TOOLS: "AI Tools",
    Dataset.LEARNING: "Learning Resources",
    Dataset.MCP_SERVERS: "MCP Servers",
}


class CollectionFormatError(ValueError):
    """Raised when a JSON document cannot be turned into a collection."""


class CatalogRecord(BaseModel):
    """Fields shared by every catalog entry.

    Unknown keys are kept so that exporting a loaded collection writes them back.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    icon: str = DEFAULT_ICON
    link: str
    description: str
    category: str = DEFAULT_CATEGORY

    @field_validator(*REQUIRED_FIELDS)
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_json(self) -> Dict[str, Any]:
        """Dump using on-disk field names, leaving out optional fields that are unset."""
        data = self.model_dump(by_alias=True)
        for field_name, field in type(self).model_fields.items():
            key = field.alias or field_name
            if not field.is_required() and data.get(key) is None:
                data.pop(key, None)
        return data


class Tool(CatalogRecord):
    pricing: Literal["free", "paid", "freemium"] = "free"
    pricing_note: Optional[str] = Field(default=None, alias="pricingNote")
    personal_favourite: Literal["yes", "no"] = "no"

    @property
    def is_favourite(self) -> bool:
        return self.personal_favourite == "yes"


class LearningResource(CatalogRecord):
    difficulty: str = DIFFICULTY_OPTIONS[0]
    type: str = TYPE_OPTIONS[0]


class McpServer(CatalogRecord):
    pricing: Literal["free", "paid", "freemium"] = "free"
    personal_favourite: Literal["yes", "no"] = "no"


RECORD_MODELS: Dict[Dataset, Type[CatalogRecord]] = {
    Dataset.TOOLS: Tool,
    Dataset.LEARNING: LearningResource,
    Dataset.MCP_SERVERS: McpServer,
}


def describe_validation_error(exc: ValidationError) -> str:
    """Summarize a pydantic error as 'missing required field ...' style text."""
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "record"
        if error["type"] == "missing":
            problems.append(f"missing required field '{field}'")
        else:
            problems.append(f"invalid '{field}': {error['msg']}")
    return "; ".join(problems)


def parse_collection(dataset: Dataset, payload: Any) -> List[CatalogRecord]:
    """Validate a decoded JSON payload into a list of records.

    Fails on the first bad record, naming its index and the offending field.
    """
    if not isinstance(payload, list):
        raise CollectionFormatError(f"expected a JSON array, got {type(payload).__name__}")

    model = RECORD_MODELS[dataset]
    records = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise CollectionFormatError(f"record {index} is not a JSON object")
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            raise CollectionFormatError(f"record {index}: {describe_validation_error(e)}") from e
    return records
