import pytest

from ai_catalog.models import DEFAULT_CATEGORY
from ai_catalog.models import DEFAULT_ICON
from ai_catalog.models import CollectionFormatError
from ai_catalog.models import Dataset
from ai_catalog.models import LearningResource
from ai_catalog.models import McpServer
from ai_catalog.models import Tool
from ai_catalog.models import parse_collection


def test_missing_optional_fields_get_defaults():
    tool = Tool.model_validate({"name": "A", "link": "https://a", "description": "d"})
    assert tool.icon == DEFAULT_ICON
    assert tool.category == DEFAULT_CATEGORY
    assert tool.pricing == "free"
    assert tool.personal_favourite == "no"
    assert tool.pricing_note is None

    resource = LearningResource.model_validate({"name": "A", "link": "https://a", "description": "d"})
    assert resource.difficulty == "beginner"
    assert resource.type == "article"

    server = McpServer.model_validate({"name": "A", "link": "https://a", "description": "d"})
    assert server.personal_favourite == "no"


def test_pricing_note_uses_camel_case_on_disk():
    tool = Tool.model_validate(
        {"name": "A", "link": "https://a", "description": "d", "pricingNote": "Free tier available"}
    )
    assert tool.pricing_note == "Free tier available"
    assert tool.to_json()["pricingNote"] == "Free tier available"


def test_to_json_omits_unset_pricing_note():
    tool = Tool(name="A", link="https://a", description="d")
    assert "pricingNote" not in tool.to_json()


def test_unknown_fields_survive_to_json():
    resource = LearningResource.model_validate(
        {"name": "A", "link": "https://a", "description": "d", "duration": "2h"}
    )
    assert resource.to_json()["duration"] == "2h"


def test_parse_collection_requires_array():
    with pytest.raises(CollectionFormatError, match="expected a JSON array"):
        parse_collection(Dataset.TOOLS, {"tools": []})


def test_parse_collection_names_missing_field_and_index():
    payload = [
        {"name": "A", "link": "https://a", "description": "d"},
        {"name": "B", "description": "d"},
    ]
    with pytest.raises(CollectionFormatError) as exc_info:
        parse_collection(Dataset.TOOLS, payload)
    message = str(exc_info.value)
    assert "record 1" in message
    assert "missing required field 'link'" in message


def test_parse_collection_rejects_blank_required_field():
    with pytest.raises(CollectionFormatError, match="'name'"):
        parse_collection(Dataset.LEARNING, [{"name": "   ", "link": "https://a", "description": "d"}])


def test_parse_collection_rejects_unknown_pricing():
    with pytest.raises(CollectionFormatError, match="pricing"):
        payload = [{"name": "A", "link": "https://a", "description": "d", "pricing": "cheap"}]
        parse_collection(Dataset.MCP_SERVERS, payload)


def test_parse_collection_rejects_non_object_items():
    with pytest.raises(CollectionFormatError, match="record 0 is not a JSON object"):
        parse_collection(Dataset.TOOLS, ["ChatGPT"])


def test_parse_collection_keeps_order_and_types():
    payload = [
        {"name": "B", "link": "https://b", "description": "d", "category": "coding"},
        {"name": "A", "link": "https://a", "description": "d", "category": "audio"},
    ]
    records = parse_collection(Dataset.TOOLS, payload)
    assert [record.name for record in records] == ["B", "A"]
    assert all(isinstance(record, Tool) for record in records)
