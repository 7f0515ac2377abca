from ai_catalog.models import LearningResource
from ai_catalog.models import Tool
from ai_catalog.query import ALL_CATEGORIES
from ai_catalog.query import catalog_stats
from ai_catalog.query import filter_records
from ai_catalog.query import filter_tools
from ai_catalog.query import format_category_name
from ai_catalog.query import get_categories
from ai_catalog.query import matches
from ai_catalog.query import partition_favourites


def _tool(name, category="writing", favourite="no", description="", pricing="free"):
    return Tool(
        name=name,
        link=f"https://example.com/{name.lower()}",
        description=description or f"{name} does things",
        category=category,
        personal_favourite=favourite,
        pricing=pricing,
    )


def _example_tools():
    return [
        _tool("Alpha", category="writing", favourite="no"),
        _tool("Beta", category="coding", favourite="yes"),
        _tool("Gamma", category="coding", favourite="no", description="Autocomplete for editors"),
        _tool("Delta", category="image-generation", favourite="yes", description="Makes pictures"),
        _tool("Epsilon", category="writing", favourite="no", description="Grammar CHECKER"),
    ]


def test_default_filters_return_collection_unchanged():
    tools = _example_tools()
    assert filter_records(tools, ALL_CATEGORIES, "") == tools


def test_search_matches_name_case_insensitively():
    tools = [
        _tool("Alpha", category="writing", description="x"),
        _tool("Beta", category="coding", favourite="yes", description="x"),
        _tool("Gamma", category="coding", description="x"),
    ]

    # "beta" ends in "a", so it matches alongside Alpha and Gamma
    assert [tool.name for tool in filter_records(tools, ALL_CATEGORIES, "a")] == ["Alpha", "Beta", "Gamma"]
    assert [tool.name for tool in filter_records(tools, ALL_CATEGORIES, "ALP")] == ["Alpha"]
    assert [tool.name for tool in filter_records(tools, ALL_CATEGORIES, "et")] == ["Beta"]


def test_filter_is_stable_and_complete():
    tools = _example_tools()
    for category in [ALL_CATEGORIES, "coding", "writing", "missing"]:
        for search in ["", "e", "CHECK", "coding", "zzz"]:
            result = filter_records(tools, category, search)
            expected = [tool for tool in tools if matches(tool, category, search)]
            assert result == expected
            for tool in result:
                assert category == ALL_CATEGORIES or tool.category == category


def test_search_checks_description_and_category():
    tools = _example_tools()
    assert [t.name for t in filter_records(tools, search="checker")] == ["Epsilon"]
    assert [t.name for t in filter_records(tools, search="IMAGE")] == ["Delta"]


def test_category_filter_uses_exact_match():
    tools = _example_tools()
    assert [t.name for t in filter_records(tools, category="coding")] == ["Beta", "Gamma"]
    assert filter_records(tools, category="code") == []


def test_partition_keeps_relative_order():
    favourites, others = partition_favourites(_example_tools())
    assert [t.name for t in favourites] == ["Beta", "Delta"]
    assert [t.name for t in others] == ["Alpha", "Gamma", "Epsilon"]


def test_tool_views_partition_the_filtered_result():
    tools = _example_tools()
    for category, search in [(ALL_CATEGORIES, ""), ("coding", ""), (ALL_CATEGORIES, "a"), ("writing", "gram")]:
        views = filter_tools(tools, category, search)
        full = filter_records(tools, category, search)

        assert all(tool.is_favourite for tool in views.favourites)
        assert not any(tool.is_favourite for tool in views.general)
        assert sorted(t.name for t in views.favourites + views.general) == sorted(t.name for t in full)


def test_tool_views_empty_only_when_both_partitions_empty():
    tools = _example_tools()
    assert filter_tools(tools, "coding", "gamma").is_empty is False
    assert filter_tools(tools, "coding", "nothing here").is_empty is True


def test_categories_are_sorted_distinct_and_idempotent():
    tools = _example_tools()
    first = get_categories(tools)
    assert first == ["coding", "image-generation", "writing"]
    assert get_categories(tools) == first


def test_new_category_adds_exactly_one_sorted_entry():
    tools = _example_tools()
    before = get_categories(tools)
    tools.append(_tool("Zeta", category="audio"))
    after = get_categories(tools)

    assert len(after) == len(before) + 1
    assert after == ["audio", "coding", "image-generation", "writing"]


def test_categories_work_for_learning_resources():
    resources = [
        LearningResource(name="A", link="https://a", description="a", category="prompting"),
        LearningResource(name="B", link="https://b", description="b", category="machine-learning"),
    ]
    assert get_categories(resources) == ["machine-learning", "prompting"]


def test_format_category_name():
    assert format_category_name("machine-learning") == "Machine Learning"
    assert format_category_name("api") == "Api"
    assert format_category_name("") == ""
    assert format_category_name("image-generation-tools") == "Image Generation Tools"


def test_catalog_stats_counts_free_and_freemium():
    tools = [
        _tool("A", pricing="free"),
        _tool("B", pricing="freemium", category="coding"),
        _tool("C", pricing="paid", category="coding"),
    ]
    stats = catalog_stats(tools)
    assert stats.total_tools == 3
    assert stats.free_tools == 2
    assert stats.categories == 2
