"""FastHTML components for the catalog pages and the admin panel.

Render functions only read application state; the web layer decides which
of them to call after a state change.
"""

from urllib.parse import urlencode

from fasthtml.common import H1
from fasthtml.common import H2
from fasthtml.common import H3
from fasthtml.common import H5
from fasthtml.common import A
from fasthtml.common import Button
from fasthtml.common import Code
from fasthtml.common import Div
from fasthtml.common import Form
from fasthtml.common import Input
from fasthtml.common import Label
from fasthtml.common import Li
from fasthtml.common import Nav
from fasthtml.common import NotStr
from fasthtml.common import Option
from fasthtml.common import P
from fasthtml.common import Pre
from fasthtml.common import Section as SectionTag
from fasthtml.common import Select
from fasthtml.common import Span
from fasthtml.common import Textarea
from fasthtml.common import Ul

from ai_catalog.admin import FIELD_OPTIONS
from ai_catalog.admin import AdminEditor
from ai_catalog.admin import form_fields
from ai_catalog.config import BASE_PATH
from ai_catalog.models import REQUIRED_FIELDS
from ai_catalog.models import Dataset
from ai_catalog.query import ALL_CATEGORIES
from ai_catalog.query import catalog_stats
from ai_catalog.query import filter_records
from ai_catalog.query import filter_tools
from ai_catalog.query import format_category_name
from ai_catalog.query import get_categories
from ai_catalog.state import AppState
from ai_catalog.state import Section

PRICING_BADGES = {
    "free": "✨ Free",
    "paid": "💎 Paid",
    "freemium": "🎯 Freemium",
}

STAGGER_SECONDS = 0.05

# title, subtitle, search placeholder, label of the "all" pill
SECTION_COPY = {
    Section.TOOLS: ("AI Tools", "Tools I use and recommend.", "Search tools...", "All Tools"),
    Section.LEARNING: ("Learn AI", "Courses, articles and videos.", "Search resources...", "All Resources"),
    Section.MCP_SERVERS: ("MCP Servers", "Model Context Protocol servers.", "Search servers...", "All Servers"),
}

NAV_LABELS = {
    Section.TOOLS: "Tools",
    Section.LEARNING: "Learn",
    Section.MCP_SERVERS: "MCP Servers",
    Section.ADMIN: "Admin",
}

FIELD_LABELS = {
    "name": "Name",
    "icon": "Icon",
    "link": "Link",
    "description": "Description",
    "category": "Category",
    "pricing": "Pricing",
    "pricingNote": "Pricing note",
    "personal_favourite": "Personal favourite",
    "difficulty": "Difficulty",
    "type": "Type",
}


def url(path: str) -> str:
    """Prefix path with BASE_PATH for subdirectory deployment"""
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{BASE_PATH}{path}"


def _stagger(index: int) -> str:
    return f"animation-delay: {index * STAGGER_SECONDS:.2f}s"


def _external_link(href: str, text: str, css_class: str):
    return A(text, href=href, target="_blank", rel="noopener", _class=css_class)


# Cards
def pricing_badge(record):
    attrs = {}
    if getattr(record, "pricing_note", None):
        attrs["title"] = record.pricing_note
    return Span(PRICING_BADGES[record.pricing], _class=f"pricing-badge {record.pricing}", **attrs)


def _card_header(record, *meta):
    return Div(
        Div(record.icon, _class="card-icon"),
        Div(H5(record.name, _class="card-name"), *meta, _class="card-info"),
        _class="card-header",
    )


def tool_card(tool, index: int = 0):
    return Div(
        _card_header(tool, Span(format_category_name(tool.category), _class="card-category")),
        P(tool.description, _class="card-description"),
        Div(pricing_badge(tool), _external_link(tool.link, "Visit →", "card-link"), _class="card-footer"),
        _class="catalog-card tool-card",
        style=_stagger(index),
    )


def learning_card(resource, index: int = 0):
    return Div(
        _card_header(
            resource,
            Div(
                Span(resource.difficulty, _class=f"difficulty-badge {resource.difficulty}"),
                Span(resource.type, _class="type-badge"),
                _class="card-meta",
            ),
        ),
        P(resource.description, _class="card-description"),
        Div(
            Span(format_category_name(resource.category), _class="card-category"),
            _external_link(resource.link, "Learn Now →", "card-link"),
            _class="card-footer",
        ),
        _class="catalog-card learn-card",
        style=_stagger(index),
    )


def mcp_card(server, index: int = 0):
    return Div(
        _card_header(server, Span(format_category_name(server.category), _class="card-category")),
        P(server.description, _class="card-description"),
        Div(pricing_badge(server), _external_link(server.link, "View Server →", "card-link"), _class="card-footer"),
        _class="catalog-card mcp-card",
        style=_stagger(index),
    )


CARD_BUILDERS = {
    Dataset.TOOLS: tool_card,
    Dataset.LEARNING: learning_card,
    Dataset.MCP_SERVERS: mcp_card,
}


def card_grid(records, dataset: Dataset, grid_id: str):
    build = CARD_BUILDERS[dataset]
    return Div(*[build(record, index) for index, record in enumerate(records)], _class="card-grid", id=grid_id)


def empty_state(section: Section, visible: bool):
    return Div(
        H3("No results found"),
        P("Try a different search term or category."),
        _class="empty-state",
        id=f"{section.value}-empty",
        style="display: block" if visible else "display: none",
    )


def load_error(dataset: Dataset, message: str):
    return Div(message, _class="load-error", id=f"{dataset.value}-grid")


# Filters
def category_pill(section: Section, category: str, label: str, active: str):
    return Button(
        label,
        _class="category-pill active" if category == active else "category-pill",
        data_category=category,
        hx_get=url(f"/category/{section.value}") + "?" + urlencode({"category": category}),
        hx_target=f"#{section.value}-body",
        hx_swap="outerHTML",
    )


def category_pills(state: AppState, section: Section):
    records = state.store.get(section.dataset)
    active = state.selection.active_category if state.is_active(section) else ALL_CATEGORIES
    all_label = SECTION_COPY[section][3]
    pills = [category_pill(section, ALL_CATEGORIES, all_label, active)]
    for category in get_categories(records):
        pills.append(category_pill(section, category, format_category_name(category), active))
    return Div(*pills, _class="categories", id=f"{section.value}-categories")


# Sections
def section_results(state: AppState, section: Section) -> list:
    """Grids (and their empty-state indicator) for a catalog section under the current filters."""
    dataset = section.dataset
    if dataset in state.load_errors:
        return [load_error(dataset, state.load_errors[dataset])]

    category = state.selection.active_category
    search = state.selection.search_term
    records = state.store.get(dataset)

    if dataset is Dataset.TOOLS:
        views = filter_tools(records, category, search)
        blocks = []
        if views.favourites:
            blocks.append(
                Div(
                    H2("⭐ Personal Favourites"),
                    card_grid(views.favourites, dataset, "favorites-grid"),
                    _class="favorites-section",
                )
            )
        blocks.append(card_grid(views.general, dataset, "tools-grid"))
        blocks.append(empty_state(section, views.is_empty))
        return blocks

    filtered = filter_records(records, category, search)
    return [card_grid(filtered, dataset, f"{dataset.value}-grid"), empty_state(section, not filtered)]


def section_body(state: AppState, section: Section):
    return Div(category_pills(state, section), *section_results(state, section), id=f"{section.value}-body")


def catalog_section(state: AppState, section: Section):
    title, subtitle, placeholder, _ = SECTION_COPY[section]
    return SectionTag(
        Div(H2(title), P(subtitle, _class="intro"), _class="section-header"),
        Input(
            type="search",
            name="q",
            value=state.selection.search_term,
            placeholder=placeholder,
            id=f"{section.value}-search",
            hx_get=url(f"/search/{section.value}"),
            hx_trigger="input changed delay:150ms, search",
            hx_target=f"#{section.value}-body",
            hx_swap="outerHTML",
        ),
        section_body(state, section),
        _class="page-section active",
        id=f"{section.value}-section",
    )


# Admin
def _field_input(name: str, value: str = ""):
    label = FIELD_LABELS[name] + (" *" if name in REQUIRED_FIELDS else "")
    if name in FIELD_OPTIONS:
        options = [Option(option, value=option, selected=option == value) for option in FIELD_OPTIONS[name]]
        control = Select(*options, name=name, id=f"admin-{name}")
    elif name == "description":
        control = Textarea(value, name=name, id=f"admin-{name}", rows=3)
    else:
        control = Input(type="url" if name == "link" else "text", name=name, value=value, id=f"admin-{name}")
    return Label(label, control, _for=f"admin-{name}")


def admin_status(editor: AdminEditor):
    if editor.status is None:
        return Div(id="admin-status")
    return Div(
        editor.status.message,
        _class="status success" if editor.status.ok else "status error",
        id="admin-status",
    )


def admin_preview(editor: AdminEditor):
    preview = editor.preview()
    return Div(
        P(f"{preview.count} items in {preview.dataset.label}", _class="preview-count"),
        Pre(Code(NotStr(preview.html))),
        _class="admin-preview",
        id="admin-preview",
    )


def admin_panel(editor: AdminEditor, values=None):
    """The admin panel; `values` refills the add form after a rejected submission."""
    dataset = editor.dataset
    values = values or {}
    target = {"hx_target": "#admin-panel", "hx_swap": "outerHTML"}
    dataset_select = Select(
        *[Option(d.label, value=d.value, selected=d is dataset) for d in Dataset],
        name="dataset",
        id="admin-dataset",
        hx_get=url("/admin/dataset"),
        hx_trigger="change",
        **target,
    )
    add_form = Form(
        *[_field_input(name, str(values.get(name) or "")) for name in form_fields(dataset)],
        Button("Add entry", type="submit"),
        hx_post=url("/admin/add"),
        _class="admin-form",
        **target,
    )
    load_form = Form(
        Input(type="file", name="file", accept=".json,application/json"),
        Button("Load from file", type="submit"),
        hx_post=url("/admin/load"),
        hx_encoding="multipart/form-data",
        **target,
    )
    save_form = Form(
        Button(f"Save {dataset.filename}", type="submit"),
        hx_post=url("/admin/save"),
        **target,
    )
    return Div(
        Label("Dataset", dataset_select, _for="admin-dataset"),
        admin_status(editor),
        add_form,
        Div(load_form, save_form, _class="admin-actions"),
        admin_preview(editor),
        id="admin-panel",
    )


def admin_section(editor: AdminEditor):
    return SectionTag(
        Div(
            H2("Admin"),
            P("Add entries, load a JSON file or export the current data.", _class="intro"),
            _class="section-header",
        ),
        admin_panel(editor),
        _class="page-section active",
        id="admin-section",
    )


# Page
def stats_bar(state: AppState, oob: bool = False):
    stats = catalog_stats(state.store.get(Dataset.TOOLS))
    attrs = {"hx_swap_oob": "true"} if oob else {}
    return Div(
        Span(Span(str(stats.total_tools), id="totalTools", _class="stat-value"), " tools"),
        Span(Span(str(stats.free_tools), id="freeTools", _class="stat-value"), " free to try"),
        Span(Span(str(stats.categories), id="categoriesCount", _class="stat-value"), " categories"),
        _class="stats",
        id="stats",
        **attrs,
    )


def nav_bar(state: AppState):
    links = []
    for section in Section:
        active = state.is_active(section)
        links.append(
            Li(
                A(
                    NAV_LABELS[section],
                    href=url(f"/?section={section.value}"),
                    hx_get=url(f"/section/{section.value}"),
                    hx_target="#app",
                    hx_swap="outerHTML",
                    _class="nav-link active" if active else "nav-link",
                    data_section=section.value,
                )
            )
        )
    return Nav(Ul(*links))


def active_view(state: AppState, editor: AdminEditor):
    section = state.selection.active_section
    if section is Section.ADMIN:
        return admin_section(editor)
    return catalog_section(state, section)


def app_view(state: AppState, editor: AdminEditor):
    return Div(
        Div(
            H1("AI Tools Collection", _class="window-title"),
            P("A curated collection of AI tools, learning resources and MCP servers.", _class="intro"),
            stats_bar(state),
            _class="page-header",
        ),
        nav_bar(state),
        active_view(state, editor),
        id="app",
    )
