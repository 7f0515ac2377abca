import logging
from pathlib import Path
from typing import Optional

from fasthtml.common import Main
from fasthtml.common import Script
from fasthtml.common import StyleX
from fasthtml.common import Title
from fasthtml.fastapp import fast_app
from starlette.datastructures import UploadFile
from starlette.requests import Request
from starlette.responses import Response

from ai_catalog import config
from ai_catalog.admin import AdminEditor
from ai_catalog.logging_config import setup_logging
from ai_catalog.models import Dataset
from ai_catalog.query import ALL_CATEGORIES
from ai_catalog.render import admin_panel
from ai_catalog.render import app_view
from ai_catalog.render import section_body
from ai_catalog.render import stats_bar
from ai_catalog.render import url
from ai_catalog.state import AppState
from ai_catalog.state import ChangeKind
from ai_catalog.state import Section
from ai_catalog.state import StateChange
from ai_catalog.storage import load_all

logger = logging.getLogger(__name__)


def _parse_section(value: str, catalog_only: bool = False) -> Optional[Section]:
    try:
        section = Section(value)
    except ValueError:
        return None
    if catalog_only and section is Section.ADMIN:
        return None
    return section


def _not_found(message: str) -> Response:
    return Response(message, status_code=404, media_type="text/plain")


def create_app(
    state: Optional[AppState] = None,
    editor: Optional[AdminEditor] = None,
    data_dir: Optional[Path] = None,
    data_url: Optional[str] = None,
):
    """Build the FastHTML app around one shared application state."""
    state = state or AppState()
    editor = editor or AdminEditor(state, save_dir=config.save_dir())
    data_dir = data_dir or config.DATA_DIR
    data_url = config.DATA_URL if data_url is None else data_url

    app, rt = fast_app(
        static_path=str(config.STATIC_DIR),
        hdrs=(StyleX(str(config.STATIC_DIR / "styles.css")),),
    )
    app.state.catalog = state
    app.state.editor = editor

    async def ensure_loaded() -> None:
        if not state.loaded:
            logger.info("Catalog empty, loading datasets")
            state.apply_load(await load_all(data_dir=data_dir, base_url=data_url or None))
            logger.info(f"Loaded catalog with {len(state.load_errors)} failed datasets")

    def admin_response(values=None):
        panel = admin_panel(editor, values)
        # The header stats are derived from the tools collection
        if editor.take_change() is Section.TOOLS:
            return panel, stats_bar(state, oob=True)
        return panel

    @rt("/")
    async def index(section: str = ""):
        await ensure_loaded()
        if section:
            target = _parse_section(section)
            if target is None:
                return _not_found(f"Unknown section: {section}")
            state.dispatch(StateChange(ChangeKind.SECTION, target))
        return Title("AI Tools Collection"), Main(app_view(state, editor), _class="container")

    @rt("/section/{section_name}")
    async def switch_section(section_name: str):
        section = _parse_section(section_name)
        if section is None:
            return _not_found(f"Unknown section: {section_name}")
        await ensure_loaded()
        state.dispatch(StateChange(ChangeKind.SECTION, section))
        return app_view(state, editor)

    @rt("/search/{section_name}")
    async def search(section_name: str, q: str = ""):
        section = _parse_section(section_name, catalog_only=True)
        if section is None:
            return _not_found(f"Unknown section: {section_name}")
        await ensure_loaded()
        if state.dispatch(StateChange(ChangeKind.SEARCH, section, q)) is None:
            return Response(status_code=204)
        return section_body(state, section)

    @rt("/category/{section_name}")
    async def select_category(section_name: str, category: str = ALL_CATEGORIES):
        section = _parse_section(section_name, catalog_only=True)
        if section is None:
            return _not_found(f"Unknown section: {section_name}")
        await ensure_loaded()
        if state.dispatch(StateChange(ChangeKind.CATEGORY, section, category)) is None:
            return Response(status_code=204)
        return section_body(state, section)

    @rt("/admin/dataset")
    async def admin_dataset(dataset: str = ""):
        await ensure_loaded()
        editor.select_dataset(dataset)
        return admin_panel(editor)

    @rt("/admin/add", methods=["post"])
    async def admin_add(req: Request):
        await ensure_loaded()
        form = await req.form()
        result = editor.add_record(form)
        return admin_response(None if result.ok else form)

    @rt("/admin/load", methods=["post"])
    async def admin_load(req: Request):
        await ensure_loaded()
        form = await req.form()
        upload = form.get("file")
        if isinstance(upload, UploadFile):
            content = await upload.read()
            filename = upload.filename
        else:
            content, filename = b"", None
        editor.load_from_file(content, filename)
        return admin_response()

    @rt("/admin/save", methods=["post"])
    async def admin_save():
        await ensure_loaded()
        result = editor.save()
        if result.ok and result.method == "download":
            download_url = url(f"/admin/download/{editor.dataset.value}")
            return admin_panel(editor), Script(f"window.location.href = '{download_url}';")
        return admin_panel(editor)

    @rt("/admin/download/{dataset_name}")
    async def admin_download(dataset_name: str):
        try:
            dataset = Dataset(dataset_name)
        except ValueError:
            return _not_found(f"Unknown dataset: {dataset_name}")
        await ensure_loaded()
        return Response(
            editor.export_payload(dataset),
            media_type="application/json",
            headers={"Content-Disposition": f'attachment; filename="{dataset.filename}"'},
        )

    @rt("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


def main() -> None:
    import uvicorn

    setup_logging()
    logger.info(f"Starting server on port {config.WEB_PORT}")
    uvicorn.run("ai_catalog.web:app", host="0.0.0.0", port=config.WEB_PORT)


# For direct script execution
if __name__ == "__main__":
    main()
