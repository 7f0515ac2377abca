import json

from click.testing import CliRunner

from ai_catalog.diagnostics import main


def test_diagnostics_reports_counts_and_failures(tmp_path):
    tools = [
        {"name": "A", "link": "https://a", "description": "d", "category": "coding", "pricing": "paid"},
        {"name": "B", "link": "https://b", "description": "d", "category": "audio", "personal_favourite": "yes"},
    ]
    (tmp_path / "tools.json").write_text(json.dumps(tools))
    (tmp_path / "mcp-servers.json").write_text("[]")

    result = CliRunner().invoke(main, ["--data-dir", str(tmp_path), "--data-url", ""])

    assert result.exit_code == 0
    assert "tools_records=2" in result.output
    assert "tools_categories=2" in result.output
    assert "tools_free_or_freemium=1" in result.output
    assert "tools_favourites=1" in result.output
    assert "mcp-servers_records=0" in result.output
    assert "learning_error=" in result.output
