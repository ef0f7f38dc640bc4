from pathlib import Path
import tomllib

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def _load() -> dict:
    return tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))


def test_console_script_points_at_typer_app() -> None:
    scripts = _load()["project"]["scripts"]
    assert scripts["copilot-agent-util"] == "copilot_agent_util.entrypoints.cli:app"


def test_config_schema_ships_as_package_data() -> None:
    package_data = _load()["tool"]["setuptools"]["package-data"]
    assert "*.json" in package_data["copilot_agent_util.schemas"]
    schema = Path(__file__).resolve().parents[1] / "src/copilot_agent_util/schemas/config.schema.v1.json"
    assert schema.is_file()
