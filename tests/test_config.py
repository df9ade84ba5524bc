from pathlib import Path

import pytest

from roasboard.config import DEFAULT_PALETTE, load_config


def test_defaults(monkeypatch):
    for name in (
        "ROASBOARD_OUTPUT_DIR",
        "ROASBOARD_EXPORT_FILENAME",
        "ROASBOARD_TEMPLATE_FILENAME",
        "ROASBOARD_AUTO_LOAD_TEMPLATE",
    ):
        monkeypatch.delenv(name, raising=False)
    config = load_config()
    assert config.output_dir == Path("output")
    assert config.export_filename == "filtered_marketing_data.csv"
    assert config.template_filename == "marketing_template.csv"
    assert config.auto_load_template is True
    assert config.palette == DEFAULT_PALETTE


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("ROASBOARD_OUTPUT_DIR", str(tmp_path))
    monkeypatch.setenv("ROASBOARD_EXPORT_FILENAME", "out.csv")
    monkeypatch.setenv("ROASBOARD_AUTO_LOAD_TEMPLATE", "No")
    config = load_config()
    assert config.output_dir == tmp_path
    assert config.export_filename == "out.csv"
    assert config.auto_load_template is False


@pytest.mark.parametrize(
    "name, value",
    [
        ("ROASBOARD_AUTO_LOAD_TEMPLATE", "maybe"),
        ("ROASBOARD_EXPORT_FILENAME", "../escape.csv"),
        ("ROASBOARD_TEMPLATE_FILENAME", " "),
    ],
)
def test_invalid_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        load_config()
