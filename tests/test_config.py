from pathlib import Path

import pytest

from notetree.config import TreeConfig, load_config
from notetree.errors import ConfigError


def _write(tmp_path: Path, lines: list[str]) -> Path:
    path = tmp_path / "notetree.toml"
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def test_defaults_without_file() -> None:
    config = load_config(None)

    assert config == TreeConfig()
    assert config.fields == ("title", "keywords")
    assert config.all_fields == ("title", "identifier", "keywords", "signature", "date")


def test_load_tree_table(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        [
            "[tree]",
            'fields = ["date", "title", "status"]',
            'extra_fields = ["status"]',
            'marker = "o"',
            'on_missing = "stub"',
            'extensions = ["md", ".ORG"]',
            "",
        ],
    )

    config = load_config(path)

    assert config.fields == ("date", "title", "status")
    assert config.all_fields[-1] == "status"
    assert config.marker == "o"
    assert config.on_missing == "stub"
    assert config.extensions == (".md", ".org")


def test_missing_table_uses_defaults(tmp_path: Path) -> None:
    assert load_config(_write(tmp_path, ["[other]", "x = 1", ""])) == TreeConfig()


@pytest.mark.parametrize(
    "line",
    [
        "colour = 'red'",
        "marker = '**'",
        "marker = ' '",
        "fields = []",
        "fields = ['status']",
        "on_missing = 'skip'",
        "fields = 'title'\nmarker = 3",
    ],
)
def test_invalid_settings(tmp_path: Path, line: str) -> None:
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, ["[tree]", line, ""]))


def test_invalid_toml(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, ["[tree", ""]))
