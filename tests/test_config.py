from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from numberline.config import (
    NO_CONFIG_ENV_VAR,
    NumberingConfig,
    apply_overrides,
    build_config,
    load_config,
    normalize_delimiter,
    parse_number_format,
    validate_config,
)
from numberline.exceptions import ConfigError, PatternCompileError
from numberline.models import NumberFormat, NumberingStyle, StyleKind


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".numberline.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_defaults():
    config = NumberingConfig()

    assert config.header_style == NumberingStyle.none()
    assert config.body_style == NumberingStyle.non_empty()
    assert config.footer_style == NumberingStyle.none()
    assert config.number_format is NumberFormat.RIGHT
    assert config.width == 6
    assert config.separator == "\t"
    assert config.start == 1
    assert config.increment == 1
    assert config.join_blank == 1
    assert config.no_renumber is False
    assert config.delimiter == "\\:"


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.numberline]
        header_style = "a"
        body_style = "p^#"
        footer_style = "t"
        number_format = "rz"
        width = 3
        separator = " | "
        start = 0
        increment = 10
        join_blank = 2
        no_renumber = true
        delimiter = "@"
        """,
    )

    config = load_config(tmp_path)

    assert config.header_style == NumberingStyle.all()
    assert config.body_style.kind is StyleKind.PATTERN
    assert config.body_style.pattern.pattern == "^#"
    assert config.footer_style == NumberingStyle.non_empty()
    assert config.number_format is NumberFormat.RIGHT_ZERO
    assert config.width == 3
    assert config.separator == " | "
    assert config.start == 0
    assert config.increment == 10
    assert config.join_blank == 2
    assert config.no_renumber is True
    assert config.delimiter == "@"


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [numberline]
        body_style = "a"
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.body_style == NumberingStyle.all()


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.numberline]
        width = 2
        """,
    )

    assert load_config(tmp_path).width == 2


def test_pyproject_without_table_falls_through(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.other]
        width = 9
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [numberline]
        width = 4
        """,
    )

    assert load_config(tmp_path).width == 4


def test_nearest_config_wins(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.numberline]
        width = 9
        """,
    )
    nested = tmp_path / "nested"
    nested.mkdir()
    _write_pyproject(
        nested,
        """
        [tool.numberline]
        width = 3
        """,
    )

    assert load_config(nested).width == 3


def test_invalid_toml_is_skipped(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text("[tool.numberline\n", encoding="utf-8")

    assert load_config(tmp_path) == NumberingConfig()


def test_empty_table_gives_defaults(tmp_path: Path):
    _write_pyproject(tmp_path, "[tool.numberline]\n")

    assert load_config(tmp_path) == NumberingConfig()


def test_non_mapping_table_is_rejected(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        numberline = "a"
        """,
    )

    with pytest.raises(ConfigError, match="tool.numberline"):
        load_config(tmp_path)


def test_unknown_keys_are_rejected(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.numberline]
        colour = "red"
        """,
    )

    with pytest.raises(ConfigError, match="colour"):
        load_config(tmp_path)


def test_invalid_style_in_file_names_the_file(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.numberline]
        body_style = "z"
        """,
    )

    with pytest.raises(ConfigError, match="pyproject.toml"):
        load_config(tmp_path)


def test_no_config_env_var_skips_discovery(tmp_path: Path, monkeypatch):
    _write_pyproject(
        tmp_path,
        """
        [tool.numberline]
        width = 2
        """,
    )
    monkeypatch.setenv(NO_CONFIG_ENV_VAR, "1")

    assert load_config(tmp_path) == NumberingConfig()


def test_apply_overrides_parses_tokens():
    config = apply_overrides(NumberingConfig(), body_style="a", number_format="ln", width=None)

    assert config.body_style == NumberingStyle.all()
    assert config.number_format is NumberFormat.LEFT
    assert config.width == 6


def test_apply_overrides_without_changes_returns_same_object():
    config = NumberingConfig()

    assert apply_overrides(config, width=None) is config


def test_apply_overrides_rejects_bad_pattern():
    with pytest.raises(PatternCompileError):
        apply_overrides(NumberingConfig(), header_style="p(")


def test_parse_number_format():
    assert parse_number_format("rz") is NumberFormat.RIGHT_ZERO
    assert parse_number_format(NumberFormat.LEFT) is NumberFormat.LEFT
    with pytest.raises(ConfigError, match="invalid line number format"):
        parse_number_format("xx")


@pytest.mark.parametrize("value", ["", "abc", 3, None])
def test_normalize_delimiter_rejects_bad_values(value):
    with pytest.raises(ConfigError, match="invalid section delimiter"):
        normalize_delimiter(value)


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"width": 0}, "`width` must be a positive integer"),
        ({"join_blank": -1}, "`join_blank` must be a positive integer"),
        ({"width": True}, "`width` must be an integer"),
        ({"start": "1"}, "`start` must be an integer"),
        ({"increment": 1.5}, "`increment` must be an integer"),
        ({"separator": 3}, "`separator` must be a string"),
        ({"no_renumber": "yes"}, "`no_renumber` must be a boolean"),
        ({"delimiter": "abc"}, "invalid section delimiter"),
    ],
)
def test_validate_config_rejects_invalid_values(overrides, message):
    with pytest.raises(ConfigError, match=message):
        validate_config(NumberingConfig(**overrides))


def test_validate_config_accepts_negative_start_and_increment():
    validate_config(NumberingConfig(start=-5, increment=-2))


def test_build_config_overrides_file_values(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.numberline]
        width = 3
        body_style = "a"
        """,
    )

    config = build_config(tmp_path, width=8, body_style=None)

    assert config.width == 8
    assert config.body_style == NumberingStyle.all()


def test_build_config_validates_file_values(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.numberline]
        join_blank = 0
        """,
    )

    with pytest.raises(ConfigError, match="join_blank"):
        build_config(tmp_path)


def test_build_config_rejects_unknown_override(tmp_path: Path, monkeypatch):
    monkeypatch.setenv(NO_CONFIG_ENV_VAR, "1")

    with pytest.raises(ConfigError):
        build_config(tmp_path, colour="red")


def test_invalid_pattern_in_file_keeps_pattern_details(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.numberline]
        body_style = "p("
        """,
    )

    with pytest.raises(PatternCompileError) as excinfo:
        load_config(tmp_path)

    assert excinfo.value.pattern == "("
    assert excinfo.value.reason
    assert excinfo.value.source == tmp_path.resolve() / "pyproject.toml"
    assert "pyproject.toml" in str(excinfo.value)
