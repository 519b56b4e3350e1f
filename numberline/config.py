"""Configuration loading and management."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from .exceptions import ConfigError, PatternCompileError
from .models import NumberFormat, NumberingStyle, Section
from .sections import DEFAULT_DELIMITER
from .styles import parse_style

NO_CONFIG_ENV_VAR = "NUMBERLINE_NO_CONFIG"

_STYLE_KEYS = ("header_style", "body_style", "footer_style")


@dataclass(frozen=True)
class NumberingConfig:
    """Configuration for numbering a stream of lines.

    Attributes:
        header_style: Numbering style for header sections.
        body_style: Numbering style for body sections.
        footer_style: Numbering style for footer sections.
        number_format: Justification of rendered numbers.
        width: Minimum width of the number field.
        separator: Text placed between a number and its line.
        start: First line number of each section.
        increment: Step added after each numbered line; may be negative.
        join_blank: Under style ``a``, number only every Nth consecutive blank line.
        no_renumber: Keep counting across section delimiters instead of resetting.
        delimiter: One- or two-character section delimiter base.

    Examples:
        NumberingConfig(body_style=NumberingStyle.all(), width=4)
    """

    # Styles
    header_style: NumberingStyle = field(default_factory=NumberingStyle.none)
    body_style: NumberingStyle = field(default_factory=NumberingStyle.non_empty)
    footer_style: NumberingStyle = field(default_factory=NumberingStyle.none)

    # Formatting
    number_format: NumberFormat = NumberFormat.RIGHT
    width: int = 6
    separator: str = "\t"

    # Counting
    start: int = 1
    increment: int = 1
    join_blank: int = 1
    no_renumber: bool = False

    # Sections
    delimiter: str = DEFAULT_DELIMITER

    def style_for(self, section: Section) -> NumberingStyle:
        if section is Section.HEADER:
            return self.header_style
        if section is Section.FOOTER:
            return self.footer_style
        return self.body_style


def load_config(search_path: Path) -> NumberingConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.numberline]`` table from `pyproject.toml` and the
    ``[numberline]`` or ``[tool.numberline]`` table from `.numberline.toml`
    when present. Returns default values when no configuration is found or
    when ``NUMBERLINE_NO_CONFIG`` is set. TOML files that cannot be read or
    decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        NumberingConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a ``numberline`` table is present but is not a mapping,
            contains unsupported keys, or holds invalid values.

    Examples:
        load_config(Path.cwd())
    """
    if os.environ.get(NO_CONFIG_ENV_VAR):
        return NumberingConfig()

    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "numberline")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".numberline.toml",
            table_paths=[("numberline",), ("tool", "numberline")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return NumberingConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> NumberingConfig | None:
    if not config_file.is_file():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> NumberingConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    unknown = sorted(set(raw_config) - set(NumberingConfig.__dataclass_fields__))
    if unknown:
        raise ConfigError(
            f"Invalid `[{table_display}]` settings in {config_file}: "
            f"unknown key(s) {', '.join(unknown)}"
        )

    try:
        return apply_overrides(NumberingConfig(), **raw_config)
    except PatternCompileError as error:
        raise PatternCompileError(error.pattern, error.reason, source=config_file) from error
    except ConfigError as error:
        raise ConfigError(f"{config_file}: {error}") from error


def parse_number_format(token: object) -> NumberFormat:
    """Convert ``ln``, ``rn`` or ``rz`` into a `NumberFormat`.

    Raises:
        ConfigError: If the token is not a known format.
    """
    if isinstance(token, NumberFormat):
        return token
    try:
        return NumberFormat(token)
    except ValueError as error:
        raise ConfigError(f"invalid line number format: '{token}'") from error


def normalize_delimiter(value: object) -> str:
    """Validate a section delimiter base of one or two characters.

    Raises:
        ConfigError: If the value is not a one- or two-character string.
    """
    if not isinstance(value, str) or not 1 <= len(value) <= 2:
        raise ConfigError(f"invalid section delimiter: '{value}'")
    return value


def apply_overrides(config: NumberingConfig, **overrides: object) -> NumberingConfig:
    """Apply override values to a `NumberingConfig`.

    Style and format overrides may be given as raw tokens (``"t"``, ``"p^#"``,
    ``"rz"``) or as already parsed values.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        NumberingConfig: New configuration with the provided overrides applied.
        The original configuration is returned when no changes are supplied.

    Raises:
        ConfigError: If a style or format token is invalid.
        TypeError: If an override name is not defined on `NumberingConfig`.

    Examples:
        updated = apply_overrides(config, body_style="a", number_format="rz")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config

    for key in _STYLE_KEYS:
        if key in changes and not isinstance(changes[key], NumberingStyle):
            changes[key] = parse_style(changes[key])
    if "number_format" in changes:
        changes["number_format"] = parse_number_format(changes["number_format"])

    return replace(config, **changes)


def validate_config(config: NumberingConfig) -> None:
    """Validate a `NumberingConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If numeric settings are not integers, width or blank-line
            grouping are not positive, or the delimiter, separator or reset
            flag have the wrong shape.

    Examples:
        validate_config(NumberingConfig(width=4))
    """
    _ensure_integers(
        {
            "width": config.width,
            "start": config.start,
            "increment": config.increment,
            "join_blank": config.join_blank,
        }
    )
    _ensure_positive({"width": config.width, "join_blank": config.join_blank})

    for key in _STYLE_KEYS:
        if not isinstance(getattr(config, key), NumberingStyle):
            raise ConfigError(f"`{key}` must be a numbering style")
    if not isinstance(config.number_format, NumberFormat):
        raise ConfigError("`number_format` must be one of: ln, rn, rz")
    if not isinstance(config.separator, str):
        raise ConfigError("`separator` must be a string")
    if not isinstance(config.no_renumber, bool):
        raise ConfigError("`no_renumber` must be a boolean")
    normalize_delimiter(config.delimiter)


def build_config(search_path: Path, **overrides: object) -> NumberingConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        NumberingConfig: Validated configuration ready for numbering.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), body_style="a", width=3)
    """
    config = load_config(search_path)
    try:
        config = apply_overrides(config, **overrides)
    except TypeError as error:
        raise ConfigError(str(error)) from error
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
