"""Numbering style parsing and evaluation.

Patterns use Python's ``re`` syntax and match anywhere in the line, the way
``grep`` treats a basic regular expression. BRE-only constructs such as
``\\(``/``\\)`` grouping or ``\\{m,n\\}`` intervals are not translated.
"""

from __future__ import annotations

import re

from .exceptions import ConfigError, PatternCompileError
from .models import NumberingStyle, StyleKind

_SIMPLE_STYLES = {
    StyleKind.ALL.value: NumberingStyle.all(),
    StyleKind.NON_EMPTY.value: NumberingStyle.non_empty(),
    StyleKind.NONE.value: NumberingStyle.none(),
}


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a line-selection pattern.

    Args:
        pattern: Regular expression text.

    Returns:
        re.Pattern[str]: The compiled expression.

    Raises:
        PatternCompileError: If the expression is invalid.
    """
    try:
        return re.compile(pattern)
    except re.error as error:
        raise PatternCompileError(pattern, str(error)) from error


def parse_style(token: str) -> NumberingStyle:
    """Convert a style token into a `NumberingStyle`.

    Args:
        token: One of ``a``, ``t``, ``n`` or ``p`` followed by a regular expression.

    Returns:
        NumberingStyle: The parsed style. Pattern styles carry a compiled expression.

    Raises:
        ConfigError: If the token names no known style.
        PatternCompileError: If a ``p`` token carries an invalid expression.

    Examples:
        parse_style("t")  # NumberingStyle.non_empty()
        parse_style("p^#")  # lines starting with '#'
    """
    if not isinstance(token, str):
        raise ConfigError(f"invalid numbering style: {token!r}")
    if token in _SIMPLE_STYLES:
        return _SIMPLE_STYLES[token]
    if token.startswith(StyleKind.PATTERN.value):
        return NumberingStyle.matching(compile_pattern(token[1:]))
    raise ConfigError(f"invalid numbering style: '{token}'")


def should_number(line: str, style: NumberingStyle) -> bool:
    """Decide whether a line receives a number under `style`.

    Blank-line grouping is applied by the caller; this only evaluates the style.

    Args:
        line: Line text without its terminator.
        style: Style of the active section.

    Returns:
        bool: True when the line should be numbered.
    """
    kind = style.kind
    if kind is StyleKind.ALL:
        return True
    if kind is StyleKind.NON_EMPTY:
        return bool(line)
    if kind is StyleKind.NONE:
        return False
    if kind is StyleKind.PATTERN:
        return style.pattern.search(line) is not None
    raise ValueError(f"Unsupported numbering style: {kind!r}")
