"""Line numbering engine."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .config import NumberingConfig
from .formatter import blank_prefix, render_number
from .models import NumberingStyle, ProcessorState, StyleKind
from .sections import SectionDelimiters, _try_enter_section, build_delimiters
from .styles import should_number


def _try_number_blank(state: ProcessorState, style: NumberingStyle, join_blank: int) -> bool:
    """Count a blank line and decide whether it receives a number.

    Only the ``a`` style numbers blank lines, and then only every
    `join_blank`-th line of a consecutive run.
    """
    state.blank_count += 1
    if style.kind is StyleKind.ALL and state.blank_count >= join_blank:
        state.blank_count = 0
        return True
    return False


def process_line(
    line: str,
    state: ProcessorState,
    config: NumberingConfig,
    delimiters: SectionDelimiters,
) -> str:
    """Produce the output line for one input line and advance `state`.

    Delimiter lines switch sections and come out empty. Numbered lines are
    ``<number><separator><text>``; every other line is padded with `width`
    spaces and carries no separator.

    Args:
        line: Input line without its terminator.
        state: Processing state, updated in place.
        config: Validated numbering configuration.
        delimiters: Delimiter lines derived from ``config.delimiter``.

    Returns:
        str: The output line, without a terminator.

    Examples:
        state = ProcessorState.initial(config)
        process_line("hello", state, config, build_delimiters())  # "     1\\thello"
    """
    if _try_enter_section(state, line, delimiters, config):
        return ""

    style = config.style_for(state.section)
    if line:
        state.blank_count = 0
        numbered = should_number(line, style)
    else:
        numbered = _try_number_blank(state, style, config.join_blank)

    if not numbered:
        return f"{blank_prefix(config.width)}{line}"

    number = render_number(state.line_number, config.width, config.number_format)
    state.line_number += config.increment
    return f"{number}{config.separator}{line}"


def number_lines(lines: Iterable[str], config: NumberingConfig | None = None) -> Iterator[str]:
    """Number a stream of lines lazily, one output line per input line.

    Each call starts from a fresh state in the body section.

    Args:
        lines: Input lines without terminators.
        config: Numbering configuration. Defaults to a new `NumberingConfig`.

    Yields:
        str: Output lines without terminators, in input order.

    Examples:
        list(number_lines(["hello", "", "world"]))
        # ["     1\\thello", "      ", "     2\\tworld"]
    """
    config = config or NumberingConfig()
    delimiters = build_delimiters(config.delimiter)
    state = ProcessorState.initial(config)

    for line in lines:
        yield process_line(line, state, config, delimiters)
