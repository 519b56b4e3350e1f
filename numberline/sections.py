"""Section delimiter recognition and transitions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .models import ProcessorState, Section

if TYPE_CHECKING:
    from .config import NumberingConfig

DEFAULT_DELIMITER = "\\:"
DELIMITER_FILL = ":"


@dataclass(frozen=True)
class SectionDelimiters:
    """Exact line texts that switch sections.

    Attributes:
        header: Base delimiter repeated three times.
        body: Base delimiter repeated twice.
        footer: Base delimiter on its own.
    """

    header: str
    body: str
    footer: str


def build_delimiters(base: str = DEFAULT_DELIMITER) -> SectionDelimiters:
    """Derive the three delimiter lines from a one- or two-character base.

    A single character is completed with ``:`` as second character.

    Examples:
        build_delimiters()  # footer "\\:", body "\\:\\:", header "\\:\\:\\:"
        build_delimiters("x")  # footer "x:", body "x:x:", header "x:x:x:"
    """
    if len(base) == 1:
        base += DELIMITER_FILL
    return SectionDelimiters(header=base * 3, body=base * 2, footer=base)


def match_delimiter(line: str, delimiters: SectionDelimiters) -> Section | None:
    """Return the section a delimiter line enters, or None for ordinary lines.

    Only exact equality counts; the three strings are distinct for any
    non-empty base, so comparison order does not matter.
    """
    if line == delimiters.header:
        return Section.HEADER
    if line == delimiters.body:
        return Section.BODY
    if line == delimiters.footer:
        return Section.FOOTER
    return None


def _try_enter_section(
    state: ProcessorState, line: str, delimiters: SectionDelimiters, config: NumberingConfig
) -> bool:
    section = match_delimiter(line, delimiters)
    if section is None:
        return False

    state.section = section
    state.blank_count = 0
    if not config.no_renumber:
        state.line_number = config.start
    return True
