"""Data models for numberline."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import NumberingConfig


class Section(Enum):
    """Logical sections of an input stream.

    Attributes:
        HEADER: Entered by a line holding the delimiter three times.
        BODY: Entered by a line holding the delimiter twice. Initial section.
        FOOTER: Entered by a line holding the delimiter once.
    """

    HEADER = auto()
    BODY = auto()
    FOOTER = auto()


class NumberFormat(Enum):
    """Justification rules for rendered line numbers.

    Each member's value is the token accepted by ``-n``.

    Attributes:
        LEFT: Left justified, padded with trailing spaces.
        RIGHT: Right justified, padded with leading spaces.
        RIGHT_ZERO: Right justified, padded with leading zeros.
    """

    LEFT = "ln"
    RIGHT = "rn"
    RIGHT_ZERO = "rz"


class StyleKind(Enum):
    """Numbering style variants, valued by their command-line token."""

    ALL = "a"
    NON_EMPTY = "t"
    NONE = "n"
    PATTERN = "p"


@dataclass(frozen=True)
class NumberingStyle:
    """Per-section policy deciding which lines receive a number.

    Attributes:
        kind: Style variant.
        pattern: Compiled regular expression, set only for ``StyleKind.PATTERN``.

    Examples:
        NumberingStyle.all()
        NumberingStyle.matching(re.compile("^#"))
    """

    kind: StyleKind
    pattern: re.Pattern[str] | None = None

    def __post_init__(self):
        if (self.kind is StyleKind.PATTERN) != (self.pattern is not None):
            raise ValueError("a pattern is required for, and only for, the pattern style")

    @classmethod
    def all(cls) -> NumberingStyle:
        return cls(StyleKind.ALL)

    @classmethod
    def non_empty(cls) -> NumberingStyle:
        return cls(StyleKind.NON_EMPTY)

    @classmethod
    def none(cls) -> NumberingStyle:
        return cls(StyleKind.NONE)

    @classmethod
    def matching(cls, pattern: re.Pattern[str]) -> NumberingStyle:
        return cls(StyleKind.PATTERN, pattern)


@dataclass
class ProcessorState:
    """Mutable state threaded through a single numbering pass.

    Attributes:
        section: Currently active section.
        line_number: Number given to the next numbered line.
        blank_count: Consecutive blank lines seen since the last number or reset.
    """

    section: Section = Section.BODY
    line_number: int = 1
    blank_count: int = 0

    @classmethod
    def initial(cls, config: NumberingConfig) -> ProcessorState:
        return cls(line_number=config.start)
