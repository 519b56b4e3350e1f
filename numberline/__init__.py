"""
numberline: a line-numbering text filter.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    numberline -ba notes.txt
    printf 'a\\n\\nb\\n' | numberline -nrz -w3

Library Usage:
    from numberline import NumberingConfig, NumberingStyle, number_lines

    config = NumberingConfig(body_style=NumberingStyle.all())
    for line in number_lines(["hello", "", "world"], config):
        print(line)
"""

__version__ = "0.1.0"

from .config import NumberingConfig, build_config, load_config, validate_config
from .exceptions import ConfigError, InputError, OutputError, PatternCompileError
from .formatter import render_number
from .models import NumberFormat, NumberingStyle, ProcessorState, Section, StyleKind
from .processor import number_lines, process_line
from .sections import SectionDelimiters, build_delimiters, match_delimiter
from .styles import parse_style, should_number

__all__ = [
    # Core functionality
    "number_lines",
    "process_line",
    "render_number",
    "should_number",
    "build_delimiters",
    "match_delimiter",
    # Configuration
    "NumberingConfig",
    "build_config",
    "load_config",
    "validate_config",
    "parse_style",
    # Data models
    "NumberFormat",
    "NumberingStyle",
    "ProcessorState",
    "Section",
    "SectionDelimiters",
    "StyleKind",
    # Exceptions
    "ConfigError",
    "InputError",
    "OutputError",
    "PatternCompileError",
    # Version
    "__version__",
]
