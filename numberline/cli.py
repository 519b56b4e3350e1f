"""
Writes a file, or standard input, to standard output with line numbers added.
Numbering follows the style of the current header, body, or footer section.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from . import __version__
from .config import build_config
from .exceptions import ConfigError, InputError, OutputError
from .processor import number_lines
from .streams import open_source, read_lines, write_lines

__all__ = ["cli"]

EPILOG = """\b
STYLE is one of:
  a      number all lines
  t      number only nonempty lines
  n      number no lines
  pBRE   number only lines that match the regular expression BRE

\b
FORMAT is one of:
  ln     left justified, no leading zeros
  rn     right justified, no leading zeros
  rz     right justified, leading zeros

Sections are delimited by lines containing only the delimiter characters
repeated 1 (footer), 2 (body), or 3 (header) times.
"""


def _discard_stdout() -> None:
    """Point stdout at the null device so the final flush after a closed pipe is silent."""
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())
    os.close(devnull)


class FilterCommand(click.Command):
    """Command whose usage errors exit with status 1 like other filter errors."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as error:
            error.exit_code = 1
            raise


@click.command(cls=FilterCommand, epilog=EPILOG)
@click.version_option(version=__version__, prog_name="numberline")
@click.option("-b", "body_style", metavar="STYLE", help="Body line numbering style (default t).")
@click.option("-d", "delimiter", metavar="CC", help="Section delimiter characters (default \\:).")
@click.option("-f", "footer_style", metavar="STYLE", help="Footer line numbering style (default n).")
@click.option("-h", "header_style", metavar="STYLE", help="Header line numbering style (default n).")
@click.option("-i", "increment", type=int, metavar="NUMBER", help="Line number increment (default 1).")
@click.option(
    "-l",
    "join_blank",
    type=int,
    metavar="NUMBER",
    help="Group of NUMBER empty lines counted as one (default 1).",
)
@click.option(
    "-n",
    "number_format",
    type=click.Choice(["ln", "rn", "rz"]),
    help="Line number format (default rn).",
)
@click.option("-p", "no_renumber", is_flag=True, help="Do not reset line numbers for each section.")
@click.option("-s", "separator", metavar="STRING", help="Separator after the number (default TAB).")
@click.option("-v", "start", type=int, metavar="NUMBER", help="First line number of each section (default 1).")
@click.option("-w", "width", type=int, metavar="NUMBER", help="Columns used for line numbers (default 6).")
@click.argument("file", required=False, type=click.Path(dir_okay=False, allow_dash=True))
def cli(
    file: str | None = None,
    body_style: str | None = None,
    delimiter: str | None = None,
    footer_style: str | None = None,
    header_style: str | None = None,
    increment: int | None = None,
    join_blank: int | None = None,
    number_format: str | None = None,
    no_renumber: bool = False,
    separator: str | None = None,
    start: int | None = None,
    width: int | None = None,
):
    """
    Number the lines of FILE, or of standard input when FILE is absent or -.

    Args:
        file: Path to the input file, or ``-`` for standard input.
        body_style: Style token for body sections.
        delimiter: Section delimiter base of one or two characters.
        footer_style: Style token for footer sections.
        header_style: Style token for header sections.
        increment: Step between consecutive line numbers.
        join_blank: Blank-line grouping factor under style ``a``.
        number_format: ``ln``, ``rn`` or ``rz``.
        no_renumber: Keep counting across sections.
        separator: Text between the number and the line.
        start: First number of each section.
        width: Minimum number field width.

    Returns:
        None.

    Raises:
        click.ClickException: If configuration is invalid, the input cannot be
            read, or writing the output fails.

    Examples:
        numberline -ba -nrz -w3 notes.txt
    """
    try:
        config = build_config(
            Path.cwd(),
            body_style=body_style,
            delimiter=delimiter,
            footer_style=footer_style,
            header_style=header_style,
            increment=increment,
            join_blank=join_blank,
            number_format=number_format,
            no_renumber=True if no_renumber else None,
            separator=separator,
            start=start,
            width=width,
        )
    except ConfigError as error:
        raise click.ClickException(str(error)) from error

    try:
        source = open_source(file)
    except InputError as error:
        raise click.ClickException(str(error)) from error

    try:
        write_lines(number_lines(read_lines(source), config), sys.stdout)
    except BrokenPipeError:
        _discard_stdout()
    except (InputError, OutputError) as error:
        raise click.ClickException(str(error)) from error
    finally:
        if source is not sys.stdin:
            source.close()


if __name__ == "__main__":
    cli()
