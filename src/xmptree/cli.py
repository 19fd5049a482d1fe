# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Click-based CLI for xmptree.

Reads one XMP packet or sidecar file and prints values from it, an
outline of its node tree, or the re-rendered document.
"""

# Standard Library
import logging
import sys
from pathlib import Path

# Third Party
import click
from colorama import Fore, Style, init

# Local
from . import __version__
from .exceptions import XmpParseError
from .tag import XmpTag
from .utils import setup_logging

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_FILE_NOT_FOUND = 2
EXIT_PARSE_FAILED = 3

logger = logging.getLogger(__name__)


def print_success(msg: str) -> None:
    """Prints a success message in green.

    Args:
        msg: The message to output.
    """
    click.echo(f"{Fore.GREEN}\u2713{Style.RESET_ALL} {msg}")


def print_error(msg: str) -> None:
    """Prints an error message in red.

    Args:
        msg: The error message to output.
    """
    click.echo(f"{Fore.RED}\u2717 Error:{Style.RESET_ALL} {msg}", err=True)


def print_warning(msg: str) -> None:
    """Prints a warning in yellow.

    Args:
        msg: The warning to output.
    """
    click.echo(f"{Fore.YELLOW}\u26a0{Style.RESET_ALL} {msg}")


def _format_property(tag: XmpTag, qualified_name: str) -> str | None:
    """Looks up ``PREFIX:NAME`` and formats its value for output.

    Args:
        tag: The parsed tag.
        qualified_name: Property name using a registered prefix.

    Returns:
        The formatted value, or None if the property is absent.

    Raises:
        click.BadParameter: If the name is malformed or the prefix unknown.
    """
    prefix, sep, name = qualified_name.partition(":")
    if not sep or not prefix or not name:
        raise click.BadParameter(
            f"Expected PREFIX:NAME, got {qualified_name!r}", param_hint="--find"
        )
    uri = tag.namespaces.uri_of(prefix)
    if uri is None:
        raise click.BadParameter(
            f"Unknown namespace prefix {prefix!r}", param_hint="--find"
        )

    node = tag.find(uri, name)
    if node is None:
        return None
    if node.value is not None:
        return node.value
    values = [child.value for child in node.children if child.value is not None]
    return ", ".join(values)


def _print_summary(tag: XmpTag, path: Path) -> None:
    print_success(
        f"Parsed {path.name}: {len(tag.node_tree.children)} top-level properties"
    )
    if tag.about:
        click.echo(f"  about:    {tag.about}")
    if tag.make is not None:
        click.echo(f"  make:     {tag.make}")
    if tag.model is not None:
        click.echo(f"  model:    {tag.model}")
    if tag.title is not None:
        click.echo(f"  title:    {tag.title}")
    if tag.keywords:
        click.echo(f"  keywords: {', '.join(tag.keywords)}")


@click.command()
@click.argument("input_path", required=False, type=click.Path())
@click.option("-k", "--keywords", is_flag=True, help="Print dc:subject keywords")
@click.option(
    "-m", "--make", is_flag=True, help="Print the camera make (tiff:Make)"
)
@click.option(
    "-f",
    "--find",
    "find_names",
    multiple=True,
    metavar="PREFIX:NAME",
    help="Print the value of a property, e.g. dc:creator (repeatable)",
)
@click.option("-d", "--dump", is_flag=True, help="Print the parsed node tree")
@click.option(
    "-r", "--render", "do_render", is_flag=True, help="Print the re-rendered XMP"
)
@click.option(
    "-p",
    "--packet",
    is_flag=True,
    help="Wrap rendered output in an xpacket header (implies --render)",
)
@click.option("-q", "--quiet", is_flag=True, help="Only output errors")
@click.option("--verbose", is_flag=True, help="Detailed output")
@click.version_option(version=__version__)
def main(
    input_path: str | None,
    keywords: bool,
    make: bool,
    find_names: tuple[str, ...],
    dump: bool,
    do_render: bool,
    packet: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """Reads XMP metadata and prints its values.

    INPUT is an XMP packet or sidecar (.xmp) file.
    """
    # Initialize colorama for Windows compatibility
    init()

    if input_path is None:
        click.echo(click.get_current_context().get_help())
        sys.exit(EXIT_GENERAL_ERROR)

    setup_logging(verbose=verbose, quiet=quiet)

    path = Path(input_path)
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        print_error(f"File not found: {input_path}")
        sys.exit(EXIT_FILE_NOT_FOUND)
    except PermissionError as e:
        print_error(f"Access denied: {e}")
        sys.exit(EXIT_GENERAL_ERROR)
    except IsADirectoryError:
        print_error(f"Not a file: {input_path}")
        sys.exit(EXIT_GENERAL_ERROR)

    try:
        tag = XmpTag(data)
    except XmpParseError as e:
        print_error(f"{path.name}: {e}")
        sys.exit(EXIT_PARSE_FAILED)

    exit_code = EXIT_SUCCESS
    selected = keywords or make or find_names or dump or do_render or packet

    if not selected:
        if not quiet:
            _print_summary(tag, path)
        sys.exit(exit_code)

    if keywords:
        for keyword in tag.keywords:
            click.echo(keyword)
    if make:
        if tag.make is None:
            print_warning("No camera make (tiff:Make) found")
        else:
            click.echo(tag.make)
    for qualified_name in find_names:
        value = _format_property(tag, qualified_name)
        if value is None:
            print_warning(f"Property not found: {qualified_name}")
            exit_code = EXIT_GENERAL_ERROR
        else:
            click.echo(f"{qualified_name} = {value}")
    if dump:
        click.echo(tag.node_tree.dump())
    if packet:
        click.echo(tag.to_packet().decode("utf-8"))
    elif do_render:
        click.echo(tag.render(pretty_print=True))

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
