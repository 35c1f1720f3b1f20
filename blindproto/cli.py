import enum
import logging
import sys
from typing import List

import rich
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .const import DEFAULT_MAX_DEPTH
from .errors import DecodeError, InputDecodeError
from .message import parse_message
from .render import Casing, format_fields, to_json
from .source import InputEncoding, decode_input, strip_grpc_web


log = logging.getLogger(__name__)

app = typer.Typer()


class KeyCasing(str, enum.Enum):
    CAMEL = "camel"
    SNAKE = "snake"


CASINGS = {
    KeyCasing.CAMEL: Casing.CAMEL,
    KeyCasing.SNAKE: Casing.SNAKE,
}


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback(context_settings={"help_option_names": ["-h", "--help"]})
def callback(ctx: typer.Context) -> None:
    """Decode protobuf messages without a schema"""
    if ctx.invoked_subcommand is None:
        rich.print(ctx.get_help())


@app.command()
def version(ctx: typer.Context) -> None:
    rich.print("blindproto version:", __version__)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def decode(
    inputs: List[str] = typer.Argument(
        ...,
        help="Base64 or hex encoded messages, or - to read one from stdin",
        metavar="INPUT...",
    ),
    encoding: InputEncoding = typer.Option(
        InputEncoding.AUTO, "-e", "--encoding", help="How the input is encoded"
    ),
    grpc_web: bool = typer.Option(
        True, help="Detect and remove a gRPC-Web frame around the message"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the tree as JSON"),
    casing: KeyCasing = typer.Option(
        KeyCasing.CAMEL, help="Casing of multi-word JSON keys"
    ),
    max_depth: int = typer.Option(
        DEFAULT_MAX_DEPTH,
        "--max-depth",
        min=0,
        envvar="BLINDPROTO_MAX_DEPTH",
        help="How many levels of nested messages to follow",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Whether or not to be verbose"
    ),
) -> None:
    """Decode one or more encoded protobuf messages and print their fields."""
    setup_logging(verbose)

    if inputs.count("-") > 1:
        raise typer.BadParameter("stdin (-) can only be read once", param_hint="INPUT")

    failed = 0
    for index, text in enumerate(inputs):
        if text == "-":
            text = sys.stdin.read()

        try:
            data = decode_input(text, encoding)
            if grpc_web:
                data, _ = strip_grpc_web(data)
            fields = parse_message(data, max_depth=max_depth)
        except InputDecodeError as e:
            failed += 1
            rich.print(
                f"[red]Error decoding input: {escape(str(e))}[/red]", file=sys.stderr
            )
            continue
        except DecodeError as e:
            failed += 1
            rich.print(f"[red]Parse error: {escape(str(e))}[/red]", file=sys.stderr)
            continue

        log.debug("decoded %d top-level fields from %d bytes", len(fields), len(data))
        if index:
            typer.echo()
        if as_json:
            typer.echo(to_json(fields, indent=2, casing=CASINGS[casing]))
        else:
            typer.echo("Decoded Protobuf Message:")
            typer.echo(format_fields(fields), nl=False)

    if failed:
        raise typer.Exit(code=1)


def main() -> None:
    app(prog_name="blindproto")
