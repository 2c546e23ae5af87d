"""ptree CLI entry point."""

import logging
from pathlib import Path
from typing import Optional

import typer

from ..codec.ppath import EncapsulatingDir, InvalidPpath, PathCodec
from ..core.config import PairtreeConfig
from ..errors import PairtreeError
from .display import error, info_dict, plain, success, warning

app = typer.Typer(
    name="ptree",
    help="Map identifiers to Pairtree paths and back",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_codec(
    config_path: Path | None,
    segment_length: int | None,
    separator: str | None,
) -> PathCodec:
    """Config file and environment, then command line overrides."""
    data = PairtreeConfig.load(config_path).model_dump()
    if segment_length is not None:
        data["segment_length"] = segment_length
    if separator is not None:
        data["path_separator"] = separator
    return PathCodec(PairtreeConfig.from_mapping(data, source="command line options"))


def _codec(ctx: typer.Context) -> PathCodec:
    return ctx.obj


@app.callback()
def main_callback(
    ctx: typer.Context,
    segment_length: Optional[int] = typer.Option(
        None, "--segment-length", "-n", help="Characters per shorty (default 2)"
    ),
    separator: Optional[str] = typer.Option(
        None, "--separator", "-s", help="Path separator (default: platform separator)"
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (YAML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Pairtree identifier and path tools."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)
    try:
        ctx.obj = build_codec(config, segment_length, separator)
    except PairtreeError as e:
        error(str(e))
        raise typer.Exit(1)


@app.command()
def clean(ctx: typer.Context, identifier: str = typer.Argument(..., help="Identifier to clean")):
    """Show the cleaned form of an identifier."""
    plain(_codec(ctx).clean(identifier))


@app.command()
def unclean(ctx: typer.Context, value: str = typer.Argument(..., help="Cleaned identifier")):
    """Reverse the cleaning of an identifier."""
    try:
        plain(_codec(ctx).unclean(value))
    except PairtreeError as e:
        error(str(e))
        raise typer.Exit(1)


@app.command()
def encode(
    ctx: typer.Context,
    identifier: str = typer.Argument(..., help="Identifier to map"),
    base: Optional[str] = typer.Option(None, "--base", "-b", help="Base path to prefix"),
    encapsulating_dir: Optional[str] = typer.Option(
        None, "--dir", "-d", help="Encapsulating directory to append"
    ),
):
    """Map an identifier to its pairtree path.

    Example:
        ptree encode ark:/13030/xt12t3 --dir obj
    """
    plain(_codec(ctx).map_to_path(identifier, base, encapsulating_dir))


@app.command()
def decode(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Pairtree path"),
    base: Optional[str] = typer.Option(None, "--base", "-b", help="Base path to strip"),
):
    """Recover the identifier from a pairtree path."""
    try:
        plain(_codec(ctx).map_to_id(path, base))
    except PairtreeError as e:
        error(str(e))
        raise typer.Exit(1)


@app.command()
def inspect(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Pairtree path"),
    base: Optional[str] = typer.Option(None, "--base", "-b", help="Base path to strip"),
):
    """Show how a pairtree path is structured."""
    codec = _codec(ctx)
    layout = codec.parse(path, base)

    if isinstance(layout, InvalidPpath):
        error(f"Invalid pairtree path: {layout.reason}")
        raise typer.Exit(1)

    try:
        identifier = codec.map_to_id(path, base)
    except PairtreeError as e:
        error(str(e))
        raise typer.Exit(1)

    info_dict({
        "identifier": identifier,
        "encapsulating directory": layout.name if isinstance(layout, EncapsulatingDir) else "none",
        "segment length": codec.segment_length,
    }, indent="")


@app.command()
def mkobj(
    ctx: typer.Context,
    root: Path = typer.Argument(..., help="Directory holding the pairtree store"),
    identifier: str = typer.Argument(..., help="Identifier of the object"),
    prefix: Optional[str] = typer.Option(None, "--prefix", "-p", help="Identifier prefix of the store"),
):
    """Create the directory for an object in a pairtree store."""
    from ..storage.root import PairtreeRoot

    try:
        obj = PairtreeRoot(root, prefix=prefix, codec=_codec(ctx)).get_object(identifier)
    except (PairtreeError, OSError) as e:
        error(str(e))
        raise typer.Exit(1)
    success(f"Object ready: {obj}")


@app.command()
def version():
    """Show ptree version."""
    from .. import __version__
    plain(f"ptree version: {__version__}")


def main():
    """Main CLI entry point."""
    try:
        app()
    except KeyboardInterrupt:
        warning("\nInterrupted by user")
        raise typer.Exit(1)


if __name__ == "__main__":
    main()
