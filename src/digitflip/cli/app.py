"""CLI application entry point for digitflip.

This module provides the main CLI interface using Typer.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from digitflip import __version__
from digitflip.cli.output import (
    console,
    print_config_error,
    print_digits,
    print_error,
    print_glyph_summary,
    print_header,
    print_letters,
    print_mapping_error,
    print_sets,
    print_step,
    print_success,
    print_symbol_set,
    print_validation_error,
)
from digitflip.config import (
    OVERRIDE_DIR_ENV,
    DigitFlipSettings,
    LoggingConfig,
    StoreConfig,
    get_default_settings,
)
from digitflip.core import FlipSession
from digitflip.exceptions import ConfigurationError, MissingMappingError
from digitflip.render import PreviewRenderer
from digitflip.utils import configure_logging

EXIT_VALIDATION = 1
EXIT_CONFIGURATION = 2
EXIT_MISSING_MAPPING = 3

# Create the Typer app
app = typer.Typer(
    name="digitflip",
    help="Write a phrase as digits that read correctly when turned upside down.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]DigitFlip[/bold blue] v{__version__}")
        raise typer.Exit()


SetOption = Annotated[
    str | None,
    typer.Option(
        "--set",
        "-s",
        help="Symbol set to use (default: classic)",
    ),
]

OverrideDirOption = Annotated[
    Path | None,
    typer.Option(
        "--override-dir",
        help="Directory with runtime-installed symbol sets, checked before packaged ones",
        envvar=OVERRIDE_DIR_ENV,
        file_okay=False,
    ),
]

LogFileOption = Annotated[
    Path | None,
    typer.Option(
        "--log-file",
        help="Write detailed logs to file",
    ),
]

LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Logging level (DEBUG|INFO|WARNING|ERROR)",
    ),
]

VersionOption = Annotated[
    bool | None,
    typer.Option(
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
]


@app.callback()
def _root(_version: VersionOption = None) -> None:  # noqa: ARG001
    """Write a phrase as digits that read correctly when turned upside down."""


def _build_session(
    symbol_set: str | None,
    override_dir: Path | None,
    log_file: Path | None = None,
    log_level: str = "WARNING",
    quiet: bool = False,
) -> FlipSession:
    """Create settings from CLI arguments, configure logging and open a session."""
    defaults = get_default_settings()
    settings = DigitFlipSettings(
        store=StoreConfig(
            symbol_set=symbol_set or defaults.store.symbol_set,
            override_dir=override_dir or defaults.store.override_dir,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level,
        ),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    return FlipSession(settings, logger=logger)


@app.command()
def flip(
    text: Annotated[
        str,
        typer.Argument(
            help="Phrase to flip (letters a-z and spaces)",
            show_default=False,
        ),
    ],
    symbol_set: SetOption = None,
    override_dir: OverrideDirOption = None,
    svg: Annotated[
        Path | None,
        typer.Option(
            "--svg",
            help="Write an SVG preview of both rows to this file",
            dir_okay=False,
        ),
    ] = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show the glyph source for every letter",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Print only the digit line",
        ),
    ] = False,
    _version: VersionOption = None,  # noqa: ARG001
) -> None:
    """Encode a phrase and print the digits to write.

    The digits are printed in reversed order, so that once written down and
    turned upside down they read as the original phrase.

    Example:
        digitflip flip "hi you"

    This prints "0 0 6   1 4".
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    session = _build_session(symbol_set, override_dir, log_file, log_level, quiet)

    error = session.encoder.validate(text)
    if error is not None:
        print_validation_error(error.message)
        raise typer.Exit(code=EXIT_VALIDATION)

    try:
        active = session.select_symbol_set()
        if not quiet:
            print_header(__version__)
            print_step("Symbol set")
            print_symbol_set(active.display_name, active.id, len(active.symbols))

        result = session.flip(text)
    except ConfigurationError as e:
        print_config_error(e.message, e.symbol_set_id)
        raise typer.Exit(code=EXIT_CONFIGURATION) from None
    except MissingMappingError as e:
        print_mapping_error(str(e))
        raise typer.Exit(code=EXIT_MISSING_MAPPING) from None

    if not result.elements:
        if not quiet:
            console.print("\nNothing to flip.")
        raise typer.Exit(code=0)

    if quiet:
        typer.echo(result.digit_display)
    else:
        print_digits(result.digit_display)

    if verbose:
        print_step("Glyphs (display order)")
        print_letters([
            (element, source.value if source else None)
            for element, source in zip(result.elements, result.sources, strict=True)
            if source is not None
        ])

    if svg is not None:
        try:
            PreviewRenderer(session.settings.layout).save(result, svg)
        except OSError as e:
            print_error(f"Could not write preview: {svg}", details=str(e))
            raise typer.Exit(code=1) from None
        if not quiet:
            print_success("Preview written", str(svg))


@app.command()
def sets(
    override_dir: OverrideDirOption = None,
) -> None:
    """List the symbol sets that can be selected."""
    session = _build_session(None, override_dir)
    print_sets(session.available_sets(), session.settings.store.symbol_set)


@app.command()
def glyph(
    letter: Annotated[
        str,
        typer.Argument(
            help="A single letter a-z",
            show_default=False,
        ),
    ],
    symbol_set: SetOption = None,
    override_dir: OverrideDirOption = None,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the full glyph record as JSON",
        ),
    ] = False,
) -> None:
    """Show the resolved glyph for one letter."""
    session = _build_session(symbol_set, override_dir)

    if len(letter) != 1 or letter == " " or session.encoder.validate(letter) is not None:
        print_validation_error("Expected a single letter a-z")
        raise typer.Exit(code=EXIT_VALIDATION)

    try:
        session.select_symbol_set(preload=False)
        mapped, record, source = session.glyph(letter)
    except ConfigurationError as e:
        print_config_error(e.message, e.symbol_set_id)
        raise typer.Exit(code=EXIT_CONFIGURATION) from None
    except MissingMappingError as e:
        print_mapping_error(str(e))
        raise typer.Exit(code=EXIT_MISSING_MAPPING) from None

    source_name = source.value if source else None
    if as_json:
        typer.echo(json.dumps({
            "letter": mapped.char,
            "code": mapped.code.text,
            "glyph": mapped.glyph_ref,
            "source": source_name,
            "record": record.to_dict(),
        }, indent=2))
        return

    print_glyph_summary(mapped, record, source_name)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
