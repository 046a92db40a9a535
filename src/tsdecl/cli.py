#!/usr/bin/env python3
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from tsdecl.errors import ReparseError
from tsdecl.logger import logger
from tsdecl.printer import EmitContext, Printer
from tsdecl.reparse import check_syntax
from tsdecl.schema import render
from tsdecl.settings import load_settings


def _setup_logging(debug: bool) -> None:
    # Ensure stdlib logger emits records so structlog output is visible
    level = logging.DEBUG if debug else logging.INFO
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        # structlog renders the final message; keep stdlib formatter simple.
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    else:
        for handler in root.handlers:
            handler.setLevel(level)


def _make_printer(config_file: Optional[Path]) -> Printer:
    files = {}
    if config_file is not None:
        suffix = config_file.suffix.lower()
        if suffix == ".toml":
            files["toml_file"] = str(config_file)
        elif suffix == ".json":
            files["json_file"] = str(config_file)
        else:
            raise ValueError(f"Unsupported config file type: {config_file.name}")
    settings = load_settings(**files)
    logger.debug("Loaded printer settings", **settings.model_dump(mode="json"))
    return Printer(EmitContext.from_settings(settings))


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "file",
    type=click.Path(
        exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path
    ),
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(
        exists=True, file_okay=True, dir_okay=False, readable=True, path_type=Path
    ),
    default=None,
    help="TOML or JSON file with printer settings (newline, indent, quotes).",
)
@click.option(
    "--check/--no-check",
    default=False,
    help="Re-parse the generated TypeScript and fail on syntax errors.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Enable debug logging.",
)
def main(file: Path, config_file: Optional[Path], check: bool, debug: bool) -> None:
    """
    Render the declarations described by a JSON payload FILE to TypeScript.

    Printer settings come from TSDECL_* environment variables and the
    optional --config file.
    """
    _setup_logging(debug)

    try:
        printer = _make_printer(config_file)
        text = render(file.read_text(encoding="utf-8"), printer)
    except ValueError as ex:
        # Malformed JSON and payload validation errors are ValueErrors too.
        click.echo(f"Error: {ex}", err=True)
        raise SystemExit(1)

    if check:
        try:
            check_syntax(text)
        except ReparseError as ex:
            click.echo(f"Error: {ex}", err=True)
            raise SystemExit(1)
        logger.debug("Generated TypeScript re-parsed cleanly", path=str(file))

    click.echo(text)


if __name__ == "__main__":
    main()
