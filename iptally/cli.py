from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List, Optional

import click
import typer

from iptally.params import DEFAULT_CONFIG_FILE, load_config, resolve_values
from iptally.pipeline import RunResult, run
from iptally.errors import IpTallyError
from iptally.utils.logging import get_logger, set_verbosity

app = typer.Typer(
    help="Count requests per IPv4 address in an access log.",
    add_completion=False,
)

log = get_logger(__name__)


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def tally(
        ctx: typer.Context,
        file_log: Optional[str] = typer.Option(
            None,
            "--file-log",
            help="Access log to read (config key logFilePath, env LOG_FILE_PATH).",
        ),
        file_output: Optional[str] = typer.Option(
            None,
            "--file-output",
            help="Report file to write (config key outputFilePath, env OUTPUT_FILE_PATH).",
        ),
        address_start: Optional[str] = typer.Option(
            None,
            "--address-start",
            help="Keep only this address, or the floor of the masked range (env ADDRESS_START).",
        ),
        address_mask: Optional[str] = typer.Option(
            None,
            "--address-mask",
            help=(
                    "Dotted-quad mask; keeps addresses whose masked value is >= the masked "
                    "start address (env ADDRESS_MASK)."
            ),
        ),
        config: Path = typer.Option(
            Path(DEFAULT_CONFIG_FILE),
            "--config",
            help="key=value configuration file consulted after the command line.",
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            "-v",
            help="Log progress of every stage to stderr.",
        ),
):
    """
    Read an access log, optionally filter by address, and write
    "<address> - <count>" lines sorted by count.

    Example:

        iptally --file-log access.log --file-output report.txt
        iptally --file-log access.log --file-output report.txt --address-start 10.0.0.0 --address-mask 255.255.0.0
    """
    set_verbosity(verbose)
    if ctx.args:
        log.debug("Ignoring unrecognised arguments: %s", ctx.args)

    cli_values = {
        "log_file_path": file_log,
        "output_file_path": file_output,
        "address_start": address_start,
        "address_mask": address_mask,
    }

    # 1) parameters
    try:
        params = resolve_values(cli_values, load_config(config), os.environ)
    except IpTallyError as e:
        _fail(str(e))

    # 2) pipeline
    result: RunResult = run(params)
    if not result.ok:
        _fail(str(result.error))

    typer.echo(f"Analysis complete, results written to {params.output_file_path}.")


def main(argv: Optional[List[str]] = None) -> None:
    """
    Entry point for console_scripts.

    Usage errors from the option parser (e.g. a flag given last with no
    value) are reported like any other failure: one "Error:" line, exit 1.
    """
    try:
        code = app(args=argv, standalone_mode=False)
    except (KeyboardInterrupt, click.exceptions.Abort):
        typer.echo("Interrupted by user.", err=True)
        sys.exit(130)
    except click.exceptions.ClickException as e:
        typer.echo(f"Error: {e.format_message()}", err=True)
        sys.exit(1)

    if isinstance(code, int) and code != 0:
        sys.exit(code)


if __name__ == "__main__":
    main()
