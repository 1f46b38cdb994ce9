# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

import sys

import typer
from dotenv import load_dotenv
from loguru import logger

from nbtranspiler.commands import transpile
from nbtranspiler.constants import APP_NAME, PROG_NAME
from nbtranspiler.context import GlobalContext, load_global_config
from nbtranspiler.core.exceptions import handle_nbtranspiler_exception
from nbtranspiler.core.logging.logging import setup_logger
from nbtranspiler.runtimeutil import (
    ensure_utf8_output,
    get_log_dir_callback,
    version_callback,
)

# main cli app
app = typer.Typer(
    help=f"{APP_NAME}: turn notebook cells into async functions sharing one global scope",
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    add_completion=False,
)

# Main cli commands
app.command(name="transpile")(transpile.main)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_path: bool = typer.Option(
        False,
        "--log-dir",
        "-LD",
        callback=get_log_dir_callback,
        is_eager=True,
        help=f"Show log path (where logs for {APP_NAME} live) and exit",
    ),
    custom_config: str | None = typer.Option(
        None,
        "--custom-config",
        help="Path to a custom config file",
    ),
    global_name: str | None = typer.Option(
        None,
        "--global-name",
        help="Parameter name of the shared global object.",
    ),
    import_name: str | None = typer.Option(
        None,
        "--import-name",
        help="Parameter name of the async import function.",
    ),
    console_name: str | None = typer.Option(
        None,
        "--console-name",
        help="Parameter name of the console passed to the cell.",
    ),
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
    silent: bool | None = typer.Option(
        None,
        "--silent",
        "-s",
        help="Do not log anything to the console.",
    ),
) -> None:
    """
    Global setup callback. Initialize global context/config used by commands
    """
    with handle_nbtranspiler_exception(exit_on_fail=True):
        if ctx.invoked_subcommand is None:
            print(ctx.get_help())
            raise typer.Exit()

        # skip --help in subcommands
        if any(arg in ctx.help_option_names for arg in sys.argv):
            return

        # initial setup of logger, updated once the config is known
        setup_logger(ctx.invoked_subcommand, debug=bool(verbose), silent=bool(silent))

        config = load_global_config(
            custom_config,
            global_name=global_name,
            import_name=import_name,
            console_name=console_name,
            verbose=verbose,
            silent=silent,
        )

        setup_logger(ctx.invoked_subcommand, debug=config.verbose, silent=config.silent)

        logger.debug(f"Global config: {config!r}")
        ctx.obj = GlobalContext(config)


def run_app():
    """Run the application with global exception handling."""
    # force stdout to be utf8
    ensure_utf8_output()
    # load any .env files (config values possibly set through env)
    load_dotenv()
    # launch cli
    app(prog_name=PROG_NAME)


if __name__ == "__main__":
    run_app()
