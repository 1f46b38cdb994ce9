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

"""
Logging configuration for the nbtranspiler CLI.

Console output goes to stderr so the emitted function can be piped from
stdout; a debug log of every run is kept in the user log directory.
"""

from datetime import datetime
from pathlib import Path

from loguru import logger
from platformdirs import user_log_path
from rich.console import Console

from nbtranspiler.constants import APP_NAME

LOG_DIR = user_log_path(appname=APP_NAME)


def setup_logger(command_name: str, debug: bool = False, silent: bool = False) -> Path:
    """
    Set up logging for a command.

    Args:
        command_name: Name of the command being executed
        debug: Show debug messages on the console
        silent: Show nothing on the console

    Returns:
        Path to the log file
    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    logfile = LOG_DIR / f"{command_name}_{timestamp}.log"

    logger.enable(APP_NAME)
    # Clear existing sinks so we don't double-log across runs
    logger.remove()

    if not silent:
        console = Console(stderr=True)

        def console_sink(message):
            console.print(message.record["message"].rstrip("\n"), highlight=False)

        logger.add(console_sink, level="DEBUG" if debug else "INFO", format="{message}")

    logger.add(
        logfile,
        level="DEBUG",
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}",
        rotation="5 MB",
        retention="7 days",
        catch=True,
    )

    logger.debug(f"Initialized logger for {command_name} → {logfile}")
    return logfile


def get_log_directory() -> Path:
    """Get the directory where log files are stored."""
    return LOG_DIR
