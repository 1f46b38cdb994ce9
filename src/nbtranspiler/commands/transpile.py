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
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.syntax import Syntax

from nbtranspiler.context import GlobalContext, TranspileContext
from nbtranspiler.core.exceptions import (
    FileSystemError,
    handle_nbtranspiler_exception,
    path_not_found,
)
from nbtranspiler.core.logging.utils import time_block
from nbtranspiler.core.transpiler import transpile


def read_cell(path: str) -> tuple[str, str | None]:
    """Read a cell from `path`, or from stdin when the path is `-`."""
    if path == "-":
        return sys.stdin.read(), None

    cell_path = Path(path)
    if not cell_path.is_file():
        raise path_not_found(path)
    try:
        return cell_path.read_text(encoding="utf-8"), str(cell_path)
    except (OSError, UnicodeDecodeError) as e:
        raise FileSystemError(f"Could not read {path}", str(e)) from e


def run_transpile(global_context: GlobalContext, transpile_context: TranspileContext) -> str:
    with time_block("Transpile"):
        result = transpile(
            transpile_context.source,
            global_context.config,
            file=transpile_context.file,
        )

    if transpile_context.output is not None:
        try:
            transpile_context.output.write_text(result + "\n", encoding="utf-8")
        except OSError as e:
            raise FileSystemError(
                f"Could not write {transpile_context.output}", str(e)
            ) from e
        logger.info(f"Wrote {transpile_context.output}")
    elif transpile_context.pretty:
        Console().print(Syntax(result, "javascript"))
    else:
        typer.echo(result)

    return result


def main(
    ctx: typer.Context,
    path: str = typer.Argument(
        "-", help="Cell file to transpile, '-' reads the cell from stdin"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the emitted function to this file"
    ),
    pretty: bool = typer.Option(
        False, "--pretty", help="Syntax highlight the emitted function"
    ),
) -> None:
    """
    Transpile a notebook cell into an async function expression.

    Top-level declarations are assigned to the global object and imports
    are awaited through the import function, both named by configuration.

    Examples:
        # Transpile a cell file
        nbt transpile cell.js

        # Read from stdin, use custom parameter names
        echo 'let x = 1; x' | nbt --global-name G transpile
    """
    with handle_nbtranspiler_exception():
        global_context: GlobalContext = ctx.obj
        source, file = read_cell(path)
        logger.debug(f"Read {len(source)} characters from {file or 'stdin'}")
        run_transpile(global_context, TranspileContext(source, file, output, pretty))
