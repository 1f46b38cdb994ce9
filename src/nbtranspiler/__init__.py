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

"""Turn notebook cells into async functions that share one global scope."""

from loguru import logger

from nbtranspiler.core.config import TranspilerConfig
from nbtranspiler.core.exceptions import (
    CellSyntaxError,
    InvariantError,
    NbTranspilerError,
    ReservedNameError,
)
from nbtranspiler.core.transpiler import transpile, wrap_cell

# Library callers opt in; the CLI enables logging when it sets up its sinks.
logger.disable(__name__)

__all__ = [
    "CellSyntaxError",
    "InvariantError",
    "NbTranspilerError",
    "ReservedNameError",
    "TranspilerConfig",
    "transpile",
    "wrap_cell",
]
