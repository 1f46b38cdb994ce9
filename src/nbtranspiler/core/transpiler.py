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
Transpiles a notebook cell into an async function expression.

The returned string has the form:

    (async (__global, __import, console) => {
    ... cell statements
    return (last_expression_result)
    })

Top-level bindings are written to `__global` so later cells can see them,
and imports are resolved through `__import` when the function is called.
"""

from dataclasses import dataclass

from loguru import logger
from tree_sitter import Node

from .config.transpiler_config import TranspilerConfig
from .exceptions import reserved_name_used
from .logging.utils import time_block
from .parser.cell_parser import WRAPPER_HEADER_LINES, CellParser, ParsedCell
from .passes.import_pass import rewrite_imports
from .passes.scope_pass import rewrite_scope
from .source.edit_index import EditIndex
from .walker.walker import walk_recursive


def wrap_cell(source: str, config: TranspilerConfig) -> str:
    """Wrap cell source in the async arrow function the passes operate on."""
    params = ", ".join(
        (config.global_name, config.import_name, config.console_name)
    )
    return f"(async ({params}) => {{\n{source}\n}})"


@dataclass
class ReservedNameState:
    cell: ParsedCell
    reserved: set[str]


def _identifier(node: Node, state: ReservedNameState, c) -> None:
    name = state.cell.node_text(node)
    if name in state.reserved:
        line = node.start_point[0] - WRAPPER_HEADER_LINES + 1
        raise reserved_name_used(name, line)


RESERVED_NAME_VISITORS = {
    "identifier": _identifier,
    "shorthand_property_identifier": _identifier,
    "shorthand_property_identifier_pattern": _identifier,
}


def check_reserved_names(cell: ParsedCell, config: TranspilerConfig) -> None:
    """Reject cells that would shadow or tamper with the wrapper's parameters."""
    walk_recursive(
        cell.body,
        ReservedNameState(cell, config.reserved_names()),
        RESERVED_NAME_VISITORS,
    )


def rewrite_trailing_expression(cell: ParsedCell, edit: EditIndex) -> bool:
    """Turn a trailing expression statement into the function's return value."""
    statements = cell.statements()
    if not statements or statements[-1].type != "expression_statement":
        return False

    last = statements[-1]
    expression = next(c for c in last.named_children if c.type != "comment")
    edit.prepend(cell.span(last), "return (")
    edit.append(cell.span(expression), ")")
    return True


def transpile(
    source: str, config: TranspilerConfig | None = None, file: str | None = None
) -> str:
    """
    Transpile a cell into an async function expression.

    Args:
        source: JavaScript source of one cell
        config: Names to use for the wrapper parameters
        file: Originating file, recorded on every source character

    Returns:
        The emitted `(async (...) => { ... })` expression

    Raises:
        CellSyntaxError: the cell does not parse
        ReservedNameError: the cell uses the global or import parameter name
    """
    config = config or TranspilerConfig()
    src = wrap_cell(source, config)

    # Translate imports into async imports.
    with time_block("Import pass"):
        edit = EditIndex(src, file)
        cell = CellParser.parse(src)
        check_reserved_names(cell, config)
        imports = rewrite_imports(cell, edit, config.import_name)
        src = edit.stratify()

    # Offsets moved, re-parse before translating declarations.
    with time_block("Scope pass"):
        cell = CellParser.parse(src)
        declarations = rewrite_scope(cell, edit, config.global_name)
        returns = rewrite_trailing_expression(cell, edit)

    logger.debug(
        f"Transpiled cell: imports={imports} declarations={declarations} returns_value={returns}"
    )
    return edit.text()
