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
Rewrites `import` statements into awaited calls to the import primitive.

    import a, {b as c, d} from "m";
    var {_:{default:a},_:{b:c},_:{d}} = {_:await __import("m")};

Every binding nests under a synthetic `_` key, so default, named and
namespace specifiers can share one destructuring pattern.
"""

from dataclasses import dataclass

from tree_sitter import Node

from ..parser.cell_parser import ParsedCell
from ..source.edit_index import EditIndex
from ..walker.walker import base, noop, walk_recursive


@dataclass
class ImportState:
    edit: EditIndex
    cell: ParsedCell
    import_name: str
    rewritten: int = 0


def import_specifiers(node: Node) -> list[Node]:
    """Flatten an import statement's clause into its specifiers, in source order."""
    specifiers: list[Node] = []
    clause = next((c for c in node.named_children if c.type == "import_clause"), None)
    if clause is None:
        return specifiers

    for child in clause.named_children:
        if child.type in ("identifier", "namespace_import"):
            specifiers.append(child)
        elif child.type == "named_imports":
            specifiers.extend(
                c for c in child.named_children if c.type == "import_specifier"
            )
    return specifiers


def import_statement(node: Node, state: ImportState, c) -> None:
    cell, edit = state.cell, state.edit
    source = node.child_by_field_name("source")
    specifiers = import_specifiers(node)
    call = f"await {state.import_name}("

    if specifiers:
        cur = specifiers[0]
        edit.replace(cell.start(node), cell.start(cur), "var {")
        for spec in specifiers[1:]:
            edit.replace(cell.end(cur), cell.start(spec), ",")
            cur = spec
        edit.replace(cell.end(cur), cell.start(source), "} = {_:" + call)
        closing = ")};"
    else:
        edit.replace(cell.start(node), cell.start(source), call)
        closing = ");"

    if cell.end(source) < cell.end(node):
        edit.replace(cell.end(source), cell.end(node), closing)
    else:
        # no semicolon to replace
        edit.append(cell.span(source), closing)

    state.rewritten += 1
    base(node, state, c)


def import_clause(node: Node, state: ImportState, c) -> None:
    # a bare identifier in the clause is the default specifier
    for child in node.named_children:
        if child.type == "identifier":
            import_default_specifier(child, state, c)
        else:
            c(child, state)


def import_specifier(node: Node, state: ImportState, c) -> None:
    cell, edit = state.cell, state.edit
    name = node.child_by_field_name("name")
    alias = node.child_by_field_name("alias")

    edit.prepend(cell.span(node), "_:{")
    if alias is not None:
        edit.replace(cell.end(name), cell.start(alias), ":")
    edit.append(cell.span(node), "}")


def import_default_specifier(node: Node, state: ImportState, c) -> None:
    state.edit.prepend(state.cell.span(node), "_:{default:")
    state.edit.append(state.cell.span(node), "}")


def namespace_import(node: Node, state: ImportState, c) -> None:
    local = node.named_children[-1]
    state.edit.replace(state.cell.start(node), state.cell.start(local), "_:")


IMPORT_VISITORS = {
    "import_statement": import_statement,
    "import_clause": import_clause,
    "import_specifier": import_specifier,
    "namespace_import": namespace_import,
    # Imports only live at the top level, do not recurse into functions etc.
    "function_declaration": noop,
    "generator_function_declaration": noop,
    "function_expression": noop,
    "function": noop,
    "generator_function": noop,
    "arrow_function": noop,
    "method_definition": noop,
    "class_static_block": noop,
}


def rewrite_imports(cell: ParsedCell, edit: EditIndex, import_name: str) -> int:
    """Run the import pass over the cell body; returns the number of rewritten imports."""
    state = ImportState(edit, cell, import_name)
    walk_recursive(cell.body, state, IMPORT_VISITORS)
    return state.rewritten
