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
Promotes top-level declarations to assignments on the global object.

    let x = 1, y;        void ((__global.x = (1)), (__global.y = undefined));
    function f() {}      void (__global.f = function f() {});
    class A {}           __global.A = (class A {});

`var` is function scoped and is promoted wherever the walk reaches it;
`let`, `const` and `class` only when they sit directly in the cell body.
Function, method and arrow bodies are never entered, so only one level of
declarations is ever promoted.
"""

from dataclasses import dataclass

from tree_sitter import Node

from ..parser.cell_parser import ParsedCell
from ..source.edit_index import EditIndex
from ..walker.walker import base, noop, require_parent, walk_recursive_with_ancestors


@dataclass
class ScopeState:
    body: Node
    edit: EditIndex
    cell: ParsedCell
    global_name: str
    translating_variable_declaration: bool = False
    rewritten: int = 0

    def prefix(self, node: Node) -> None:
        """Turn the identifier `node` into a property of the global object."""
        self.edit.prepend(self.cell.span(node), f"{self.global_name}.")


def binding_target(node: Node) -> Node | None:
    """The plain identifier bound by a pattern element, if there is one.

    `a`, `a = 1` and `...a` all bind `a`; nested patterns return None and are
    handled by their own visitors.
    """
    if node.type == "identifier":
        return node
    if node.type == "assignment_pattern":
        left = node.child_by_field_name("left")
        return left if left is not None and left.type == "identifier" else None
    if node.type == "rest_pattern":
        target = node.named_children[0] if node.named_children else None
        return target if target is not None and target.type == "identifier" else None
    return None


def class_declaration(node: Node, state: ScopeState, c, ancestors) -> None:
    base(node, state, c)

    # Classes are block scoped, leave them alone unless they are top-level.
    if require_parent(ancestors) != state.body:
        return

    name = state.cell.node_text(node.child_by_field_name("name"))
    state.edit.prepend(state.cell.span(node), f"{state.global_name}.{name} = (")
    state.edit.append(state.cell.span(node), ");")
    state.rewritten += 1


def function_declaration(node: Node, state: ScopeState, c, ancestors) -> None:
    # No base() call: nothing inside a function body is translated.
    name = state.cell.node_text(node.child_by_field_name("name"))
    state.edit.prepend(state.cell.span(node), f"void ({state.global_name}.{name} = ")
    state.edit.append(state.cell.span(node), ");")
    state.rewritten += 1


def variable_declaration(node: Node, state: ScopeState, c, ancestors) -> None:
    # TODO: hoist `var` declarations to the top of the cell so reads before
    # the declaration see `undefined` instead of throwing.
    parent = require_parent(ancestors)
    kind = node.children[0].type
    translate = kind == "var" or parent == state.body

    state.translating_variable_declaration = translate
    base(node, state, c)
    state.translating_variable_declaration = False

    if not translate:
        return

    cell, edit = state.cell, state.edit
    declarators = [d for d in node.named_children if d.type == "variable_declarator"]
    edit.replace(cell.start(node), cell.start(declarators[0]), "void (")

    for decl in declarators:
        value = decl.child_by_field_name("value")
        edit.prepend(cell.span(decl), "(")
        if value is not None:
            edit.prepend(cell.span(value), "(")
            edit.append(cell.span(value), ")")
            edit.append(cell.span(decl), ")")
        else:
            # Destructuring requires an initializer, so `name` is an identifier.
            edit.append(cell.span(decl), " = undefined)")

    # Close after the last declarator rather than the node, which may end
    # with a semicolon.
    edit.append(cell.span(declarators[-1]), ")")
    state.rewritten += 1


def variable_declarator(node: Node, state: ScopeState, c, ancestors) -> None:
    name = node.child_by_field_name("name")
    value = node.child_by_field_name("value")

    c(name, state)
    if value is not None:
        # initializers are expressions, not binding targets
        translating = state.translating_variable_declaration
        state.translating_variable_declaration = False
        c(value, state)
        state.translating_variable_declaration = translating

    if state.translating_variable_declaration and name.type == "identifier":
        state.prefix(name)


def pattern_default(node: Node, state: ScopeState, c, ancestors) -> None:
    c(node.child_by_field_name("left"), state)

    # defaults are expressions, not binding targets
    translating = state.translating_variable_declaration
    state.translating_variable_declaration = False
    c(node.child_by_field_name("right"), state)
    state.translating_variable_declaration = translating


def shorthand_target(prop: Node) -> Node | None:
    """The identifier of a `{x}` or `{x = 1}` property, which needs expanding."""
    if prop.type == "shorthand_property_identifier_pattern":
        return prop
    if prop.type == "object_assignment_pattern":
        left = prop.child_by_field_name("left")
        if left.type == "shorthand_property_identifier_pattern":
            return left
    return None


def object_pattern(node: Node, state: ScopeState, c, ancestors) -> None:
    base(node, state, c)

    if not state.translating_variable_declaration:
        return

    for prop in node.named_children:
        shorthand = shorthand_target(prop)
        if shorthand is not None:
            # {x} → {x:__global.x}
            name = state.cell.node_text(shorthand)
            state.edit.append(
                state.cell.span(shorthand), f":{state.global_name}.{name}"
            )
            continue

        if prop.type == "pair_pattern":
            prop = prop.child_by_field_name("value")
        target = binding_target(prop)
        if target is not None:
            state.prefix(target)


def array_pattern(node: Node, state: ScopeState, c, ancestors) -> None:
    base(node, state, c)

    if not state.translating_variable_declaration:
        return

    for element in node.named_children:
        target = binding_target(element)
        if target is not None:
            state.prefix(target)


def for_in_statement(node: Node, state: ScopeState, c, ancestors) -> None:
    kind = node.child_by_field_name("kind")
    left = node.child_by_field_name("left")
    if kind is None or kind.type != "var":
        base(node, state, c)
        return

    # `for (var x of xs)` → `for (__global.x of xs)`
    state.edit.replace(state.cell.start(kind), state.cell.start(left), "")
    state.translating_variable_declaration = True
    c(left, state)
    state.translating_variable_declaration = False
    if left.type == "identifier":
        state.prefix(left)
    state.rewritten += 1

    for child in node.named_children:
        if child != left:
            c(child, state)


SCOPE_VISITORS = {
    "class_declaration": class_declaration,
    "function_declaration": function_declaration,
    "generator_function_declaration": function_declaration,
    "variable_declaration": variable_declaration,
    "lexical_declaration": variable_declaration,
    "variable_declarator": variable_declarator,
    "object_pattern": object_pattern,
    "array_pattern": array_pattern,
    "assignment_pattern": pattern_default,
    "object_assignment_pattern": pattern_default,
    "for_in_statement": for_in_statement,
    # Don't do any translation inside function (etc.) bodies.
    "function_expression": noop,
    "function": noop,
    "generator_function": noop,
    "arrow_function": noop,
    "method_definition": noop,
    "class_static_block": noop,
}


def rewrite_scope(cell: ParsedCell, edit: EditIndex, global_name: str) -> int:
    """Run the scope pass over the cell body; returns the number of promoted declarations."""
    state = ScopeState(cell.body, edit, cell, global_name)
    walk_recursive_with_ancestors(cell.body, state, SCOPE_VISITORS)
    return state.rewritten
