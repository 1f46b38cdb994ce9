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


import pytest

from nbtranspiler.core.config import TranspilerConfig
from nbtranspiler.core.parser.cell_parser import CellParser
from nbtranspiler.core.passes.import_pass import import_specifiers, rewrite_imports
from nbtranspiler.core.source.edit_index import EditIndex
from nbtranspiler.core.transpiler import wrap_cell

HEADER = "(async (__global, __import, console) => {\n"
FOOTER = "\n})"


def run_import_pass(source: str, import_name: str = "__import") -> str:
    text = wrap_cell(source, TranspilerConfig(import_name=import_name))
    edit = EditIndex(text)
    rewrite_imports(CellParser.parse(text), edit, import_name)
    result = edit.text()
    assert result.endswith(FOOTER)
    return result[result.index("\n") + 1 : -len(FOOTER)]


# -----------------------------------------------------------------------------
# Tests
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "source, expected",
    [
        # default
        (
            'import a from "m";',
            'var {_:{default:a}} = {_:await __import("m")};',
        ),
        # named, aliased and not, no semicolon
        (
            'import {b, c as d} from "m"',
            'var {_:{b},_:{c:d}} = {_:await __import("m")};',
        ),
        # namespace
        (
            'import * as ns from "m";',
            'var {_:ns} = {_:await __import("m")};',
        ),
        # default + namespace
        (
            'import a, * as ns from "m";',
            'var {_:{default:a},_:ns} = {_:await __import("m")};',
        ),
        # default + named
        (
            "import a, {b as c} from './mod.js';",
            "var {_:{default:a},_:{b:c}} = {_:await __import('./mod.js')};",
        ),
        # side effect only
        ('import "m";', 'await __import("m");'),
        ('import "m"', 'await __import("m");'),
        # empty braces bind nothing
        ('import {} from "m";', 'await __import("m");'),
    ],
)
def test_import_forms(source, expected):
    assert run_import_pass(source) == expected


def test_multiple_imports_and_surrounding_code_are_preserved():
    source = 'import x from "a";\n// keep me\nimport {y} from "b";\nx + y'

    assert run_import_pass(source) == (
        'var {_:{default:x}} = {_:await __import("a")};\n'
        "// keep me\n"
        'var {_:{y}} = {_:await __import("b")};\n'
        "x + y"
    )


def test_imports_inside_functions_are_not_rewritten():
    source = 'function f() { return import("m") }\nconst g = async () => await import("n");'

    assert run_import_pass(source) == source


def test_custom_import_name():
    assert run_import_pass('import "m";', import_name="load") == 'await load("m");'


def test_import_specifiers_are_flattened_in_order():
    text = wrap_cell('import a, {b, c as d} from "m";', TranspilerConfig())
    cell = CellParser.parse(text)
    statement = cell.statements()[0]

    specifiers = import_specifiers(statement)

    assert [cell.node_text(s) for s in specifiers] == ["a", "b", "c as d"]


def test_rewrite_imports_counts_statements():
    text = wrap_cell('import "a";\nimport b from "b";\nb', TranspilerConfig())
    edit = EditIndex(text)

    assert rewrite_imports(CellParser.parse(text), edit, "__import") == 2
