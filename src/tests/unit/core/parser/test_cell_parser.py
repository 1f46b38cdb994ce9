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
from nbtranspiler.core.exceptions import CellSyntaxError
from nbtranspiler.core.parser.cell_parser import CellParser, OffsetMap
from nbtranspiler.core.transpiler import wrap_cell


def parse(source: str):
    return CellParser.parse(wrap_cell(source, TranspilerConfig()))


# -----------------------------------------------------------------------------
# Tests
# -----------------------------------------------------------------------------


def test_parse_finds_wrapper_body():
    cell = parse("let x = 1;\nx")

    assert cell.function.type == "arrow_function"
    assert cell.body.type == "statement_block"
    assert [s.type for s in cell.statements()] == [
        "lexical_declaration",
        "expression_statement",
    ]


def test_statements_skip_comments():
    cell = parse("// leading\nfoo()\n/* trailing */")

    assert [s.type for s in cell.statements()] == ["expression_statement"]


def test_empty_cell_has_no_statements():
    assert parse("").statements() == []


def test_node_text_uses_character_offsets():
    cell = parse('let s = "héllo 😀"; s')
    declaration = cell.statements()[0]
    value = declaration.named_children[0].child_by_field_name("value")

    assert cell.node_text(value) == '"héllo 😀"'
    assert cell.text[cell.start(value)] == '"'


def test_offset_map_ascii_is_identity():
    offsets = OffsetMap("abc")

    assert offsets.char_offset(2) == 2


def test_offset_map_multibyte():
    # a=1 byte, é=2 bytes, space=1 byte, b=1 byte
    offsets = OffsetMap("aé b")

    assert offsets.char_offset(1) == 1
    assert offsets.char_offset(3) == 2
    assert offsets.char_offset(4) == 3
    assert offsets.char_offset(5) == 4


def test_syntax_error_reports_cell_line():
    with pytest.raises(CellSyntaxError) as exc_info:
        parse("let a = 1;\nlet b = ;")

    assert exc_info.value.line == 2
    assert "Syntax error" in exc_info.value.message


def test_cell_escaping_wrapper_is_rejected():
    with pytest.raises(CellSyntaxError) as exc_info:
        parse("}); (() => {")

    assert "escapes" in exc_info.value.message
