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


import importlib

import pytest
from loguru import logger

import nbtranspiler
from nbtranspiler.core.logging.logging import get_log_directory, setup_logger
from nbtranspiler.core.transpiler import transpile


@pytest.fixture
def log_dir(tmp_path, monkeypatch):
    path = tmp_path / "logs"
    monkeypatch.setattr("nbtranspiler.core.logging.logging.LOG_DIR", path)
    return path


def capture_transpile(source: str) -> list[str]:
    messages = []
    sink_id = logger.add(messages.append, level="DEBUG", format="{message}")
    try:
        transpile(source)
    finally:
        logger.remove(sink_id)
    return messages


# -----------------------------------------------------------------------------
# Tests
# -----------------------------------------------------------------------------


def test_importing_the_package_silences_library_logs(log_dir):
    setup_logger("transpile", silent=True)
    importlib.reload(nbtranspiler)

    assert capture_transpile("let x = 1") == []


def test_setup_logger_enables_library_logs(log_dir):
    logger.disable("nbtranspiler")
    setup_logger("transpile", debug=True, silent=True)

    messages = capture_transpile("let x = 1")

    assert any("Transpiled cell" in m for m in messages)


def test_setup_logger_writes_log_file(log_dir):
    logfile = setup_logger("transpile", silent=True)
    capture_transpile("1")

    assert logfile.parent == log_dir == get_log_directory()
    assert logfile.exists()
