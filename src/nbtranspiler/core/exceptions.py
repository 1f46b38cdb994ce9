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
Custom exception hierarchy for nbtranspiler.

This module defines the exception hierarchy used by the transpiler and
its command line interface, so callers can tell user input problems
(syntax errors, reserved names) apart from broken internal invariants.
"""

import contextlib

import typer
from loguru import logger


class NbTranspilerError(Exception):
    """
    Base exception for all nbtranspiler errors.

    All nbtranspiler-specific exceptions should inherit from this class
    to enable consistent error handling throughout the application.
    """

    def __init__(self, message: str, details: str = None):
        """
        Initialize a NbTranspilerError.

        Args:
            message: Main error message for the user
            details: Additional technical details for logging
        """
        self.message = message
        self.details = details
        super().__init__(message)


class CellSyntaxError(NbTranspilerError):
    """
    The cell source could not be parsed.

    Raised when the parser rejects the wrapped cell, or when the cell
    source closes the wrapping function early.
    """

    def __init__(
        self,
        message: str,
        details: str = None,
        line: int | None = None,
        column: int | None = None,
    ):
        self.line = line
        self.column = column
        super().__init__(message, details)


class InvariantError(NbTranspilerError):
    """
    A structural assertion failed.

    Signals a broken contract between the walker, the passes and the edit
    index rather than a problem with the user's input.
    """

    pass


class ValidationError(NbTranspilerError):
    """
    Input validation errors.

    Raised when a cell is well formed but cannot be transpiled safely.
    """

    pass


class ReservedNameError(ValidationError):
    """Raised when a cell uses one of the wrapper's parameter names."""

    pass


class ConfigurationError(NbTranspilerError):
    """
    Configuration-related errors.

    Raised when configuration files are invalid, missing,
    or contain incompatible settings.
    """

    pass


class FileSystemError(NbTranspilerError):
    """
    File system operation errors.

    Raised when a cell file cannot be read or the output cannot be written.
    """

    pass


# Convenience functions for creating common errors
def syntax_error_at(line: int, column: int, snippet: str) -> CellSyntaxError:
    """Create a CellSyntaxError pointing at a cell-relative position."""
    return CellSyntaxError(
        f"Syntax error at line {line}, column {column}",
        f"Unexpected input near {snippet!r}",
        line=line,
        column=column,
    )


def wrapper_escaped() -> CellSyntaxError:
    """Create a CellSyntaxError for cells that close the wrapping function."""
    return CellSyntaxError(
        "Cell source escapes the wrapping function",
        "Check the cell for unbalanced braces or parentheses",
    )


def reserved_name_used(name: str, line: int) -> ReservedNameError:
    """Create a ReservedNameError for a cell identifier that collides with a wrapper parameter."""
    return ReservedNameError(
        f"Identifier '{name}' on line {line} is reserved by the transpiler",
        "Rename the binding, or pick different global/import names in the configuration",
    )


def path_not_found(path: str) -> FileSystemError:
    """Create a FileSystemError for non-existent paths."""
    return FileSystemError(
        f"Path not found: {path}",
        "Please check that the path exists and is accessible",
    )


@contextlib.contextmanager
def handle_nbtranspiler_exception(exit_on_fail: bool = True):
    """
    Log nbtranspiler errors for the user and turn them into a CLI exit code.

    Errors that are not NbTranspilerError propagate untouched.
    """
    try:
        yield
    except NbTranspilerError as e:
        logger.error(e.message)
        if e.details:
            logger.debug(e.details)
        if exit_on_fail:
            raise typer.Exit(1)
        raise
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        raise typer.Exit(130)
