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

"""Configuration model for the transpiler."""

import re

from pydantic import BaseModel, field_validator, model_validator

IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Keywords, strict mode reserved words and names the emitted code relies on.
RESERVED_WORDS = frozenset(
    """
    await break case catch class const continue debugger default delete do else
    enum export extends false finally for function if implements import in
    instanceof interface let new null package private protected public return
    static super switch this throw true try typeof var void while with yield
    arguments eval undefined
    """.split()
)


class TranspilerConfig(BaseModel):
    """Names used by the wrapper function, plus logging switches for the CLI."""

    global_name: str = "__global"
    import_name: str = "__import"
    console_name: str = "console"
    verbose: bool = False
    silent: bool = False

    @field_validator("global_name", "import_name", "console_name")
    @classmethod
    def _check_identifier(cls, value: str) -> str:
        if not IDENTIFIER.match(value):
            raise ValueError(f"'{value}' is not a valid JavaScript identifier")
        if value in RESERVED_WORDS:
            raise ValueError(f"'{value}' is a reserved word in JavaScript")
        return value

    @model_validator(mode="after")
    def _check_distinct(self) -> "TranspilerConfig":
        names = [self.global_name, self.import_name, self.console_name]
        if len(set(names)) != len(names):
            raise ValueError("global_name, import_name and console_name must differ")
        return self

    def reserved_names(self) -> set[str]:
        """Wrapper parameters a cell must not bind or read itself."""
        # console is shadowed on purpose, user code may rebind it
        return {self.global_name, self.import_name}
