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

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class SourceChar:
    """A single character tagged with where it came from.

    `pos` and `file` are None for text inserted by a rewrite.
    """

    char: str
    pos: int | None = None
    file: str | None = None


Source: TypeAlias = list[SourceChar]
SourceLike: TypeAlias = str | Source


def convert(source: SourceLike, file: str | None = None) -> Source:
    """Tag every character of plain text; already tagged sources pass through."""
    if isinstance(source, str):
        return [SourceChar(char, pos, file) for pos, char in enumerate(source)]
    return source


def inserted(source: SourceLike) -> Source:
    """Plain text added by a rewrite has no origin; tagged sources pass through."""
    if isinstance(source, str):
        return [SourceChar(char) for char in source]
    return source


def source_text(source: Source) -> str:
    return "".join(c.char for c in source)
