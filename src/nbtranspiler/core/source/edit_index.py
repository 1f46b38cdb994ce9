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

from collections.abc import Iterator

from ..exceptions import InvariantError
from .tagged_source import Source, SourceLike, convert, inserted, source_text


class EditNode:
    """Owns the current fragment standing in for one original character."""

    def __init__(self, source: SourceLike):
        self.current: Source = []
        self.replace(source)

    def prepend(self, source: SourceLike) -> None:
        self.current = [*inserted(source), *self.current]

    def append(self, source: SourceLike) -> None:
        self.current = [*self.current, *inserted(source)]

    def replace(self, source: SourceLike) -> None:
        self.current = list(inserted(source))

    def clear(self) -> None:
        self.current = []

    def __repr__(self) -> str:
        return f"EditNode({source_text(self.current)!r})"


class EditIndex:
    """
    Position-stable text editor addressed by original character offsets.

    There is one EditNode per character of the text the offsets were computed
    from, so edits computed from a single parse never shift each other and
    can be applied in any order. Once the text has changed shape, call
    `stratify()` and re-parse before addressing it again.

    Spans are half-open `(start, end)` character ranges.
    """

    def __init__(self, source: SourceLike, file: str | None = None):
        self._index: list[EditNode] = []
        self.source = convert(source, file)

    @property
    def source(self) -> Source:
        source: Source = []
        for node in self._index:
            source.extend(node.current)
        return source

    @source.setter
    def source(self, source: Source) -> None:
        if source:
            self._index = [EditNode([char]) for char in source]
        else:
            self._index = [EditNode([])]

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[EditNode]:
        return iter(self._index)

    def stratify(self) -> str:
        """Bake all pending edits into a fresh index and return its text."""
        self.source = self.source
        return self.text()

    def text(self) -> str:
        return "".join(c.char for node in self._index for c in node.current)

    def first(self) -> EditNode:
        return self._index[0]

    def last(self) -> EditNode:
        return self._index[-1]

    def replace(self, start: int, end: int, text: SourceLike) -> None:
        """Collapse the original span [start, end) into `text`."""
        self._check_span(start, end)
        self._index[start].replace(text)
        for i in range(start + 1, end):
            self._index[i].clear()

    def prepend(self, span: tuple[int, int], text: SourceLike) -> None:
        start, end = span
        self._check_span(start, end)
        self._index[start].prepend(text)

    def append(self, span: tuple[int, int], text: SourceLike) -> None:
        start, end = span
        self._check_span(start, end)
        self._index[end - 1].append(text)

    def _check_span(self, start: int, end: int) -> None:
        if not 0 <= start < end <= len(self._index):
            raise InvariantError(
                f"Edit span [{start}, {end}) is outside the index",
                f"Index holds {len(self._index)} nodes; was the text re-parsed after stratify()?",
            )
