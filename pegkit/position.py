"""Cursor positions inside an input string, measured in UTF-8 byte offsets."""

from __future__ import annotations

from collections.abc import Callable, Iterable


def _char_len(lead: int) -> int:
    """Length in bytes of the UTF-8 sequence starting with ``lead``."""
    if lead < 0x80:
        return 1
    if lead < 0xE0:
        return 2
    if lead < 0xF0:
        return 3
    return 4


def _is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


class Position:
    """A cursor in a string that supports the primitive matching steps of a parser.

    The position is a byte offset into the UTF-8 encoding of the input and
    always lies on a character boundary.
    """

    __slots__ = ("_input", "_data", "_pos")

    def __init__(self, input: str, pos: int) -> None:
        data = input.encode("utf-8")
        if not 0 <= pos <= len(data) or (pos < len(data) and _is_continuation(data[pos])):
            raise ValueError(f"{pos} is not a character boundary of the input")
        self._input = input
        self._data = data
        self._pos = pos

    @classmethod
    def _unchecked(cls, input: str, data: bytes, pos: int) -> Position:
        position = cls.__new__(cls)
        position._input = input
        position._data = data
        position._pos = pos
        return position

    @classmethod
    def from_start(cls, input: str) -> Position:
        """Create a position at the start of ``input``."""
        return cls(input, 0)

    @property
    def input(self) -> str:
        """The string this position points into."""
        return self._input

    @property
    def pos(self) -> int:
        """The byte offset of this position."""
        return self._pos

    def __copy__(self) -> Position:
        return Position._unchecked(self._input, self._data, self._pos)

    def span(self, other: Position):
        """Create a span from this position to ``other``."""
        if self._input is not other._input:
            raise ValueError("span created from positions from different inputs")
        from .span import Span

        return Span(self._input, self._pos, other._pos)

    def line_col(self) -> tuple[int, int]:
        """Return the 1-based line and column (in characters) of this position."""
        if self._pos > len(self._data):
            raise IndexError("position out of bounds")
        prefix = self._data[: self._pos].decode("utf-8")
        line, col = 1, 1
        chars = iter(prefix)
        pending = next(chars, None)
        while pending is not None:
            following = next(chars, None)
            if pending == "\r" and following == "\n":
                line, col = line + 1, 1
                following = next(chars, None)
            elif pending == "\n":
                line, col = line + 1, 1
            else:
                col += 1
            pending = following
        return line, col

    def line_of(self) -> str:
        """Return the whole line of the input containing this position."""
        if self._pos > len(self._data):
            raise IndexError("position out of bounds")
        return self._data[self.find_line_start() : self.find_line_end()].decode("utf-8")

    def find_line_start(self) -> int:
        """Byte offset of the start of the line containing this position."""
        if not self._data:
            return 0
        return self._data.rfind(b"\n", 0, self._pos) + 1

    def find_line_end(self) -> int:
        """Byte offset just past the end (newline included) of this position's line."""
        if not self._data:
            return 0
        if self._pos == len(self._data) - 1:
            return len(self._data)
        found = self._data.find(b"\n", self._pos)
        return len(self._data) if found < 0 else found + 1

    def at_start(self) -> bool:
        """Whether this position is at the start of the input."""
        return self._pos == 0

    def at_end(self) -> bool:
        """Whether this position is at the end of the input."""
        return self._pos == len(self._data)

    def skip(self, n: int) -> bool:
        """Move forward ``n`` characters; on failure leave the position untouched."""
        pos = self._pos
        for _ in range(n):
            if pos >= len(self._data):
                return False
            pos += _char_len(self._data[pos])
        self._pos = pos
        return True

    def skip_back(self, n: int) -> bool:
        """Move back ``n`` characters; on failure leave the position untouched."""
        pos = self._pos
        for _ in range(n):
            if pos == 0:
                return False
            pos -= 1
            while _is_continuation(self._data[pos]):
                pos -= 1
        self._pos = pos
        return True

    def skip_until(self, strings: Iterable[str]) -> bool:
        """Advance to the first occurrence of any of ``strings``.

        If none is found the position moves to the end of the input and
        ``False`` is returned.
        """
        end = len(self._data)
        hits = [
            found
            for found in (self._data.find(s.encode("utf-8"), self._pos) for s in strings)
            if 0 <= found < end
        ]
        if hits:
            self._pos = min(hits)
            return True
        self._pos = end
        return False

    def _next_char(self) -> str | None:
        if self._pos >= len(self._data):
            return None
        width = _char_len(self._data[self._pos])
        return self._data[self._pos : self._pos + width].decode("utf-8")

    def match_char(self, c: str) -> bool:
        """Whether the character at this position is ``c``; never moves."""
        return self._next_char() == c

    def match_char_by(self, predicate: Callable[[str], bool]) -> bool:
        """Consume the next character if ``predicate`` accepts it."""
        c = self._next_char()
        if c is not None and predicate(c):
            self._pos += len(c.encode("utf-8"))
            return True
        return False

    def match_string(self, string: str) -> bool:
        """Consume ``string`` if the input continues with it."""
        encoded = string.encode("utf-8")
        if self._data.startswith(encoded, self._pos):
            self._pos += len(encoded)
            return True
        return False

    def match_insensitive(self, string: str) -> bool:
        """Consume ``string`` compared case-insensitively over ASCII letters."""
        encoded = string.encode("utf-8")
        to = self._pos + len(encoded)
        if to > len(self._data) or (to < len(self._data) and _is_continuation(self._data[to])):
            return False
        if self._data[self._pos : to].lower() == encoded.lower():
            self._pos = to
            return True
        return False

    def match_range(self, start: str, end: str) -> bool:
        """Consume the next character if it lies in ``start..=end``."""
        c = self._next_char()
        if c is not None and start <= c <= end:
            self._pos += len(c.encode("utf-8"))
            return True
        return False

    def __repr__(self) -> str:
        return f"Position(pos={self._pos})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self._input is other._input and self._pos == other._pos

    def __hash__(self) -> int:
        return hash((id(self._input), self._pos))

    def _ordered_with(self, other: Position) -> int:
        if self._input is not other._input:
            raise ValueError("cannot compare positions from different strs")
        return other._pos

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self._pos < self._ordered_with(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self._pos <= self._ordered_with(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self._pos > self._ordered_with(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self._pos >= self._ordered_with(other)