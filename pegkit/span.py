"""Spans of an input string, delimited by UTF-8 byte offsets."""

from __future__ import annotations

from collections.abc import Iterator

from .position import Position, _is_continuation


def _on_boundary(data: bytes, offset: int) -> bool:
    return offset == len(data) or not _is_continuation(data[offset])


class Span:
    """A slice ``input[start:end]`` of a string, measured in UTF-8 bytes.

    Both ends always lie on character boundaries.
    """

    __slots__ = ("_input", "_data", "_start", "_end")

    def __init__(self, input: str, start: int, end: int) -> None:
        data = input.encode("utf-8")
        if not (
            0 <= start <= end <= len(data)
            and _on_boundary(data, start)
            and _on_boundary(data, end)
        ):
            raise ValueError(f"{start}..{end} is not a valid slice of the input")
        self._input = input
        self._data = data
        self._start = start
        self._end = end

    @classmethod
    def _unchecked(cls, input: str, data: bytes, start: int, end: int) -> Span:
        span = cls.__new__(cls)
        span._input = input
        span._data = data
        span._start = start
        span._end = end
        return span

    def get(self, start: int | None = None, end: int | None = None) -> Span | None:
        """Return the sub-span ``[start:end]`` relative to this span, or ``None``.

        Offsets are byte offsets into :meth:`as_str`; ``None`` stands for the
        respective end of this span.
        """
        length = self._end - self._start
        lo = 0 if start is None else start
        hi = length if end is None else end
        if not 0 <= lo <= hi <= length:
            return None
        abs_lo = self._start + lo
        abs_hi = self._start + hi
        if not (_on_boundary(self._data, abs_lo) and _on_boundary(self._data, abs_hi)):
            return None
        return Span._unchecked(self._input, self._data, abs_lo, abs_hi)

    @property
    def start(self) -> int:
        """Start byte offset."""
        return self._start

    @property
    def end(self) -> int:
        """End byte offset."""
        return self._end

    @property
    def start_pos(self) -> Position:
        """The position at the start of the span."""
        return Position._unchecked(self._input, self._data, self._start)

    @property
    def end_pos(self) -> Position:
        """The position at the end of the span."""
        return Position._unchecked(self._input, self._data, self._end)

    def split(self) -> tuple[Position, Position]:
        """Return the start and end positions of the span."""
        return self.start_pos, self.end_pos

    def as_str(self) -> str:
        """The text covered by the span."""
        return self._data[self._start : self._end].decode("utf-8")

    def lines_span(self) -> Iterator[Span]:
        """Yield a span for every line at least partially covered by this span."""
        pos = self._start
        while pos <= self._end:
            position = Position._unchecked(self._input, self._data, pos)
            if position.at_end():
                return
            line_start = position.find_line_start()
            pos = position.find_line_end()
            yield Span._unchecked(self._input, self._data, line_start, pos)

    def lines(self) -> Iterator[str]:
        """Yield the text of every line at least partially covered by this span."""
        return (span.as_str() for span in self.lines_span())

    def __repr__(self) -> str:
        return f"Span(str={self.as_str()!r}, start={self._start}, end={self._end})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Span):
            return NotImplemented
        return (
            self._input is other._input
            and self._start == other._start
            and self._end == other._end
        )

    def __hash__(self) -> int:
        return hash((id(self._input), self._start, self._end))