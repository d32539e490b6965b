"""Pratt parsing of prefix, postfix and infix operator expressions over pairs."""

from __future__ import annotations

import enum
from collections.abc import Callable, Hashable, Iterable, Iterator
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_PREC_STEP = 10


class Assoc(enum.Enum):
    """Associativity of an infix binary operator."""

    LEFT = "left"
    RIGHT = "right"


class _Affix(enum.Enum):
    PREFIX = "prefix"
    POSTFIX = "postfix"
    INFIX = "infix"


class Op:
    """One or more operators sharing a precedence level.

    Operators are combined with ``|`` to give them equal precedence.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: tuple[tuple[Hashable, _Affix, Assoc | None], ...]) -> None:
        self._entries = entries

    @classmethod
    def prefix(cls, rule: Hashable) -> Op:
        """Define ``rule`` as a prefix unary operator."""
        return cls(((rule, _Affix.PREFIX, None),))

    @classmethod
    def postfix(cls, rule: Hashable) -> Op:
        """Define ``rule`` as a postfix unary operator."""
        return cls(((rule, _Affix.POSTFIX, None),))

    @classmethod
    def infix(cls, rule: Hashable, assoc: Assoc) -> Op:
        """Define ``rule`` as an infix binary operator with associativity ``assoc``."""
        return cls(((rule, _Affix.INFIX, assoc),))

    def __or__(self, other: Op) -> Op:
        if not isinstance(other, Op):
            return NotImplemented
        return Op(self._entries + other._entries)

    def __iter__(self) -> Iterator[tuple[Hashable, _Affix, Assoc | None]]:
        return iter(self._entries)

    def __repr__(self) -> str:
        parts = " | ".join(
            f"{affix.value}({rule!r}{'' if assoc is None else ', ' + assoc.name})"
            for rule, affix, assoc in self._entries
        )
        return f"Op({parts})"


def _default_rule_of(pair: Any) -> Hashable:
    return pair.rule


class PrattParser:
    """Operator table used to Pratt-parse alternating operand/operator pairs.

    The pairs are expected in the order
    ``prefix* primary postfix* (infix prefix* primary postfix*)*``.
    Each call to :meth:`op` adds operators binding tighter than all earlier ones.
    """

    def __init__(self, rule_of: Callable[[Any], Hashable] | None = None) -> None:
        self._rule_of = rule_of or _default_rule_of
        self._prec = _PREC_STEP
        self._ops: dict[Hashable, tuple[_Affix, Assoc | None, int]] = {}
        self.has_prefix = False
        self.has_postfix = False
        self.has_infix = False

    def op(self, op: Op) -> PrattParser:
        """Add ``op`` at a precedence above every operator added so far."""
        self._prec += _PREC_STEP
        for rule, affix, assoc in op:
            if affix is _Affix.PREFIX:
                self.has_prefix = True
            elif affix is _Affix.POSTFIX:
                self.has_postfix = True
            else:
                self.has_infix = True
            self._ops[rule] = (affix, assoc, self._prec)
        return self

    def map_primary(self, primary: Callable[[Any], T]) -> PrattParserMap[T]:
        """Start a mapping whose primary expressions are mapped with ``primary``."""
        return PrattParserMap(self, primary)


class _Peekable:
    __slots__ = ("_it", "_head", "_has_head")

    def __init__(self, iterable: Iterable[Any]) -> None:
        self._it = iter(iterable)
        self._has_head = False
        self._head = None

    def peek(self) -> tuple[bool, Any]:
        if not self._has_head:
            try:
                self._head = next(self._it)
            except StopIteration:
                return False, None
            self._has_head = True
        return True, self._head

    def next(self) -> tuple[bool, Any]:
        present, value = self.peek()
        if present:
            self._has_head = False
            self._head = None
        return present, value


class PrattParserMap(Generic[T]):
    """Defines how primaries and operators are mapped while parsing."""

    def __init__(self, pratt: PrattParser, primary: Callable[[Any], T]) -> None:
        self._pratt = pratt
        self._primary = primary
        self._prefix: Callable[[Any, T], T] | None = None
        self._postfix: Callable[[T, Any], T] | None = None
        self._infix: Callable[[T, Any, T], T] | None = None

    def map_prefix(self, prefix: Callable[[Any, T], T]) -> PrattParserMap[T]:
        """Map prefix operators with ``prefix(op, rhs)``."""
        self._prefix = prefix
        return self

    def map_postfix(self, postfix: Callable[[T, Any], T]) -> PrattParserMap[T]:
        """Map postfix operators with ``postfix(lhs, op)``."""
        self._postfix = postfix
        return self

    def map_infix(self, infix: Callable[[T, Any, T], T]) -> PrattParserMap[T]:
        """Map infix operators with ``infix(lhs, op, rhs)``."""
        self._infix = infix
        return self

    def parse(self, pairs: Iterable[Any]) -> T:
        """Run the Pratt parser over ``pairs`` and return the mapped result.

        Raises ValueError when ``pairs`` is empty, out of order, or holds an
        operator kind for which no mapping was given.
        """
        return self._expr(_Peekable(pairs), 0)

    def _lookup(self, pair: Any) -> tuple[_Affix, Assoc | None, int] | None:
        return self._pratt._ops.get(self._pratt._rule_of(pair))

    def _expr(self, pairs: _Peekable, rbp: int) -> T:
        lhs = self._nud(pairs)
        while rbp < self._lbp(pairs):
            lhs = self._led(pairs, lhs)
        return lhs

    def _nud(self, pairs: _Peekable) -> T:
        present, pair = pairs.next()
        if not present:
            raise ValueError("Pratt parsing expects non-empty Pairs")
        entry = self._lookup(pair)
        if entry is None:
            return self._primary(pair)
        affix, _, prec = entry
        if affix is not _Affix.PREFIX:
            raise ValueError(f"Expected prefix or primary expression, found {pair}")
        rhs = self._expr(pairs, prec - 1)
        if self._prefix is None:
            raise ValueError(f"Could not map {pair}, no `.map_prefix(...)` specified")
        return self._prefix(pair, rhs)

    def _led(self, pairs: _Peekable, lhs: T) -> T:
        _, pair = pairs.next()
        entry = self._lookup(pair)
        if entry is None:
            raise ValueError(f"Expected postfix or infix expression, found {pair}")
        affix, assoc, prec = entry
        if affix is _Affix.INFIX:
            rhs = self._expr(pairs, prec if assoc is Assoc.LEFT else prec - 1)
            if self._infix is None:
                raise ValueError(f"Could not map {pair}, no `.map_infix(...)` specified")
            return self._infix(lhs, pair, rhs)
        if affix is _Affix.POSTFIX:
            if self._postfix is None:
                raise ValueError(f"Could not map {pair}, no `.map_postfix(...)` specified")
            return self._postfix(lhs, pair)
        raise ValueError(f"Expected postfix or infix expression, found {pair}")

    def _lbp(self, pairs: _Peekable) -> int:
        present, pair = pairs.peek()
        if not present:
            return 0
        entry = self._lookup(pair)
        if entry is None:
            raise ValueError(f"Expected operator, found {pair}")
        return entry[2]