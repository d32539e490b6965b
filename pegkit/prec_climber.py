"""Precedence climbing over alternating operand/operator pairs."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator
from enum import Enum
from typing import Any, TypeVar

from .pratt_parser import _Peekable

__all__ = ["Assoc", "Operator", "PrecClimber"]

T = TypeVar("T")


class Assoc(Enum):
    """Associativity of an :class:`Operator`."""

    LEFT = "left"
    RIGHT = "right"


class Operator:
    """One or more infix operators sharing a precedence level.

    Operators are combined with ``|`` to give them equal precedence.
    """

    __slots__ = ("_entries",)

    def __init__(self, rule: Hashable, assoc: Assoc) -> None:
        self._entries: tuple[tuple[Hashable, Assoc], ...] = ((rule, assoc),)

    @property
    def rule(self) -> Hashable:
        """The rule of the first operator in the chain."""
        return self._entries[0][0]

    @property
    def assoc(self) -> Assoc:
        """The associativity of the first operator in the chain."""
        return self._entries[0][1]

    def __or__(self, other: Operator) -> Operator:
        if not isinstance(other, Operator):
            return NotImplemented
        combined = Operator(self.rule, self.assoc)
        combined._entries = self._entries + other._entries
        return combined

    def __iter__(self) -> Iterator[tuple[Hashable, Assoc]]:
        return iter(self._entries)

    def __repr__(self) -> str:
        parts = " | ".join(f"{rule!r}:{assoc.name}" for rule, assoc in self._entries)
        return f"Operator({parts})"


def _default_rule_of(pair: Any) -> Hashable:
    return pair.rule


class PrecClimber:
    """Operator table that reduces ``primary (operator primary)*`` pairs to one value.

    Operators given to the constructor get precedence *index + 1*; a chain
    built with ``|`` shares one precedence.
    """

    def __init__(
        self,
        ops: Iterable[Operator],
        rule_of: Callable[[Any], Hashable] | None = None,
    ) -> None:
        table = [
            (rule, prec, assoc)
            for prec, operator in enumerate(ops, start=1)
            for rule, assoc in operator
        ]
        self._init_table(table, rule_of)

    @classmethod
    def from_table(
        cls,
        ops: Iterable[tuple[Hashable, int, Assoc]],
        rule_of: Callable[[Any], Hashable] | None = None,
    ) -> PrecClimber:
        """Create a climber from ``(rule, precedence, assoc)`` triples.

        Precedences start at 1; the entries need not be ordered.
        """
        climber = cls.__new__(cls)
        climber._init_table(list(ops), rule_of)
        return climber

    def _init_table(
        self,
        table: list[tuple[Hashable, int, Assoc]],
        rule_of: Callable[[Any], Hashable] | None,
    ) -> None:
        self._rule_of = rule_of or _default_rule_of
        self._ops: dict[Hashable, tuple[int, Assoc]] = {}
        for rule, prec, assoc in table:
            self._ops.setdefault(rule, (prec, assoc))

    @property
    def ops(self) -> list[tuple[Hashable, int, Assoc]]:
        """The operator table as ``(rule, precedence, assoc)`` triples."""
        return [(rule, prec, assoc) for rule, (prec, assoc) in self._ops.items()]

    def _get(self, pair: Any) -> tuple[int, Assoc] | None:
        return self._ops.get(self._rule_of(pair))

    def climb(
        self,
        pairs: Iterable[Any],
        primary: Callable[[Any], T],
        infix: Callable[[T, Any, T], T],
    ) -> T:
        """Map primaries with ``primary`` and reduce them with ``infix``.

        Raises ValueError when ``pairs`` is empty or an operator is not
        followed by a primary.
        """
        stream = _Peekable(pairs)
        present, first = stream.next()
        if not present:
            raise ValueError("precedence climbing requires a non-empty Pairs")
        return self._climb_rec(primary(first), 0, stream, primary, infix)

    def _climb_rec(
        self,
        lhs: T,
        min_prec: int,
        pairs: _Peekable,
        primary: Callable[[Any], T],
        infix: Callable[[T, Any, T], T],
    ) -> T:
        while True:
            present, pair = pairs.peek()
            if not present:
                break
            found = self._get(pair)
            if found is None or found[0] < min_prec:
                break
            prec = found[0]
            _, op = pairs.next()
            present, operand = pairs.next()
            if not present:
                raise ValueError(
                    "infix operator must be followed by a primary expression"
                )
            rhs = primary(operand)

            while True:
                present, following = pairs.peek()
                if not present:
                    break
                found = self._get(following)
                if found is None:
                    break
                new_prec, assoc = found
                if new_prec > prec or (assoc is Assoc.RIGHT and new_prec == prec):
                    rhs = self._climb_rec(rhs, new_prec, pairs, primary, infix)
                else:
                    break

            lhs = infix(lhs, op, rhs)
        return lhs