from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from pegkit.prec_climber import Assoc, Operator, PrecClimber


@dataclass
class Pair:
    rule: str
    text: str
    inner: list["Pair"] = field(default_factory=list)


_OPERATORS = {
    "+": "plus",
    "-": "minus",
    "*": "times",
    "/": "divide",
    "%": "modulus",
    "^": "power",
}


def _parse_expression(text: str, pos: int) -> tuple[Pair, int]:
    start = pos
    inner = []
    primary, pos = _parse_primary(text, pos)
    inner.append(primary)
    while pos < len(text) and text[pos] in _OPERATORS:
        inner.append(Pair(_OPERATORS[text[pos]], text[pos]))
        primary, pos = _parse_primary(text, pos + 1)
        inner.append(primary)
    return Pair("expression", text[start:pos], inner), pos


def _parse_primary(text: str, pos: int) -> tuple[Pair, int]:
    if text[pos] == "(":
        expr, pos = _parse_expression(text, pos + 1)
        assert text[pos] == ")"
        return expr, pos + 1
    start = pos
    if text[pos] == "-":
        pos += 1
    while pos < len(text) and text[pos].isdigit():
        pos += 1
    return Pair("number", text[start:pos]), pos


def parse_calc(text: str) -> Pair:
    expr, pos = _parse_expression(text, 0)
    assert pos == len(text)
    return expr


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _trunc_rem(a: int, b: int) -> int:
    return a - b * _trunc_div(a, b)


def _infix(lhs: int, op: Pair, rhs: int) -> int:
    return {
        "plus": lambda: lhs + rhs,
        "minus": lambda: lhs - rhs,
        "times": lambda: lhs * rhs,
        "divide": lambda: _trunc_div(lhs, rhs),
        "modulus": lambda: _trunc_rem(lhs, rhs),
        "power": lambda: lhs**rhs,
    }[op.rule]()


def consume(pair: Pair, climber: PrecClimber) -> int:
    if pair.rule == "expression":
        return climber.climb(pair.inner, lambda p: consume(p, climber), _infix)
    return int(pair.text)


def calculator_climber() -> PrecClimber:
    return PrecClimber(
        [
            Operator("plus", Assoc.LEFT) | Operator("minus", Assoc.LEFT),
            Operator("times", Assoc.LEFT)
            | Operator("divide", Assoc.LEFT)
            | Operator("modulus", Assoc.LEFT),
            Operator("power", Assoc.RIGHT),
        ]
    )


def tree(pairs, climber):
    return climber.climb(pairs, lambda p: int(p.text), lambda l, op, r: (op.text, l, r))


def n(value: int) -> Pair:
    return Pair("number", str(value))


def op(symbol: str) -> Pair:
    return Pair(_OPERATORS[symbol], symbol)


def test_prec_climb_calculator():
    expr = parse_calc("-12+3*(4-9)^3^2/9%7381")
    assert consume(expr, calculator_climber()) == -1525


def test_simple_precedence():
    assert consume(parse_calc("1+2*3"), calculator_climber()) == 7
    assert consume(parse_calc("(1+2)*3"), calculator_climber()) == 9


def test_left_associativity_same_level():
    climber = calculator_climber()
    result = tree([n(1), op("-"), n(2), op("+"), n(3)], climber)
    assert result == ("+", ("-", 1, 2), 3)


def test_right_associativity():
    climber = calculator_climber()
    result = tree([n(2), op("^"), n(3), op("^"), n(2)], climber)
    assert result == ("^", 2, ("^", 3, 2))


def test_mixed_precedence_tree():
    climber = calculator_climber()
    result = tree([n(1), op("+"), n(2), op("*"), n(3), op("-"), n(4)], climber)
    assert result == ("-", ("+", 1, ("*", 2, 3)), 4)


def test_single_primary():
    assert calculator_climber().climb([n(42)], lambda p: int(p.text), _infix) == 42


def test_empty_pairs_raises():
    with pytest.raises(ValueError, match="non-empty"):
        calculator_climber().climb([], lambda p: p, _infix)


def test_missing_operand_raises():
    with pytest.raises(ValueError, match="followed by a primary"):
        calculator_climber().climb([n(1), op("+")], lambda p: int(p.text), _infix)


def test_unknown_rule_stops_climbing():
    climber = calculator_climber()
    pairs = [n(1), op("+"), n(2), Pair("number", "3")]
    assert climber.climb(pairs, lambda p: int(p.text), _infix) == 3


def test_from_table_matches_constructor():
    table = PrecClimber.from_table(
        [
            ("power", 3, Assoc.RIGHT),
            ("plus", 1, Assoc.LEFT),
            ("minus", 1, Assoc.LEFT),
            ("times", 2, Assoc.LEFT),
            ("divide", 2, Assoc.LEFT),
            ("modulus", 2, Assoc.LEFT),
        ]
    )
    expr = parse_calc("-12+3*(4-9)^3^2/9%7381")
    assert consume(expr, table) == -1525


def test_constructor_assigns_index_precedence():
    climber = calculator_climber()
    assert sorted(climber.ops, key=lambda e: (e[1], e[0])) == [
        ("minus", 1, Assoc.LEFT),
        ("plus", 1, Assoc.LEFT),
        ("divide", 2, Assoc.LEFT),
        ("modulus", 2, Assoc.LEFT),
        ("times", 2, Assoc.LEFT),
        ("power", 3, Assoc.RIGHT),
    ]


def test_operator_chain_order():
    chain = Operator("a", Assoc.LEFT) | Operator("b", Assoc.RIGHT) | Operator("c", Assoc.LEFT)
    assert list(chain) == [("a", Assoc.LEFT), ("b", Assoc.RIGHT), ("c", Assoc.LEFT)]
    assert chain.rule == "a"


def test_custom_rule_of():
    climber = PrecClimber(
        [Operator("add", Assoc.LEFT), Operator("mul", Assoc.LEFT)],
        rule_of=lambda item: {"+": "add", "*": "mul"}.get(item),
    )
    result = climber.climb(
        ["2", "+", "3", "*", "4"],
        int,
        lambda l, o, r: l + r if o == "+" else l * r,
    )
    assert result == 14