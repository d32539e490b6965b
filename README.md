# pegkit

pegkit is a set of small building blocks for writing PEG-style parsers in Python.
It has no dependencies.

| Module | What it provides |
| --- | --- |
| `pegkit.position` | `Position`, a cursor into a string with the basic matching steps |
| `pegkit.span` | `Span`, a slice of the input between two byte offsets |
| `pegkit.token` | `Token` and `TokenKind`, the start and end markers of a matched rule |
| `pegkit.stack` | `Stack`, a stack you can snapshot and later restore |
| `pegkit.pratt_parser` | `Assoc`, `Op`, `PrattParser`, `PrattParserMap` for Pratt parsing |
| `pegkit.prec_climber` | `Assoc`, `Operator`, `PrecClimber` for precedence climbing |

Positions and spans count in UTF-8 byte offsets. A character that takes several
bytes in UTF-8 therefore takes up several offsets.

## Installation

```
pip install pegkit
```

## Positions

A `Position(input, pos)` must fall on a character boundary. If it does not,
`ValueError` is raised. `Position.from_start(input)` creates a position at offset 0.

```python
from pegkit.position import Position

text = "a\rb\nc\r\nd嗨"
Position(text, 4).line_col()      # (2, 1)
Position(text, 4).line_of()       # "c\r\n"

pos = Position.from_start("asdasdf")
pos.match_string("asd")           # True
pos.pos                           # 3
```

Methods that move the cursor:

- `match_string`
- `match_insensitive` (ignores ASCII case)
- `match_range(start, end)` (the range includes both ends)
- `match_char_by(predicate)`
- `skip(n)`
- `skip_back(n)`

Each of these returns `True` if it matched. If it fails, the position is not moved.

`skip_until(strings)` moves to the first place where any of the given strings
occurs. If none of them is found, it moves to the end of the input and returns `False`.

`match_char(c)` only checks the next character and never moves the position.

Positions that come from the same input string can be compared and ordered.
Ordering positions from different strings raises `ValueError`.

## Spans

```python
from pegkit.span import Span

span = Span("abc\ndef\nghi", 1, 7)
list(span.lines())                # ["abc\n", "def\n"]
span.as_str()                     # "bc\ndef"
span.get(0, 2).as_str()           # "bc"
span.get(0, 100)                  # None
```

`lines_span()` yields `Span` objects for the same lines that `lines()` yields as strings.

`start` and `end` give the byte offsets. `start_pos`, `end_pos` and `split()` give the
matching `Position` objects. `Position.span(other)` builds a span from two positions
on the same input.

## Tokens

`Token(kind, rule, pos)` is a frozen dataclass:

- `kind` is `TokenKind.START` or `TokenKind.END`.
- `rule` can be any value.
- `pos` is a `Position`.

## A rewindable stack

```python
from pegkit.stack import Stack

stack = Stack()
stack.push(0)
stack.snapshot()
stack.push(1)
stack.restore()                   # back to [0]
list(stack)                       # [0]
```

- `pop()` and `peek()` return `None` when the stack is empty.
- `clear_snapshot()` drops the most recent snapshot and keeps the current contents.
- `restore()` with no snapshot taken empties the stack.
- The stack supports `len()`, indexing, slicing and iteration.

## Operator precedence

Both parsers take any iterable of pairs. By default the rule of a pair is read from
its `rule` attribute. You can pass `rule_of` to read it some other way.

```python
from pegkit.pratt_parser import Assoc, Op, PrattParser

pratt = (
    PrattParser(rule_of=lambda pair: pair[0])
    .op(Op.infix("plus", Assoc.LEFT) | Op.infix("minus", Assoc.LEFT))
    .op(Op.infix("times", Assoc.LEFT))
    .op(Op.infix("power", Assoc.RIGHT))
)

pairs = [("num", 2), ("plus", None), ("num", 3), ("times", None), ("num", 4)]
result = (
    pratt.map_primary(lambda pair: pair[1])
    .map_infix(lambda lhs, op, rhs: {"plus": lhs + rhs,
                                     "minus": lhs - rhs,
                                     "times": lhs * rhs,
                                     "power": lhs ** rhs}[op[0]])
    .parse(pairs)
)
# result == 14
```

Precedence in `PrattParser`:

- Each call to `op` adds operators that bind more tightly than every operator added before.
- Operators joined with `|` share one precedence.
- `Op.prefix` and `Op.postfix` define unary operators. You map them with
  `map_prefix(op, rhs)` and `map_postfix(lhs, op)`.

`PrecClimber` handles infix operators only. There are two ways to build one:

- `PrecClimber([Operator(rule, assoc) | ..., ...], rule_of)` gives each list entry
  precedence index + 1.
- `PrecClimber.from_table([(rule, precedence, assoc), ...], rule_of)` takes the
  precedences from the table.

Then call `climb(pairs, primary, infix)`.

Both parsers raise `ValueError` in these cases:

- the pairs are empty;
- the pairs are not in the expected order;
- an operator kind turns up for which no mapping was given.

## What pegkit does not do

pegkit has no grammar language and no parser driver. Nothing in it reads a grammar,
runs rules against an input, produces a stream of `Token`s, or reports parse errors
with expected and unexpected rules. You write those parts yourself using these
building blocks. It also has no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```