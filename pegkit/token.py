"""Tokens marking where matched rules start and end."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from .position import Position


class TokenKind(enum.Enum):
    """Whether a token opens or closes a matched rule."""

    START = "start"
    END = "end"


@dataclass(frozen=True)
class Token:
    """The start or end of a matched rule at a position in the input."""

    kind: TokenKind
    rule: Any
    pos: Position