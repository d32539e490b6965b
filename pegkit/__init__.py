"""Building blocks for PEG parsers: positions, spans, tokens, a rewindable stack and operator-precedence parsing."""

__version__ = "0.1.0"
__all__ = ["position", "span", "token", "stack", "pratt_parser", "prec_climber"]