# =============================================================================
# core/calculator.py  —  Four-operator arithmetic
# =============================================================================

import operator as _op

from core.models import ToolResult
from core.text import format_number

OPERATORS = {
    "+": _op.add,
    "-": _op.sub,
    "*": _op.mul,
    "/": _op.truediv,
}

DIVIDE_BY_ZERO = "cannot divide by zero."


def calculate(a: float, b: float, operator: str) -> float:
    """Apply `operator` to a and b.  Raises ZeroDivisionError for x / 0."""
    return OPERATORS[operator](a, b)


def handle_calc(args) -> ToolResult:
    if args.operator == "/" and args.b == 0:
        return ToolResult.error(DIVIDE_BY_ZERO)

    result = calculate(args.a, args.b, args.operator)
    return ToolResult.text(
        f"{format_number(args.a)} {args.operator} {format_number(args.b)} = {format_number(result)}"
    )
