"""Safe evaluation of cabinet part dimension formulas.

Part formulas are catalog data, so they are never handed to ``eval``.
A formula is parsed with :mod:`ast` and only a small arithmetic grammar
is accepted:

- numeric literals
- the bound variables ``width``/``w``, ``height``/``h``, ``depth``/``d``
  and ``quantity``/``qty``
- binary ``+``, ``-``, ``*``, ``/``, unary ``+``/``-`` and parentheses

Anything else (calls, attribute access, comparisons, unknown names)
raises :class:`FormulaError`. Evaluation uses ``Decimal`` throughout.
"""

from __future__ import annotations

import ast
import operator
from collections.abc import Callable, Mapping
from decimal import Decimal, DivisionByZero, InvalidOperation
from functools import lru_cache

from cabinet_pricing.domain.errors import FormulaError
from cabinet_pricing.domain.value_objects import to_decimal

__all__ = ["FORMULA_VARIABLES", "evaluate_formula", "parse_formula"]

MAX_FORMULA_LENGTH = 256

# Alias -> canonical variable name
FORMULA_VARIABLES: dict[str, str] = {
    "width": "width",
    "w": "width",
    "height": "height",
    "h": "height",
    "depth": "depth",
    "d": "depth",
    "quantity": "quantity",
    "qty": "quantity",
}

_BINARY_OPERATORS: dict[type[ast.operator], Callable[[Decimal, Decimal], Decimal]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
}

_UNARY_OPERATORS: dict[type[ast.unaryop], Callable[[Decimal], Decimal]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


def _check_node(node: ast.AST, formula: str) -> None:
    """Reject any node outside the arithmetic grammar."""
    if isinstance(node, ast.Expression):
        _check_node(node.body, formula)
    elif isinstance(node, ast.BinOp):
        if type(node.op) not in _BINARY_OPERATORS:
            raise FormulaError(formula, f"operator {type(node.op).__name__} not allowed")
        _check_node(node.left, formula)
        _check_node(node.right, formula)
    elif isinstance(node, ast.UnaryOp):
        if type(node.op) not in _UNARY_OPERATORS:
            raise FormulaError(formula, f"operator {type(node.op).__name__} not allowed")
        _check_node(node.operand, formula)
    elif isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise FormulaError(formula, f"literal {node.value!r} not allowed")
        if not to_decimal(node.value).is_finite():
            raise FormulaError(formula, "literal is not finite")
    elif isinstance(node, ast.Name):
        if node.id not in FORMULA_VARIABLES:
            raise FormulaError(formula, f"unknown variable {node.id!r}")
    else:
        raise FormulaError(formula, f"{type(node).__name__} not allowed")


@lru_cache(maxsize=512)
def parse_formula(formula: str) -> ast.Expression:
    """Parse and validate a formula, returning its expression tree.

    Results are cached; the returned tree must not be mutated.

    Raises:
        FormulaError: If the formula is empty, too long, malformed or uses
            anything outside the arithmetic grammar.
    """
    source = formula.strip().lower()
    if not source:
        raise FormulaError(formula, "formula is empty")
    if len(source) > MAX_FORMULA_LENGTH:
        raise FormulaError(formula, f"longer than {MAX_FORMULA_LENGTH} characters")
    try:
        tree = ast.parse(source, mode="eval")
    except (SyntaxError, ValueError) as e:
        raise FormulaError(formula, "invalid syntax") from e
    except RecursionError as e:
        raise FormulaError(formula, "nested too deeply") from e
    _check_node(tree, formula)
    return tree


def _evaluate(node: ast.AST, variables: Mapping[str, Decimal], formula: str) -> Decimal:
    if isinstance(node, ast.Expression):
        return _evaluate(node.body, variables, formula)
    if isinstance(node, ast.BinOp):
        left = _evaluate(node.left, variables, formula)
        right = _evaluate(node.right, variables, formula)
        if isinstance(node.op, ast.Div) and right == 0:
            raise FormulaError(formula, "division by zero")
        return _BINARY_OPERATORS[type(node.op)](left, right)
    if isinstance(node, ast.UnaryOp):
        return _UNARY_OPERATORS[type(node.op)](_evaluate(node.operand, variables, formula))
    if isinstance(node, ast.Constant):
        return to_decimal(node.value)
    if isinstance(node, ast.Name):
        name = FORMULA_VARIABLES[node.id]
        if name not in variables:
            raise FormulaError(formula, f"variable {node.id!r} is not bound")
        return variables[name]
    # parse_formula has already rejected every other node type
    raise FormulaError(formula, f"{type(node).__name__} not allowed")


def evaluate_formula(formula: str | None, variables: Mapping[str, Decimal]) -> Decimal:
    """Evaluate a part formula against bound variables.

    Args:
        formula: Formula text such as ``"(width - 36) / 2"``.
        variables: Values keyed by canonical variable name
            (``width``, ``height``, ``depth``, ``quantity``).

    Returns:
        The finite Decimal result.

    Raises:
        FormulaError: If the formula is missing, invalid, or cannot be
            evaluated with the given variables.
    """
    if formula is None:
        raise FormulaError(formula, "formula is missing")
    tree = parse_formula(formula)
    try:
        result = _evaluate(tree, variables, formula)
    except (InvalidOperation, DivisionByZero) as e:
        raise FormulaError(formula, "arithmetic error") from e
    if not result.is_finite():
        raise FormulaError(formula, "result is not finite")
    return result
