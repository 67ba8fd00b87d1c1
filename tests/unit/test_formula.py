"""Unit tests for the part formula evaluator.

These tests verify:
- Arithmetic over the bound dimension variables and their aliases
- Decimal precision is kept (no binary float drift)
- Anything outside the arithmetic grammar is rejected
- Runtime failures (division by zero, unbound variables) raise FormulaError
"""

from decimal import Decimal

import pytest

from cabinet_pricing.domain.errors import FormulaError
from cabinet_pricing.domain.services import evaluate_formula, parse_formula

VARIABLES = {
    "width": Decimal(600),
    "height": Decimal(720),
    "depth": Decimal(560),
    "quantity": Decimal(2),
}


class TestEvaluateFormula:
    """Tests for evaluate_formula."""

    @pytest.mark.parametrize(
        "formula,expected",
        [
            ("width", Decimal(600)),
            ("height", Decimal(720)),
            ("width - 36", Decimal(564)),
            ("(width - 36) / 2", Decimal(282)),
            ("height / 3", Decimal(240)),
            ("-depth + 600", Decimal(40)),
            ("w * h / 1000", Decimal(432)),
            ("qty * 100", Decimal(200)),
            ("18", Decimal(18)),
        ],
    )
    def test_arithmetic(self, formula: str, expected: Decimal) -> None:
        """Supported operators and aliases evaluate as expected."""
        assert evaluate_formula(formula, VARIABLES) == expected

    def test_case_and_whitespace_insensitive(self) -> None:
        assert evaluate_formula("  WIDTH - 36 ", VARIABLES) == Decimal(564)

    def test_float_literals_stay_exact(self) -> None:
        """0.1 is read as Decimal('0.1'), not its binary expansion."""
        result = evaluate_formula("width * 0.1", VARIABLES)
        assert result == Decimal("60.0")

    def test_missing_formula(self) -> None:
        with pytest.raises(FormulaError, match="missing"):
            evaluate_formula(None, VARIABLES)

    def test_division_by_zero(self) -> None:
        with pytest.raises(FormulaError, match="division by zero"):
            evaluate_formula("width / (height - 720)", VARIABLES)

    def test_unbound_variable(self) -> None:
        with pytest.raises(FormulaError, match="not bound"):
            evaluate_formula("depth", {"width": Decimal(600)})


class TestParseFormula:
    """Tests for formula grammar validation."""

    @pytest.mark.parametrize(
        "formula",
        [
            "",
            "   ",
            "width +",
            "__import__('os')",
            "width.real",
            "width ** 2",
            "width % 3",
            "width if height else depth",
            "width > 3",
            "'600'",
            "True",
            "length",
            "[width]",
        ],
    )
    def test_rejects_non_arithmetic(self, formula: str) -> None:
        """Calls, attributes, other operators and unknown names are rejected."""
        with pytest.raises(FormulaError):
            parse_formula(formula)

    def test_rejects_overlong_formula(self) -> None:
        with pytest.raises(FormulaError, match="longer than"):
            parse_formula("width + " * 40 + "1")

    def test_error_names_formula(self) -> None:
        with pytest.raises(FormulaError) as exc_info:
            parse_formula("width ** 2")
        assert exc_info.value.formula == "width ** 2"
        assert "width ** 2" in str(exc_info.value)
