"""Tests for the exprcalc expression language.

Covers:
- Tokenizer: all token kinds, positions, lenient and strict scanning
- Parser: precedence, associativity, error handling
- Evaluator: arithmetic, comparison, logic, division, overflow
- Serializer: JSON dump and load of expression trees
"""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from exprcalc.core.errors import (
    DivisionByZeroError,
    EvalError,
    ExprSyntaxError,
    IntegerOverflowError,
    LexError,
)
from exprcalc.core.expression_lang.evaluator import evaluate
from exprcalc.core.expression_lang.parser import parse, parse_expr
from exprcalc.core.expression_lang.serializer import from_json, to_json
from exprcalc.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from exprcalc.core.ir.expressions import (
    INT64_MAX,
    INT64_MIN,
    Additive,
    IntLiteral,
    Logical,
    Multiplicative,
    Parenthesized,
    Relational,
    render_infix,
)

# ============================================================================
# Tokenizer tests
# ============================================================================


class TestTokenizer:
    """Tokenizer produces correct token sequences."""

    def test_integer(self) -> None:
        tokens = tokenize("42")
        assert tokens == [Token(TokenKind.INTEGER, "42", 0)]

    def test_maximal_digit_run(self) -> None:
        tokens = tokenize("12345")
        assert len(tokens) == 1
        assert tokens[0].value == "12345"

    def test_keywords_case_insensitive(self) -> None:
        tokens = tokenize("and OR Xor")
        assert [t.kind for t in tokens] == [TokenKind.LOGICAL] * 3
        assert [t.value for t in tokens] == ["and", "OR", "Xor"]

    def test_relational_operators(self) -> None:
        tokens = tokenize("< <= > >= == != /=")
        assert [t.kind for t in tokens] == [TokenKind.RELATIONAL] * 7
        assert [t.value for t in tokens] == ["<", "<=", ">", ">=", "==", "!=", "/="]

    def test_arithmetic_operators(self) -> None:
        tokens = tokenize("+ - * /")
        assert [t.kind for t in tokens] == [
            TokenKind.ADDITIVE,
            TokenKind.ADDITIVE,
            TokenKind.MULTIPLICATIVE,
            TokenKind.MULTIPLICATIVE,
        ]

    def test_parentheses(self) -> None:
        tokens = tokenize("()")
        assert [t.kind for t in tokens] == [TokenKind.LPAREN, TokenKind.RPAREN]

    def test_two_char_operator_wins_over_slash(self) -> None:
        tokens = tokenize("4/=2")
        assert [t.value for t in tokens] == ["4", "/=", "2"]

    def test_positions(self) -> None:
        tokens = tokenize("12 + 3")
        assert [t.pos for t in tokens] == [0, 3, 5]

    def test_no_whitespace_tokens(self) -> None:
        tokens = tokenize("555/5 + 1 -100")
        assert [t.value for t in tokens] == ["555", "/", "5", "+", "1", "-", "100"]

    def test_unrecognized_characters_skipped(self) -> None:
        tokens = tokenize("1@@+2")
        assert [t.value for t in tokens] == ["1", "+", "2"]

    def test_lone_equals_is_not_a_token(self) -> None:
        tokens = tokenize("5 = 5")
        assert [t.value for t in tokens] == ["5", "5"]

    def test_strict_rejects_stray_character(self) -> None:
        with pytest.raises(LexError, match="Unexpected character") as exc_info:
            tokenize("1@@+2", strict=True)
        assert exc_info.value.position == 1

    def test_strict_rejects_trailing_garbage(self) -> None:
        with pytest.raises(LexError) as exc_info:
            tokenize("1 + 2 ?", strict=True)
        assert exc_info.value.position == 6

    def test_strict_accepts_whitespace(self) -> None:
        tokens = tokenize("  1 +\t2\n", strict=True)
        assert len(tokens) == 3

    def test_empty_input(self) -> None:
        with pytest.raises(LexError, match="No tokens"):
            tokenize("")

    def test_whitespace_only(self) -> None:
        with pytest.raises(LexError):
            tokenize("   ")

    def test_nothing_recognizable(self) -> None:
        with pytest.raises(LexError):
            tokenize("@#$ x")


# ============================================================================
# Parser tests
# ============================================================================


class TestParserStructure:
    """Parser builds trees with the right shape."""

    def test_integer(self) -> None:
        expr = parse_expr("42")
        assert isinstance(expr, IntLiteral)
        assert expr.value == 42

    def test_left_associative(self) -> None:
        expr = parse_expr("10 - 3 - 2")
        assert isinstance(expr, Additive)
        assert isinstance(expr.left, Additive)
        assert expr.left.left == IntLiteral(value=10)
        assert expr.right == IntLiteral(value=2)

    def test_mul_binds_tighter_than_add(self) -> None:
        expr = parse_expr("2 + 3 * 4")
        assert isinstance(expr, Additive)
        assert isinstance(expr.right, Multiplicative)

    def test_parentheses_override_precedence(self) -> None:
        expr = parse_expr("(2 + 3) * 4")
        assert isinstance(expr, Multiplicative)
        assert isinstance(expr.left, Parenthesized)
        assert isinstance(expr.left.inner, Additive)

    def test_relational_below_additive(self) -> None:
        expr = parse_expr("1 + 1 == 2")
        assert isinstance(expr, Relational)
        assert isinstance(expr.left, Additive)

    def test_logical_lowest(self) -> None:
        expr = parse_expr("1 < 2 and 3 > 2")
        assert isinstance(expr, Logical)
        assert isinstance(expr.left, Relational)
        assert isinstance(expr.right, Relational)

    def test_keyword_spelling_kept(self) -> None:
        expr = parse_expr("1 AND 1")
        assert isinstance(expr, Logical)
        assert expr.op == "AND"

    def test_parse_token_list(self) -> None:
        expr = parse(tokenize("7 * 6"))
        assert isinstance(expr, Multiplicative)

    def test_str_shows_grouping(self) -> None:
        assert str(parse_expr("10-3-2")) == "((10 - 3) - 2)"
        assert str(parse_expr("(2+3)*4")) == "(((2 + 3)) * 4)"

    def test_str_of_long_chain(self) -> None:
        text = str(parse_expr("1" + "+1" * 5000))
        assert text.startswith("(" * 5000 + "1 + 1)")
        assert text.endswith(" + 1)")
        assert text.count("+") == 5000

    def test_render_infix_matches_str(self) -> None:
        expr = parse_expr("(1 AND 2) /= 3 * 0")
        assert render_infix(expr) == str(expr)

    def test_int64_max_literal(self) -> None:
        expr = parse_expr("9223372036854775807")
        assert isinstance(expr, IntLiteral)
        assert expr.value == INT64_MAX


class TestParserErrors:
    """Parser produces clear errors for invalid expressions."""

    def test_unterminated_parenthesis(self) -> None:
        with pytest.raises(ExprSyntaxError, match="Unterminated parenthesis"):
            parse_expr("(1+2")

    def test_unterminated_parenthesis_context(self) -> None:
        with pytest.raises(ExprSyntaxError) as exc_info:
            parse_expr("(1+2")
        assert exc_info.value.context is not None
        assert exc_info.value.context.format() == "(1+2\n^"

    def test_wrong_token_instead_of_rparen(self) -> None:
        with pytest.raises(ExprSyntaxError, match="Expected"):
            parse_expr("(1 2)")

    def test_trailing_operator(self) -> None:
        with pytest.raises(ExprSyntaxError, match="Unexpected end of input"):
            parse_expr("1 +")

    def test_doubled_operator(self) -> None:
        with pytest.raises(ExprSyntaxError, match="Unexpected token"):
            parse_expr("1 + * 2")

    def test_unary_minus_not_supported(self) -> None:
        with pytest.raises(ExprSyntaxError):
            parse_expr("-7")

    def test_leading_close_paren(self) -> None:
        with pytest.raises(ExprSyntaxError):
            parse_expr(")")

    def test_tokens_after_expression(self) -> None:
        with pytest.raises(ExprSyntaxError, match="after expression") as exc_info:
            parse_expr("1 2")
        assert exc_info.value.position == 2

    def test_lone_equals_leaves_trailing_token(self) -> None:
        with pytest.raises(ExprSyntaxError, match="after expression"):
            parse_expr("5 = 5")

    def test_literal_out_of_range(self) -> None:
        with pytest.raises(ExprSyntaxError, match="out of range"):
            parse_expr("9223372036854775808")

    def test_very_long_literal(self) -> None:
        with pytest.raises(ExprSyntaxError, match="out of range"):
            parse_expr("9" * 5000)

    def test_leading_zeros(self) -> None:
        assert parse_expr("007") == IntLiteral(value=7)

    def test_empty_expression(self) -> None:
        with pytest.raises(LexError):
            parse_expr("")

    def test_nested_too_deeply(self) -> None:
        source = "(" * 5000 + "1" + ")" * 5000
        with pytest.raises(ExprSyntaxError, match="nested too deeply"):
            parse_expr(source)


# ============================================================================
# Evaluator tests
# ============================================================================


class TestEvalArithmetic:
    """Evaluator handles arithmetic correctly."""

    @pytest.mark.parametrize("value", [0, 7, 42, 1000000, INT64_MAX])
    def test_literal(self, value: int) -> None:
        assert evaluate(parse_expr(str(value))) == value

    def test_left_associativity(self) -> None:
        assert evaluate(parse_expr("10-3-2")) == 5

    def test_precedence(self) -> None:
        assert evaluate(parse_expr("2+3*4")) == 14

    def test_parentheses(self) -> None:
        assert evaluate(parse_expr("(2+3)*4")) == 20

    def test_driver_example(self) -> None:
        assert evaluate(parse_expr("555/5 + 1 -100")) == 12

    def test_truncating_division(self) -> None:
        assert evaluate(parse_expr("7/2")) == 3
        assert evaluate(parse_expr("(0-7)/2")) == -3
        assert evaluate(parse_expr("7/(0-2)")) == -3
        assert evaluate(parse_expr("(0-7)/(0-2)")) == 3

    def test_division_by_zero(self) -> None:
        with pytest.raises(DivisionByZeroError, match="Division by zero"):
            evaluate(parse_expr("1/0"))

    def test_division_by_zero_is_arithmetic_error(self) -> None:
        with pytest.raises(ArithmeticError):
            evaluate(parse_expr("(1+1)/(1-1)"))

    def test_int64_min_reachable(self) -> None:
        assert evaluate(parse_expr("0-9223372036854775807-1")) == INT64_MIN

    def test_overflow(self) -> None:
        with pytest.raises(IntegerOverflowError):
            evaluate(parse_expr("9223372036854775807+1"))

    def test_min_divided_by_minus_one_overflows(self) -> None:
        with pytest.raises(IntegerOverflowError):
            evaluate(parse_expr("(0-9223372036854775807-1)/(0-1)"))


class TestEvalComparison:
    """Evaluator handles relational operators."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("2 < 3", 1),
            ("3 < 3", 0),
            ("3 <= 3", 1),
            ("4 > 5", 0),
            ("5 >= 5", 1),
            ("5 == 5", 1),
            ("5 != 4", 1),
        ],
    )
    def test_operators(self, source: str, expected: int) -> None:
        assert evaluate(parse_expr(source)) == expected

    def test_not_equal_synonyms(self) -> None:
        assert evaluate(parse_expr("5 != 5")) == 0
        assert evaluate(parse_expr("5 /= 5")) == 0

    def test_chained_comparison_is_left_associative(self) -> None:
        # (3 > 2) > 1 -> 1 > 1 -> 0
        assert evaluate(parse_expr("3 > 2 > 1")) == 0


class TestEvalLogic:
    """Evaluator handles logical operators."""

    def test_keyword_case_insensitive(self) -> None:
        assert evaluate(parse_expr("1 AND 1")) == 1
        assert evaluate(parse_expr("1 and 1")) == 1

    def test_and(self) -> None:
        assert evaluate(parse_expr("1 and 0")) == 0
        assert evaluate(parse_expr("2 and 3")) == 1

    def test_or(self) -> None:
        assert evaluate(parse_expr("0 or 2")) == 1
        assert evaluate(parse_expr("0 or 0")) == 0

    def test_xor(self) -> None:
        assert evaluate(parse_expr("1 xor 1")) == 0
        assert evaluate(parse_expr("1 xor 0")) == 1

    def test_negative_is_false_for_and_or(self) -> None:
        assert evaluate(parse_expr("(0-1) and 1")) == 0
        assert evaluate(parse_expr("(0-1) or 0")) == 0

    def test_negative_is_true_for_xor(self) -> None:
        assert evaluate(parse_expr("(0-1) xor 0")) == 1

    def test_no_short_circuit(self) -> None:
        with pytest.raises(DivisionByZeroError):
            evaluate(parse_expr("0 and 1/0"))

    def test_compound(self) -> None:
        assert evaluate(parse_expr("(2 + 3) * 4 > 10 and 7 /= 8")) == 1


class TestEvalTree:
    """Evaluator works on hand-built trees and is repeatable."""

    def test_idempotent(self) -> None:
        expr = parse_expr("555/5 + 1 - 100 > 10 xor 0")
        before = expr.model_dump()
        assert evaluate(expr) == evaluate(expr)
        assert expr.model_dump() == before

    def test_hand_built_tree(self) -> None:
        expr = Multiplicative(
            op="*",
            left=Parenthesized(
                inner=Additive(op="+", left=IntLiteral(value=1), right=IntLiteral(value=2))
            ),
            right=IntLiteral(value=5),
        )
        assert evaluate(expr) == 15

    @pytest.mark.parametrize(
        "expr",
        [
            Logical(op="nand", left=IntLiteral(value=1), right=IntLiteral(value=1)),
            Relational(op="=", left=IntLiteral(value=1), right=IntLiteral(value=1)),
            Additive(op="*", left=IntLiteral(value=1), right=IntLiteral(value=1)),
            Multiplicative(op="%", left=IntLiteral(value=1), right=IntLiteral(value=1)),
        ],
    )
    def test_unimplemented_operator(self, expr) -> None:
        with pytest.raises(EvalError, match="Unimplemented"):
            evaluate(expr)

    def test_nodes_are_frozen(self) -> None:
        lit = IntLiteral(value=1)
        with pytest.raises(ValidationError):
            lit.value = 2  # type: ignore[misc]

    def test_literal_range_enforced(self) -> None:
        with pytest.raises(ValidationError):
            IntLiteral(value=INT64_MAX + 1)

    def test_long_chain_evaluates(self) -> None:
        expr = parse_expr("1" + "+1" * 5000)
        assert evaluate(expr) == 5001

    def test_long_mixed_chain_evaluates(self) -> None:
        expr = parse_expr("2" + "*1+1-1" * 2000)
        assert evaluate(expr) == 2

    def test_deeply_nested_right_operands(self) -> None:
        expr: Additive | IntLiteral = IntLiteral(value=0)
        for _ in range(3000):
            expr = Additive(op="+", left=IntLiteral(value=1), right=expr)
        assert evaluate(expr) == 3000


# ============================================================================
# Serializer tests
# ============================================================================


class TestSerializer:
    """Trees dump to JSON with a kind discriminator and load back."""

    def test_dump_shape(self) -> None:
        data = json.loads(to_json(parse_expr("1 + 2")))
        assert data == {
            "kind": "additive",
            "op": "+",
            "left": {"kind": "int", "value": 1},
            "right": {"kind": "int", "value": 2},
        }

    def test_parenthesized_dump(self) -> None:
        data = json.loads(to_json(parse_expr("(3)")))
        assert data == {"kind": "paren", "inner": {"kind": "int", "value": 3}}

    def test_load_restores_tree(self) -> None:
        expr = parse_expr("(2 + 3) * 4 >= 20 OR 0")
        restored = from_json(to_json(expr, indent=2))
        assert restored == expr
        assert evaluate(restored) == 1

    def test_load_rejects_unknown_kind(self) -> None:
        with pytest.raises(ValidationError):
            from_json('{"kind": "modulo", "op": "%"}')

    def test_dump_moderately_long_chain(self) -> None:
        expr = parse_expr("1" + "+1" * 50)
        assert evaluate(from_json(to_json(expr))) == 51

    def test_dump_too_deep_reports_eval_error(self) -> None:
        expr = parse_expr("1" + "+1" * 5000)
        with pytest.raises(EvalError, match="nested too deeply to serialize"):
            to_json(expr)
