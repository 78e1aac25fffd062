"""
Evaluation of expression ASTs to values.

This module walks the tree produced by the parser depth-first, applying
256-bit arithmetic, unit conversions and built-in function calls. The
first error raised anywhere in the walk aborts the evaluation.
"""

from fractions import Fraction
from typing import List, Optional, Tuple

from ..arith import apply_binary, mul, negate
from ..errors import (
    ArithmeticOverflowError,
    ArithmeticUnderflowError,
    EvalError,
    TypeMismatchError,
    UnitConversionUnsupportedError,
    UnknownIdentifierError,
)
from ..functions import Argument, ParamKind, lookup, signed_from_value
from ..parser.ast_nodes import (
    Expression,
    Literal,
    Identifier,
    UnaryOperation,
    BinaryOperation,
    UnitConversion,
    FunctionCall,
    UncheckedBlock,
)
from ..values import UINT256_MAX, Uint, Unit, Value, base_unit, lookup_unit, type_label
from .context import EvaluationContext


class Evaluator:
    """
    Evaluates expression AST nodes.

    Every node is evaluated with a context one level deeper than its
    parent's, except the left spine of an operator chain, which shares
    the depth of the outermost operation. unchecked(...) derives a context
    with wrapping arithmetic that only its own subtree sees.
    """

    def __init__(self, ctx: Optional[EvaluationContext] = None):
        self._ctx = ctx or EvaluationContext()

    def evaluate(self, expr: Expression, ctx: Optional[EvaluationContext] = None) -> Value:
        """Evaluate an expression node to a value."""
        ctx = (ctx or self._ctx).descend(expr.position)

        if isinstance(expr, Literal):
            return self._evaluate_literal(expr, ctx)
        elif isinstance(expr, Identifier):
            return self._evaluate_identifier(expr, ctx)
        elif isinstance(expr, UnaryOperation):
            return self._evaluate_unary(expr, ctx)
        elif isinstance(expr, BinaryOperation):
            return self._evaluate_binary(expr, ctx)
        elif isinstance(expr, UnitConversion):
            return self._evaluate_conversion(expr, ctx)
        elif isinstance(expr, FunctionCall):
            return self._evaluate_call(expr, ctx)
        elif isinstance(expr, UncheckedBlock):
            return self.evaluate(expr.expression, ctx.as_unchecked())

        raise TypeError(f'Unknown expression node: {type(expr).__name__}')

    # =========================================================================
    # LEAVES
    # =========================================================================

    def _evaluate_literal(self, lit: Literal, ctx: EvaluationContext) -> Value:
        if lit.exact is not None and lit.exact.denominator != 1:
            ctx.diagnostics.warn_literal_rounded(lit.raw, lit.value.value, lit.position)
        return lit.value

    def _evaluate_identifier(self, ident: Identifier, ctx: EvaluationContext) -> Value:
        if ident.name == 'max_uint':
            return Uint(UINT256_MAX)
        if ident.name == 'now':
            return Uint(ctx.now())
        raise UnknownIdentifierError(f"unknown identifier '{ident.name}'", ident.position)

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def _operand(self, expr: Expression, operator: str, ctx: EvaluationContext) -> int:
        value = self.evaluate(expr, ctx)
        if not isinstance(value, Uint):
            raise TypeMismatchError(
                f"operator '{operator}' needs numbers, got {type_label(value)}", expr.position
            )
        return value.value

    def _evaluate_unary(self, op: UnaryOperation, ctx: EvaluationContext) -> Value:
        operand = self._operand(op.operand, op.operator, ctx)
        try:
            return Uint(negate(operand))
        except ArithmeticUnderflowError as e:
            if not ctx.unchecked:
                e.position = op.position
                raise
        ctx.diagnostics.info_unchecked(op.position)
        return Uint(negate(operand, unchecked=True))

    def _evaluate_binary(self, op: BinaryOperation, ctx: EvaluationContext) -> Value:
        # Left-nested chains (1 + 2 + 3 ...) fold iteratively at a single depth
        chain = [op]
        while isinstance(chain[-1].left, BinaryOperation):
            chain.append(chain[-1].left)
        first = chain[-1]
        result = self._operand(first.left, first.operator, ctx)
        for node in reversed(chain):
            right = self._operand(node.right, node.operator, ctx)
            result = self._apply_binary(node, result, right, ctx)
        return Uint(result)

    def _apply_binary(self, op: BinaryOperation, left: int, right: int,
                      ctx: EvaluationContext) -> int:
        try:
            return apply_binary(op.operator, left, right)
        except (ArithmeticOverflowError, ArithmeticUnderflowError) as e:
            if not ctx.unchecked:
                e.position = op.position
                raise
        except EvalError as e:
            e.position = op.position
            raise
        ctx.diagnostics.info_unchecked(op.position)
        return apply_binary(op.operator, left, right, unchecked=True)

    # =========================================================================
    # UNIT CONVERSION
    # =========================================================================

    def _unit(self, name: str, position: int) -> Unit:
        unit = lookup_unit(name)
        if unit is None:
            raise UnitConversionUnsupportedError(f"unknown unit '{name}'", position)
        return unit

    def _scaled(self, expr: Expression, factor: int, ctx: EvaluationContext) -> int:
        """Evaluate expr multiplied by factor, scaling fractional literals exactly."""
        if isinstance(expr, Literal) and expr.exact is not None:
            exact = expr.exact * factor
            scaled = int(exact + Fraction(1, 2))
            if exact.denominator != 1:
                ctx.diagnostics.warn_literal_rounded(expr.raw, scaled, expr.position)
            if scaled > UINT256_MAX:
                raise ArithmeticOverflowError(
                    f'{expr.raw} scaled by {factor} overflows uint256', expr.position
                )
            return scaled
        amount = self._operand(expr, 'unit', ctx)
        try:
            return mul(amount, factor)
        except ArithmeticOverflowError as e:
            e.position = expr.position
            raise

    def _source_unit(self, conv: UnitConversion) -> Tuple[Optional[Unit], Expression]:
        """The unit an operand of 'to' is expressed in, or None for the family base."""
        inner = conv.expression
        if isinstance(inner, UnitConversion) and inner.to_unit is not None:
            return self._unit(inner.to_unit, inner.position), inner
        if isinstance(inner, UnitConversion):
            return base_unit(self._unit(inner.from_unit, inner.position).family), inner
        return None, inner

    def _evaluate_conversion(self, conv: UnitConversion, ctx: EvaluationContext) -> Value:
        if conv.to_unit is None:
            unit = self._unit(conv.from_unit, conv.position)
            return Uint(self._scaled(conv.expression, unit.factor, ctx))

        target = self._unit(conv.to_unit, conv.position)
        source, inner = self._source_unit(conv)
        if source is None:
            source = base_unit(target.family)
        if source.family != target.family:
            raise UnitConversionUnsupportedError(
                f'cannot convert {source.name} ({source.family}) to '
                f'{target.name} ({target.family})',
                conv.position,
            )

        amount = self._scaled(inner, source.factor, ctx)
        result, remainder = divmod(amount, target.factor)
        if remainder:
            ctx.diagnostics.warn_conversion_truncated(source.name, target.name, conv.position)
        return Uint(result)

    # =========================================================================
    # FUNCTION CALLS
    # =========================================================================

    def _signed_argument(self, expr: Expression, ctx: EvaluationContext) -> int:
        """Evaluate an argument for a signed parameter; '-x' stays negative."""
        if isinstance(expr, UnaryOperation) and expr.operator == '-':
            return -self._signed_argument(expr.operand, ctx.descend(expr.position))
        value = self.evaluate(expr, ctx)
        try:
            return signed_from_value(value)
        except EvalError as e:
            if e.position is None:
                e.position = expr.position
            raise

    def _evaluate_call(self, call: FunctionCall, ctx: EvaluationContext) -> Value:
        try:
            function = lookup(call.name)
            count = len(call.arguments)
            function.check_arity(count)
        except EvalError as e:
            e.position = call.position
            raise

        args: List[Argument] = []
        for index, arg in enumerate(call.arguments):
            if function.param_kind(index, count) == ParamKind.INT:
                args.append(self._signed_argument(arg, ctx))
            else:
                args.append(self.evaluate(arg, ctx))

        try:
            return function.call(ctx, args)
        except EvalError as e:
            if e.position is None:
                e.position = call.position
            raise
