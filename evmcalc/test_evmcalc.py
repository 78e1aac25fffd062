#!/usr/bin/env python3
"""
Unit tests for the evmcalc expression evaluator.

Run with: python3 -m pytest evmcalc/test_evmcalc.py
   or: python3 evmcalc/test_evmcalc.py
"""

import sys
import os
# Add parent directory to path so the package imports without installation
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout

from evmcalc import EvaluatorConfig, evaluate, evaluate_line, load_config, main
from evmcalc.calc import run_lines
from evmcalc.errors import EvalError, ExpressionSyntaxError
from evmcalc.lexer import Lexer, TokenType
from evmcalc.parser import (
    BinaryOperation,
    FunctionCall,
    Literal,
    Parser,
    UnitConversion,
    UncheckedBlock,
)
from evmcalc.values import Uint, UINT256_MAX


MAX_UINT = str(UINT256_MAX)


def error_kind(line: str, config: EvaluatorConfig = None) -> str:
    outcome = evaluate_line(line, config)
    if outcome.ok:
        raise AssertionError(f'{line!r} evaluated to {outcome.text!r}, expected an error')
    return outcome.error.kind


class TestLexer(unittest.TestCase):
    """Test tokenization of a single line."""

    def test_tokenize_basic(self):
        tokens = Lexer('1 + 0x10 ** 2').tokenize()
        types = [t.type for t in tokens]
        self.assertEqual(types, [
            TokenType.NUMBER, TokenType.PLUS, TokenType.HEX_NUMBER,
            TokenType.STAR_STAR, TokenType.NUMBER, TokenType.EOF,
        ])

    def test_positions(self):
        tokens = Lexer('sqrt( 25 )').tokenize()
        self.assertEqual([t.position for t in tokens], [0, 4, 6, 9, 10])

    def test_keywords(self):
        tokens = Lexer('unchecked(1) to wei').tokenize()
        self.assertEqual(tokens[0].type, TokenType.UNCHECKED)
        self.assertEqual(tokens[4].type, TokenType.TO)

    def test_number_followed_by_unit(self):
        tokens = Lexer('1ether').tokenize()
        self.assertEqual(tokens[0].type, TokenType.NUMBER)
        self.assertEqual(tokens[1].type, TokenType.IDENTIFIER)
        self.assertEqual(tokens[1].value, 'ether')

    def test_string_escapes(self):
        tokens = Lexer(r'"a\"b\n"').tokenize()
        self.assertEqual(tokens[0].type, TokenType.STRING_LITERAL)
        self.assertEqual(tokens[0].value, 'a"b\n')

    def test_unknown_character(self):
        with self.assertRaises(ExpressionSyntaxError) as cm:
            Lexer('1 $ 2').tokenize()
        self.assertEqual(cm.exception.position, 2)

    def test_unterminated_string(self):
        with self.assertRaises(ExpressionSyntaxError):
            Lexer('"abc').tokenize()

    def test_non_ascii_digits_and_letters(self):
        for source in ('²', '٣', '1１', 'a²', 'é'):
            with self.subTest(source=source):
                with self.assertRaises(ExpressionSyntaxError):
                    Lexer(source).tokenize()


class TestParser(unittest.TestCase):
    """Test precedence and AST shape."""

    def parse(self, source: str):
        return Parser.from_source(source).parse()

    def test_multiplication_binds_tighter(self):
        tree = self.parse('1 + 2 * 3')
        self.assertIsInstance(tree, BinaryOperation)
        self.assertEqual(tree.operator, '+')
        self.assertEqual(tree.right.operator, '*')

    def test_power_is_right_associative(self):
        tree = self.parse('2 ** 3 ** 2')
        self.assertEqual(tree.operator, '**')
        self.assertIsInstance(tree.left, Literal)
        self.assertEqual(tree.right.operator, '**')

    def test_conversion_has_lowest_precedence(self):
        tree = self.parse('1 ether + 1 gwei to gwei')
        self.assertIsInstance(tree, UnitConversion)
        self.assertEqual(tree.to_unit, 'gwei')
        self.assertIsInstance(tree.expression, BinaryOperation)

    def test_unit_suffix(self):
        tree = self.parse('3 days')
        self.assertIsInstance(tree, UnitConversion)
        self.assertEqual(tree.from_unit, 'days')
        self.assertIsNone(tree.to_unit)

    def test_function_call_arguments(self):
        tree = self.parse('root(125, 3)')
        self.assertIsInstance(tree, FunctionCall)
        self.assertEqual(tree.name, 'root')
        self.assertEqual(len(tree.arguments), 2)

    def test_unchecked_block(self):
        tree = self.parse('unchecked(0 - 1)')
        self.assertIsInstance(tree, UncheckedBlock)

    def test_fractional_literal_keeps_exact_value(self):
        tree = self.parse('1.5')
        self.assertEqual(tree.value, Uint(2))
        self.assertEqual(tree.exact.numerator, 3)
        self.assertEqual(tree.exact.denominator, 2)

    def test_syntax_errors(self):
        for source in ('', '1 +', '(1', '1 2', 'sqrt(1,', '1 to'):
            with self.subTest(source=source):
                with self.assertRaises(ExpressionSyntaxError):
                    self.parse(source)

    def test_syntax_error_reports_position(self):
        with self.assertRaises(ExpressionSyntaxError) as cm:
            self.parse('1 + )')
        self.assertEqual(cm.exception.position, 4)
        self.assertIn('position 4', str(cm.exception))


class TestLiterals(unittest.TestCase):
    """Test numeric literal forms."""

    def test_decimal_forms(self):
        self.assertEqual(evaluate('1_000'), '1000')
        self.assertEqual(evaluate('0x10'), '16')
        self.assertEqual(evaluate('0b101'), '5')
        self.assertEqual(evaluate('1.2e18'), '1200000000000000000')

    def test_fraction_rounds_half_up(self):
        self.assertEqual(evaluate('0.5'), '1')
        self.assertEqual(evaluate('1.4'), '1')
        self.assertEqual(evaluate('5e-1'), '1')

    def test_rounding_records_warning(self):
        outcome = evaluate_line('1.5')
        self.assertTrue(outcome.ok)
        self.assertEqual([d.code for d in outcome.diagnostics], ['W001'])

    def test_integral_scientific_has_no_warning(self):
        self.assertEqual(evaluate_line('1.2e18').diagnostics, [])

    def test_invalid_literals(self):
        self.assertEqual(error_kind('0x'), 'InvalidLiteral')
        self.assertEqual(error_kind('0xzz'), 'InvalidLiteral')
        self.assertEqual(error_kind('0b102'), 'InvalidLiteral')
        self.assertEqual(error_kind(str(2**256)), 'InvalidLiteral')
        self.assertEqual(error_kind('1e100'), 'InvalidLiteral')

    def test_overlong_literals(self):
        self.assertEqual(error_kind('1' * 5000), 'InvalidLiteral')
        self.assertEqual(error_kind('1e' + '9' * 5000), 'InvalidLiteral')
        self.assertEqual(error_kind('0x' + 'f' * 5000), 'InvalidLiteral')
        line = 'abi_encode("f(uint256)", "' + '1' * 5000 + '")'
        self.assertEqual(error_kind(line), 'InvalidLiteral')

    def test_largest_literal(self):
        self.assertEqual(evaluate(MAX_UINT), MAX_UINT)

    def test_string_literal(self):
        self.assertEqual(evaluate('"hello"'), 'hello')


class TestArithmetic(unittest.TestCase):
    """Test checked and unchecked 256-bit arithmetic."""

    def test_precedence(self):
        self.assertEqual(evaluate('2 + 3 * 4'), '14')
        self.assertEqual(evaluate('(2 + 3) * 4'), '20')
        self.assertEqual(evaluate('2 ** 3 ** 2'), '512')
        self.assertEqual(evaluate('1 + 1 << 2'), '8')

    def test_division_and_modulo(self):
        self.assertEqual(evaluate('7 / 2'), '3')
        self.assertEqual(evaluate('7 % 3'), '1')

    def test_max_uint(self):
        self.assertEqual(evaluate('max_uint'), MAX_UINT)

    def test_checked_overflow(self):
        self.assertEqual(error_kind('max_uint + 1'), 'ArithmeticOverflow')
        self.assertEqual(error_kind('max_uint * 2'), 'ArithmeticOverflow')
        self.assertEqual(error_kind('2 ** 256'), 'ArithmeticOverflow')
        self.assertEqual(evaluate('2 ** 255'), str(2**255))

    def test_checked_underflow(self):
        self.assertEqual(error_kind('0 - 1'), 'ArithmeticUnderflow')
        self.assertEqual(error_kind('-1'), 'ArithmeticUnderflow')
        self.assertEqual(evaluate('-0'), '0')

    def test_division_by_zero(self):
        self.assertEqual(error_kind('1 / 0'), 'DivisionByZero')
        self.assertEqual(error_kind('1 % 0'), 'DivisionByZero')
        self.assertEqual(error_kind('unchecked(1 / 0)'), 'DivisionByZero')

    def test_unchecked_wraps(self):
        self.assertEqual(evaluate('unchecked(0 - 1)'), MAX_UINT)
        self.assertEqual(evaluate('unchecked(max_uint + 1)'), '0')
        self.assertEqual(evaluate('unchecked(-1)'), MAX_UINT)
        self.assertEqual(evaluate('unchecked(2 ** 256)'), '0')

    def test_unchecked_matches_modular_subtraction(self):
        for a, b in ((3, 5), (0, UINT256_MAX), (10, 10), (2**200, 2**255)):
            with self.subTest(a=a, b=b):
                self.assertEqual(evaluate(f'unchecked({a} - {b})'), str((a - b) % 2**256))

    def test_unchecked_scope_is_the_subtree(self):
        self.assertEqual(error_kind('unchecked(0 - 1) + 1'), 'ArithmeticOverflow')
        self.assertEqual(error_kind('unchecked(1) - 2'), 'ArithmeticUnderflow')

    def test_unchecked_records_info(self):
        outcome = evaluate_line('unchecked(max_uint + 1)')
        self.assertEqual([d.code for d in outcome.diagnostics], ['I001'])

    def test_shifts(self):
        self.assertEqual(evaluate('1 << 255'), str(2**255))
        self.assertEqual(evaluate('1 << 256'), '0')
        self.assertEqual(evaluate('max_uint << 1'), str(UINT256_MAX - 1))
        self.assertEqual(evaluate('256 >> 4'), '16')
        self.assertEqual(evaluate('max_uint >> 300'), '0')

    def test_operands_must_be_numbers(self):
        self.assertEqual(error_kind('"a" + 1'), 'TypeMismatch')

    def test_roots(self):
        self.assertEqual(evaluate('sqrt(25)'), '5')
        self.assertEqual(evaluate('sqrt(26)'), '5')
        self.assertEqual(evaluate('root(125, 3)'), '5')
        self.assertEqual(evaluate('root(124, 3)'), '4')
        self.assertEqual(evaluate('root(max_uint, 256)'), '1')
        self.assertEqual(error_kind('root(8, 0)'), 'DivisionByZero')


class TestUnits(unittest.TestCase):
    """Test unit suffixes and 'to' conversions."""

    def test_suffix_scales_to_base_unit(self):
        self.assertEqual(evaluate('1 ether'), '1000000000000000000')
        self.assertEqual(evaluate('2 days'), '172800')
        self.assertEqual(evaluate('1 week'), '604800')

    def test_fractional_amount_is_exact(self):
        self.assertEqual(evaluate('1.5 ether'), '1500000000000000000')
        self.assertEqual(evaluate_line('1.5 ether').diagnostics, [])

    def test_conversions(self):
        self.assertEqual(evaluate('1 ether to gwei'), '1000000000')
        self.assertEqual(evaluate('1 year to seconds'), '31536000')
        self.assertEqual(evaluate('3600 to hours'), '1')
        self.assertEqual(evaluate('1 ether to gwei to wei'), '1000000000000000000')

    def test_truncated_conversion_warns(self):
        outcome = evaluate_line('1 gwei to ether')
        self.assertEqual(outcome.text, '0')
        self.assertEqual([d.code for d in outcome.diagnostics], ['W002'])

    def test_unsupported_conversions(self):
        self.assertEqual(error_kind('1 ether to seconds'), 'UnitConversionUnsupported')
        self.assertEqual(error_kind('1 to parsecs'), 'UnitConversionUnsupported')

    def test_unit_overflow(self):
        self.assertEqual(error_kind('max_uint ether'), 'ArithmeticOverflow')


class TestFunctions(unittest.TestCase):
    """Test built-in functions outside the ABI and Uniswap families."""

    def test_strings(self):
        self.assertEqual(evaluate('upper("abc")'), 'ABC')
        self.assertEqual(evaluate('lower("AbC")'), 'abc')
        self.assertEqual(evaluate('len("hello")'), '5')
        self.assertEqual(evaluate('len(keccak256("a"))'), '32')
        self.assertEqual(evaluate('count("banana", "an")'), '2')
        self.assertEqual(error_kind('count("banana", "")'), 'TypeMismatch')
        self.assertEqual(error_kind('upper(1)'), 'TypeMismatch')

    def test_base64(self):
        self.assertEqual(evaluate('b64_encode("hello")'), 'aGVsbG8=')
        self.assertEqual(evaluate('b64_decode("aGVsbG8=")'), 'hello')
        self.assertEqual(evaluate('b64_decode("/w==")'), '0xff')
        self.assertEqual(error_kind('b64_decode("!!")'), 'TypeMismatch')

    def test_formatting(self):
        self.assertEqual(evaluate('format_ether(1e18)'), '1.000000000000000000')
        self.assertEqual(evaluate('format_units(123456, 4)'), '12.3456')
        self.assertEqual(evaluate('format_units(5, 0)'), '5')
        self.assertEqual(error_kind('format_units(1, 78)'), 'OutOfRange')

    def test_unknown_names(self):
        self.assertEqual(error_kind('foo'), 'UnknownIdentifier')
        self.assertEqual(error_kind('foo(1)'), 'UnknownFunction')

    def test_arity_and_type_errors(self):
        self.assertEqual(error_kind('sqrt(1, 2)'), 'ArityMismatch')
        self.assertEqual(error_kind('sqrt()'), 'ArityMismatch')
        self.assertEqual(error_kind('sqrt("a")'), 'TypeMismatch')
        self.assertEqual(error_kind('unix(1, 2, 3)'), 'ArityMismatch')

    def test_error_position(self):
        outcome = evaluate_line('1 + foo')
        self.assertEqual(outcome.error.position, 4)


class TestTime(unittest.TestCase):
    """Test now and the unix() overloads against a fixed clock."""

    def setUp(self):
        self.config = EvaluatorConfig(clock=lambda: 1700000000.75)

    def test_now(self):
        self.assertEqual(evaluate('now', self.config), '1700000000')
        self.assertEqual(evaluate('now + 1 day', self.config), '1700086400')

    def test_unix_from_fields(self):
        self.assertEqual(evaluate('unix(2024, 1, 1, 0, 0, 0)'), '1704067200')

    def test_unix_from_iso_string(self):
        self.assertEqual(evaluate('unix("2024-01-01T00:00:00Z")'), '1704067200')
        self.assertEqual(evaluate('unix("2024-01-01T00:00:00")'), '1704067200')

    def test_unix_formats_timestamp(self):
        self.assertEqual(evaluate('unix(0)'), '1970-01-01 00:00:00 UTC')
        self.assertEqual(evaluate('unix(1704067200, "%d/%m/%Y")'), '01/01/2024')

    def test_configured_date_format(self):
        config = EvaluatorConfig(date_format='%Y')
        self.assertEqual(evaluate('unix(1704067200)', config), '2024')

    def test_invalid_dates(self):
        self.assertEqual(error_kind('unix(2024, 2, 30, 0, 0, 0)'), 'InvalidLiteral')
        self.assertEqual(error_kind('unix("yesterday")'), 'InvalidLiteral')
        self.assertEqual(error_kind('unix(max_uint)'), 'OutOfRange')


class TestLimits(unittest.TestCase):
    """Test nesting limits."""

    def test_deep_nesting_is_rejected(self):
        line = '(' * 100 + '1' + ')' * 100
        self.assertEqual(error_kind(line), 'RecursionLimitExceeded')

    def test_configured_depth(self):
        config = EvaluatorConfig(max_depth=3)
        self.assertEqual(error_kind('((((1))))', config), 'RecursionLimitExceeded')
        self.assertEqual(evaluate('(1)', config), '1')

    def test_flat_chains_do_not_count_as_nesting(self):
        self.assertEqual(evaluate(' + '.join(['1'] * 200)), '200')
        self.assertEqual(evaluate(' * '.join(['2'] * 200) + ' / 2 ** 199'), '2')
        config = EvaluatorConfig(max_depth=3)
        self.assertEqual(evaluate('1 - 1 + 1 - 1 + 1 - 1 + 1', config), '1')

    def test_chain_reports_failing_operator(self):
        outcome = evaluate_line('1 + 2 + max_uint + 4')
        self.assertEqual(outcome.error.kind, 'ArithmeticOverflow')
        self.assertEqual(evaluate('unchecked(1 + max_uint + 4)'), '4')


class TestHostileInput(unittest.TestCase):
    """evaluate_line returns an error outcome for malformed input of any shape."""

    def assertFailsWith(self, line, kind):
        outcome = evaluate_line(line)
        self.assertFalse(outcome.ok, line[:40])
        self.assertEqual(outcome.error.kind, kind, line[:40])

    def test_unicode_digits(self):
        self.assertFailsWith('²', 'SyntaxError')
        self.assertFailsWith('٣', 'SyntaxError')
        self.assertFailsWith('1 + ١', 'SyntaxError')

    def test_overlong_numbers(self):
        self.assertFailsWith('1' * 5000, 'InvalidLiteral')
        self.assertFailsWith('1e' + '9' * 5000, 'InvalidLiteral')
        self.assertFailsWith('1e-' + '9' * 5000, 'InvalidLiteral')

    def test_non_ascii_base64(self):
        self.assertFailsWith('b64_decode("é")', 'TypeMismatch')

    def test_signed_or_padded_hex_addresses(self):
        for text in ('-1', '+1', '0x-1', '1 2', '٣', ''):
            with self.subTest(text=text):
                self.assertFailsWith(f'address("{text}")', 'InvalidLiteral')
                self.assertFailsWith(f'checksum("{text}")', 'InvalidLiteral')


class TestHostApi(unittest.TestCase):
    """Test evaluate, evaluate_line, config loading and the CLI."""

    def test_evaluate_raises(self):
        with self.assertRaises(EvalError) as cm:
            evaluate('1 / 0')
        self.assertEqual(str(cm.exception).split(':')[0], 'DivisionByZero')

    def test_evaluate_line_never_raises(self):
        outcome = evaluate_line(')')
        self.assertFalse(outcome.ok)
        self.assertEqual(outcome.error.kind, 'SyntaxError')

    def test_load_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'config.json')
            with open(path, 'w') as f:
                json.dump({'max_depth': 10, 'price_precision': 2}, f)
            config = load_config(path)
        self.assertEqual(config.max_depth, 10)
        self.assertEqual(config.price_precision, 2)
        self.assertEqual(config.date_format, EvaluatorConfig().date_format)

    def test_load_config_rejects_unknown_keys(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'config.json')
            with open(path, 'w') as f:
                json.dump({'colour': 'blue'}, f)
            with self.assertRaises(ValueError):
                load_config(path)

    def test_run_lines(self):
        out, err = io.StringIO(), io.StringIO()
        failures = run_lines(['sqrt(25)', '', 'foo'], EvaluatorConfig(), out=out, err=err)
        self.assertEqual(failures, 1)
        self.assertEqual(out.getvalue(), '5\n')
        self.assertIn('UnknownIdentifier', err.getvalue())

    def test_main_with_expressions(self):
        out = io.StringIO()
        with redirect_stdout(out):
            status = main(['1 ether to gwei', '--precision', '2'])
        self.assertEqual(status, 0)
        self.assertEqual(out.getvalue(), '1000000000\n')

    def test_main_reports_failure(self):
        out = io.StringIO()
        with redirect_stdout(out):
            status = main(['max_uint + 1'])
        self.assertEqual(status, 1)

    def test_full_words(self):
        config = EvaluatorConfig(full_words=True)
        self.assertEqual(evaluate('1', config), '0x' + '0' * 63 + '1')
        self.assertEqual(evaluate('address(255)', config), '0x' + '0' * 62 + 'ff')
        self.assertEqual(evaluate('max_uint', config), '0x' + 'f' * 64)
        self.assertEqual(evaluate('selector("transfer(address,uint256)")', config), '0xa9059cbb')
        self.assertEqual(evaluate('"text"', config), 'text')
        line = 'abi_decode("f(uint256 n)", abi_encode_with_selector("f(uint256)", 7))'
        self.assertEqual(evaluate(line, config), 'n (uint256): 0x' + '0' * 63 + '7')

    def test_full_words_from_config_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'config.json')
            with open(path, 'w') as f:
                json.dump({'full_words': True}, f)
            self.assertTrue(load_config(path).full_words)
            with open(path, 'w') as f:
                json.dump({'full_words': 'yes'}, f)
            with self.assertRaises(ValueError):
                load_config(path)

    def test_main_full_words(self):
        out = io.StringIO()
        with redirect_stdout(out):
            status = main(['--full-words', '16'])
        self.assertEqual(status, 0)
        self.assertEqual(out.getvalue(), '0x' + '0' * 62 + '10\n')

    def test_main_list_functions(self):
        out = io.StringIO()
        with redirect_stdout(out):
            status = main(['--list-functions'])
        self.assertEqual(status, 0)
        names = out.getvalue().split()
        self.assertEqual(names, sorted(names))
        for name in ('sqrt', 'keccak256', 'abi_decode', 'get_tick_from_sqrt_ratio'):
            self.assertIn(name, names)


if __name__ == '__main__':
    unittest.main(verbosity=2)
