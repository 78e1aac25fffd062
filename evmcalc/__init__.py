"""
Expression calculator for Ethereum development.

This package evaluates single-line expressions covering 256-bit arithmetic,
unit conversions, ABI encoding and decoding, hashing and Uniswap V3 math.

Module Structure:
- values/: Value variants and unit tables
- lexer/: Tokenization (TokenType, Token, Lexer)
- parser/: AST nodes and parsing (Parser, all AST node types)
- arith/: Checked and wrapping uint256 operations, integer roots
- abi/: Keccak, checksums, signatures, static ABI codec
- uniswap/: Tick math and liquidity math
- functions/: Built-in function registry
- display/: Rendering values to text
- evaluator/: AST evaluation, context and diagnostics
- calc.py: evaluate(), evaluate_line() and the command-line entry point

Usage:
    from evmcalc import evaluate

    evaluate('1 ether to gwei')            # '1000000000'
    evaluate('selector("transfer(address,uint256)")')  # '0xa9059cbb'
"""

# Re-export main entry points for convenience
from .calc import EvalOutcome, evaluate, evaluate_line, main
from .config import EvaluatorConfig, load_config
from .errors import EvalError

__all__ = [
    'EvalOutcome',
    'evaluate',
    'evaluate_line',
    'main',
    'EvaluatorConfig',
    'load_config',
    'EvalError',
]
