#!/usr/bin/env python3
"""
evmcalc: an expression calculator for Ethereum development.

Evaluates one line at a time, for example:

    1.2e18
    1 ether to gwei
    unchecked(0 - 1)
    selector("transfer(address,uint256)")
    abi_decode("transfer(address,uint256)", 0xa9059cbb...)

Usage:
    evmcalc '1 ether to gwei' 'sqrt(25)'
    evmcalc -f expressions.txt
    evmcalc --list-functions
    evmcalc                      # interactive prompt

Nothing carries over between lines: there are no variables or history.
"""

import argparse
import sys
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .config import EvaluatorConfig, load_config
from .display import format_value
from .errors import EvalError
from .evaluator import Diagnostic, EvalDiagnostics, EvaluationContext, Evaluator
from .functions import function_names
from .parser import Parser


PROMPT = '> '


@dataclass
class EvalOutcome:
    """Result of evaluating one line: display text on success, the error otherwise."""
    ok: bool
    text: str = ''
    error: Optional[EvalError] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)


def _evaluate(line: str, config: EvaluatorConfig, diagnostics: EvalDiagnostics) -> str:
    tree = Parser.from_source(line, config.max_depth).parse()
    ctx = EvaluationContext(config=config, diagnostics=diagnostics)
    return format_value(Evaluator(ctx).evaluate(tree), full_words=config.full_words)


def evaluate(line: str, config: Optional[EvaluatorConfig] = None) -> str:
    """Evaluate one line and return its display string.

    Raises:
        EvalError: a subclass naming what went wrong.
    """
    return _evaluate(line, config or EvaluatorConfig(), EvalDiagnostics())


def evaluate_line(
    line: str,
    config: Optional[EvaluatorConfig] = None,
    diagnostics: Optional[EvalDiagnostics] = None,
) -> EvalOutcome:
    """Evaluate one line, reporting evaluation errors in the outcome instead of raising."""
    if diagnostics is None:
        diagnostics = EvalDiagnostics()
    try:
        text = _evaluate(line, config or EvaluatorConfig(), diagnostics)
    except EvalError as e:
        return EvalOutcome(ok=False, error=e, diagnostics=diagnostics.diagnostics)
    return EvalOutcome(ok=True, text=text, diagnostics=diagnostics.diagnostics)


def run_lines(lines: Iterable[str], config: EvaluatorConfig, verbose: bool = False,
              out=None, err=None) -> int:
    """Evaluate each non-blank line, printing results; return the number of failures."""
    out = out or sys.stdout
    err = err or sys.stderr
    failures = 0
    for line in lines:
        line = line.strip()
        if not line:
            continue
        diagnostics = EvalDiagnostics(verbose=verbose)
        outcome = evaluate_line(line, config, diagnostics)
        if outcome.ok:
            print(outcome.text, file=out)
        else:
            failures += 1
            print(str(outcome.error), file=err)
        diagnostics.print_summary(err)
    return failures


def _prompt_lines() -> Iterable[str]:
    while True:
        try:
            yield input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            return


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='evmcalc',
        description='Expression calculator for Ethereum development',
    )
    parser.add_argument('expressions', nargs='*', metavar='EXPR',
                        help='Expression to evaluate (one line each)')
    parser.add_argument('-f', '--file', metavar='PATH',
                        help="Read expressions from a file, one per line ('-' for stdin)")
    parser.add_argument('--config', metavar='PATH', help='JSON config file')
    parser.add_argument('--max-depth', type=int, metavar='N',
                        help='Maximum expression nesting depth')
    parser.add_argument('--precision', type=int, metavar='N',
                        help='Fraction digits for get_price_from_tick')
    parser.add_argument('--full-words', action='store_true',
                        help='Show integer results as full 32-byte EVM words')
    parser.add_argument('--list-functions', action='store_true',
                        help='List the built-in functions and exit')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Also print informational diagnostics')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.list_functions:
        for name in function_names():
            print(name)
        return 0

    config = EvaluatorConfig()
    if args.config:
        try:
            config = load_config(args.config)
        except (OSError, ValueError) as e:
            parser.error(f'cannot load config: {e}')
    for name, value in (('--max-depth', args.max_depth), ('--precision', args.precision)):
        if value is not None and value < 0:
            parser.error(f'{name} must be non-negative')
    config = config.with_overrides(
        max_depth=args.max_depth,
        price_precision=args.precision,
        full_words=True if args.full_words else None,
    )

    if args.expressions:
        lines: Iterable[str] = args.expressions
    elif args.file and args.file != '-':
        try:
            with open(args.file, 'r') as f:
                lines = f.read().splitlines()
        except OSError as e:
            parser.error(f'cannot read {args.file}: {e}')
    elif args.file == '-' or not sys.stdin.isatty():
        lines = sys.stdin.read().splitlines()
    else:
        lines = _prompt_lines()

    failures = run_lines(lines, config, verbose=args.verbose)
    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main())
