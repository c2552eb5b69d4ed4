import argparse
import logging
import sys
from typing import Optional, Sequence

from arithcalc.errors import CalculatorError
from arithcalc.evaluator import Evaluator, construct_evaluator
from arithcalc.tokenizer import tokenize

__version__ = "3.0"

logger = logging.getLogger("arithcalc.repl")


def format_result(value: float) -> str:
    return f"{value:.15g}"


def run_line(evaluator: Evaluator, code: str, show_tokens: bool = False) -> bool:
    """Evaluates one line and prints the outcome, returns False on a fault."""
    try:
        if show_tokens:
            tokens = tokenize(code, allow_variables=evaluator.allow_variables)
            print(f"tokens: {' '.join(str(t) for t in tokens)}")
        result = evaluator.evaluate(code)
    except CalculatorError as e:
        logger.debug("fault %s while evaluating %r", e.kind, code)
        print(f"Error: {e}", file=sys.stderr)
        return False
    print(f"Result: {format_result(result)}")
    return True


def run_interactive(evaluator: Evaluator, prompt: str, exit_token: str, show_tokens: bool = False) -> int:
    while True:
        try:
            code = input(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        if code == exit_token:
            return 0
        run_line(evaluator, code, show_tokens=show_tokens)


def run_batch(
    evaluator: Evaluator, lines: Sequence[str], exit_token: Optional[str] = None, show_tokens: bool = False
) -> int:
    """Evaluates every line in order, stopping early only at ``exit_token``."""
    status = 0
    for line in lines:
        code = line.rstrip("\r\n")
        if exit_token is not None and code == exit_token:
            break
        if not run_line(evaluator, code, show_tokens=show_tokens):
            status = 1
    return status


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="arithcalc", description="Arithmetic expression calculator")
    parser.add_argument(
        "-e", "--eval", dest="expressions", action="append", default=[], metavar="EXPR",
        help="evaluate EXPR and exit, may be given several times",
    )
    parser.add_argument(
        "--no-variables", dest="allow_variables", action="store_false",
        help="arithmetic only, letters are rejected",
    )
    parser.add_argument("--prompt", default=">> ", help="interactive prompt (default: %(default)r)")
    parser.add_argument("--exit-token", default=".", help="line that ends the session (default: %(default)r)")
    parser.add_argument("--show-tokens", action="store_true", help="print the token stream of every line")
    parser.add_argument("-q", "--quiet", action="store_true", help="don't print the banner")
    parser.add_argument(
        "--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (default: %(default)s)",
    )
    parser.add_argument("-v", "--version", action="version", version=f"arithcalc {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    evaluator = construct_evaluator(allow_variables=args.allow_variables)

    if args.expressions:
        return run_batch(evaluator, args.expressions, show_tokens=args.show_tokens)

    if not sys.stdin.isatty():
        return run_batch(evaluator, sys.stdin.readlines(), exit_token=args.exit_token, show_tokens=args.show_tokens)

    if not args.quiet:
        variables_note = " with variables A-Z" if args.allow_variables else ""
        print(f"Calculator v{__version__}{variables_note}. Enter {args.exit_token!r} to exit.")
    return run_interactive(evaluator, args.prompt, args.exit_token, show_tokens=args.show_tokens)


if __name__ == "__main__":
    sys.exit(main())
