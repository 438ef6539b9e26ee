import logging
import sys
from typing import Dict, List

from pyparsing import ParseException

from bitcore.logic import uint_from_int
from uintcalc.evaluator import Evaluator, EvaluationError
from uintcalc.expr_parser import parse_expression
from uintcalc.formatter import Formatter
from uintcalc.tracer import BoothTracer, run_tracer

logger = logging.getLogger(__name__)


def parse_bindings(bindings: List[str]) -> Dict[str, int]:
    res = {}
    for binding in bindings:
        name, sep, value = binding.partition('=')
        if not sep or not name:
            raise ValueError(f"Expected NAME=VALUE, got {binding!r}")
        res[name.strip()] = int(value.strip(), 0)
    return res


def evaluate(text: str, style: str, bindings: List[str]):
    tree = parse_expression(text)
    evaluator = Evaluator(parse_bindings(bindings))
    result = evaluator.evaluate(tree)
    formatter = Formatter()
    logger.info(f"{formatter.format_expression(tree)}: {len(evaluator.alu.history)} ALU operations")
    for record in evaluator.alu.history:
        logger.debug(str(record))
    print(formatter.format_value(result, style))


def convert(value: str, style: str):
    print(Formatter().format_value(uint_from_int(int(value, 0)), style))


def booth(multiplicand: str, multiplier: str, interactive: bool):
    tracer = BoothTracer(uint_from_int(int(multiplicand, 0)), uint_from_int(int(multiplier, 0)))
    run_tracer(tracer, interactive)


def main(argv=None):
    import argparse

    arg_parser = argparse.ArgumentParser(description="Bit-level unsigned integer calculator")
    arg_parser.add_argument("-v", "--verbose", action="store_true", help="Log every ALU operation")
    subparsers = arg_parser.add_subparsers(dest="command", required=True)

    eval_parser = subparsers.add_parser("eval", help="Evaluate an expression over & | ^ + - *")
    eval_parser.add_argument("expression", help="Expression, e.g. '(5 | 3) * 0b11'")
    eval_parser.add_argument("--format", default="all", choices=Formatter.styles, help="Output format")
    eval_parser.add_argument("--var", action="append", default=[], metavar="NAME=VALUE",
                             help="Bind a variable used in the expression")

    convert_parser = subparsers.add_parser("convert", help="Show the bits of a number")
    convert_parser.add_argument("value", help="Non-negative integer, decimal, 0b or 0x")
    convert_parser.add_argument("--format", default="all", choices=Formatter.styles, help="Output format")

    booth_parser = subparsers.add_parser("booth", help="Trace Booth's multiplication cycle by cycle")
    booth_parser.add_argument("multiplicand")
    booth_parser.add_argument("multiplier")
    booth_parser.add_argument("--step", action="store_true", help="Wait for Enter before every cycle")

    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "eval":
            evaluate(args.expression, args.format, args.var)
        elif args.command == "convert":
            convert(args.value, args.format)
        elif args.command == "booth":
            booth(args.multiplicand, args.multiplier, args.step)
    except (ParseException, EvaluationError, ValueError, TypeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
