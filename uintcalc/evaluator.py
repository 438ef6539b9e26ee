from typing import Dict, Optional, Union

from bitcore.components import ArithmeticLogicUnit
from bitcore.logic import UInt, uint_from_int
from uintcalc.expr_parser import parse_expression


class EvaluationError(Exception):
    """Base class for evaluation errors."""
    pass


class UndefinedVariableError(EvaluationError):
    """Raised when an identifier has no value bound to it."""
    def __init__(self, var_name: str):
        self.var_name = var_name
        super().__init__(f"Undefined variable: {var_name}")


class UnsupportedOperatorError(EvaluationError):
    """Raised when the tree holds an operator the ALU does not know."""
    def __init__(self, op: str):
        self.op = op
        super().__init__(f"Unsupported operator: {op}")


class InvalidLiteralError(EvaluationError):
    """Raised when a value cannot be represented as an unsigned integer."""
    def __init__(self, value, context: str = ""):
        self.value = value
        self.context = context
        super().__init__(f"Invalid unsigned value: {value!r}" + (f" ({context})" if context else ""))


class Evaluator:
    """Evaluates parser output on an ArithmeticLogicUnit."""

    def __init__(self, variables: Optional[Dict[str, Union[int, UInt]]] = None,
                 alu: Optional[ArithmeticLogicUnit] = None):
        self.variables: Dict[str, UInt] = {}
        for name, value in (variables or {}).items():
            self.bind(name, value)
        self.alu = alu or ArithmeticLogicUnit()

    def bind(self, name: str, value: Union[int, UInt]):
        self.variables[name] = self.to_uint(value, context=name)

    def to_uint(self, value, context: str = "") -> UInt:
        if isinstance(value, UInt):
            return value.clone()
        try:
            return uint_from_int(value)
        except (TypeError, ValueError):
            raise InvalidLiteralError(value, context)

    def evaluate(self, tree: dict) -> UInt:
        expr_type = tree['type']

        if expr_type == 'integer':
            return self.to_uint(tree['value'])
        elif expr_type == 'identifier':
            name = tree['value']
            if name not in self.variables:
                raise UndefinedVariableError(name)
            return self.variables[name].clone()
        elif expr_type == 'bin_expr':
            op = tree['op']
            if op not in self.alu.operations:
                raise UnsupportedOperatorError(op)
            left = self.evaluate(tree['left'])
            right = self.evaluate(tree['right'])
            return self.alu.execute(op, left, right)
        else:
            raise ValueError(f"Unknown expression type: {expr_type}")

    def evaluate_text(self, text: str) -> UInt:
        return self.evaluate(parse_expression(text))
