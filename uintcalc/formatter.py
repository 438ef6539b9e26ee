import json

from bitcore.logic import UInt


class Formatter:
    styles = ('bin', 'dec', 'bits', 'all')

    def format_value(self, value: UInt, style: str = 'all') -> str:
        """Format a UInt as binary, decimal, a JSON bit list or all of them"""
        if style == 'bin':
            return str(value)
        elif style == 'dec':
            return str(value.to_int())
        elif style == 'bits':
            return json.dumps([int(b) for b in value.bits])
        elif style == 'all':
            return f"{value.to_int()} = {value} (width {value.length})"
        else:
            raise ValueError(f"Unknown format style: {style}")

    def format_expression(self, expr: dict) -> str:
        """Format a parsed expression, parenthesizing every operation"""
        expr_type = expr['type']

        if expr_type == 'identifier':
            return expr['value']
        elif expr_type == 'integer':
            return expr.get('literal', str(expr['value']))
        elif expr_type == 'bin_expr':
            left = self.format_expression(expr['left'])
            op = expr['op']
            right = self.format_expression(expr['right'])
            return f"({left} {op} {right})"
        else:
            raise ValueError(f"Unknown expression type: {expr_type}")
