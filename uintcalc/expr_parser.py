from pyparsing import *
import string

# Loosest binding first, as in Python
PRECEDENCE = ['|', '^', '&', '+ -', '*']


class Parser:
    def __init__(self):
        self.text = ""

    def make_identifier(self, tokens):
        return {'type': 'identifier', 'value': str(tokens[0])}

    def make_integer(self, tokens):
        literal = str(tokens[0]).lower()
        if literal.startswith('0b') or literal.startswith('0x'):
            value = int(literal, 0)
        else:
            value = int(literal, 10)
        return {'type': 'integer', 'value': value, 'literal': str(tokens[0])}

    def enrich_binary_expr(self, tokens):
        token_list = list(tokens[0])

        # a chain like "a - b - c" arrives flat and folds to the left
        res = token_list[0]
        for i in range(1, len(token_list), 2):
            res = {
                'type': 'bin_expr',
                'left': res,
                'op': str(token_list[i]),
                'right': token_list[i + 1]
            }
        return res

    def parse_expression(self, text) -> dict:
        integer = Regex(r'0[bB][01]+|0[xX][0-9a-fA-F]+|\d+')
        integer.setParseAction(self.make_integer)
        identifier = Word(string.ascii_lowercase + '_', string.ascii_lowercase + string.digits + '_')
        identifier.setParseAction(self.make_identifier)
        atom = integer | identifier
        levels = [(one_of(ops), 2, OpAssoc.LEFT, self.enrich_binary_expr) for ops in reversed(PRECEDENCE)]
        expr = infix_notation(atom, levels)
        self.text = text
        return expr.parse_string(self.text, parse_all=True)[0]


def parse_expression(text: str) -> dict:
    """Convenience function to parse an expression."""
    return Parser().parse_expression(text)
