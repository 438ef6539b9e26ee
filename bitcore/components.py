import logging
from dataclasses import dataclass
from typing import List

from bitcore.logic import UInt

logger = logging.getLogger(__name__)


class UnsupportedOperationError(ValueError):
    def __init__(self, op: str):
        self.op = op
        super().__init__(f"Unsupported operation: {op}")


@dataclass
class AluRecord:
    op: str
    left: UInt
    right: UInt
    result: UInt

    def __str__(self):
        return f"{self.left.to_int()} {self.op} {self.right.to_int()} = {self.result.to_int()}"


class ArithmeticLogicUnit:
    """Runs one operator over two UInt values.

    reg0 and reg1 hold private clones of the operands, reg2 receives the result,
    so the caller's values are never modified.
    """
    operations = {
        '&': 'and_',
        '|': 'or_',
        '^': 'xor',
        '+': 'add',
        '-': 'sub',
        '*': 'mul',
    }

    def __init__(self, keep_history: bool = True):
        self.reg0: UInt = UInt(0)
        self.reg1: UInt = UInt(0)
        self.reg2: UInt = UInt(0)
        self.keep_history = keep_history
        self.history: List[AluRecord] = []

    def execute(self, op: str, left: UInt, right: UInt) -> UInt:
        if op not in self.operations:
            raise UnsupportedOperationError(op)
        self.reg0 = left.clone()
        self.reg1 = right.clone()
        getattr(self, self.operations[op])()
        logger.debug(f"{self.reg0} {op} {self.reg1} -> {self.reg2}")
        if self.keep_history:
            self.history.append(AluRecord(op, left.clone(), right.clone(), self.reg2.clone()))
        return self.reg2.clone()

    def reset(self):
        self.reg0 = UInt(0)
        self.reg1 = UInt(0)
        self.reg2 = UInt(0)
        self.history = []

    def align(self):
        # bitwise results keep the receiver's width, so widen it first
        if self.reg1.length > self.reg0.length:
            self.reg0.pad_with_leading_zeroes(self.reg1.length - self.reg0.length)

    def and_(self):
        self.align()
        self.reg2 = self.reg0 & self.reg1

    def or_(self):
        self.align()
        self.reg2 = self.reg0 | self.reg1

    def xor(self):
        self.align()
        self.reg2 = self.reg0 ^ self.reg1

    def add(self):
        self.reg2 = self.reg0 + self.reg1

    def sub(self):
        self.reg2 = self.reg0 - self.reg1

    def mul(self):
        self.reg2 = self.reg0 * self.reg1
