import logging
from typing import Iterable, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class UInt:
    """Unsigned integer stored as a list of bits, most significant bit first.

    Operands of different width are always aligned at the least significant
    end. In-place operations (``iand``, ``iadd``, ...) replace ``bits`` and
    ``length`` of the receiver and never touch the argument; the operator forms
    (``&``, ``+``, ...) work on a clone of the left operand.
    """

    def __init__(self, value: Union[int, 'UInt']):
        if isinstance(value, UInt):
            self.bits: List[bool] = list(value.bits)
            self.length: int = value.length
            return
        if not isinstance(value, int):
            raise TypeError(f"Cannot build UInt from {type(value).__name__}")
        if value < 0:
            raise ValueError(f"UInt is unsigned, got {value}")
        if value == 0:
            self.bits = [False, False]
            self.length = 2
            return

        # floor(log2(value)) + 1 bits for the value and one for the leading zero
        self.length = value.bit_length() + 1
        self.bits = [False] * self.length
        for b in range(self.length - 1, -1, -1):
            self.bits[b] = value % 2 == 1
            value >>= 1

    def clone(self) -> 'UInt':
        return UInt(self)

    def __copy__(self):
        return self.clone()

    def __deepcopy__(self, memo):
        return self.clone()

    def to_int(self) -> int:
        res = 0
        for b in self.bits:
            res = res << 1
            if b:
                res += 1
        return res

    def __int__(self):
        return self.to_int()

    def __str__(self):
        return "0b" + "".join("1" if b else "0" for b in self.bits)

    def __repr__(self):
        return f"UInt({str(self)})"

    def __len__(self):
        return self.length

    def __getitem__(self, item):
        return self.bits[item]

    def __bool__(self):
        return any(self.bits)

    def __eq__(self, other):
        if not isinstance(other, UInt):
            return NotImplemented
        for k in range(max(self.length, other.length)):
            mine = self.bits[self.length - k - 1] if k < self.length else False
            theirs = other.bits[other.length - k - 1] if k < other.length else False
            if mine != theirs:
                return False
        return True

    __hash__ = None

    def pad_with_leading_zeroes(self, count: int):
        if count < 0:
            raise ValueError(f"Cannot pad with {count} bits")
        self.bits = [False] * count + self.bits
        self.length = len(self.bits)

    def _equalize_with(self, other: 'UInt') -> 'UInt':
        """Pads the shorter of self and a clone of other; returns the clone."""
        other = other.clone()
        if self.length > other.length:
            other.pad_with_leading_zeroes(self.length - other.length)
        elif other.length > self.length:
            self.pad_with_leading_zeroes(other.length - self.length)
        return other

    # Bitwise engine

    def iand(self, other: 'UInt') -> 'UInt':
        for k in range(min(self.length, other.length)):
            i = self.length - k - 1
            self.bits[i] = self.bits[i] and other.bits[other.length - k - 1]
        # AND against the implicit zero padding of a shorter argument
        for k in range(other.length, self.length):
            self.bits[self.length - k - 1] = False
        return self

    def ior(self, other: 'UInt') -> 'UInt':
        for k in range(min(self.length, other.length)):
            i = self.length - k - 1
            self.bits[i] = self.bits[i] or other.bits[other.length - k - 1]
        return self

    def ixor(self, other: 'UInt') -> 'UInt':
        for k in range(min(self.length, other.length)):
            i = self.length - k - 1
            self.bits[i] = self.bits[i] ^ other.bits[other.length - k - 1]
        return self

    # Arithmetic engine

    def _ripple_carry(self, other: 'UInt') -> Tuple[List[bool], bool]:
        other = self._equalize_with(other)
        total = [False] * self.length
        carry = False
        for i in range(self.length - 1, -1, -1):
            a, b = self.bits[i], other.bits[i]
            total[i] = a ^ b ^ carry
            carry = (a and b) or (a and carry) or (b and carry)
        return total, carry

    def iadd(self, other: 'UInt') -> 'UInt':
        total, carry = self._ripple_carry(other)
        self.bits = [carry] + total
        self.length = len(self.bits)
        return self

    def add_ignore_final_carry(self, other: 'UInt') -> 'UInt':
        total, _ = self._ripple_carry(other)
        self.bits = total
        self.length = len(self.bits)
        return self

    def _negate(self):
        # two's complement within the current width; the one must not widen it
        self.bits = [not b for b in self.bits]
        self.add_ignore_final_carry(uint_from_bits([False] * (self.length - 1) + [True]))

    def isub(self, other: 'UInt') -> 'UInt':
        negative = self.to_int() < other.to_int()
        negated = self._equalize_with(other)
        negated._negate()
        self.add_ignore_final_carry(negated)
        if negative:
            self.bits = [False]
            self.length = 1
        return self

    def imul(self, other: 'UInt') -> 'UInt':
        multiplier = BoothMultiplier(self, other)
        multiplier.run()
        self.bits = multiplier.product().bits
        self.length = len(self.bits)
        return self

    def _arithmetic_shift_right(self):
        for i in range(self.length - 1, 0, -1):
            self.bits[i] = self.bits[i - 1]
        self.bits[0] = self.bits[1]

    # Operator forms

    def __iand__(self, other):
        if not isinstance(other, UInt):
            return NotImplemented
        return self.iand(other)

    def __ior__(self, other):
        if not isinstance(other, UInt):
            return NotImplemented
        return self.ior(other)

    def __ixor__(self, other):
        if not isinstance(other, UInt):
            return NotImplemented
        return self.ixor(other)

    def __iadd__(self, other):
        if not isinstance(other, UInt):
            return NotImplemented
        return self.iadd(other)

    def __isub__(self, other):
        if not isinstance(other, UInt):
            return NotImplemented
        return self.isub(other)

    def __imul__(self, other):
        if not isinstance(other, UInt):
            return NotImplemented
        return self.imul(other)

    def __and__(self, other):
        if not isinstance(other, UInt):
            return NotImplemented
        return self.clone().iand(other)

    def __or__(self, other):
        if not isinstance(other, UInt):
            return NotImplemented
        return self.clone().ior(other)

    def __xor__(self, other):
        if not isinstance(other, UInt):
            return NotImplemented
        return self.clone().ixor(other)

    def __add__(self, other):
        if not isinstance(other, UInt):
            return NotImplemented
        return self.clone().iadd(other)

    def __sub__(self, other):
        if not isinstance(other, UInt):
            return NotImplemented
        return self.clone().isub(other)

    def __mul__(self, other):
        if not isinstance(other, UInt):
            return NotImplemented
        return self.clone().imul(other)


def add_ignore_final_carry(a: UInt, b: UInt) -> UInt:
    return a.clone().add_ignore_final_carry(b)


class BoothMultiplier:
    """Booth's algorithm over the A, S and P registers.

    Both operands are read as signed values of the common width, so a working
    copy whose top bit is set gets one more leading zero first. ``step`` runs a
    single cycle and returns the action taken, which lets callers trace the
    registers between cycles.
    """

    def __init__(self, multiplicand: UInt, multiplier: UInt):
        m = multiplicand.clone()
        r = multiplier.clone()
        for operand in (m, r):
            if operand.bits[0]:
                operand.pad_with_leading_zeroes(1)
        r = m._equalize_with(r)

        self.cycles = m.length
        self.width = 2 * self.cycles + 1
        m_negated = m.clone()
        m_negated._negate()

        self.a = self._register(m.bits, 0)
        self.s = self._register(m_negated.bits, 0)
        self.p = self._register(r.bits, self.cycles)
        self.cycle = 0

    def _register(self, bits: List[bool], offset: int) -> UInt:
        reg = UInt(0)
        reg.bits = [False] * self.width
        reg.bits[offset:offset + len(bits)] = bits
        reg.length = self.width
        return reg

    @property
    def done(self) -> bool:
        return self.cycle >= self.cycles

    def step(self) -> Optional[str]:
        assert not self.done
        pair = (self.p.bits[-2], self.p.bits[-1])
        action = None
        if pair == (False, True):
            self.p.add_ignore_final_carry(self.a)
            action = "+A"
        elif pair == (True, False):
            self.p.add_ignore_final_carry(self.s)
            action = "+S"
        self.p._arithmetic_shift_right()
        self.cycle += 1
        logger.debug(f"booth cycle {self.cycle}/{self.cycles}: {action or 'nop'}, P = {self.p}")
        return action

    def run(self) -> 'BoothMultiplier':
        while not self.done:
            self.step()
        return self

    def product(self) -> UInt:
        # the last bit of P is Booth's scratch bit
        res = UInt(0)
        res.bits = [False] + self.p.bits[:-1]
        res.length = self.width
        return res


def uint_from_int(v: int) -> UInt:
    return UInt(v)


def uint_from_bits(bits: Iterable) -> UInt:
    """Builds a UInt from bits given most significant first, e.g. ``[0, 1, 1]``."""
    res = UInt(0)
    res.bits = [bool(b) for b in bits]
    if not res.bits:
        raise ValueError("UInt needs at least one bit")
    res.length = len(res.bits)
    return res
