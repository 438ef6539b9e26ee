from dataclasses import dataclass
from typing import List, Optional

from bitcore.logic import BoothMultiplier, UInt


@dataclass
class TraceRow:
    cycle: int
    pair: str
    action: Optional[str]
    p: str

    def format(self, width: int):
        return f"{self.cycle:>5}  {self.pair:>4}  {self.action or '':>6}  {self.p:>{width}}"


class BoothTracer:
    """Steps a BoothMultiplier and keeps the P register after every cycle."""

    def __init__(self, multiplicand: UInt, multiplier: UInt):
        self.multiplicand = multiplicand
        self.multiplier = multiplier
        self.booth = BoothMultiplier(multiplicand, multiplier)
        self.rows: List[TraceRow] = []

    @property
    def done(self) -> bool:
        return self.booth.done

    def forward(self) -> TraceRow:
        p = self.booth.p
        pair = ("1" if p[-2] else "0") + ("1" if p[-1] else "0")
        action = self.booth.step()
        row = TraceRow(self.booth.cycle, pair, action, str(self.booth.p))
        self.rows.append(row)
        return row

    def run(self) -> UInt:
        while not self.done:
            self.forward()
        return self.product()

    def product(self) -> UInt:
        return self.booth.product()

    def print_header(self):
        width = self.booth.width + 2
        print(f"{self.multiplicand.to_int()} * {self.multiplier.to_int()}: "
              f"{self.booth.cycles} cycles, registers of {self.booth.width} bits")
        print(f"A = {self.booth.a}")
        print(f"S = {self.booth.s}")
        print(f"P = {self.booth.p}")
        print("-" * (21 + width))
        print(f"{'cycle':>5}  {'bits':>4}  {'action':>6}  {'P':>{width}}")

    def print_row(self, row: TraceRow):
        print(row.format(self.booth.width + 2))

    def print_trace(self):
        self.print_header()
        for row in self.rows:
            self.print_row(row)
        if self.done:
            self.print_product()

    def print_product(self):
        product = self.product()
        print("-" * (21 + self.booth.width + 2))
        print(f"product = {product} = {product.to_int()}")


def run_tracer(tracer: BoothTracer, interactive: bool = False):
    tracer.print_header()
    while not tracer.done:
        if interactive:
            input()
        tracer.print_row(tracer.forward())
    tracer.print_product()
