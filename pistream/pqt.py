import operator
from dataclasses import dataclass
from typing import Callable


A = 13591409
B = 545140134
C = 640320
C3_OVER_24 = (C**3) // 24

Multiplier = Callable[[int, int], int]


@dataclass(frozen=True)
class PQT:
    p: int
    q: int
    t: int

    @property
    def empty(self) -> bool:
        return self.p == 0


def term(k: int) -> PQT:
    if k == 0:
        return PQT(1, 1, A)
    p = (6 * k - 5) * (2 * k - 1) * (6 * k - 1)
    q = k * k * k * C3_OVER_24
    t = p * (A + B * k)
    if k & 1:
        t = -t
    return PQT(p, q, t)


def combine(left: PQT, right: PQT, mul: Multiplier = operator.mul) -> PQT:
    # left must hold the earlier terms, the T formula is not symmetric
    return PQT(
        mul(left.p, right.p),
        mul(left.q, right.q),
        mul(left.t, right.q) + mul(left.p, right.t),
    )


def make_multiplier(accelerated: Multiplier, min_bits: int) -> Multiplier:
    min_bits = int(min_bits)

    def mul(x: int, y: int) -> int:
        if x.bit_length() >= min_bits and y.bit_length() >= min_bits:
            return accelerated(x, y)
        return x * y

    return mul
