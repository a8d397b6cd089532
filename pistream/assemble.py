from typing import Tuple

from mpmath import mp

from .pqt import PQT


def assemble_pi(pqt: PQT, bits: int):
    if pqt.t == 0:
        raise ValueError("T is zero, no series terms were evaluated")
    with mp.workprec(int(bits)):
        num = mp.mpf(pqt.q) * 426880
        num *= mp.sqrt(10005)
        return num / mp.mpf(pqt.t)


def split_integer_part(value, bits: int) -> Tuple[int, object]:
    with mp.workprec(int(bits)):
        int_part = int(mp.floor(value))
        return int_part, value - int_part
