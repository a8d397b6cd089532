import math

from .pqt import PQT


DIGITS_PER_TERM = 14.181647462725477
GUARD_BITS = 128
_LOG2_10 = math.log2(10)


def terms_for_digits(digits: int) -> int:
    # one extra term keeps the truncated tail below the last requested digit
    digits = max(1, int(digits))
    return int(math.ceil(digits / DIGITS_PER_TERM)) + 1


def digit_bits(digits: int) -> int:
    return int(math.ceil(max(1, int(digits)) * _LOG2_10))


def required_bits(digits: int, pqt: PQT, guard: int = GUARD_BITS) -> int:
    # call only once the split is done; Q and T must convert to floats exactly
    return max(digit_bits(digits), abs(pqt.q).bit_length(), abs(pqt.t).bit_length()) + int(guard)
