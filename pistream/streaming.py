import logging
import math
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from mpmath import mp

from .handoff import HandoffQueue


logger = logging.getLogger(__name__)

MIN_BLOCK_SIZE = 1_000_000
MAX_BLOCK_SIZE = 25_000_000
BASE_THREADS = 16.0
BASE_ITERATIONS = 100.0


@dataclass(frozen=True)
class DigitBlock:
    text: str
    expected_length: int


@contextmanager
def _unlimited_int_str():
    # blocks run to millions of digits, far past the default int->str cap
    if not hasattr(sys, "set_int_max_str_digits"):
        yield
        return
    saved = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(0)
    try:
        yield
    finally:
        sys.set_int_max_str_digits(saved)


def choose_block_size(digits: int, threads: int) -> int:
    digits = max(1, int(digits))
    threads = max(1, int(threads))
    if digits < MIN_BLOCK_SIZE:
        return digits
    factor = math.sqrt(BASE_THREADS / threads)
    factor = max(0.5, min(factor, 2.0))
    block_size = int(digits / (BASE_ITERATIONS * factor))
    return max(MIN_BLOCK_SIZE, min(block_size, MAX_BLOCK_SIZE))


def iter_digit_blocks(fraction, digits: int, block_size: int, bits: int) -> Iterator[DigitBlock]:
    digits = int(digits)
    block_size = max(1, int(block_size))
    bits = int(bits)
    with mp.workprec(bits):
        pow_block = mp.mpf(10**block_size)
    frac = fraction
    remaining = digits
    while remaining > 0:
        take = block_size if remaining >= block_size else remaining
        with mp.workprec(bits):
            scale = pow_block if take == block_size else mp.mpf(10**take)
            scaled = frac * scale
            value = int(scaled)
            frac = scaled - value
        assert value >= 0, "negative digit block, working precision was too small"
        with _unlimited_int_str():
            text = str(value)
        yield DigitBlock(text, take)
        remaining -= take


def produce_blocks(queue: HandoffQueue, fraction, digits: int, block_size: int, bits: int) -> int:
    count = 0
    try:
        for block in iter_digit_blocks(fraction, digits, block_size, bits):
            queue.push(block)
            count += 1
            logger.debug("queued block %d (%d digits)", count, block.expected_length)
    finally:
        queue.finish()
    return count


def pad_block(block: DigitBlock) -> str:
    text = block.text
    missing = block.expected_length - len(text)
    if missing < 0:
        raise ValueError(f"block holds {len(text)} digits, expected {block.expected_length}")
    if missing:
        return ("0" * missing) + text
    return text


class StreamingWriter:
    def __init__(self, path: str, mode: str = "a"):
        self.path = path
        self.file = open(path, mode, encoding="ascii", newline="")
        self.blocks = 0

    def write(self, block: DigitBlock):
        self.file.write(pad_block(block))
        self.file.flush()
        self.blocks += 1

    def close(self):
        if self.file:
            self.file.write("\n")
            self.file.close()
            self.file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def write_blocks(queue: HandoffQueue, path: str) -> int:
    try:
        writer = StreamingWriter(path)
    except OSError:
        logger.exception("writer thread cannot open %s", path)
        return 0
    with writer:
        for block in queue:
            writer.write(block)
    logger.debug("writer flushed %d blocks to %s", writer.blocks, path)
    return writer.blocks
