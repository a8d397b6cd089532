import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

from .assemble import assemble_pi, split_integer_part
from .binary_split import evaluate
from .config import DEFAULT_OUTPUT, RunConfig, format_duration
from .handoff import HandoffQueue
from .precision import required_bits, terms_for_digits
from .streaming import choose_block_size, iter_digit_blocks, pad_block, produce_blocks, write_blocks


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunReport:
    path: str
    digits: int
    threads: int
    workers: int
    terms: int
    precision_bits: int
    block_size: int
    blocks: int
    blocks_written: int
    elapsed: float

    @property
    def complete(self) -> bool:
        return self.blocks_written == self.blocks

    @property
    def elapsed_text(self) -> str:
        return format_duration(self.elapsed)


def _compute_fraction(cfg: RunConfig):
    terms = terms_for_digits(cfg.digits)
    logger.info("calculating %d terms for %d digits", terms, cfg.digits)
    pqt = evaluate(terms, cfg.threads, strategy=cfg.strategy, executor_kind=cfg.executor_kind)
    bits = required_bits(cfg.digits, pqt)
    logger.info("required precision: %d bits", bits)
    pi = assemble_pi(pqt, bits)
    int_part, frac = split_integer_part(pi, bits)
    return terms, bits, int_part, frac


def compute_pi_to_file(
    digits: int,
    threads: int = 1,
    out_path: str = DEFAULT_OUTPUT,
    block_size: Optional[int] = None,
    strategy: str = "partition",
    executor_kind: str = "process",
) -> RunReport:
    """Compute ``digits`` decimals of Pi and stream them into ``out_path``.

    The calling thread extracts digit blocks while a writer thread appends
    them to the file; the two meet only at a :class:`HandoffQueue`.
    """
    cfg = RunConfig(
        digits=digits,
        threads=threads,
        out_path=out_path,
        block_size=block_size,
        strategy=strategy,
        executor_kind=executor_kind,
    ).normalized()
    started = time.perf_counter()
    terms, bits, int_part, frac = _compute_fraction(cfg)
    size = cfg.block_size or choose_block_size(cfg.digits, cfg.threads)
    size = min(size, cfg.digits)
    logger.info("using block size %d for %d threads", size, cfg.threads)

    with open(cfg.out_path, "w", encoding="ascii", newline="") as f:
        f.write(f"{int_part}.")

    queue = HandoffQueue()
    written = []
    writer = threading.Thread(
        target=lambda: written.append(write_blocks(queue, cfg.out_path)),
        name="pistream-writer",
    )
    writer.start()
    try:
        blocks = produce_blocks(queue, frac, cfg.digits, size, bits)
    finally:
        writer.join()
    blocks_written = written[0] if written else 0
    if blocks_written < blocks:
        logger.warning("writer stored %d of %d blocks in %s", blocks_written, blocks, cfg.out_path)

    elapsed = time.perf_counter() - started
    logger.info("wrote %d digits to %s in %s", cfg.digits, cfg.out_path, format_duration(elapsed))
    return RunReport(
        path=cfg.out_path,
        digits=cfg.digits,
        threads=cfg.threads,
        workers=min(cfg.threads, terms),
        terms=terms,
        precision_bits=bits,
        block_size=size,
        blocks=blocks,
        blocks_written=blocks_written,
        elapsed=elapsed,
    )


def chudnovsky_pi_decimal_string(digits_after_point: int, threads: int = 1, executor_kind: str = "process") -> str:
    cfg = RunConfig(digits=digits_after_point, threads=threads, executor_kind=executor_kind).normalized()
    _, bits, int_part, frac = _compute_fraction(cfg)
    tail = "".join(pad_block(b) for b in iter_digit_blocks(frac, cfg.digits, cfg.digits, bits))
    return f"{int_part}.{tail}"
