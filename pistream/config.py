import logging
from dataclasses import dataclass, replace
from typing import Optional


logger = logging.getLogger(__name__)

DEFAULT_THREADS = 8
DEFAULT_DIGITS = 100_000
DEFAULT_OUTPUT = "pi_bs_par_stream_output.txt"

_SUFFIXES = {"k": 10**3, "m": 10**6, "b": 10**9}


def parse_digit_count(spec) -> int:
    s = str(spec).strip()
    if not s:
        raise ValueError("empty digit count")
    multiplier = 1
    suffix = s[-1].lower()
    if suffix in _SUFFIXES:
        multiplier = _SUFFIXES[suffix]
        s = s[:-1].strip()
        if not s:
            raise ValueError(f"missing number before suffix in {spec!r}")
    try:
        base = int(s)
    except ValueError:
        raise ValueError(f"invalid digit count {spec!r}") from None
    return base * multiplier


def format_duration(seconds: float) -> str:
    ms = int(round(float(seconds) * 1000))
    hours, ms = divmod(ms, 3_600_000)
    minutes, ms = divmod(ms, 60_000)
    secs, ms = divmod(ms, 1000)
    return f"{hours} hour {minutes} minute {secs} second {ms} millisecond"


@dataclass(frozen=True)
class RunConfig:
    digits: int = DEFAULT_DIGITS
    threads: int = DEFAULT_THREADS
    out_path: str = DEFAULT_OUTPUT
    block_size: Optional[int] = None
    strategy: str = "partition"
    executor_kind: str = "process"

    def normalized(self) -> "RunConfig":
        digits = int(self.digits)
        threads = int(self.threads)
        if digits < 1:
            logger.warning("digit count %d raised to 1", digits)
            digits = 1
        if threads < 1:
            logger.warning("thread count %d raised to 1", threads)
            threads = 1
        block_size = self.block_size
        if block_size is not None and int(block_size) <= 0:
            block_size = None
        elif block_size is not None:
            block_size = int(block_size)
        return replace(
            self,
            digits=digits,
            threads=threads,
            block_size=block_size,
            strategy=(self.strategy or "partition").lower().strip(),
            executor_kind=(self.executor_kind or "process").lower().strip(),
        )
