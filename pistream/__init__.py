__all__ = [
    "PQT",
    "combine",
    "split",
    "split_tasks",
    "split_partitioned",
    "evaluate",
    "terms_for_digits",
    "required_bits",
    "assemble_pi",
    "DigitBlock",
    "HandoffQueue",
    "StreamingWriter",
    "compute_pi_to_file",
    "chudnovsky_pi_decimal_string",
]

from .assemble import assemble_pi
from .binary_split import evaluate, split, split_partitioned, split_tasks
from .handoff import HandoffQueue
from .pipeline import chudnovsky_pi_decimal_string, compute_pi_to_file
from .pqt import PQT, combine
from .precision import required_bits, terms_for_digits
from .streaming import DigitBlock, StreamingWriter
