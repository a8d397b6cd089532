import logging
import operator
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Iterable, List, Tuple, Union

from .pqt import PQT, Multiplier, combine, term


logger = logging.getLogger(__name__)

TASK_THRESHOLD = 1024

_Node = Union[Future, Tuple["_Node", "_Node"]]


def split(a: int, b: int) -> PQT:
    if a >= b:
        raise ValueError(f"empty term range [{a}, {b})")
    if b - a == 1:
        return term(a)
    m = a + (b - a) // 2
    return combine(split(a, m), split(m, b))


def _split_range(ab: Tuple[int, int]) -> PQT:
    return split(ab[0], ab[1])


def _fork(a: int, b: int, executor: Executor, threshold: int) -> _Node:
    if b - a < threshold or b - a == 1:
        return executor.submit(split, a, b)
    m = a + (b - a) // 2
    return _fork(a, m, executor, threshold), _fork(m, b, executor, threshold)


def _join(node: _Node, mul: Multiplier) -> PQT:
    if isinstance(node, Future):
        return node.result()
    left, right = node
    return combine(_join(left, mul), _join(right, mul), mul)


def split_tasks(a: int, b: int, executor: Executor, threshold: int = TASK_THRESHOLD, mul: Multiplier = operator.mul) -> PQT:
    # forked subtrees follow the same midpoints as split(), so the triple is identical
    if a >= b:
        raise ValueError(f"empty term range [{a}, {b})")
    threshold = max(1, int(threshold))
    return _join(_fork(a, b, executor, threshold), mul)


def partition(terms: int, workers: int) -> List[Tuple[int, int]]:
    terms = int(terms)
    workers = max(1, int(workers))
    if workers > terms:
        logger.debug("capping %d workers to %d terms", workers, terms)
        workers = max(1, terms)
    bounds = [(terms * i) // workers for i in range(workers + 1)]
    return [(bounds[i], bounds[i + 1]) for i in range(workers)]


def reduce_ordered(results: Iterable[PQT], mul: Multiplier = operator.mul) -> PQT:
    acc = None
    for r in results:
        if r is None or r.empty:
            continue
        acc = r if acc is None else combine(acc, r, mul)
    if acc is None:
        logger.warning("no partial result carried any terms, falling back to the first term")
        return split(0, 1)
    return acc


def split_partitioned(terms: int, workers: int, executor: Executor, mul: Multiplier = operator.mul) -> PQT:
    ranges = partition(terms, workers)
    logger.debug("ranges: %s", ranges)
    work = [ab for ab in ranges if ab[0] < ab[1]]
    chunks = list(executor.map(_split_range, work))
    return reduce_ordered(chunks, mul)


def make_executor(kind: str, workers: int) -> Executor:
    kind = (kind or "process").lower().strip()
    if kind == "process":
        return ProcessPoolExecutor(max_workers=workers)
    if kind == "thread":
        return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pistream-split")
    raise ValueError("unsupported executor")


def evaluate(
    terms: int,
    workers: int = 1,
    strategy: str = "partition",
    executor_kind: str = "process",
    threshold: int = TASK_THRESHOLD,
    mul: Multiplier = operator.mul,
) -> PQT:
    terms = max(1, int(terms))
    workers = min(max(1, int(workers)), terms)
    strategy = (strategy or "partition").lower().strip()
    if strategy not in {"partition", "tasks"}:
        raise ValueError("unsupported strategy")
    if workers == 1:
        logger.debug("evaluating %d terms sequentially", terms)
        return split(0, terms)
    logger.debug("evaluating %d terms with %d %s workers (%s)", terms, workers, executor_kind, strategy)
    with make_executor(executor_kind, workers) as ex:
        if strategy == "tasks":
            return split_tasks(0, terms, ex, threshold=threshold, mul=mul)
        return split_partitioned(terms, workers, ex, mul=mul)
