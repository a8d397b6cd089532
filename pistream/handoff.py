import threading
from collections import deque
from typing import Deque, Generic, Optional, TypeVar


T = TypeVar("T")


class HandoffQueue(Generic[T]):
    """Unbounded FIFO between one producer and one consumer.

    ``pop`` blocks until an item arrives or the queue is finished and drained,
    in which case it returns ``None``. ``finish`` closes the queue for good.
    """

    def __init__(self):
        self._items: Deque[T] = deque()
        self._cond = threading.Condition()
        self._finished = False

    def push(self, item: T) -> None:
        with self._cond:
            if self._finished:
                raise RuntimeError("push after finish")
            self._items.append(item)
            self._cond.notify()

    def pop(self) -> Optional[T]:
        with self._cond:
            self._cond.wait_for(lambda: self._items or self._finished)
            if not self._items:
                return None
            return self._items.popleft()

    def finish(self) -> None:
        with self._cond:
            if self._finished:
                raise RuntimeError("finish called twice")
            self._finished = True
            self._cond.notify_all()

    @property
    def finished(self) -> bool:
        with self._cond:
            return self._finished

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def __iter__(self):
        while True:
            item = self.pop()
            if item is None:
                return
            yield item
