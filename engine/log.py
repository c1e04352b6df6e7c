from collections import deque
from typing import Iterator, List


class AnimationLog:
    """
    Bounded ring of human-readable log lines; the oldest line drops out
    first once `maxlen` is reached.
    """

    def __init__(self, maxlen: int = 5):
        if maxlen < 1:
            raise ValueError("log must keep at least one entry")
        self._lines = deque(maxlen=maxlen)

    @property
    def maxlen(self) -> int:
        return self._lines.maxlen

    def append(self, line: str) -> None:
        self._lines.append(line)

    def clear(self) -> None:
        self._lines.clear()

    def entries(self) -> List[str]:
        return list(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._lines))

    def __len__(self) -> int:
        return len(self._lines)
