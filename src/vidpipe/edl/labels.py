"""Stream label allocation for filter graphs."""

from __future__ import annotations


def ref(label: str) -> str:
    """Bracket a label for use as a filter pad: ``v0`` → ``[v0]``."""
    return f"[{label}]"


class LabelAllocator:
    """Hands out unique stream labels for one compilation.

    ``new("v")`` yields ``v0``, ``v1``, ...; ``named("vout")`` reserves a
    fixed name. A label is never handed out twice.
    """

    def __init__(self) -> None:
        self._counters: dict[str, int] = {}
        self._used: set[str] = set()

    def new(self, prefix: str) -> str:
        n = self._counters.get(prefix, 0)
        while f"{prefix}{n}" in self._used:
            n += 1
        label = f"{prefix}{n}"
        self._counters[prefix] = n + 1
        self._used.add(label)
        return label

    def named(self, name: str) -> str:
        if name in self._used:
            return self.new(name)
        self._used.add(name)
        return name
