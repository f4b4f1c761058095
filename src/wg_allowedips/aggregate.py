"""Address accumulation, deduplication and joining."""

from __future__ import annotations

from typing import Iterable, List

SEPARATOR = ","


class AddressCollector:
    """Brief: Accumulates literal addresses from every entry of a run.

    Addresses are kept in arrival order with duplicates until finalize(),
    which deduplicates by exact string and sorts with plain string
    comparison (so "10.0.0.10" sorts before "10.0.0.2").
    """

    def __init__(self) -> None:
        self._addresses: List[str] = []

    def __len__(self) -> int:
        return len(self._addresses)

    def add(self, address: str) -> None:
        self._addresses.append(address)

    def extend(self, addresses: Iterable[str]) -> None:
        self._addresses.extend(addresses)

    def finalize(self) -> List[str]:
        return sorted(set(self._addresses))


def join_addresses(addresses: Iterable[str]) -> str:
    """Join addresses with ',' and no spaces; an empty input joins to ''."""
    return SEPARATOR.join(addresses)
