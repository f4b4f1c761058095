"""Allow-list to address list pipeline.

Brief:
  collect_addresses() reads the allow-list, classifies each entry, resolves
  hostnames, and returns the finalized (deduplicated, sorted) address list.

Inputs:
  - Allow-list path, a Resolver, and a Diagnostics sink.

Outputs:
  - list[str] of IPv4 addresses in plain string order.
"""

from __future__ import annotations

from typing import List

from .aggregate import AddressCollector
from .diagnostics import Diagnostics
from .entries import Classification, classify, iter_entries
from .errors import InvalidEntryError, ResolutionError
from .resolver import Resolver


def collect_addresses(
    allowed_path: str, resolver: Resolver, diagnostics: Diagnostics
) -> List[str]:
    """Brief: Build the finalized address list for one allow-list file.

    Inputs:
      - allowed_path: Path of the allow-list file.
      - resolver: Resolver used for hostname entries.
      - diagnostics: Sink receiving per-hostname warnings.

    Outputs:
      - list[str]: Unique addresses sorted as plain strings.

    Raises:
      - FileOpenError / ReadError: the allow-list cannot be read.
      - InvalidEntryError: an entry is neither an address nor a hostname;
        raised at the first such line, discarding everything collected.

    Notes:
      - A hostname whose lookup fails, or yields no addresses, produces a
        warning and contributes nothing. Repeated hostnames are looked up
        again each time.
    """

    collector = AddressCollector()
    for entry in iter_entries(allowed_path):
        kind = classify(entry.text)
        if kind is Classification.LITERAL_ADDRESS:
            collector.add(entry.text)
            continue
        if kind is Classification.INVALID:
            raise InvalidEntryError(entry.line_number, entry.text)

        try:
            resolved = resolver.resolve(entry.text)
        except ResolutionError as exc:
            diagnostics.warning(
                "Line %d: Failed to resolve hostname %s: %s",
                entry.line_number,
                entry.text,
                exc.cause,
            )
            continue
        if not resolved:
            diagnostics.warning(
                "Line %d: No DNS results for hostname: %s", entry.line_number, entry.text
            )
            continue
        diagnostics.debug(
            "Line %d: %s resolved to %s", entry.line_number, entry.text, ", ".join(resolved)
        )
        collector.extend(resolved)

    return collector.finalize()
