"""Allow-list reading and entry classification.

Brief:
  iter_entries() turns an allow-list file into (line_number, text) entries,
  skipping blank lines and '#' comments. classify() decides whether an entry
  is a literal IPv4 address, a hostname, or invalid.
"""

from __future__ import annotations

import enum
import ipaddress
import re
from dataclasses import dataclass
from typing import Iterator

from .errors import FileOpenError, ReadError

MAX_HOSTNAME_LENGTH = 253
MAX_LABEL_LENGTH = 63

_LABEL_RE = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?")


class Classification(enum.Enum):
    LITERAL_ADDRESS = "literal_address"
    DOMAIN_NAME = "domain_name"
    INVALID = "invalid"


@dataclass(frozen=True)
class Entry:
    """A meaningful allow-list line and its 1-based position in the file."""

    line_number: int
    text: str


def iter_entries(path: str, description: str = "Allowed file") -> Iterator[Entry]:
    """
    Yield non-empty, non-comment lines from an allow-list file with line numbers.

    Args:
        path: File path to read (UTF-8).
        description: Label used in error messages.

    Returns:
        Iterator of Entry values. Line numbers count every physical line,
        including blanks and comments.

    Raises:
        FileOpenError: the file cannot be opened.
        ReadError: an I/O or decoding error occurs while reading.

    Example:
        >>> # doctest: +SKIP
        >>> for entry in iter_entries('allowed.txt'):
        ...     print(entry.line_number, entry.text)
    """
    try:
        fh = open(path, "r", encoding="utf-8")
    except OSError as exc:
        raise FileOpenError(path, description, exc) from exc

    with fh:
        try:
            for idx, raw in enumerate(fh, start=1):
                line = raw.strip()
                if not line or line.startswith("#"):
                    continue
                yield Entry(line_number=idx, text=line)
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError(path, description, exc) from exc


def is_valid_ipv4(text: str) -> bool:
    """Brief: True for a dotted-quad IPv4 address without leading zeros.

    Inputs:
      - text: Candidate string (already trimmed).

    Outputs:
      - bool: True when text has exactly four ASCII decimal segments in
        0-255 and no segment longer than one character starts with '0'.

    Example:
      >>> is_valid_ipv4("1.2.3.4"), is_valid_ipv4("01.2.3.4"), is_valid_ipv4("1.2.3")
      (True, False, False)
    """

    parts = text.split(".")
    if len(parts) != 4:
        return False
    for part in parts:
        if not (part.isascii() and part.isdigit()):
            return False
        if len(part) > 1 and part[0] == "0":
            return False
    try:
        ipaddress.IPv4Address(text)
    except ValueError:
        return False
    return True


def is_valid_hostname(text: str) -> bool:
    """Brief: True for an RFC 1123 style hostname with at least one dot.

    Inputs:
      - text: Candidate string (already trimmed).

    Outputs:
      - bool: True when the name is 1-253 characters, contains a '.', and
        every label is 1-63 alphanumeric/hyphen characters that neither
        start nor end with a hyphen.
    """

    if not text or len(text) > MAX_HOSTNAME_LENGTH:
        return False
    if "." not in text:
        return False
    for label in text.split("."):
        if not label or len(label) > MAX_LABEL_LENGTH:
            return False
        if not _LABEL_RE.fullmatch(label):
            return False
    return True


def classify(text: str) -> Classification:
    """Classify a trimmed entry; the literal address check runs first."""
    if is_valid_ipv4(text):
        return Classification.LITERAL_ADDRESS
    if is_valid_hostname(text):
        return Classification.DOMAIN_NAME
    return Classification.INVALID
