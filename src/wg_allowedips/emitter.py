"""Output stage: print the list, or splice it into a WireGuard config.

Brief:
  emit_list() prints the joined allow-list. emit_substituted() reads a
  template config and replaces every line whose trimmed text starts with
  ``AllowedIPs`` by ``AllowedIPs = <value>``. The match is a raw prefix
  test, so ``AllowedIPsX = ...`` is replaced as well. Template lines are
  handled as raw bytes; only the prefix test decodes them.
"""

from __future__ import annotations

from typing import IO, Iterable, Iterator, List, Sequence

from .aggregate import join_addresses
from .errors import FileOpenError, ReadError

FIELD_NAME = "AllowedIPs"


def emit_list(addresses: Sequence[str], out: IO[str]) -> None:
    """Print the joined list followed by a newline; print nothing when empty."""
    if addresses:
        out.write(join_addresses(addresses) + "\n")


def _strip_line_ending(raw: bytes) -> bytes:
    line = raw[:-1] if raw.endswith(b"\n") else raw
    if line.endswith(b"\r"):
        line = line[:-1]
    return line


def iter_template_lines(path: str, description: str = "WireGuard config file") -> Iterator[bytes]:
    """
    Yield the raw lines of a template file without their line terminators.

    The file is read in binary mode so lines pass through byte for byte
    whatever their encoding. Lines are split on b'\\n' only; a trailing
    b'\\r' before it is dropped as well.

    Raises:
        FileOpenError: the file cannot be opened.
        ReadError: an I/O error occurs while reading.
    """
    try:
        fh = open(path, "rb")
    except OSError as exc:
        raise FileOpenError(path, description, exc) from exc

    with fh:
        try:
            for raw in fh:
                yield _strip_line_ending(raw)
        except OSError as exc:
            raise ReadError(path, description, exc) from exc


def _is_field_line(line: bytes) -> bool:
    text = line.decode("utf-8", errors="surrogateescape")
    return text.strip().startswith(FIELD_NAME)


def substitute_field(lines: Iterable[bytes], value: str) -> Iterator[bytes]:
    """Brief: Replace AllowedIPs lines, pass every other line through.

    Inputs:
      - lines: Raw template lines without terminators.
      - value: Joined allow-list string.

    Outputs:
      - Iterator of raw output lines without terminators.

    Example:
      >>> list(substitute_field([b"[Peer]", b"  AllowedIPs = 0.0.0.0/0"], "1.2.3.4"))
      [b'[Peer]', b'AllowedIPs = 1.2.3.4']
    """

    replacement = f"{FIELD_NAME} = {value}".encode("utf-8")
    for line in lines:
        if _is_field_line(line):
            yield replacement
        else:
            yield line


def emit_substituted(template_path: str, value: str, out: IO[bytes]) -> None:
    """
    Write the template to a binary stream with every AllowedIPs line replaced.

    The whole output is rendered before anything is written, so a read
    failure halfway through the template leaves ``out`` untouched.
    """
    rendered: List[bytes] = [
        line + b"\n" for line in substitute_field(iter_template_lines(template_path), value)
    ]
    out.write(b"".join(rendered))
