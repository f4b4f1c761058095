"""
Brief: Tests for wg_allowedips.aggregate.

Inputs:
  - None

Outputs:
  - None
"""

from wg_allowedips.aggregate import AddressCollector, join_addresses


def test_finalize_sorts_as_plain_strings():
    """
    Brief: Ordering is lexicographic, not numeric per octet.

    Inputs:
      - three direct literals

    Outputs:
      - None: Asserts "10.0.0.10" lands between "10.0.0.1" and "10.0.0.2"
    """
    c = AddressCollector()
    c.extend(["10.0.0.2", "10.0.0.10", "10.0.0.1"])
    assert join_addresses(c.finalize()) == "10.0.0.1,10.0.0.10,10.0.0.2"


def test_finalize_removes_duplicates_and_is_idempotent():
    c = AddressCollector()
    c.add("192.168.1.1")
    c.extend(["9.9.9.9", "192.168.1.1", "9.9.9.9"])
    assert len(c) == 4
    first = c.finalize()
    assert first == ["192.168.1.1", "9.9.9.9"]

    again = AddressCollector()
    again.extend(first)
    assert again.finalize() == first


def test_join_empty_is_empty_string():
    assert AddressCollector().finalize() == []
    assert join_addresses([]) == ""
