from __future__ import annotations

import pytest

from simulador_camara.allocation import (
    hamilton_three_party,
    hamilton_two_party,
    normalize_shares,
    sainte_lague_allocation,
)


def test_hamilton_two_party_largest_remainder():
    allocation = hamilton_two_party(7, 0.6)
    assert (allocation.party_a, allocation.party_b) == (4, 3)


@pytest.mark.parametrize("total", [0, 1, 2, 5, 13, 52])
@pytest.mark.parametrize("share", [0.0, 0.05, 1 / 3, 0.5, 0.61, 0.999, 1.0])
def test_hamilton_two_party_preserves_total(total, share):
    assert hamilton_two_party(total, share).total == total


def test_hamilton_two_party_clamps_share():
    assert hamilton_two_party(4, 1.7).party_a == 4
    assert hamilton_two_party(4, -0.3).party_b == 4


def test_hamilton_three_party_ties_follow_party_order():
    assert hamilton_three_party(6, 0.5, 0.25) == (3, 2, 1)


def test_hamilton_three_party_renormalizes_excess():
    assert hamilton_three_party(10, 0.6, 0.7) == (5, 5, 0)


def test_hamilton_three_party_clamps_inputs():
    assert hamilton_three_party(4, -0.2, 1.5) == (0, 4, 0)


def test_sainte_lague_reference_case():
    seats = sainte_lague_allocation({"a": 0.5, "b": 0.3, "c": 0.2}, 10, ["a", "b", "c"])
    assert seats == {"a": 5, "b": 3, "c": 2}


def test_sainte_lague_ties_go_to_lower_party_id():
    assert sainte_lague_allocation({"b": 0.5, "a": 0.5}, 1, ["b", "a"]) == {"b": 0, "a": 1}
    assert sainte_lague_allocation({"a": 0.5, "b": 0.5}, 3, ["a", "b"]) == {"a": 2, "b": 1}


def test_sainte_lague_zero_shares_split_evenly():
    seats = sainte_lague_allocation({}, 4, ["a", "b"])
    assert seats == {"a": 2, "b": 2}


def test_normalize_shares_even_split_when_nothing_positive():
    assert normalize_shares({"a": -1, "b": 0}, ["a", "b"]) == {"a": 0.5, "b": 0.5}


def test_normalize_shares_sums_to_one():
    shares = normalize_shares({"a": 2, "b": 1, "c": 1, "z": 10}, ["a", "b", "c"])
    assert shares == pytest.approx({"a": 0.5, "b": 0.25, "c": 0.25})
