from __future__ import annotations

import pytest

from simulador_camara.apportionment import (
    InvalidConfigurationError,
    apportion,
    compute_priority,
    house_size_by_model,
)
from simulador_camara.data_loader import StateRecord, load_states, populations_by_state

APPORTIONMENT_2020 = {
    "AL": 7, "AK": 1, "AZ": 9, "AR": 4, "CA": 52, "CO": 8, "CT": 5, "DE": 1, "FL": 28, "GA": 14,
    "HI": 2, "ID": 2, "IL": 17, "IN": 9, "IA": 4, "KS": 4, "KY": 6, "LA": 6, "ME": 2, "MD": 8,
    "MA": 9, "MI": 13, "MN": 8, "MS": 4, "MO": 8, "MT": 2, "NE": 3, "NV": 4, "NH": 2, "NJ": 12,
    "NM": 3, "NY": 26, "NC": 14, "ND": 1, "OH": 15, "OK": 5, "OR": 6, "PA": 17, "RI": 2, "SC": 7,
    "SD": 1, "TN": 9, "TX": 38, "UT": 4, "VT": 1, "VA": 11, "WA": 10, "WV": 2, "WI": 8, "WY": 1,
}


@pytest.fixture(scope="module")
def records():
    return load_states()


@pytest.fixture(scope="module")
def populations(records):
    return populations_by_state(records)


def test_allocates_exact_total(populations):
    seats = apportion(populations, 500)
    assert sum(seats.values()) == 500


def test_every_state_gets_at_least_one_seat(populations):
    seats = apportion(populations, 435)
    assert len(seats) == 50
    assert all(value >= 1 for value in seats.values())


def test_matches_known_2020_apportionment(populations):
    assert apportion(populations, 435) == APPORTIONMENT_2020


def test_total_equal_to_state_count_gives_one_seat_each():
    seats = apportion({"AA": 10, "BB": 1_000_000, "CC": 5}, 3)
    assert seats == {"AA": 1, "BB": 1, "CC": 1}


def test_rejects_total_below_state_count():
    with pytest.raises(InvalidConfigurationError):
        apportion({"AA": 10, "BB": 20, "CC": 30}, 2)


def test_invalid_configuration_is_a_value_error():
    assert issubclass(InvalidConfigurationError, ValueError)


def test_equal_priority_favors_later_code():
    assert apportion({"AA": 100, "BB": 100}, 3) == {"AA": 1, "BB": 2}


def test_priority_formula():
    assert compute_priority(1000, 1) == pytest.approx(1000 / 2 ** 0.5)
    assert compute_priority(1000, 2) == pytest.approx(1000 / 6 ** 0.5)


def test_larger_population_never_gets_fewer_seats(populations):
    seats = apportion(populations, 600)
    ordered = sorted(populations, key=populations.get)
    values = [seats[code] for code in ordered]
    assert values == sorted(values)


def test_house_size_models(records):
    assert house_size_by_model("manual", records, 300) == 435
    assert house_size_by_model("manual", records, 5000) == 1200
    assert house_size_by_model("manual", records, 600) == 600
    assert house_size_by_model("cube_root", records) == 692
    assert house_size_by_model("proportional_500k", records) == 662
    assert house_size_by_model("wyoming_rule", records) == 573


def test_house_size_rounds_halves_up():
    records = [StateRecord(name="Estado", code="AA", region_code="01", population=436_250_000)]
    assert house_size_by_model("proportional_500k", records) == 873


def test_unknown_house_model(records):
    with pytest.raises(ValueError):
        house_size_by_model("doubling", records)
