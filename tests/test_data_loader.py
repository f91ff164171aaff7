from __future__ import annotations

import pandas as pd
import pytest

from simulador_camara.data_loader import load_states, load_vote_shares, populations_by_state


def test_bundled_population_covers_all_states():
    records = load_states()
    assert len(records) == 51
    assert sum(record.apportioned for record in records) == 50
    california = next(record for record in records if record.code == "CA")
    assert california.name == "California"
    assert california.region_code == "06"
    assert california.population == 39_576_757


def test_populations_exclude_dc():
    populations = populations_by_state(load_states())
    assert "DC" not in populations
    assert len(populations) == 50


def test_missing_population_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_states(tmp_path / "nada.csv")


def test_incomplete_population_file(tmp_path):
    path = tmp_path / "pop.csv"
    pd.DataFrame(
        [{"state": "Alabama", "abbr": "AL", "fips": "01", "population": 5_000_000}]
    ).to_csv(path, index=False)
    with pytest.raises(ValueError):
        load_states(path)


def test_population_file_requires_columns(tmp_path):
    path = tmp_path / "pop.csv"
    pd.DataFrame([{"abbr": "AL", "population": 5}]).to_csv(path, index=False)
    with pytest.raises(ValueError):
        load_states(path)


def test_vote_shares_are_clamped_and_completed(tmp_path):
    path = tmp_path / "votes.csv"
    path.write_text("code,share\nCA,0.95\nTX,0.3\nny,45%\nFL,abc\n", encoding="utf-8")
    records = load_states()

    shares = load_vote_shares(path, records)

    assert shares["CA"] == pytest.approx(0.9)
    assert shares["TX"] == pytest.approx(0.3)
    assert shares["NY"] == pytest.approx(0.45)
    assert shares["FL"] == pytest.approx(0.5)
    assert shares["WY"] == pytest.approx(0.5)
    assert len(shares) == 51


def test_vote_shares_without_records_only_returns_feed(tmp_path):
    path = tmp_path / "votes.csv"
    path.write_text("Code,Share\nOH,0.05\n", encoding="utf-8")
    assert load_vote_shares(path) == {"OH": pytest.approx(0.1)}


def test_vote_shares_missing_columns(tmp_path):
    path = tmp_path / "votes.csv"
    path.write_text("state,value\nOH,0.5\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_vote_shares(path)


def test_vote_shares_from_excel(tmp_path):
    path = tmp_path / "votos.xlsx"
    pd.DataFrame({"Code": ["CA", "WY", "OH"], "Share": [0.97, 0.02, 0.55]}).to_excel(path, index=False)
    records = load_states()

    shares = load_vote_shares(path, records)

    assert shares["CA"] == pytest.approx(0.9)
    assert shares["WY"] == pytest.approx(0.1)
    assert shares["OH"] == pytest.approx(0.55)
    assert shares["TX"] == pytest.approx(0.5)
    assert len(shares) == 51
