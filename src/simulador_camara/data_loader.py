"""Lectura de la población de referencia y de las cuotas de voto por estado."""
from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
import re
from typing import Dict, Iterable, List

import pandas as pd

NON_APPORTIONED_CODES = ("DC",)
DEFAULT_TWO_PARTY_SHARE = 0.5
MIN_FEED_SHARE = 0.1
MAX_FEED_SHARE = 0.9

_REQUIRED_POPULATION_COLUMNS = ("state", "abbr", "fips", "population")
_REQUIRED_FEED_COLUMNS = ("code", "share")


@dataclass(frozen=True)
class StateRecord:
    """Dato de referencia de un estado (o del distrito federal, solo para mostrar)."""

    name: str
    code: str
    region_code: str
    population: int

    @property
    def apportioned(self) -> bool:
        return self.code not in NON_APPORTIONED_CODES


def load_states(path: Path | str | None = None) -> List[StateRecord]:
    """Carga la población de referencia.

    Sin ``path`` se usa el censo 2020 incluido en el paquete. El archivo debe
    cubrir los 50 estados; a lo sumo puede traer una jurisdicción no
    prorrateada (DC).
    """

    if path is None:
        source = resources.files("simulador_camara").joinpath("data/populations_2020.csv")
        with resources.as_file(source) as csv_path:
            df = pd.read_csv(csv_path, dtype={"fips": str})
    else:
        csv_path = Path(path)
        if not csv_path.exists():
            raise FileNotFoundError(f"No se encontró el archivo {csv_path}")
        df = pd.read_csv(csv_path, dtype={"fips": str})

    missing = [column for column in _REQUIRED_POPULATION_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"Faltan columnas en la población de referencia: {', '.join(missing)}")

    records: List[StateRecord] = []
    for _, row in df.iterrows():
        code = _parse_code(row.get("abbr"))
        if not code:
            continue
        records.append(
            StateRecord(
                name=_parse_str(row.get("state")) or code,
                code=code,
                region_code=_parse_str(row.get("fips")) or "",
                population=_parse_int(row.get("population")),
            )
        )

    apportioned = [record for record in records if record.apportioned]
    if len(apportioned) != 50:
        raise ValueError(
            f"La población de referencia debe cubrir los 50 estados (se encontraron {len(apportioned)})"
        )
    if len(records) - len(apportioned) > 1:
        raise ValueError("Solo se admite una jurisdicción no prorrateada")
    return records


def populations_by_state(records: Iterable[StateRecord]) -> Dict[str, int]:
    """Población por código, excluyendo las jurisdicciones no prorrateadas."""

    return {record.code: record.population for record in records if record.apportioned}


def load_vote_shares(
    path: Path | str, records: Iterable[StateRecord] | None = None
) -> Dict[str, float]:
    """Lee un archivo CSV o Excel con columnas ``code`` y ``share``.

    Las cuotas se limitan a [0.1, 0.9]. Con ``records`` se completa cada
    estado ausente (o con valor inválido) con el reparto parejo 0.5.
    """

    feed_path = Path(path)
    if not feed_path.exists():
        raise FileNotFoundError(f"No se encontró el archivo {feed_path}")
    if feed_path.suffix.lower() in (".xlsx", ".xls"):
        df = pd.read_excel(feed_path)
    else:
        df = pd.read_csv(feed_path)

    df.columns = [str(column).strip().lower() for column in df.columns]
    missing = [column for column in _REQUIRED_FEED_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"Faltan columnas en el archivo de votos: {', '.join(missing)}")

    shares: Dict[str, float] = {}
    for _, row in df.iterrows():
        code = _parse_code(row.get("code"))
        share = _parse_share(row.get("share"))
        if not code or share is None:
            continue
        shares[code] = clamp_feed_share(share)

    if records is None:
        return shares
    return {record.code: shares.get(record.code, DEFAULT_TWO_PARTY_SHARE) for record in records}


def clamp_feed_share(value: float) -> float:
    return min(MAX_FEED_SHARE, max(MIN_FEED_SHARE, float(value)))


def _parse_code(value) -> str | None:
    text = _parse_str(value)
    if text is None:
        return None
    text = text.upper()
    return text if _CODE_PATTERN.match(text) else None


def _parse_int(value) -> int:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        digits = re.sub(r"[^0-9]", "", value)
        return int(digits) if digits else 0
    return int(value)


def _parse_share(value) -> float | None:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        clean = value.strip().replace(",", ".")
        scale = 1.0
        if clean.endswith("%"):
            clean = clean[:-1].strip()
            scale = 100.0
        try:
            return float(clean) / scale if clean else None
        except ValueError:
            # Celda ilegible: el estado cae al reparto parejo.
            return None
    return None


def _parse_str(value) -> str | None:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    text = str(value).strip()
    return text or None


_CODE_PATTERN = re.compile(r"^[A-Z]{2}$")


__all__ = [
    "StateRecord",
    "load_states",
    "load_vote_shares",
    "populations_by_state",
    "clamp_feed_share",
]
