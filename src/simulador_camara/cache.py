"""Caché en memoria de resultados proporcionales por estado."""
from __future__ import annotations

import json
import threading
from dataclasses import asdict
from typing import Dict, Mapping, Optional, Sequence

from loguru import logger

from .models import DistrictPlan, StatePRResult
from .settings import PRSettings


class ResultCache:
    """Resultados por huella de entrada; sin límite de tamaño, vive lo que viva el objeto."""

    def __init__(self) -> None:
        self._entries: Dict[str, StatePRResult] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key_for(
        state_code: str,
        state_seats: int,
        vote_shares: Mapping[str, float],
        settings: PRSettings,
        district_plan: DistrictPlan,
        party_ids: Sequence[str],
    ) -> str:
        """Serialización canónica de todas las entradas que determinan el resultado."""
        payload = {
            "state": state_code,
            "seats": state_seats,
            "votes": {party_id: vote_shares.get(party_id, 0.0) for party_id in party_ids},
            "settings": asdict(settings),
            "plan": asdict(district_plan),
            "parties": list(party_ids),
        }
        return json.dumps(payload, sort_keys=True, separators=(",", ":"), default=dict)

    def get(self, key: str) -> Optional[StatePRResult]:
        result = self._entries.get(key)
        if result is None:
            self.misses += 1
            return None
        self.hits += 1
        logger.debug("Caché: acierto para {}", result.state_code)
        return result

    def set(self, key: str, result: StatePRResult) -> None:
        with self._lock:
            self._entries[key] = result
        logger.debug("Caché: guardado {} ({} entradas)", result.state_code, len(self._entries))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        self.hits = 0
        self.misses = 0
        logger.debug("Caché vaciada")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries


__all__ = ["ResultCache"]
