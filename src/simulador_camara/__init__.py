"""Herramientas para simular el tamaño de la Cámara y sistemas proporcionales."""

from loguru import logger

from .allocation import hamilton_three_party, hamilton_two_party, normalize_shares, sainte_lague_allocation
from .apportionment import InvalidConfigurationError, apportion, house_size_by_model
from .cache import ResultCache
from .data_loader import StateRecord, load_states, load_vote_shares, populations_by_state
from .district_plan import build_district_plan
from .elections import compute_historical_ec_outcomes
from .models import DEFAULT_PARTIES, DistrictPlan, DistrictSpec, Party, StateVotes
from .settings import DEFAULT_PR_SETTINGS, PRSettings, clamp_pr_settings
from .simulation import run_hybrid_pr_by_state, summarize_national_pr
from .stv import run_stv

__all__ = [
    "DEFAULT_PARTIES",
    "DEFAULT_PR_SETTINGS",
    "DistrictPlan",
    "DistrictSpec",
    "InvalidConfigurationError",
    "PRSettings",
    "Party",
    "ResultCache",
    "StateRecord",
    "StateVotes",
    "apportion",
    "build_district_plan",
    "clamp_pr_settings",
    "compute_historical_ec_outcomes",
    "hamilton_three_party",
    "hamilton_two_party",
    "house_size_by_model",
    "load_states",
    "load_vote_shares",
    "normalize_shares",
    "populations_by_state",
    "run_hybrid_pr_by_state",
    "run_stv",
    "sainte_lague_allocation",
    "summarize_national_pr",
]

logger.disable(__name__)
