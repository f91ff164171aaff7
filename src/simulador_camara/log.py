"""Configuración de logs."""
from __future__ import annotations

import sys

from loguru import logger


def setup_logging(level: str = "WARNING"):
    """Deja un único destino en stderr con el nivel indicado."""
    logger.remove()
    logger.enable("simulador_camara")
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>",
        level=level.upper(),
        colorize=True,
    )
    return logger


__all__ = ["setup_logging"]
