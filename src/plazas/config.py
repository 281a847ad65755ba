"""
Configuración centralizada del sistema.
Carga variables de entorno y define settings globales.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Encontrar la raíz del proyecto (donde está el .env)
# config.py -> plazas/ -> src/ -> project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Configuración principal de la aplicación."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        env_prefix="PLAZAS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Matching
    round_mode: Literal["snapshot", "reactive"] = Field(
        "snapshot",
        description=(
            "Cómo se recorre cada ronda: 'snapshot' usa los no asignados al inicio "
            "de la ronda, 'reactive' re-encola en la misma ronda a los desplazados"
        ),
    )
    record_events: bool = Field(
        False, description="Guardar en el resultado cada postulación y su desenlace"
    )
    verify_stability: bool = Field(
        False, description="Buscar pares bloqueantes al terminar el matching"
    )

    # Reporte
    report_format: Literal["text", "json"] = Field(
        "text", description="Formato del reporte final: 'text' o 'json'"
    )

    # Logging
    log_level: str = Field("INFO", description="Nivel de logging")


@lru_cache
def get_settings() -> Settings:
    """Obtiene la configuración cacheada."""
    return Settings()


# Desenlaces posibles de una postulación
OUTCOME_ADMITTED = "admitted"
OUTCOME_DISPLACED_OTHER = "displaced_other"
OUTCOME_REJECTED_UNRANKED = "rejected_unranked"
OUTCOME_REJECTED_FULL = "rejected_full"
OUTCOME_EXHAUSTED = "exhausted"

PROPOSAL_OUTCOMES = [
    OUTCOME_ADMITTED,
    OUTCOME_DISPLACED_OTHER,
    OUTCOME_REJECTED_UNRANKED,
    OUTCOME_REJECTED_FULL,
    OUTCOME_EXHAUSTED,
]

ROUND_MODES = ["snapshot", "reactive"]
