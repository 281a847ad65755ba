"""
Carga de problemas desde JSON.

Formato:
    {
      "applicants": {"A1": ["P1", "P2"], ...},
      "programs": {"P1": {"preferences": ["A1"], "capacity": 2}, ...}
    }

El orden de las claves en el archivo define el orden de declaración.
"""

import json
from pathlib import Path
from typing import Any, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from plazas.exceptions import InvalidInputError
from plazas.loaders.mappings import problem_from_mappings
from plazas.models import MatchingProblem
from plazas.models.problem import format_validation_error

logger = structlog.get_logger()


class ProgramEntry(BaseModel):
    """Un programa tal como aparece en el archivo."""

    model_config = ConfigDict(extra="forbid")

    preferences: list[str] = Field(default_factory=list)
    capacity: int = Field(..., strict=True)


class ProblemFile(BaseModel):
    """Esquema del archivo de entrada."""

    model_config = ConfigDict(extra="forbid")

    applicants: dict[str, list[str]] = Field(default_factory=dict)
    programs: dict[str, ProgramEntry] = Field(default_factory=dict)


def parse_problem(data: Any, source: str = "<datos>") -> MatchingProblem:
    """
    Convierte un dict (ya parseado desde JSON) en un MatchingProblem.

    Raises:
        InvalidInputError: si el contenido no respeta el esquema
    """
    try:
        parsed = ProblemFile.model_validate(data)
    except ValidationError as e:
        raise InvalidInputError(
            f"{source}: formato inválido ({e.error_count()} error(es))",
            problems=[f"{source}: {format_validation_error(err)}" for err in e.errors()],
        ) from e

    return problem_from_mappings(
        parsed.applicants,
        {
            program_id: (entry.preferences, entry.capacity)
            for program_id, entry in parsed.programs.items()
        },
    )


def load_problem(path: Union[str, Path]) -> MatchingProblem:
    """
    Lee un problema desde un archivo JSON.

    Args:
        path: Ruta al archivo

    Returns:
        MatchingProblem (sin validar referencias; eso lo hace el motor)

    Raises:
        InvalidInputError: si el archivo no existe, no es JSON o no respeta el esquema
    """
    path = Path(path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise InvalidInputError(f"No se pudo leer {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"{path} no es JSON válido: {e}") from e

    problem = parse_problem(data, source=str(path))

    logger.info(
        "Problema cargado",
        path=str(path),
        applicants=len(problem.applicants),
        programs=len(problem.programs),
    )
    return problem


def save_problem(problem: MatchingProblem, path: Union[str, Path]) -> None:
    """Guarda un problema en el mismo formato que lee load_problem."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(problem.to_mappings(), f, ensure_ascii=False, indent=2)
