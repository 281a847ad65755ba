"""
Instancia del problema de asignación.

El orden de declaración de los postulantes es el orden en que el motor
los procesa en cada ronda; el de los programas, el orden del reporte.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from plazas.exceptions import InvalidInputError
from plazas.models.agents import Applicant, Program

# Un programa puede venir como Program, como (preferencias, cupo) o como dict
ProgramInput = Union[Program, tuple, list, Mapping]

PROGRAM_KEYS = ("preferences", "capacity")


class MatchingProblem(BaseModel):
    """Postulantes y programas de una corrida."""

    model_config = ConfigDict(frozen=True)

    applicants: tuple[Applicant, ...] = Field(default_factory=tuple)
    programs: tuple[Program, ...] = Field(default_factory=tuple)

    @property
    def applicant_ids(self) -> list[str]:
        return [a.id for a in self.applicants]

    @property
    def program_ids(self) -> list[str]:
        return [p.id for p in self.programs]

    def applicants_by_id(self) -> dict[str, Applicant]:
        return {a.id: a for a in self.applicants}

    def programs_by_id(self) -> dict[str, Program]:
        return {p.id: p for p in self.programs}

    @property
    def total_capacity(self) -> int:
        return sum(p.capacity for p in self.programs)

    @property
    def total_preferences(self) -> int:
        """Cota de postulaciones posibles: suma de los largos de las listas."""
        return sum(len(a.preferences) for a in self.applicants)

    def to_mappings(self) -> dict[str, Any]:
        """Serializa al formato de archivo de entrada (ver plazas.loaders)."""
        return {
            "applicants": {a.id: list(a.preferences) for a in self.applicants},
            "programs": {
                p.id: {"preferences": list(p.preferences), "capacity": p.capacity}
                for p in self.programs
            },
        }

    @classmethod
    def from_mappings(
        cls,
        applicants: Mapping[str, Sequence[str]],
        programs: Mapping[str, ProgramInput],
    ) -> "MatchingProblem":
        """
        Construye el problema desde los mapas planos que recibe `solve`.

        Args:
            applicants: postulante -> lista ordenada de programas
            programs: programa -> Program, (preferencias, cupo) o
                {"preferences": [...], "capacity": n}

        Raises:
            InvalidInputError: si algún valor no tiene la forma esperada
        """
        for name, value in (("applicants", applicants), ("programs", programs)):
            if not isinstance(value, Mapping):
                raise InvalidInputError(
                    f"Entrada con formato inválido: '{name}' debe ser un mapa "
                    f"id -> preferencias, no {type(value).__name__}"
                )

        try:
            applicant_models = tuple(
                Applicant(id=applicant_id, preferences=_as_preferences(prefs))
                for applicant_id, prefs in applicants.items()
            )
            program_models = tuple(
                _build_program(program_id, entry) for program_id, entry in programs.items()
            )
        except ValidationError as e:
            raise InvalidInputError(
                f"Entrada con formato inválido: {e.error_count()} error(es)",
                problems=[format_validation_error(err) for err in e.errors()],
            ) from e
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Entrada con formato inválido: {e}") from e

        return cls(applicants=applicant_models, programs=program_models)


def _build_program(program_id: str, entry: ProgramInput) -> Program:
    if isinstance(entry, Program):
        if entry.id != program_id:
            raise ValueError(
                f"El programa '{entry.id}' está registrado bajo la clave '{program_id}'"
            )
        return entry

    if isinstance(entry, Mapping):
        unknown = sorted(str(key) for key in entry if key not in PROGRAM_KEYS)
        if unknown:
            raise ValueError(
                f"El programa '{program_id}' tiene claves desconocidas: {', '.join(unknown)}"
            )
        return Program(
            id=program_id,
            preferences=_as_preferences(entry.get("preferences", ())),
            capacity=entry.get("capacity"),
        )

    if isinstance(entry, (tuple, list)) and len(entry) == 2:
        prefs, capacity = entry
        return Program(id=program_id, preferences=_as_preferences(prefs), capacity=capacity)

    raise TypeError(
        f"El programa '{program_id}' debe ser Program, (preferencias, cupo) o dict"
    )


def _as_preferences(value: Any) -> tuple:
    # Un string suelto se iteraría caracter por caracter
    if isinstance(value, str):
        raise TypeError(f"Se esperaba una lista de preferencias, no el texto '{value}'")
    return tuple(value)


def format_validation_error(err: dict) -> str:
    location = ".".join(str(part) for part in err.get("loc", ()))
    return f"{location}: {err.get('msg')}" if location else str(err.get("msg"))
