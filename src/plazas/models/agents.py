"""
Agentes del matching: postulantes y programas.

Ambos lados rankean un subconjunto del otro lado en orden estricto
(el primero es el más preferido). Una vez cargados no se modifican.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Applicant(BaseModel):
    """Postulante con su lista de programas en orden de preferencia."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Identificador único del postulante")
    preferences: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Programas rankeados, el más preferido primero",
    )

    def rank_of(self, program_id: str) -> Optional[int]:
        """Posición del programa en la lista (0 = el más preferido), None si no lo rankea."""
        try:
            return self.preferences.index(program_id)
        except ValueError:
            return None


class Program(BaseModel):
    """
    Programa con cupo fijo.

    El cupo se valida en el motor (debe ser >= 1) para reportar todos
    los problemas de la entrada juntos.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Identificador único del programa")
    preferences: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Postulantes rankeados, el más preferido primero",
    )
    capacity: int = Field(..., strict=True, description="Cantidad de vacantes")

    def rank_of(self, applicant_id: str) -> Optional[int]:
        """Posición del postulante en la lista (0 = el más preferido), None si no lo rankea."""
        try:
            return self.preferences.index(applicant_id)
        except ValueError:
            return None

    def ranks(self) -> dict[str, int]:
        """Mapa postulante -> posición, para comparaciones repetidas."""
        return {applicant_id: r for r, applicant_id in enumerate(self.preferences)}
