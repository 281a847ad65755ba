"""
Errores del sistema de asignación.
"""

from typing import Optional


class PlazasError(Exception):
    """Error base de plazas."""

    pass


class InvalidInputError(PlazasError, ValueError):
    """
    Los datos de entrada no permiten correr el matching.

    Referencias a postulantes o programas no declarados, cupos no positivos,
    entradas duplicadas en una lista de preferencias o archivos ilegibles.
    Se lanza antes de crear cualquier estado del motor.
    """

    def __init__(self, message: str, problems: Optional[list[str]] = None):
        self.problems = list(problems) if problems else [message]
        super().__init__(message)


class MalformedPreferenceError(InvalidInputError):
    """Un identificador aparece de ambos lados o un agente se rankea a sí mismo."""

    pass


class InvalidAssignmentError(PlazasError):
    """Una asignación viola cupos, exclusividad o nombra agentes desconocidos."""

    pass
