"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta de identificadores y plantillas en el borde.
- Resultados inmutables (`frozen`) para que la traza no se edite tras crearse.

Nota:
- Estos modelos describen *qué* se resuelve, no *cómo* se descarga.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.errors import (
    InvalidIdentifier,
    NotFound,
    ResolutionCancelled,
    ResolutionError,
    TransferFailed,
)

IDENTIFIER_LENGTH = 12
PLACEHOLDER = "{12NC}"

_IDENTIFIER_RE = re.compile(r"[0-9]{%d}" % IDENTIFIER_LENGTH)


def is_valid_identifier(value: object) -> bool:
    return isinstance(value, str) and _IDENTIFIER_RE.fullmatch(value) is not None


def validate_identifier(value: object) -> str:
    """Devuelve `value` si es un 12NC válido; si no, lanza `InvalidIdentifier`."""

    if not is_valid_identifier(value):
        raise InvalidIdentifier(
            f"Invalid 12NC {value!r}: expected exactly {IDENTIFIER_LENGTH} digits"
        )
    return value  # type: ignore[return-value]


def suggested_filename(identifier: str) -> str:
    return f"{identifier}_specification.pdf"


class TemplateGroup(BaseModel):
    """Grupo ordenado de plantillas de URL (una generación de la API)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Nombre del grupo (p.ej. 'primary', 'secondary').",
    )
    templates: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description=f"Plantillas en orden de prueba; cada una contiene {PLACEHOLDER}.",
    )

    @field_validator("templates")
    @classmethod
    def _require_placeholder(cls, templates: tuple[str, ...]) -> tuple[str, ...]:
        for template in templates:
            if PLACEHOLDER not in template:
                raise ValueError(f"template without {PLACEHOLDER} placeholder: {template!r}")
        return templates

    def expand(self, identifier: str) -> list[str]:
        """Sustituye el identificador en cada plantilla (todas las apariciones)."""

        return [template.replace(PLACEHOLDER, identifier) for template in self.templates]


class ProbeResult(BaseModel):
    """Resultado del sondeo de una URL candidata.

    Se crea una sola vez por candidato y nunca se modifica.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="URL candidata sondeada.")
    verified: bool = Field(
        default=False,
        description="True si la URL sirve un documento con la firma esperada.",
    )
    attempts: int = Field(
        default=1,
        ge=1,
        description="Intentos realizados (1..max_attempts).",
    )
    last_error: str | None = Field(
        default=None,
        description="Último error de transporte, si el sondeo terminó por fallos.",
    )

    @property
    def negative_signature(self) -> bool:
        """La URL respondió, pero el contenido no es el documento esperado."""

        return not self.verified and self.last_error is None


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    INVALID_IDENTIFIER = "invalid_identifier"
    NOT_FOUND = "not_found"
    TRANSFER_FAILED = "transfer_failed"
    CANCELLED = "cancelled"


_STATUS_ERRORS: dict[OutcomeStatus, type[ResolutionError]] = {
    OutcomeStatus.INVALID_IDENTIFIER: InvalidIdentifier,
    OutcomeStatus.NOT_FOUND: NotFound,
    OutcomeStatus.TRANSFER_FAILED: TransferFailed,
    OutcomeStatus.CANCELLED: ResolutionCancelled,
}


class ResolutionOutcome(BaseModel):
    """Valor terminal de una resolución; pertenece al llamador.

    Solo `SUCCESS` trae `payload`/`source_url`/`suggested_filename`; todos
    los estados traen la traza ordenada y un mensaje legible.
    """

    model_config = ConfigDict(frozen=True)

    status: OutcomeStatus
    identifier: str = Field(..., description="Entrada tal y como llegó al resolver.")
    message: str = Field(default="", description="Mensaje legible del resultado.")
    trace: tuple[ProbeResult, ...] = Field(
        default_factory=tuple,
        description="Un ProbeResult por candidato, en orden de prueba.",
    )
    payload: bytes | None = Field(default=None, repr=False)
    source_url: str | None = None
    suggested_filename: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    def raise_for_status(self) -> "ResolutionOutcome":
        """Lanza la excepción del estado si no es `SUCCESS`; si no, devuelve self."""

        error_cls = _STATUS_ERRORS.get(self.status)
        if error_cls is not None:
            raise error_cls(self.message, trace=self.trace)
        return self
