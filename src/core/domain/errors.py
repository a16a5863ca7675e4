"""Errores del dominio.

Por qué una jerarquía propia:
- El resolver nunca deja escapar estas excepciones: las traduce a un
  `ResolutionOutcome`. Existen para quien prefiera trabajar con excepciones
  (`ResolutionOutcome.raise_for_status`) y para el manejo interno de intentos.
- Un "contenido que no es PDF" no es un error: es un `ProbeResult` con
  `verified=False` y sin `last_error`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.domain.models import ProbeResult


class ResolutionError(Exception):
    """Base de los errores a nivel de llamada."""

    def __init__(self, message: str, *, trace: "tuple[ProbeResult, ...]" = ()) -> None:
        super().__init__(message)
        self.message = message
        self.trace = trace


class InvalidIdentifier(ResolutionError, ValueError):
    """El identificador no cumple el contrato (12 dígitos)."""


class NotFound(ResolutionError):
    """Se agotaron los candidatos sin ninguno verificado."""


class TransferFailed(ResolutionError):
    """El candidato se verificó, pero la descarga completa falló."""


class ResolutionCancelled(ResolutionError):
    """La resolución se canceló entre candidatos."""


class ProbeTransportError(Exception):
    """Fallo transitorio (timeout, red, HTTP no-2xx) en un intento de sondeo.

    Se reintenta localmente; nunca llega al llamador como fallo de la llamada.
    """

    def __init__(
        self,
        url: str,
        reason: str,
        *,
        status_code: int | None = None,
        definitive: bool = False,
    ) -> None:
        super().__init__(f"{reason} ({url})")
        self.url = url
        self.reason = reason
        self.status_code = status_code
        # La URL no puede funcionar (p.ej. mal formada): no se reintenta.
        self.definitive = definitive
