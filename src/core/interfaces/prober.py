"""Contrato del sondeo de URLs candidatas.

Por qué Protocol:
- Contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir el prober HTTP por uno falso en tests del resolver.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ProbeResult


@runtime_checkable
class DocumentProber(Protocol):
    """Contrato mínimo para verificar una URL candidata.

    Reglas de diseño:
    - `probe` es asíncrono porque hace I/O (HTTP) y duerme entre reintentos.
    - Nunca lanza por fallos de transporte: los refleja en el `ProbeResult`.
    """

    async def probe(self, url: str) -> ProbeResult:
        """Sondea `url` y devuelve un único resultado normalizado."""

        ...
