"""Verificación de firma binaria.

Compara los primeros bytes de un buffer con el marcador mágico del formato.
Puro, sin I/O, nunca lanza.
"""

from __future__ import annotations

PDF_MAGIC = b"%PDF"


def is_valid_document(buffer: bytes, marker: bytes = PDF_MAGIC) -> bool:
    """True si `buffer` empieza exactamente por `marker`.

    Buffers más cortos que el marcador (o vacíos) devuelven False.
    """

    if not buffer or len(buffer) < len(marker):
        return False
    return bytes(buffer[: len(marker)]) == marker
