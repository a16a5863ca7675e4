"""Guardado del PDF descargado.

Equivalente en escritorio del "crear enlace y hacer click" del navegador:
el host lo invoca solo después de un `ResolutionOutcome` exitoso.
"""

from __future__ import annotations

from pathlib import Path


def save_bytes_as_file(payload: bytes, filename: str, directory: Path) -> Path:
    """Escribe `payload` en `directory/filename` y devuelve la ruta final."""

    if Path(filename).name != filename:
        raise ValueError(f"filename must not contain path separators: {filename!r}")

    directory.mkdir(parents=True, exist_ok=True)
    output_path = directory / filename
    tmp_path = output_path.with_name(output_path.name + ".part")
    tmp_path.write_bytes(payload)
    tmp_path.replace(output_path)
    return output_path
