"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/prober) lean timeouts y reintentos de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "specsheet-fetch"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "specsheet-fetch"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "specsheet-fetch"
    return Path.home() / ".config" / "specsheet-fetch"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# specsheet-fetch user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPECSHEET_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout de la descarga completa de un candidato ya verificado (segundos).",
    )
    probe_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout por intento de sondeo (segundos).",
    )
    probe_max_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Intentos máximos por URL candidata ante fallos de transporte.",
    )
    probe_backoff_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Espera base entre intentos; se multiplica por el número de intento.",
    )
    retry_client_errors: bool = Field(
        default=True,
        description="Reintentar respuestas 4xx como fallos de transporte (si False, 4xx descarta la URL).",
    )
    user_agent: str = Field(
        default="specsheet-fetch/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para las peticiones HTTP.",
    )

    templates_path: Path | None = Field(
        default=None,
        description="Ruta a un JSON con grupos de plantillas de URL (sustituye a los de fábrica).",
    )
    output_dir: Path = Field(
        default=Path("."),
        description="Directorio donde se guardan los PDF descargados.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging para la CLI (DEBUG, INFO, WARNING...).",
    )
