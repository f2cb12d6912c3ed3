"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- `ApiConfig` es el contrato inmutable que viaja con cada llamada; se deriva
  de `AppSettings` una sola vez y se personaliza por copia.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.interfaces.parser import ResponseParser


ENV_PREFIX = "RESTBIND_"


def user_config_dir() -> Path:
    """`RESTBIND_CONFIG_DIR` si está definido; si no, el directorio estándar del SO."""

    override = os.environ.get(f"{ENV_PREFIX}CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA") or Path.home()) / "restbind"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "restbind"
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config") / "restbind"


def user_env_file() -> Path:
    return user_config_dir() / ".env"


def read_user_env(env_path: Path | None = None) -> dict[str, str]:
    """Variables `RESTBIND_*` del .env de usuario; el resto se ignora."""

    env_path = env_path or user_env_file()
    if not env_path.exists():
        return {}
    values: dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.strip().partition("=")
        key = key.strip()
        if not sep or not key.startswith(ENV_PREFIX):
            continue
        values[key] = value.strip().strip("\"'")
    return values


def _env_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def save_user_settings(changes: Mapping[str, Any], env_path: Path | None = None) -> Path:
    """Persiste campos de `AppSettings` (por nombre de campo) en el .env de usuario.

    Se fusiona con lo ya guardado; un campo desconocido es un error.
    """

    unknown = sorted(set(changes) - set(AppSettings.model_fields))
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(unknown)}")

    env_path = env_path or user_env_file()
    values = read_user_env(env_path)
    values.update({f"{ENV_PREFIX}{name.upper()}": _env_value(v) for name, v in changes.items() if v is not None})

    env_path.parent.mkdir(parents=True, exist_ok=True)
    body = "".join(f"{key}={values[key]}\n" for key in sorted(values))
    env_path.write_text("# restbind user config (.env)\n" + body, encoding="utf-8")
    return env_path


class RequestEncoding(str, Enum):
    """Cómo se codifican los parámetros de POST/PUT."""

    JSON = "json"
    URL = "url"


class AppSettings(BaseSettings):
    """Configuración central leída del entorno.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(user_env_file())),
        env_file_encoding="utf-8",
    )

    host: str = Field(
        default="http://localhost:3000",
        min_length=1,
        description="Host base al que se concatenan las rutas de los modelos.",
    )
    root_namespace: str = Field(
        default="",
        description="Ruta (separada por puntos) que envuelve todas las respuestas, p.ej. 'data'.",
    )
    request_logging: bool = Field(
        default=False,
        description="Loguea cada request con su duración y status.",
    )
    encoding: RequestEncoding = Field(
        default=RequestEncoding.JSON,
        description="Codificación de parámetros para POST/PUT (json/url).",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="restbind/0.1",
        min_length=1,
        description="User-Agent de las peticiones.",
    )


class ApiConfig(BaseModel):
    """Configuración efectiva de una llamada.

    Inmutable: `customize` devuelve una copia, así que un modelo puede
    derivar su propia config sin tocar la compartida. El `parser` lo inyecta
    quien cablea los adaptadores (`core.services.context_factory`).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    host: str = Field(default="http://localhost:3000", min_length=1)
    root_namespace: str = ""
    request_logging: bool = False
    encoding: RequestEncoding = RequestEncoding.JSON
    headers: dict[str, str] = Field(default_factory=dict)
    parser: ResponseParser | None = None

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        parser: ResponseParser | None = None,
    ) -> "ApiConfig":
        settings = settings or AppSettings()
        return cls(
            host=settings.host,
            root_namespace=settings.root_namespace,
            request_logging=settings.request_logging,
            encoding=settings.encoding,
            headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
            parser=parser,
        )

    def customize(self, **changes: Any) -> "ApiConfig":
        """Copia con campos cambiados; `headers` se copia para no compartir el dict."""

        if "headers" not in changes:
            changes["headers"] = dict(self.headers)
        return self.model_copy(update=changes)
