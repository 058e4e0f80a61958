"""Configuración de la consola leída de variables de entorno.

Se carga un fichero ``.env`` si existe; las variables ya definidas en el
entorno tienen prioridad.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True, slots=True)
class Settings:
    api_base: str = "http://localhost:3000/api"
    http_timeout: float = 10.0
    tamano_pagina: int = 10
    debounce_ms: int = 300
    log_level: str = "INFO"
    settings_org: str = "CentrosFormacion"
    settings_app: str = "AdminCentros"

    @classmethod
    def desde_entorno(cls, cargar_dotenv: bool = True) -> "Settings":
        if cargar_dotenv:
            load_dotenv(override=False)

        defaults = cls()
        return cls(
            api_base=os.environ.get("ADMIN_API_BASE", defaults.api_base).rstrip("/"),
            http_timeout=float(os.environ.get("ADMIN_HTTP_TIMEOUT", defaults.http_timeout)),
            tamano_pagina=int(os.environ.get("ADMIN_PAGE_SIZE", defaults.tamano_pagina)),
            debounce_ms=int(os.environ.get("ADMIN_DEBOUNCE_MS", defaults.debounce_ms)),
            log_level=os.environ.get("ADMIN_LOG_LEVEL", defaults.log_level).upper(),
            settings_org=os.environ.get("ADMIN_SETTINGS_ORG", defaults.settings_org),
            settings_app=os.environ.get("ADMIN_SETTINGS_APP", defaults.settings_app),
        )


__all__ = ["Settings"]
