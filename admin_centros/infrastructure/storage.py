"""Almacenamiento persistente de la sesión en el equipo del usuario.

La sesión se guarda en tres entradas clave/valor. En escritorio se usa
``QSettings`` (registro de Windows, plist o fichero ini según la
plataforma); en pruebas y ejecuciones sin interfaz basta con un diccionario.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from PyQt6.QtCore import QSettings

from admin_centros.models.session import Sesion

logger = logging.getLogger(__name__)

TOKEN_KEY = "authToken"
USER_TYPE_KEY = "userType"
CEDULA_KEY = "userCedula"


class SessionStorage(Protocol):
    def obtener(self, clave: str) -> Optional[str]: ...

    def guardar(self, clave: str, valor: str) -> None: ...

    def eliminar(self, clave: str) -> None: ...


class MemoryStorage:
    """Almacenamiento en memoria, útil para pruebas."""

    def __init__(self) -> None:
        self._datos: dict[str, str] = {}

    def obtener(self, clave: str) -> Optional[str]:
        return self._datos.get(clave)

    def guardar(self, clave: str, valor: str) -> None:
        self._datos[clave] = valor

    def eliminar(self, clave: str) -> None:
        self._datos.pop(clave, None)

    def __contains__(self, clave: str) -> bool:
        return clave in self._datos


class QSettingsStorage:
    """Almacenamiento respaldado por ``QSettings``."""

    def __init__(self, settings: QSettings) -> None:
        self._settings = settings

    @classmethod
    def para_aplicacion(cls, organizacion: str, aplicacion: str) -> "QSettingsStorage":
        return cls(QSettings(organizacion, aplicacion))

    def obtener(self, clave: str) -> Optional[str]:
        if not self._settings.contains(clave):
            return None
        valor = self._settings.value(clave)
        return None if valor is None else str(valor)

    def guardar(self, clave: str, valor: str) -> None:
        self._settings.setValue(clave, valor)
        self._settings.sync()

    def eliminar(self, clave: str) -> None:
        self._settings.remove(clave)
        self._settings.sync()


class SessionStore:
    """Punto único de lectura y escritura de la sesión persistida.

    ``storage`` puede ser ``None`` cuando no hay almacenamiento disponible;
    en ese caso las lecturas devuelven ``None`` y las escrituras se ignoran.
    """

    def __init__(self, storage: SessionStorage | None) -> None:
        self._storage = storage

    # ------------------------------------------------------------------
    # Ciclo de vida conjunto
    # ------------------------------------------------------------------
    def cargar(self) -> Sesion | None:
        token = self.obtener_token()
        if not token:
            return None
        return Sesion(token=token, tipo_usuario=self.obtener_tipo_usuario(), cedula=self.obtener_cedula())

    def guardar(self, sesion: Sesion) -> None:
        self._escribir(TOKEN_KEY, sesion.token)
        self._escribir(USER_TYPE_KEY, sesion.tipo_usuario)
        self._escribir(CEDULA_KEY, sesion.cedula)
        logger.info("Sesión almacenada (tipo de usuario: %s)", sesion.tipo_usuario)

    def limpiar(self) -> None:
        for clave in (TOKEN_KEY, USER_TYPE_KEY, CEDULA_KEY):
            self._escribir(clave, None)

    # ------------------------------------------------------------------
    # Acceso individual a cada clave
    # ------------------------------------------------------------------
    def obtener_token(self) -> Optional[str]:
        return self._leer(TOKEN_KEY)

    def guardar_token(self, token: str) -> None:
        self._escribir(TOKEN_KEY, token)

    def limpiar_token(self) -> None:
        self._escribir(TOKEN_KEY, None)

    def obtener_tipo_usuario(self) -> Optional[str]:
        return self._leer(USER_TYPE_KEY)

    def guardar_tipo_usuario(self, tipo_usuario: str) -> None:
        self._escribir(USER_TYPE_KEY, tipo_usuario)

    def limpiar_tipo_usuario(self) -> None:
        self._escribir(USER_TYPE_KEY, None)

    def obtener_cedula(self) -> Optional[str]:
        return self._leer(CEDULA_KEY)

    def guardar_cedula(self, cedula: str) -> None:
        self._escribir(CEDULA_KEY, cedula)

    def limpiar_cedula(self) -> None:
        self._escribir(CEDULA_KEY, None)

    # ------------------------------------------------------------------
    def _leer(self, clave: str) -> Optional[str]:
        if self._storage is None:
            return None
        return self._storage.obtener(clave) or None

    def _escribir(self, clave: str, valor: Optional[str]) -> None:
        if self._storage is None:
            logger.warning("Almacenamiento no disponible; se descarta la clave %s", clave)
            return
        if valor:
            self._storage.guardar(clave, str(valor))
        else:
            self._storage.eliminar(clave)


__all__ = [
    "CEDULA_KEY",
    "MemoryStorage",
    "QSettingsStorage",
    "SessionStorage",
    "SessionStore",
    "TOKEN_KEY",
    "USER_TYPE_KEY",
]
