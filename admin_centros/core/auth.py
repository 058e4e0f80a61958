"""Autenticación contra ``/api/auth`` y gestión de la sesión local."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from admin_centros.infrastructure.api_client import APIClient, ApiError
from admin_centros.infrastructure.storage import SessionStore
from admin_centros.models.session import Sesion

logger = logging.getLogger(__name__)

AUTH_PATH = "/auth"

MENSAJE_LOGIN_FALLIDO = "Inicio de sesión fallido."
MENSAJE_ERROR_DESCONOCIDO = "Error desconocido. Por favor, inténtalo de nuevo."
MENSAJE_ERROR_GENERICO = "Ocurrió un error."

# Mensaje fijo por código HTTP y si se prefiere el ``error`` del backend.
MENSAJES_LOGIN: dict[int, tuple[str, bool]] = {
    400: ("Usuario o contraseña incorrectos.", True),
    401: ("Acceso no autorizado.", False),
    404: ("Correo no registrado. Por favor contacta con un administrador.", True),
    500: ("Error en el servidor. Por favor, inténtalo de nuevo más tarde.", False),
}


class AuthError(Exception):
    """Fallo de autenticación con un mensaje listo para mostrar."""


def mensaje_error_login(error: ApiError) -> str:
    """Traduce un error HTTP del login al mensaje que ve el usuario."""

    entrada = MENSAJES_LOGIN.get(error.status)
    if entrada is None:
        return MENSAJE_ERROR_DESCONOCIDO
    mensaje, usa_backend = entrada
    if usa_backend and error.error_backend:
        return error.error_backend
    return mensaje


class AuthService:
    """Inicio y cierre de sesión, recuperación de contraseña y estado local."""

    def __init__(
        self,
        api_client: APIClient,
        store: SessionStore,
        *,
        on_logout: Callable[[], None] | None = None,
    ) -> None:
        self._api_client = api_client
        self._store = store
        self._on_logout = on_logout

    def login(self, correo: str, contrasena: str) -> dict[str, Any]:
        """Autentica al usuario y persiste la sesión devuelta por el backend.

        Raises
        ------
        AuthError
            Con el mensaje a mostrar, tanto si el backend rechazó las
            credenciales como si respondió sin token.
        """

        try:
            respuesta = self._api_client.post(
                f"{AUTH_PATH}/login", {"correo": correo, "contrasena": contrasena}
            )
        except ApiError as exc:
            logger.error("Error de inicio de sesión (HTTP %s): %s", exc.status, exc)
            raise AuthError(mensaje_error_login(exc)) from exc

        if not isinstance(respuesta, dict) or not respuesta.get("token"):
            logger.error("La respuesta del login no incluye token")
            raise AuthError(MENSAJE_LOGIN_FALLIDO)

        sesion = Sesion(
            token=str(respuesta["token"]),
            tipo_usuario=_opcional(respuesta.get("userType")),
            cedula=_opcional(respuesta.get("cedula")),
        )
        self._store.guardar(sesion)
        return respuesta

    def logout(self) -> None:
        """Borra la sesión local y vuelve a la pantalla de login."""

        self._store.limpiar()
        logger.info("Sesión cerrada")
        if self._on_logout is not None:
            self._on_logout()

    def is_authenticated(self) -> bool:
        sesion = self.sesion_actual()
        return sesion is not None and sesion.is_valid()

    def forgot_password(self, correo: str) -> Any:
        return self._post_generico(f"{AUTH_PATH}/forgot-password", {"correo": correo})

    def reset_password(self, token: str, nueva_contrasena: str) -> Any:
        return self._post_generico(
            f"{AUTH_PATH}/reset-password", {"token": token, "newPassword": nueva_contrasena}
        )

    def sesion_actual(self) -> Sesion | None:
        return self._store.cargar()

    # ------------------------------------------------------------------
    # Acceso directo al almacenamiento
    # ------------------------------------------------------------------
    def get_token(self) -> Optional[str]:
        return self._store.obtener_token()

    def set_token(self, token: str) -> None:
        self._store.guardar_token(token)

    def clear_token(self) -> None:
        self._store.limpiar_token()

    def get_user_type(self) -> Optional[str]:
        return self._store.obtener_tipo_usuario()

    def set_user_type(self, tipo_usuario: str) -> None:
        self._store.guardar_tipo_usuario(tipo_usuario)

    def clear_user_type(self) -> None:
        self._store.limpiar_tipo_usuario()

    def get_cedula(self) -> Optional[str]:
        return self._store.obtener_cedula()

    def set_cedula(self, cedula: str) -> None:
        self._store.guardar_cedula(cedula)

    def clear_cedula(self) -> None:
        self._store.limpiar_cedula()

    # ------------------------------------------------------------------
    def _post_generico(self, path: str, payload: dict) -> Any:
        try:
            return self._api_client.post(path, payload)
        except ApiError as exc:
            logger.error("Ocurrió un error en %s: %s", path, exc)
            raise AuthError(MENSAJE_ERROR_GENERICO) from exc


def _opcional(valor: object) -> Optional[str]:
    return str(valor) if valor not in (None, "") else None


__all__ = [
    "AuthError",
    "AuthService",
    "MENSAJES_LOGIN",
    "MENSAJE_ERROR_DESCONOCIDO",
    "MENSAJE_ERROR_GENERICO",
    "MENSAJE_LOGIN_FALLIDO",
    "mensaje_error_login",
]
