"""Implementaciones de repositorios para acceso a datos."""

from __future__ import annotations

from typing import Any

from admin_centros.infrastructure.api_client import APIClient
from admin_centros.models.user import Centro, User

USUARIOS_PATH = "/usuarios"
CENTROS_PATH = "/centros"


class CentroRepository:
    """Repositorio de centros de formación (solo lectura)."""

    def __init__(self, api_client: APIClient) -> None:
        self._api_client = api_client

    def obtener_centros(self) -> list[Centro]:
        respuesta = self._api_client.get(CENTROS_PATH)
        # El backend envuelve la lista en {"data": [...]}
        centros_crudos = respuesta.get("data", []) if isinstance(respuesta, dict) else respuesta
        return [Centro.desde_backend(datos) for datos in centros_crudos or []]


class UserRepository:
    """Repositorio de usuarios basado en un cliente API."""

    def __init__(self, api_client: APIClient) -> None:
        self._api_client = api_client

    def obtener_usuarios(self) -> list[User]:
        """Devuelve la lista completa de usuarios."""

        usuarios_crudos = self._api_client.get(USUARIOS_PATH) or []
        return [User.desde_backend(datos) for datos in usuarios_crudos]

    def actualizar_usuario(self, cedula: str, datos: dict[str, Any]) -> Any:
        return self._api_client.put(f"{USUARIOS_PATH}/{cedula}", datos)

    def eliminar_usuario(self, cedula: str) -> Any:
        return self._api_client.delete(f"{USUARIOS_PATH}/{cedula}")


__all__ = ["CentroRepository", "UserRepository"]
