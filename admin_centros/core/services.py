"""Servicios de aplicación que coordinan el acceso a datos."""

from __future__ import annotations

import logging
import unicodedata
from typing import Iterable

from admin_centros.infrastructure.repositories import CentroRepository, UserRepository
from admin_centros.models.user import Centro, FiltroUsuarios, User

logger = logging.getLogger(__name__)


def _normalizar(texto: str) -> str:
    """Minúsculas y sin tildes, para comparar como lo haría una persona."""

    descompuesto = unicodedata.normalize("NFKD", texto)
    return "".join(c for c in descompuesto if not unicodedata.combining(c)).casefold()


def ordenar_usuarios(usuarios: Iterable[User]) -> list[User]:
    """Ordena por primer nombre y primer apellido, en orden ascendente."""

    return sorted(usuarios, key=lambda usuario: (_normalizar(usuario.clave_orden), usuario.clave_orden))


def filtrar_usuarios(
    usuarios: Iterable[User], filtro: FiltroUsuarios, centros: list[Centro]
) -> list[User]:
    """Aplica el filtro del formulario de búsqueda sobre usuarios ya cargados.

    - nombre: subcadena sin distinguir mayúsculas sobre el nombre completo.
    - centro: coincidencia exacta con el nombre del centro seleccionado.
    - email: subcadena sin distinguir mayúsculas.
    - cédula: subcadena sobre el número como texto.
    """

    if filtro.vacio:
        return ordenar_usuarios(usuarios)

    nombre = filtro.nombre.strip().lower()
    email = filtro.email.strip().lower()
    cedula = filtro.cedula.strip()
    centro_nombre = None
    if filtro.centro_id is not None:
        centro = next((c for c in centros if c.id == filtro.centro_id), None)
        centro_nombre = centro.nombre if centro else ""

    def coincide(usuario: User) -> bool:
        return (
            (not nombre or nombre in usuario.nombre_completo.lower())
            and (centro_nombre is None or usuario.centro_nombre == centro_nombre)
            and (not email or email in usuario.email.lower())
            and (not cedula or cedula in str(usuario.cedula))
        )

    return ordenar_usuarios(usuario for usuario in usuarios if coincide(usuario))


class UserService:
    """Orquesta el flujo de datos relacionado con usuarios y centros."""

    def __init__(self, repository: UserRepository, centro_repository: CentroRepository) -> None:
        self._repository = repository
        self._centro_repository = centro_repository

    def obtener_centros(self) -> list[Centro]:
        centros = self._centro_repository.obtener_centros()
        logger.info("Centros de formación obtenidos: %d", len(centros))
        return centros

    def obtener_usuarios(self, centros: list[Centro]) -> list[User]:
        """Devuelve los usuarios con el centro resuelto, ordenados por nombre."""

        usuarios = self._repository.obtener_usuarios()
        return ordenar_usuarios(usuario.con_centro(centros) for usuario in usuarios)

    def cargar(self) -> tuple[list[Centro], list[User]]:
        """Carga centros y luego usuarios; los usuarios necesitan los centros."""

        centros = self.obtener_centros()
        return centros, self.obtener_usuarios(centros)

    def actualizar_usuario(self, usuario: User) -> None:
        self._repository.actualizar_usuario(usuario.cedula, usuario.a_backend())
        logger.info("Usuario %s actualizado", usuario.cedula)

    def eliminar_usuario(self, usuario: User) -> None:
        self._repository.eliminar_usuario(usuario.cedula)
        logger.info("Usuario %s eliminado", usuario.cedula)


__all__ = ["UserService", "filtrar_usuarios", "ordenar_usuarios"]
