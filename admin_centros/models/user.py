"""Definiciones de modelos de dominio.

Los usuarios y centros llegan del backend con nombres de campo en español
y notación ``snake_case`` (``usr_cedula``, ``cen_id``...). Estos modelos
hacen la traducción en ambos sentidos para que el resto de la aplicación
trabaje con atributos legibles.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

CENTRO_DESCONOCIDO = "N/A"


class TipoUsuario(Enum):
    """Tipos de usuario conocidos por la consola (fijos, no se consultan)."""

    ADMINISTRADOR = 1
    INSTRUCTOR = 2
    ALMACEN = 3

    @property
    def nombre(self) -> str:
        return _NOMBRES_TIPO[self]

    @classmethod
    def desde_valor(cls, valor: object) -> Optional["TipoUsuario"]:
        """Resuelve un tipo a partir de su id o de su nombre visible."""

        if valor is None or isinstance(valor, bool):
            return None
        if isinstance(valor, TipoUsuario):
            return valor
        if isinstance(valor, int):
            return next((tipo for tipo in cls if tipo.value == valor), None)

        texto = str(valor).strip()
        if texto.isdigit():
            return cls.desde_valor(int(texto))
        texto = texto.lower()
        return next((tipo for tipo in cls if tipo.nombre.lower() == texto), None)


_NOMBRES_TIPO = {
    TipoUsuario.ADMINISTRADOR: "Administrador",
    TipoUsuario.INSTRUCTOR: "Instructor",
    TipoUsuario.ALMACEN: "Almacen",
}


@dataclass(frozen=True, slots=True)
class Centro:
    """Centro de formación al que pertenece un usuario."""

    id: int
    nombre: str

    @classmethod
    def desde_backend(cls, datos: dict) -> "Centro":
        return cls(id=int(datos["cen_id"]), nombre=str(datos.get("cen_nombre") or ""))


@dataclass(frozen=True, slots=True)
class User:
    """Usuario administrado desde la consola.

    Attributes
    ----------
    cedula:
        Número de identificación; es la clave primaria en el backend.
    centro_id:
        Referencia al centro de formación tal como la envía el backend.
    centro_nombre:
        Nombre del centro ya resuelto para mostrar en pantalla. Vale
        ``"N/A"`` cuando el id no corresponde a ningún centro cargado.
    """

    cedula: str
    primer_nombre: str
    primer_apellido: str
    email: str
    segundo_nombre: str = ""
    segundo_apellido: str = ""
    telefono: str = ""
    centro_id: int | None = None
    centro_nombre: str = CENTRO_DESCONOCIDO
    tipo_usuario: TipoUsuario | None = None

    @property
    def nombre_completo(self) -> str:
        partes = (
            self.primer_nombre,
            self.segundo_nombre,
            self.primer_apellido,
            self.segundo_apellido,
        )
        return " ".join(parte for parte in partes if parte)

    @property
    def clave_orden(self) -> str:
        return f"{self.primer_nombre} {self.primer_apellido}"

    def con_centro(self, centros: list[Centro]) -> "User":
        """Devuelve una copia con el nombre del centro resuelto."""

        centro = next((c for c in centros if c.id == self.centro_id), None)
        return replace(self, centro_nombre=centro.nombre if centro else CENTRO_DESCONOCIDO)

    @classmethod
    def desde_backend(cls, datos: dict) -> "User":
        return cls(
            cedula=_texto(datos.get("usr_cedula")),
            primer_nombre=_texto(datos.get("usr_primer_nombre")),
            segundo_nombre=_texto(datos.get("usr_segundo_nombre")),
            primer_apellido=_texto(datos.get("usr_primer_apellido")),
            segundo_apellido=_texto(datos.get("usr_segundo_apellido")),
            email=_texto(datos.get("usr_correo")),
            telefono=_texto(datos.get("usr_telefono")),
            centro_id=_entero(datos.get("cen_id")),
            tipo_usuario=TipoUsuario.desde_valor(datos.get("tip_usr_id")),
        )

    def a_backend(self) -> dict[str, Any]:
        """Traduce el usuario al DTO parcial que espera ``PUT /usuarios/<cedula>``.

        Los campos sin resolver (centro o tipo) se omiten para que el backend
        conserve el valor que ya tiene.
        """

        datos = {
            "usr_cedula": self.cedula,
            "usr_primer_nombre": self.primer_nombre,
            "usr_segundo_nombre": self.segundo_nombre,
            "usr_primer_apellido": self.primer_apellido,
            "usr_segundo_apellido": self.segundo_apellido,
            "usr_correo": self.email,
            "usr_telefono": self.telefono,
            "cen_id": self.centro_id,
            "tip_usr_id": self.tipo_usuario.value if self.tipo_usuario else None,
        }
        return {campo: valor for campo, valor in datos.items() if valor is not None}


@dataclass(frozen=True, slots=True)
class FiltroUsuarios:
    """Valores del formulario de búsqueda. Un campo vacío acepta todo."""

    nombre: str = ""
    centro_id: int | None = None
    email: str = ""
    cedula: str = ""

    @property
    def vacio(self) -> bool:
        return not (self.nombre.strip() or self.email.strip() or self.cedula.strip()) and (
            self.centro_id is None
        )


def _texto(valor: object) -> str:
    return "" if valor is None else str(valor)


def _entero(valor: object) -> int | None:
    try:
        return int(valor)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


__all__ = ["CENTRO_DESCONOCIDO", "Centro", "FiltroUsuarios", "TipoUsuario", "User"]
