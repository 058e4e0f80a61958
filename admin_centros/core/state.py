"""Estado compartido de la pantalla de búsqueda de usuarios."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from admin_centros.core.services import filtrar_usuarios
from admin_centros.models.user import Centro, FiltroUsuarios, User


@dataclass
class AppState:
    """Mantiene los usuarios visibles, el filtro, la página y la selección."""

    tamano_pagina: int = 10
    centros: List[Centro] = field(default_factory=list)
    usuarios: List[User] = field(default_factory=list)
    filtrados: List[User] = field(default_factory=list)
    filtro: FiltroUsuarios = field(default_factory=FiltroUsuarios)
    pagina: int = 0
    usuario_seleccionado: User | None = None

    def __post_init__(self) -> None:
        if self.tamano_pagina < 1:
            raise ValueError("El tamaño de página debe ser positivo")

    def actualizar_centros(self, centros: list[Centro]) -> None:
        self.centros = list(centros)

    def actualizar_usuarios(self, usuarios: list[User]) -> None:
        """Reemplaza los usuarios y vuelve a aplicar el filtro activo."""

        self.usuarios = list(usuarios)
        self._refiltrar()
        self.ir_a_pagina(self.pagina)

    def aplicar_filtro(self, filtro: FiltroUsuarios) -> None:
        self.filtro = filtro
        self._refiltrar()
        self.ir_a_pagina(0)

    def _refiltrar(self) -> None:
        self.filtrados = filtrar_usuarios(self.usuarios, self.filtro, self.centros)
        if self.usuario_seleccionado not in self.filtrados:
            self.usuario_seleccionado = None

    # ------------------------------------------------------------------
    # Paginación
    # ------------------------------------------------------------------
    @property
    def total_paginas(self) -> int:
        return max(1, -(-len(self.filtrados) // self.tamano_pagina))

    def pagina_visible(self) -> list[User]:
        inicio = self.pagina * self.tamano_pagina
        return self.filtrados[inicio : inicio + self.tamano_pagina]

    def ir_a_pagina(self, pagina: int) -> None:
        self.pagina = max(0, min(pagina, self.total_paginas - 1))

    def siguiente_pagina(self) -> None:
        self.ir_a_pagina(self.pagina + 1)

    def pagina_anterior(self) -> None:
        self.ir_a_pagina(self.pagina - 1)

    def cambiar_tamano_pagina(self, tamano: int) -> None:
        if tamano < 1:
            raise ValueError("El tamaño de página debe ser positivo")
        self.tamano_pagina = tamano
        self.ir_a_pagina(0)

    def seleccionar_usuario(self, usuario: User | None) -> None:
        self.usuario_seleccionado = usuario


__all__ = ["AppState"]
