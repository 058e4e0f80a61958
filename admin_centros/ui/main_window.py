"""Ventana principal: búsqueda, edición y borrado de usuarios."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PyQt6.QtCore import Qt, QTimer, pyqtSignal
from PyQt6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from admin_centros.core.services import UserService
from admin_centros.core.state import AppState
from admin_centros.infrastructure.api_client import ApiError
from admin_centros.models.user import FiltroUsuarios, User
from admin_centros.ui.dialogs import EditUserDialog, confirmar_eliminacion

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _TableColumns:
    cedula: int = 0
    nombre: int = 1
    centro: int = 2
    email: int = 3
    telefono: int = 4
    tipo: int = 5
    acciones: int = 6


class MainWindow(QMainWindow):
    """Pantalla de búsqueda con filtros, tabla paginada y acciones por fila."""

    logout_requested = pyqtSignal()
    closed = pyqtSignal()

    def __init__(
        self,
        *,
        state: AppState,
        user_service: UserService,
        debounce_ms: int = 300,
    ) -> None:
        super().__init__()
        self.state = state
        self.user_service = user_service
        self._columns = _TableColumns()
        self._ultimo_filtro: FiltroUsuarios | None = None

        self.setWindowTitle("Gestión de usuarios")
        self.resize(1100, 600)

        self._debounce = QTimer(self)
        self._debounce.setSingleShot(True)
        self._debounce.setInterval(debounce_ms)
        self._debounce.timeout.connect(self._apply_filter)

        self.input_nombre = QLineEdit(placeholderText="Nombre")
        self.combo_centro = QComboBox()
        self.input_email = QLineEdit(placeholderText="Correo")
        self.input_cedula = QLineEdit(placeholderText="Cédula")
        for campo in (self.input_nombre, self.input_email, self.input_cedula):
            campo.textChanged.connect(self._schedule_filter)
        self.combo_centro.currentIndexChanged.connect(self._schedule_filter)

        self.refresh_button = QPushButton("Recargar")
        self.refresh_button.clicked.connect(self._reload_data)
        self.logout_button = QPushButton("Cerrar sesión")
        self.logout_button.clicked.connect(self.logout_requested)

        self.table = QTableWidget(columnCount=7)
        self.table.setHorizontalHeaderLabels(
            ["Cédula", "Nombre", "Centro de formación", "Correo", "Teléfono", "Tipo", "Acciones"]
        )
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.itemSelectionChanged.connect(self._on_selection_changed)

        self.prev_button = QPushButton("‹ Anterior")
        self.prev_button.clicked.connect(self._on_prev_page)
        self.next_button = QPushButton("Siguiente ›")
        self.next_button.clicked.connect(self._on_next_page)
        self.page_size_combo = QComboBox()
        for tamano in (5, 10, 25, 50):
            self.page_size_combo.addItem(str(tamano), tamano)
        indice = self.page_size_combo.findData(self.state.tamano_pagina)
        if indice < 0:
            self.page_size_combo.addItem(str(self.state.tamano_pagina), self.state.tamano_pagina)
            indice = self.page_size_combo.count() - 1
        self.page_size_combo.setCurrentIndex(indice)
        self.page_size_combo.currentIndexChanged.connect(self._on_page_size_changed)
        self.page_label = QLabel("")

        self._build_ui()
        self._reload_data()

    def closeEvent(self, event) -> None:  # pragma: no cover - UI
        self.closed.emit()
        super().closeEvent(event)

    def _build_ui(self) -> None:
        top_bar = QHBoxLayout()
        top_bar.addWidget(QLabel("Usuarios"))
        top_bar.addStretch(1)
        top_bar.addWidget(self.refresh_button)
        top_bar.addWidget(self.logout_button)

        filtros = QHBoxLayout()
        filtros.addWidget(self.input_nombre, 2)
        filtros.addWidget(self.combo_centro, 2)
        filtros.addWidget(self.input_email, 2)
        filtros.addWidget(self.input_cedula, 1)

        paginacion = QHBoxLayout()
        paginacion.addWidget(QLabel("Filas por página"))
        paginacion.addWidget(self.page_size_combo)
        paginacion.addStretch(1)
        paginacion.addWidget(self.page_label)
        paginacion.addWidget(self.prev_button)
        paginacion.addWidget(self.next_button)

        layout = QVBoxLayout()
        layout.addLayout(top_bar)
        layout.addLayout(filtros)
        layout.addWidget(self.table)
        layout.addLayout(paginacion)

        container = QWidget()
        container.setLayout(layout)
        self.setCentralWidget(container)

    # ------------------------------------------------------------------
    # Eventos y acciones
    # ------------------------------------------------------------------
    def _reload_data(self) -> None:
        """Carga centros y después usuarios; sin centros no se listan usuarios."""

        try:
            centros = self.user_service.obtener_centros()
        except ApiError as exc:
            self._report_error("Error al obtener centros de formación", exc)
            return
        self.state.actualizar_centros(centros)
        self._populate_centros()
        self._reload_users()

    def _reload_users(self) -> None:
        try:
            usuarios = self.user_service.obtener_usuarios(self.state.centros)
        except ApiError as exc:
            self._report_error("Error al obtener usuarios", exc)
            return
        self.state.actualizar_usuarios(usuarios)
        self._render()

    def _current_filter(self) -> FiltroUsuarios:
        return FiltroUsuarios(
            nombre=self.input_nombre.text(),
            centro_id=self.combo_centro.currentData(),
            email=self.input_email.text(),
            cedula=self.input_cedula.text(),
        )

    def _schedule_filter(self, *_args) -> None:
        self._debounce.start()

    def _apply_filter(self) -> None:
        filtro = self._current_filter()
        if filtro == self._ultimo_filtro:
            return
        self._ultimo_filtro = filtro
        self.state.aplicar_filtro(filtro)
        self._render()

    def _on_selection_changed(self) -> None:  # pragma: no cover - UI
        visibles = self.state.pagina_visible()
        current_row = self.table.currentRow()
        if current_row < 0 or current_row >= len(visibles):
            self.state.seleccionar_usuario(None)
            return
        self.state.seleccionar_usuario(visibles[current_row])

    def _on_prev_page(self) -> None:  # pragma: no cover - UI
        self.state.pagina_anterior()
        self._render()

    def _on_next_page(self) -> None:  # pragma: no cover - UI
        self.state.siguiente_pagina()
        self._render()

    def _on_page_size_changed(self, _index: int) -> None:  # pragma: no cover - UI
        self.state.cambiar_tamano_pagina(self.page_size_combo.currentData())
        self._render()

    def _on_edit(self, usuario: User) -> None:
        resultado = EditUserDialog.editar(usuario, self.state.centros, self)
        if resultado is None:
            return
        try:
            self.user_service.actualizar_usuario(resultado)
        except ApiError as exc:
            self._report_error("Error al actualizar usuario", exc)
            return
        self.statusBar().showMessage("Usuario actualizado", 4000)
        self._reload_users()

    def _on_delete(self, usuario: User) -> None:
        if not confirmar_eliminacion(usuario, self):
            return
        try:
            self.user_service.eliminar_usuario(usuario)
        except ApiError as exc:
            self._report_error("Error al eliminar usuario", exc)
            return
        self.statusBar().showMessage("Usuario eliminado", 4000)
        self._reload_users()

    def _report_error(self, contexto: str, exc: ApiError) -> None:
        logger.error("%s (HTTP %s): %s", contexto, exc.status, exc)
        self.statusBar().showMessage(f"{contexto}: {exc}", 5000)

    # ------------------------------------------------------------------
    # Renderizado
    # ------------------------------------------------------------------
    def _populate_centros(self) -> None:
        seleccionado = self.combo_centro.currentData()
        self.combo_centro.blockSignals(True)
        self.combo_centro.clear()
        self.combo_centro.addItem("Todos los centros", None)
        for centro in self.state.centros:
            self.combo_centro.addItem(centro.nombre, centro.id)
        if seleccionado is not None:
            self.combo_centro.setCurrentIndex(max(self.combo_centro.findData(seleccionado), 0))
        self.combo_centro.blockSignals(False)

    def _render(self) -> None:
        usuarios = self.state.pagina_visible()
        self.table.setRowCount(len(usuarios))

        for row, usuario in enumerate(usuarios):
            valores = {
                self._columns.cedula: str(usuario.cedula),
                self._columns.nombre: usuario.nombre_completo,
                self._columns.centro: usuario.centro_nombre,
                self._columns.email: usuario.email,
                self._columns.telefono: usuario.telefono,
                self._columns.tipo: usuario.tipo_usuario.nombre if usuario.tipo_usuario else "",
            }
            for column, texto in valores.items():
                item = QTableWidgetItem(texto)
                item.setFlags(item.flags() & ~Qt.ItemFlag.ItemIsEditable)
                self.table.setItem(row, column, item)
            self.table.setCellWidget(row, self._columns.acciones, self._build_actions(usuario))

        total = len(self.state.filtrados)
        self.page_label.setText(
            f"Página {self.state.pagina + 1} de {self.state.total_paginas} ({total} usuarios)"
        )
        self.prev_button.setEnabled(self.state.pagina > 0)
        self.next_button.setEnabled(self.state.pagina < self.state.total_paginas - 1)
        if not usuarios:
            self.state.seleccionar_usuario(None)

    def _build_actions(self, usuario: User) -> QWidget:
        edit_button = QPushButton("Editar")
        edit_button.clicked.connect(lambda _checked=False, u=usuario: self._on_edit(u))
        delete_button = QPushButton("Eliminar")
        delete_button.clicked.connect(lambda _checked=False, u=usuario: self._on_delete(u))

        layout = QHBoxLayout()
        layout.setContentsMargins(2, 0, 2, 0)
        layout.addWidget(edit_button)
        layout.addWidget(delete_button)
        widget = QWidget()
        widget.setLayout(layout)
        return widget


__all__ = ["MainWindow"]
