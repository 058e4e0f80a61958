"""Diálogos modales de edición y borrado de usuarios."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from PyQt6.QtWidgets import (
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLineEdit,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from admin_centros.models.user import Centro, TipoUsuario, User


class EditUserDialog(QDialog):
    """Formulario de edición. ``resultado`` queda en ``None`` si se cancela."""

    def __init__(self, usuario: User, centros: list[Centro], parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(f"Editar usuario {usuario.cedula}")
        self.setModal(True)
        self.setMinimumWidth(600)
        self._usuario = usuario
        self._centros = list(centros)
        self.resultado: Optional[User] = None

        self._primer_nombre = QLineEdit(usuario.primer_nombre)
        self._segundo_nombre = QLineEdit(usuario.segundo_nombre)
        self._primer_apellido = QLineEdit(usuario.primer_apellido)
        self._segundo_apellido = QLineEdit(usuario.segundo_apellido)
        self._email = QLineEdit(usuario.email)
        self._telefono = QLineEdit(usuario.telefono)

        self._centro = QComboBox()
        self._centro.addItem("Sin centro", None)
        for centro in centros:
            self._centro.addItem(centro.nombre, centro.id)
        if usuario.centro_id is not None:
            indice = self._centro.findData(usuario.centro_id)
            if indice < 0:
                # Centro que no vino en el listado: se conserva tal cual
                self._centro.addItem(f"{usuario.centro_nombre} (id {usuario.centro_id})", usuario.centro_id)
                indice = self._centro.count() - 1
            self._centro.setCurrentIndex(indice)

        self._tipo = QComboBox()
        self._tipo.addItem("Sin tipo", None)
        for tipo in TipoUsuario:
            self._tipo.addItem(tipo.nombre, tipo.value)
        if usuario.tipo_usuario is not None:
            self._tipo.setCurrentIndex(self._tipo.findData(usuario.tipo_usuario.value))

        form = QFormLayout()
        form.addRow("Primer nombre", self._primer_nombre)
        form.addRow("Segundo nombre", self._segundo_nombre)
        form.addRow("Primer apellido", self._primer_apellido)
        form.addRow("Segundo apellido", self._segundo_apellido)
        form.addRow("Correo", self._email)
        form.addRow("Teléfono", self._telefono)
        form.addRow("Centro de formación", self._centro)
        form.addRow("Tipo de usuario", self._tipo)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)

        layout = QVBoxLayout()
        layout.addLayout(form)
        layout.addWidget(buttons)
        self.setLayout(layout)

    def _on_accept(self) -> None:
        primer_nombre = self._primer_nombre.text().strip()
        primer_apellido = self._primer_apellido.text().strip()
        email = self._email.text().strip()
        if not primer_nombre or not primer_apellido or not email:
            QMessageBox.warning(
                self, "Editar usuario", "Nombre, apellido y correo son obligatorios."
            )
            return

        centro_id = self._centro.currentData()
        self.resultado = replace(
            self._usuario,
            primer_nombre=primer_nombre,
            segundo_nombre=self._segundo_nombre.text().strip(),
            primer_apellido=primer_apellido,
            segundo_apellido=self._segundo_apellido.text().strip(),
            email=email,
            telefono=self._telefono.text().strip(),
            centro_id=centro_id,
            centro_nombre=next(
                (c.nombre for c in self._centros if c.id == centro_id), self._usuario.centro_nombre
            ),
            tipo_usuario=TipoUsuario.desde_valor(self._tipo.currentData()),
        )
        self.accept()

    @classmethod
    def editar(
        cls, usuario: User, centros: list[Centro], parent: QWidget | None = None
    ) -> Optional[User]:  # pragma: no cover - UI
        dialogo = cls(usuario, centros, parent)
        if dialogo.exec() != QDialog.DialogCode.Accepted:
            return None
        return dialogo.resultado


def confirmar_eliminacion(usuario: User, parent: QWidget | None = None) -> bool:  # pragma: no cover - UI
    respuesta = QMessageBox.question(
        parent,
        "Eliminar usuario",
        f"¿Eliminar a {usuario.nombre_completo} (cédula {usuario.cedula})?",
        QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        QMessageBox.StandardButton.No,
    )
    return respuesta == QMessageBox.StandardButton.Yes


__all__ = ["EditUserDialog", "confirmar_eliminacion"]
