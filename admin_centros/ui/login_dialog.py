"""Diálogo de inicio de sesión contra ``/api/auth/login``."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
)

from admin_centros.core.auth import AuthError, AuthService

logger = logging.getLogger(__name__)


class LoginDialog(QDialog):
    """Pantalla modal de login; acepta solo cuando hay sesión guardada."""

    def __init__(self, auth_service: AuthService, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Autenticación requerida")
        self.setModal(True)
        self._auth_service = auth_service

        self._lbl_status = QLabel("")
        self._lbl_status.setObjectName("statusLabel")
        self._lbl_status.setWordWrap(True)

        self._input_email = QLineEdit()
        self._input_email.setPlaceholderText("correo@ejemplo.com")

        self._input_password = QLineEdit()
        self._input_password.setPlaceholderText("contraseña")
        self._input_password.setEchoMode(QLineEdit.EchoMode.Password)
        self._input_password.returnPressed.connect(self._on_submit)

        self._btn_login = QPushButton("Ingresar")
        self._btn_login.setDefault(True)
        self._btn_login.clicked.connect(self._on_submit)

        self._btn_cancel = QPushButton("Cancelar")
        self._btn_cancel.setObjectName("secondaryButton")
        self._btn_cancel.clicked.connect(self.reject)

        self._btn_forgot = QPushButton("¿Olvidaste tu contraseña?")
        self._btn_forgot.setObjectName("linkButton")
        self._btn_forgot.setFlat(True)
        self._btn_forgot.clicked.connect(self._on_forgot_password)

        self._build_ui()
        self._input_email.setFocus()

    def _build_ui(self) -> None:  # pragma: no cover - UI
        title = QLabel("Consola de administración")
        title.setObjectName("titleLabel")
        subtitle = QLabel("Ingresa con tu correo institucional")
        subtitle.setObjectName("subtitleLabel")

        form = QFormLayout()
        form.setLabelAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        form.addRow("Correo", self._input_email)
        form.addRow("Contraseña", self._input_password)

        buttons = QDialogButtonBox()
        buttons.addButton(self._btn_login, QDialogButtonBox.ButtonRole.AcceptRole)
        buttons.addButton(self._btn_cancel, QDialogButtonBox.ButtonRole.RejectRole)

        forgot_row = QHBoxLayout()
        forgot_row.addStretch(1)
        forgot_row.addWidget(self._btn_forgot)

        layout = QVBoxLayout()
        layout.setSpacing(14)
        layout.setContentsMargins(20, 18, 20, 16)
        layout.addWidget(title)
        layout.addWidget(subtitle)
        layout.addLayout(form)
        layout.addLayout(forgot_row)
        layout.addWidget(buttons)
        layout.addWidget(self._lbl_status)

        self.setLayout(layout)
        self.setMinimumWidth(420)
        self._apply_styles()

    def _on_submit(self) -> None:  # pragma: no cover - UI
        correo = self._input_email.text().strip()
        contrasena = self._input_password.text()

        if not correo or not contrasena:
            self._show_status("Correo y contraseña son obligatorios.")
            return

        self._btn_login.setEnabled(False)
        try:
            self._auth_service.login(correo, contrasena)
        except AuthError as exc:
            self._show_status(str(exc))
            return
        finally:
            self._btn_login.setEnabled(True)

        self._input_password.clear()
        self.accept()

    def _on_forgot_password(self) -> None:  # pragma: no cover - UI
        correo, aceptado = QInputDialog.getText(
            self,
            "Recuperar contraseña",
            "Correo registrado:",
            text=self._input_email.text().strip(),
        )
        correo = correo.strip()
        if not aceptado or not correo:
            return

        try:
            self._auth_service.forgot_password(correo)
        except AuthError as exc:
            self._show_status(str(exc))
            return
        QMessageBox.information(
            self,
            "Recuperar contraseña",
            "Si el correo está registrado recibirás instrucciones para restablecer la contraseña.",
        )

    def _show_status(self, message: str) -> None:  # pragma: no cover - UI
        self._lbl_status.setText(message)
        self._lbl_status.setToolTip(message)
        self._lbl_status.setVisible(bool(message))
        if message:
            QMessageBox.warning(self, "Inicio de sesión", message)

    def _apply_styles(self) -> None:  # pragma: no cover - UI
        self.setStyleSheet(
            """
            QDialog {
                background-color: #f0fdf4;
                color: #14532d;
                font-family: 'Segoe UI', 'Open Sans', sans-serif;
                font-size: 9pt;
            }
            QLineEdit {
                border: 1px solid #86efac;
                border-radius: 8px;
                padding: 8px 10px;
                background: #fff;
            }
            QLineEdit:focus {
                border: 2px solid #16a34a;
            }
            QPushButton {
                background: #16a34a;
                color: #fff;
                border: none;
                border-radius: 10px;
                padding: 9px 16px;
                font-weight: 700;
            }
            QPushButton:hover {
                background: #15803d;
            }
            QPushButton:disabled {
                background: #bbf7d0;
                color: #166534;
            }
            #secondaryButton {
                background: #e2e8f0;
                color: #1e293b;
            }
            #linkButton {
                background: transparent;
                color: #15803d;
                font-weight: 500;
                text-decoration: underline;
                padding: 0;
            }
            #titleLabel {
                font-size: 15pt;
                font-weight: 700;
            }
            #subtitleLabel {
                color: #166534;
            }
            #statusLabel {
                color: #b91c1c;
                font-weight: 600;
            }
            """
        )


__all__ = ["LoginDialog"]
