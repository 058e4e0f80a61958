"""Punto de entrada de la aplicación.

Crea los componentes de infraestructura, servicios y estado, pide el login
cuando no hay una sesión vigente y arranca la ventana principal. Al cerrar
sesión se vuelve a mostrar el diálogo de login.
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication, QDialog

from admin_centros.config import Settings
from admin_centros.core.auth import AuthService
from admin_centros.core.services import UserService
from admin_centros.core.state import AppState
from admin_centros.infrastructure.api_client import APIClient
from admin_centros.infrastructure.repositories import CentroRepository, UserRepository
from admin_centros.infrastructure.storage import QSettingsStorage, SessionStore
from admin_centros.ui.login_dialog import LoginDialog
from admin_centros.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


class Application:
    """Coordina la navegación entre el login y la ventana principal."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.store = SessionStore(
            QSettingsStorage.para_aplicacion(settings.settings_org, settings.settings_app)
        )
        self.api_client = APIClient(
            settings.api_base,
            timeout=settings.http_timeout,
            token_provider=self.store.obtener_token,
        )
        self.auth_service = AuthService(self.api_client, self.store, on_logout=self.show_login)
        self.user_service = UserService(UserRepository(self.api_client), CentroRepository(self.api_client))
        self.window: MainWindow | None = None
        self._cambiando_ventana = False

    def start(self) -> bool:  # pragma: no cover - punto de entrada interactivo
        if self.auth_service.is_authenticated():
            self.show_main_window()
            return True
        return self.show_login()

    def show_login(self) -> bool:  # pragma: no cover - punto de entrada interactivo
        if self.window is not None:
            self._cambiando_ventana = True
            self.window.close()
            self.window.deleteLater()
            self.window = None
            self._cambiando_ventana = False

        login = LoginDialog(self.auth_service)
        if login.exec() != QDialog.DialogCode.Accepted or not self.auth_service.is_authenticated():
            QApplication.quit()
            return False
        self.show_main_window()
        return True

    def show_main_window(self) -> None:  # pragma: no cover - punto de entrada interactivo
        state = AppState(tamano_pagina=self.settings.tamano_pagina)
        self.window = MainWindow(
            state=state,
            user_service=self.user_service,
            debounce_ms=self.settings.debounce_ms,
        )
        self.window.logout_requested.connect(self.auth_service.logout)
        self.window.closed.connect(self._on_window_closed)
        self.window.showMaximized()

    def _on_window_closed(self) -> None:  # pragma: no cover - punto de entrada interactivo
        if not self._cambiando_ventana:
            QApplication.quit()


def main() -> None:
    """Arranca la aplicación PyQt6 con las dependencias configuradas."""

    settings = Settings.desde_entorno()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    app.setQuitOnLastWindowClosed(False)

    application = Application(settings)
    if not application.start():
        sys.exit(0)
    sys.exit(app.exec())


if __name__ == "__main__":  # pragma: no cover - punto de entrada interactivo
    main()
