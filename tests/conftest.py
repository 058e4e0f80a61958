"""Fixtures compartidas por las pruebas de la consola."""

import base64
import json
import os
import time

import pytest

from admin_centros.infrastructure.api_client import ApiError
from admin_centros.infrastructure.storage import MemoryStorage, SessionStore
from admin_centros.models.user import Centro, TipoUsuario, User

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def _b64url(datos: bytes) -> str:
    return base64.urlsafe_b64encode(datos).rstrip(b"=").decode("ascii")


def crear_token(payload) -> str:
    """Token de tres partes con el payload indicado (firma ficticia)."""
    cabecera = _b64url(json.dumps({"alg": "HS256", "typ": "JWT"}).encode())
    cuerpo = _b64url(json.dumps(payload).encode())
    return f"{cabecera}.{cuerpo}.firma"


@pytest.fixture
def token_vigente():
    return crear_token({"sub": "1001", "exp": int(time.time()) + 3600})


@pytest.fixture
def token_caducado():
    return crear_token({"sub": "1001", "exp": int(time.time()) - 60})


class FakeAPIClient:
    """Sustituto del cliente HTTP: registra llamadas y devuelve respuestas fijas."""

    def __init__(self):
        self.llamadas = []
        self.respuestas = {}

    def responder(self, method, path, respuesta):
        self.respuestas[(method, path)] = respuesta

    def _resolver(self, method, path, payload=None):
        self.llamadas.append((method, path, payload))
        respuesta = self.respuestas.get((method, path))
        if isinstance(respuesta, ApiError):
            raise respuesta
        return respuesta

    def get(self, path):
        return self._resolver("GET", path)

    def post(self, path, payload=None):
        return self._resolver("POST", path, payload)

    def put(self, path, payload=None):
        return self._resolver("PUT", path, payload)

    def delete(self, path):
        return self._resolver("DELETE", path)


@pytest.fixture
def api_client():
    return FakeAPIClient()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return SessionStore(storage)


@pytest.fixture
def centros():
    return [Centro(id=1, nombre="A"), Centro(id=2, nombre="B")]


@pytest.fixture
def usuarios():
    return [
        User(
            cedula="1001234",
            primer_nombre="Carla",
            primer_apellido="Pérez",
            email="carla.perez@example.com",
            centro_id=2,
            centro_nombre="B",
            tipo_usuario=TipoUsuario.ALMACEN,
        ),
        User(
            cedula="2005678",
            primer_nombre="ana",
            segundo_nombre="María",
            primer_apellido="García",
            email="Ana.Garcia@example.com",
            centro_id=1,
            centro_nombre="A",
            tipo_usuario=TipoUsuario.ADMINISTRADOR,
        ),
        User(
            cedula="3001239",
            primer_nombre="Álvaro",
            primer_apellido="Díaz",
            email="alvaro.diaz@example.com",
            centro_id=1,
            centro_nombre="A",
            tipo_usuario=TipoUsuario.INSTRUCTOR,
        ),
    ]


@pytest.fixture
def fabrica_token():
    return crear_token


@pytest.fixture(scope="session")
def qt_app():
    from PyQt6.QtWidgets import QApplication

    return QApplication.instance() or QApplication([])
