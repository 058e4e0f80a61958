import http.client
import io
import json
import socket
from urllib.error import HTTPError, URLError

import pytest

from admin_centros.infrastructure import api_client as api_client_module
from admin_centros.infrastructure.api_client import APIClient, ApiError


class _Respuesta:
    def __init__(self, cuerpo: bytes):
        self._cuerpo = cuerpo

    def read(self):
        return self._cuerpo

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def peticiones(monkeypatch):
    """Intercepta ``urlopen`` y devuelve lo configurado en ``resultado``."""

    registro = {"peticiones": [], "resultado": b"{}"}

    def falso_urlopen(request, timeout):
        registro["peticiones"].append((request, timeout))
        resultado = registro["resultado"]
        if isinstance(resultado, Exception):
            raise resultado
        return _Respuesta(resultado)

    monkeypatch.setattr(api_client_module, "urlopen", falso_urlopen)
    return registro


def test_post_envia_json_y_token(peticiones):
    peticiones["resultado"] = b'{"ok": true}'
    cliente = APIClient("http://api.local/api/", timeout=5, token_provider=lambda: "tok")

    assert cliente.post("/auth/login", {"correo": "a@b.c"}) == {"ok": True}

    request, timeout = peticiones["peticiones"][0]
    assert request.full_url == "http://api.local/api/auth/login"
    assert request.get_method() == "POST"
    assert json.loads(request.data) == {"correo": "a@b.c"}
    assert request.get_header("Authorization") == "Bearer tok"
    assert request.get_header("Content-type") == "application/json"
    assert timeout == 5


def test_get_sin_token_no_envia_authorization(peticiones):
    cliente = APIClient("http://api.local/api", token_provider=lambda: None)

    cliente.get("/centros")

    request, _ = peticiones["peticiones"][0]
    assert request.get_method() == "GET"
    assert request.data is None
    assert request.get_header("Authorization") is None


def test_cuerpo_vacio_devuelve_none(peticiones):
    peticiones["resultado"] = b""

    assert APIClient("http://api.local").delete("/usuarios/1") is None


def test_error_http_incluye_status_y_cuerpo(peticiones):
    peticiones["resultado"] = HTTPError(
        "http://api.local/auth/login", 404, "Not Found", {}, io.BytesIO(b'{"error": "No existe"}')
    )

    with pytest.raises(ApiError) as excinfo:
        APIClient("http://api.local").post("/auth/login", {})

    assert excinfo.value.status == 404
    assert excinfo.value.cuerpo == {"error": "No existe"}
    assert excinfo.value.error_backend == "No existe"


def test_error_http_con_cuerpo_no_json(peticiones):
    peticiones["resultado"] = HTTPError("http://api.local/x", 500, "Error", {}, io.BytesIO(b"boom"))

    with pytest.raises(ApiError) as excinfo:
        APIClient("http://api.local").get("/x")

    assert excinfo.value.status == 500
    assert excinfo.value.cuerpo == "boom"
    assert excinfo.value.error_backend is None


@pytest.mark.parametrize(
    "error",
    [
        URLError("connection refused"),
        URLError(socket.timeout("timed out")),
        TimeoutError("timed out"),
        ConnectionResetError("reset by peer"),
        http.client.RemoteDisconnected("Remote end closed connection"),
        http.client.IncompleteRead(b""),
    ],
)
def test_fallos_de_conexion_tienen_status_cero(peticiones, error):
    peticiones["resultado"] = error

    with pytest.raises(ApiError) as excinfo:
        APIClient("http://api.local").get("/usuarios")

    assert excinfo.value.status == 0


def test_respuesta_no_json(peticiones):
    peticiones["resultado"] = b"<html>"

    with pytest.raises(ApiError, match="no es JSON"):
        APIClient("http://api.local").get("/usuarios")


def test_respuesta_con_bytes_no_utf8(peticiones):
    peticiones["resultado"] = b"\xff\xfe\xfd"

    with pytest.raises(ApiError) as excinfo:
        APIClient("http://api.local").get("/usuarios")

    assert excinfo.value.status == 0
