import pytest

from admin_centros.core.auth import (
    MENSAJE_ERROR_DESCONOCIDO,
    MENSAJE_ERROR_GENERICO,
    MENSAJE_LOGIN_FALLIDO,
    AuthError,
    AuthService,
    mensaje_error_login,
)
from admin_centros.infrastructure import api_client as api_client_module
from admin_centros.infrastructure.api_client import APIClient, ApiError
from admin_centros.infrastructure.storage import CEDULA_KEY, TOKEN_KEY, USER_TYPE_KEY, SessionStore


@pytest.fixture
def navegaciones():
    return []


@pytest.fixture
def auth(api_client, store, navegaciones):
    return AuthService(api_client, store, on_logout=lambda: navegaciones.append("/login"))


def test_login_persiste_token_tipo_y_cedula(auth, api_client, storage, token_vigente):
    respuesta = {"token": token_vigente, "userType": "Administrador", "cedula": "1001"}
    api_client.responder("POST", "/auth/login", respuesta)

    assert auth.login("ana@example.com", "secreta") == respuesta
    assert api_client.llamadas == [
        ("POST", "/auth/login", {"correo": "ana@example.com", "contrasena": "secreta"})
    ]
    assert storage.obtener(TOKEN_KEY) == token_vigente
    assert storage.obtener(USER_TYPE_KEY) == "Administrador"
    assert storage.obtener(CEDULA_KEY) == "1001"
    assert auth.is_authenticated() is True


def test_login_reemplaza_la_sesion_anterior_completa(auth, api_client, store, storage, token_vigente):
    store.guardar_cedula("9999")
    store.guardar_tipo_usuario("Instructor")
    api_client.responder("POST", "/auth/login", {"token": token_vigente})

    auth.login("ana@example.com", "secreta")

    assert storage.obtener(TOKEN_KEY) == token_vigente
    assert USER_TYPE_KEY not in storage
    assert CEDULA_KEY not in storage


def test_login_sin_token_falla_aunque_http_responda_ok(auth, api_client, storage):
    api_client.responder("POST", "/auth/login", {"userType": "Administrador"})

    with pytest.raises(AuthError) as excinfo:
        auth.login("ana@example.com", "secreta")

    assert str(excinfo.value) == MENSAJE_LOGIN_FALLIDO
    assert TOKEN_KEY not in storage


def test_login_404_usa_mensaje_del_backend(auth, api_client):
    api_client.responder(
        "POST", "/auth/login", ApiError(404, "Not Found", {"error": "El correo no existe"})
    )

    with pytest.raises(AuthError, match="El correo no existe"):
        auth.login("nadie@example.com", "x")


def test_login_404_sin_mensaje_usa_texto_fijo(auth, api_client):
    api_client.responder("POST", "/auth/login", ApiError(404, "Not Found"))

    with pytest.raises(AuthError, match="Correo no registrado"):
        auth.login("nadie@example.com", "x")


def test_login_con_conexion_cortada_da_mensaje_desconocido(monkeypatch, store, storage):
    def urlopen_cortado(request, timeout):
        raise ConnectionResetError("reset by peer")

    monkeypatch.setattr(api_client_module, "urlopen", urlopen_cortado)
    auth = AuthService(APIClient("http://api.local/api"), store)

    with pytest.raises(AuthError) as excinfo:
        auth.login("ana@example.com", "secreta")

    assert str(excinfo.value) == MENSAJE_ERROR_DESCONOCIDO
    assert TOKEN_KEY not in storage


@pytest.mark.parametrize(
    ("status", "cuerpo", "esperado"),
    [
        (400, {"error": "Contraseña incorrecta"}, "Contraseña incorrecta"),
        (400, None, "Usuario o contraseña incorrectos."),
        (401, {"error": "ignorado"}, "Acceso no autorizado."),
        (500, {"error": "stack trace"}, "Error en el servidor. Por favor, inténtalo de nuevo más tarde."),
        (503, None, MENSAJE_ERROR_DESCONOCIDO),
        (0, None, MENSAJE_ERROR_DESCONOCIDO),
    ],
)
def test_mensaje_error_login_por_codigo(status, cuerpo, esperado):
    assert mensaje_error_login(ApiError(status, "fallo", cuerpo)) == esperado


def test_logout_borra_las_tres_claves_y_navega_al_login(
    auth, api_client, store, storage, navegaciones, token_vigente
):
    store.guardar_token(token_vigente)
    store.guardar_tipo_usuario("Almacen")
    store.guardar_cedula("1001")

    auth.logout()
    auth.logout()

    for clave in (TOKEN_KEY, USER_TYPE_KEY, CEDULA_KEY):
        assert clave not in storage
    assert navegaciones == ["/login", "/login"]
    assert auth.is_authenticated() is False
    assert api_client.llamadas == []


def test_no_autenticado_sin_token(auth):
    assert auth.is_authenticated() is False


def test_no_autenticado_con_token_expirado(auth, token_caducado):
    auth.set_token(token_caducado)

    assert auth.is_authenticated() is False


def test_no_autenticado_con_token_mal_formado(auth):
    auth.set_token("esto-no-es-un-token")

    assert auth.is_authenticated() is False


def test_forgot_password_envia_correo(auth, api_client):
    api_client.responder("POST", "/auth/forgot-password", {"message": "ok"})

    assert auth.forgot_password("ana@example.com") == {"message": "ok"}
    assert api_client.llamadas == [("POST", "/auth/forgot-password", {"correo": "ana@example.com"})]


def test_reset_password_envia_token_y_nueva_contrasena(auth, api_client):
    auth.reset_password("tok-123", "nueva")

    assert api_client.llamadas == [
        ("POST", "/auth/reset-password", {"token": "tok-123", "newPassword": "nueva"})
    ]


@pytest.mark.parametrize("operacion", ["forgot", "reset"])
def test_errores_de_recuperacion_son_genericos(auth, api_client, operacion):
    api_client.responder("POST", "/auth/forgot-password", ApiError(404, "x", {"error": "detalle"}))
    api_client.responder("POST", "/auth/reset-password", ApiError(500, "x"))

    with pytest.raises(AuthError) as excinfo:
        if operacion == "forgot":
            auth.forgot_password("ana@example.com")
        else:
            auth.reset_password("tok", "nueva")

    assert str(excinfo.value) == MENSAJE_ERROR_GENERICO


def test_getters_devuelven_none_sin_almacenamiento(api_client):
    auth = AuthService(api_client, SessionStore(None))

    auth.set_token("abc")
    auth.set_cedula("1001")

    assert auth.get_token() is None
    assert auth.get_user_type() is None
    assert auth.get_cedula() is None
    assert auth.is_authenticated() is False


def test_setters_y_getters_individuales(auth):
    auth.set_user_type("Instructor")
    auth.set_cedula("42")

    assert auth.get_user_type() == "Instructor"
    assert auth.get_cedula() == "42"

    auth.clear_user_type()
    auth.clear_cedula()

    assert auth.get_user_type() is None
    assert auth.get_cedula() is None


def test_sesion_actual_refleja_el_almacenamiento(auth, api_client, token_vigente):
    assert auth.sesion_actual() is None

    api_client.responder(
        "POST", "/auth/login", {"token": token_vigente, "userType": "Almacen", "cedula": "77"}
    )
    auth.login("ana@example.com", "secreta")

    sesion = auth.sesion_actual()
    assert (sesion.token, sesion.tipo_usuario, sesion.cedula) == (token_vigente, "Almacen", "77")
