from PyQt6.QtCore import QSettings

from admin_centros.infrastructure.storage import (
    CEDULA_KEY,
    TOKEN_KEY,
    USER_TYPE_KEY,
    QSettingsStorage,
    SessionStore,
)
from admin_centros.models.session import Sesion


def test_guardar_y_cargar_sesion(store):
    store.guardar(Sesion(token="tok", tipo_usuario="Instructor", cedula="1001"))

    assert store.cargar() == Sesion(token="tok", tipo_usuario="Instructor", cedula="1001")


def test_sin_token_no_hay_sesion(store):
    store.guardar_cedula("1001")

    assert store.cargar() is None


def test_guardar_elimina_claves_vacias(store, storage):
    store.guardar(Sesion(token="viejo", tipo_usuario="Almacen", cedula="1"))
    store.guardar(Sesion(token="nuevo"))

    assert storage.obtener(TOKEN_KEY) == "nuevo"
    assert USER_TYPE_KEY not in storage
    assert CEDULA_KEY not in storage


def test_limpiar_es_idempotente(store, storage):
    store.guardar(Sesion(token="tok", tipo_usuario="Almacen", cedula="1"))

    store.limpiar()
    store.limpiar()

    for clave in (TOKEN_KEY, USER_TYPE_KEY, CEDULA_KEY):
        assert clave not in storage
    assert store.cargar() is None


def test_sin_almacenamiento_todo_es_none():
    store = SessionStore(None)

    store.guardar(Sesion(token="tok", cedula="1"))
    store.limpiar()

    assert store.cargar() is None
    assert store.obtener_token() is None


def test_qsettings_persiste_entre_instancias(tmp_path):
    ruta = str(tmp_path / "sesion.ini")
    store = SessionStore(QSettingsStorage(QSettings(ruta, QSettings.Format.IniFormat)))
    store.guardar(Sesion(token="tok", tipo_usuario="Administrador", cedula="1001"))

    otra = SessionStore(QSettingsStorage(QSettings(ruta, QSettings.Format.IniFormat)))
    assert otra.cargar() == Sesion(token="tok", tipo_usuario="Administrador", cedula="1001")

    otra.limpiar()
    tercera = SessionStore(QSettingsStorage(QSettings(ruta, QSettings.Format.IniFormat)))
    assert tercera.obtener_token() is None
    assert tercera.obtener_cedula() is None
