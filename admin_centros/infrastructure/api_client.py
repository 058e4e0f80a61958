"""Cliente HTTP del backend.

Encapsula las peticiones JSON contra la API REST. Cualquier fallo de red
o respuesta HTTP de error se convierte en :class:`ApiError` para que las
capas superiores traten un único tipo de excepción.
"""

from __future__ import annotations

import http.client
import json
import logging
import socket
from typing import Any, Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error devuelto por el backend o por la conexión.

    ``status`` es el código HTTP, o ``0`` cuando no hubo respuesta.
    ``cuerpo`` contiene el JSON de error enviado por el backend, si existe.
    """

    def __init__(self, status: int, mensaje: str, cuerpo: Any = None) -> None:
        super().__init__(mensaje)
        self.status = status
        self.mensaje = mensaje
        self.cuerpo = cuerpo

    @property
    def error_backend(self) -> Optional[str]:
        """Mensaje ``error`` incluido por el backend en el cuerpo, si lo hay."""

        if isinstance(self.cuerpo, dict):
            valor = self.cuerpo.get("error")
            if valor:
                return str(valor)
        return None


class APIClient:
    """Provee acceso JSON a la API REST."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10,
        token_provider: Callable[[], Optional[str]] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token_provider = token_provider

    def get(self, path: str) -> Any:
        return self._request("GET", path)

    def post(self, path: str, payload: Any = None) -> Any:
        return self._request("POST", path, payload)

    def put(self, path: str, payload: Any = None) -> Any:
        return self._request("PUT", path, payload)

    def delete(self, path: str) -> Any:
        return self._request("DELETE", path)

    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, payload: Any = None) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = {"Accept": "application/json"}
        data = None
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"

        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug("%s %s", method, url)
        try:
            with urlopen(
                Request(url, data=data, method=method, headers=headers),
                timeout=self.timeout,
            ) as response:
                raw = response.read()
        except HTTPError as exc:
            cuerpo = self._leer_cuerpo_error(exc)
            logger.warning("%s %s respondió HTTP %s", method, url, exc.code)
            raise ApiError(exc.code, f"Error HTTP {exc.code} en {method} {path}", cuerpo) from exc
        except URLError as exc:
            if isinstance(exc.reason, socket.timeout):
                mensaje = f"La petición {method} {path} expiró por timeout."
            else:
                mensaje = f"No se pudo conectar al servicio: {exc.reason}."
            logger.error(mensaje)
            raise ApiError(0, mensaje) from exc
        except TimeoutError as exc:
            mensaje = f"La petición {method} {path} expiró por timeout."
            logger.error(mensaje)
            raise ApiError(0, mensaje) from exc
        except (OSError, http.client.HTTPException) as exc:
            mensaje = f"No se pudo completar la petición {method} {path}: {exc!r}."
            logger.error(mensaje)
            raise ApiError(0, mensaje) from exc

        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise ApiError(0, f"Respuesta de {method} {path} no es JSON válido.") from exc

    @staticmethod
    def _leer_cuerpo_error(exc: HTTPError) -> Any:
        try:
            raw = exc.read()
        except OSError:
            return None
        if not raw:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return raw.decode("utf-8", errors="replace")


__all__ = ["APIClient", "ApiError"]
