"""Sesión autenticada y lectura del token emitido por el backend."""

from __future__ import annotations

import base64
import json
import math
import time
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Sesion:
    """Mantiene la información de autenticación activa.

    Token, tipo de usuario y cédula se guardan y se borran juntos: una
    sesión nunca queda con un token de un login y la cédula de otro.
    """

    token: str
    tipo_usuario: Optional[str] = None
    cedula: Optional[str] = None

    def is_valid(self, ahora: float | None = None) -> bool:
        """Indica si el token sigue vigente según su claim ``exp``."""

        return bool(self.token) and not token_expirado(self.token, ahora)


def decodificar_payload(token: str) -> Optional[dict]:
    """Devuelve el payload JSON del token o ``None`` si está mal formado."""

    partes = token.split(".")
    if len(partes) != 3 or not partes[1]:
        return None

    segmento = partes[1]
    segmento += "=" * (-len(segmento) % 4)
    try:
        crudo = base64.urlsafe_b64decode(segmento)
        payload = json.loads(crudo.decode("utf-8"), parse_constant=_rechazar_constante)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def _rechazar_constante(nombre: str) -> float:
    # NaN e Infinity no son JSON válido
    raise ValueError(f"Constante JSON no admitida: {nombre}")


def token_expirado(token: str, ahora: float | None = None) -> bool:
    """Un token sin ``exp`` numérico o ilegible se considera expirado."""

    payload = decodificar_payload(token)
    if payload is None:
        return True

    exp = payload.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        return True
    if isinstance(exp, float) and not math.isfinite(exp):
        return True

    momento = time.time() if ahora is None else ahora
    return exp < momento


__all__ = ["Sesion", "decodificar_payload", "token_expirado"]
