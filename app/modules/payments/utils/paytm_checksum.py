# -*- coding: utf-8 -*-
"""
app/modules/payments/utils/paytm_checksum.py

Checksum de Paytm para formularios de redirect firmados.

Algoritmo:
    1. Serializar el payload (str tal cual; mapping -> valores unidos con "|")
    2. Salt de 4 caracteres (base64 de 3 bytes aleatorios)
    3. hash = sha256_hex(serializado + "|" + salt) + salt
    4. AES-128-CBC, PKCS#7, IV fijo de Paytm, llave = secreto rellenado a 16
    5. token = base64(ciphertext)

El IV fijo es parte del protocolo de Paytm; no cambiarlo.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
import secrets
from typing import Any, Mapping, Optional, Union

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from app.modules.payments.exceptions import SigningError

logger = logging.getLogger(__name__)

PAYTM_IV = b"@@@@&&&&####$$$$"
SEPARATOR = "|"
SALT_LENGTH = 4
KEY_LENGTH = 16

Payload = Union[str, Mapping[str, Any]]


# ---------------------------------------------------------------------------- #
# Serialización
# ---------------------------------------------------------------------------- #
def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def serialize_params(params: Payload) -> str:
    if isinstance(params, str):
        return params
    if isinstance(params, Mapping):
        return SEPARATOR.join(_stringify(v) for v in params.values())
    raise SigningError(f"Unsupported payload type: {type(params).__name__}")


# ---------------------------------------------------------------------------- #
# Primitivas
# ---------------------------------------------------------------------------- #
def generate_salt() -> str:
    return base64.b64encode(secrets.token_bytes(3)).decode("ascii")


def calculate_hash(params_string: str, salt: str) -> str:
    digest = hashlib.sha256(f"{params_string}{SEPARATOR}{salt}".encode("utf-8")).hexdigest()
    return digest + salt


def derive_key(secret: str) -> bytes:
    """Secreto rellenado con NUL / truncado a 16 caracteres, luego UTF-8."""
    return secret.ljust(KEY_LENGTH, "\0")[:KEY_LENGTH].encode("utf-8")


def _cipher(secret: str) -> Cipher:
    try:
        return Cipher(algorithms.AES(derive_key(secret)), modes.CBC(PAYTM_IV))
    except (ValueError, TypeError, AttributeError, UnicodeError) as exc:
        raise SigningError("Invalid signing key") from exc


def encrypt(plain: str, secret: str) -> str:
    encryptor = _cipher(secret).encryptor()
    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    try:
        padded = padder.update(plain.encode("utf-8")) + padder.finalize()
    except UnicodeError as exc:
        raise SigningError("Payload is not encodable") from exc
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return base64.b64encode(ciphertext).decode("ascii")


def decrypt(token: str, secret: str) -> str:
    decryptor = _cipher(secret).decryptor()
    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    try:
        ciphertext = base64.b64decode(token, validate=True)
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        return (unpadder.update(padded) + unpadder.finalize()).decode("utf-8")
    except (ValueError, UnicodeError) as exc:
        raise SigningError("Checksum cannot be decrypted") from exc


# ---------------------------------------------------------------------------- #
# API pública
# ---------------------------------------------------------------------------- #
def generate_signature(params: Payload, secret: str, *, salt: Optional[str] = None) -> str:
    """
    Genera el checksum de `params` con la llave de merchant.

    Raises:
        SigningError: llave de longitud inválida o payload no serializable
    """
    if not isinstance(secret, str):
        raise SigningError("Signing key must be a string")
    params_string = serialize_params(params)
    salt = salt if salt is not None else generate_salt()
    return encrypt(calculate_hash(params_string, salt), secret)


def verify_signature(params: Payload, secret: str, checksum: str) -> bool:
    """True si `checksum` corresponde a `params` bajo `secret`."""
    try:
        hash_with_salt = decrypt(checksum, secret)
    except SigningError:
        logger.debug("paytm_checksum_undecryptable")
        return False
    if len(hash_with_salt) <= SALT_LENGTH:
        return False
    salt = hash_with_salt[-SALT_LENGTH:]
    expected = calculate_hash(serialize_params(params), salt)
    return hmac.compare_digest(expected, hash_with_salt)


__all__ = [
    "PAYTM_IV",
    "derive_key",
    "generate_salt",
    "generate_signature",
    "serialize_params",
    "verify_signature",
]
# Fin del archivo app/modules/payments/utils/paytm_checksum.py
