"""Symmetric encryption of the canonical checkout payload.

The payload is encrypted with AES-256-CBC. Both the AES key and the IV are
derived from the merchant encryption key, so the same key and plaintext
always produce the same output:

1. ``aes_key = SHA256(key)``
2. ``iv = SHA256("iv:" + key)[:16]``
3. PKCS7-pad the UTF-8 plaintext and encrypt.
4. ``mac = HMAC-SHA256(key, base64(iv) + base64(ciphertext))`` as hex.
5. Base64 the JSON object ``{"iv", "value", "mac"}``.

The result is plain ASCII and safe to place in a hidden form field.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

logger = logging.getLogger(__name__)

_BLOCK_BITS = algorithms.AES.block_size


class DecryptionError(ValueError):
    """Raised when a payload cannot be authenticated or decrypted."""


def _sha256(data: bytes) -> bytes:
    digest = hashes.Hash(hashes.SHA256())
    digest.update(data)
    return digest.finalize()


def _derive(key: str) -> tuple[bytes, bytes, bytes]:
    raw = key.encode("utf-8")
    aes_key = _sha256(raw)
    iv = _sha256(b"iv:" + raw)[:16]
    return raw, aes_key, iv


def _hmac(raw_key: bytes, iv_b64: str, value_b64: str) -> hmac.HMAC:
    h = hmac.HMAC(raw_key, hashes.SHA256())
    h.update((iv_b64 + value_b64).encode("utf-8"))
    return h


def encrypt(text: str, key: str) -> str:
    """Return the transport-safe encrypted form of ``text``."""
    raw_key, aes_key, iv = _derive(key)

    padder = padding.PKCS7(_BLOCK_BITS).padder()
    padded = padder.update(text.encode("utf-8")) + padder.finalize()
    encryptor = Cipher(algorithms.AES(aes_key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()

    iv_b64 = base64.b64encode(iv).decode("ascii")
    value_b64 = base64.b64encode(ciphertext).decode("ascii")
    mac = _hmac(raw_key, iv_b64, value_b64).finalize().hex()
    envelope = {"iv": iv_b64, "value": value_b64, "mac": mac}
    return base64.b64encode(json.dumps(envelope).encode("utf-8")).decode("ascii")


def decrypt(payload: str, key: str) -> str:
    """Reverse :func:`encrypt`. Raises :class:`DecryptionError` on any mismatch."""
    raw_key, aes_key, _ = _derive(key)
    try:
        envelope = json.loads(base64.b64decode(payload, validate=True))
        iv_b64, value_b64, mac = envelope["iv"], envelope["value"], envelope["mac"]
    except (binascii.Error, ValueError, TypeError, KeyError) as exc:
        raise DecryptionError("malformed payload") from exc
    if not all(isinstance(part, str) for part in (iv_b64, value_b64, mac)):
        raise DecryptionError("malformed payload")

    try:
        _hmac(raw_key, iv_b64, value_b64).verify(bytes.fromhex(mac))
    except (ValueError, InvalidSignature) as exc:
        logger.warning("payload MAC mismatch")
        raise DecryptionError("MAC verification failed") from exc

    try:
        iv = base64.b64decode(iv_b64, validate=True)
        ciphertext = base64.b64decode(value_b64, validate=True)
        decryptor = Cipher(algorithms.AES(aes_key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(_BLOCK_BITS).unpadder()
        return (unpadder.update(padded) + unpadder.finalize()).decode("utf-8")
    except (binascii.Error, ValueError) as exc:
        raise DecryptionError("payload could not be decrypted") from exc


__all__ = ["DecryptionError", "encrypt", "decrypt"]
