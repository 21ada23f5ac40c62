import base64
import json
import os
import sys

import pytest
from cryptography.hazmat.primitives import hashes, hmac

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
import crypto

PLAINTEXT = "amount::100.00;currency::INR;order_no::ORD1"


def test_round_trip():
    encrypted = crypto.encrypt(PLAINTEXT, "KEY1")
    assert crypto.decrypt(encrypted, "KEY1") == PLAINTEXT


def test_round_trip_unicode():
    text = "customer_name::寵物名牌;order_no::ORD1"
    assert crypto.decrypt(crypto.encrypt(text, "KEY1"), "KEY1") == text


def test_encrypt_is_deterministic_and_key_dependent():
    assert crypto.encrypt(PLAINTEXT, "KEY1") == crypto.encrypt(PLAINTEXT, "KEY1")
    assert crypto.encrypt(PLAINTEXT, "KEY1") != crypto.encrypt(PLAINTEXT, "KEY2")


def test_output_is_ascii_envelope():
    encrypted = crypto.encrypt(PLAINTEXT, "KEY1")
    envelope = json.loads(base64.b64decode(encrypted))
    assert set(envelope) == {"iv", "value", "mac"}
    assert len(base64.b64decode(envelope["iv"])) == 16
    assert PLAINTEXT not in encrypted


def test_decrypt_with_wrong_key_fails():
    encrypted = crypto.encrypt(PLAINTEXT, "KEY1")
    with pytest.raises(crypto.DecryptionError):
        crypto.decrypt(encrypted, "KEY2")


def test_decrypt_tampered_value_fails():
    envelope = json.loads(base64.b64decode(crypto.encrypt(PLAINTEXT, "KEY1")))
    envelope["value"] = base64.b64encode(b"\x00" * 16).decode()
    tampered = base64.b64encode(json.dumps(envelope).encode()).decode()
    with pytest.raises(crypto.DecryptionError):
        crypto.decrypt(tampered, "KEY1")


@pytest.mark.parametrize("payload", ["not base64!", base64.b64encode(b"[1, 2]").decode(), ""])
def test_decrypt_malformed_payload(payload):
    with pytest.raises(crypto.DecryptionError):
        crypto.decrypt(payload, "KEY1")


def test_mac_is_hmac_sha256_over_iv_and_value():
    envelope = json.loads(base64.b64decode(crypto.encrypt(PLAINTEXT, "KEY1")))
    h = hmac.HMAC(b"KEY1", hashes.SHA256())
    h.update((envelope["iv"] + envelope["value"]).encode())
    assert envelope["mac"] == h.finalize().hex()


def test_key_and_iv_derived_from_sha256():
    digest = hashes.Hash(hashes.SHA256())
    digest.update(b"iv:KEY1")
    envelope = json.loads(base64.b64decode(crypto.encrypt(PLAINTEXT, "KEY1")))
    assert base64.b64decode(envelope["iv"]) == digest.finalize()[:16]


def test_decrypt_non_hex_mac_fails():
    envelope = json.loads(base64.b64decode(crypto.encrypt(PLAINTEXT, "KEY1")))
    envelope["mac"] = "not-hex"
    tampered = base64.b64encode(json.dumps(envelope).encode()).decode()
    with pytest.raises(crypto.DecryptionError):
        crypto.decrypt(tampered, "KEY1")
