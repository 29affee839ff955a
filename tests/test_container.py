"""Tests for sealing and opening encrypted containers."""

from __future__ import annotations

import hashlib
import os
import unittest
from unittest import mock

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from csvseal.core import container
from csvseal.core.container import (
    HEADER_LENGTH,
    NONCE_LENGTH,
    TAG_LENGTH,
    Container,
    open_blob,
    seal,
)
from csvseal.core.kdf import SALT_LENGTH
from csvseal.utils import AuthenticationError, EncryptionError, MalformedContainerError

CONTACTS = b"name,email\nAlice,a@example.com\n"


def _flip_bit(blob: bytes, index: int) -> bytes:
    data = bytearray(blob)
    data[index] ^= 0x01
    return bytes(data)


class TestSealOpen(unittest.TestCase):
    def test_contacts_scenario(self) -> None:
        blob = seal(CONTACTS, "correct horse")
        self.assertEqual(len(blob), HEADER_LENGTH + len(CONTACTS))
        self.assertEqual(open_blob(blob, "correct horse"), CONTACTS)
        with self.assertRaises(AuthenticationError):
            open_blob(blob, "wrong horse")

    def test_roundtrip_empty_plaintext(self) -> None:
        blob = seal(b"", "password123")
        self.assertEqual(len(blob), HEADER_LENGTH)
        self.assertEqual(open_blob(blob, "password123"), b"")

    def test_roundtrip_binary(self) -> None:
        data = os.urandom(4096)
        self.assertEqual(open_blob(seal(data, b"\x00\xffkey"), b"\x00\xffkey"), data)

    def test_header_layout(self) -> None:
        self.assertEqual(HEADER_LENGTH, 64)
        self.assertEqual((SALT_LENGTH, NONCE_LENGTH, TAG_LENGTH), (32, 16, 16))

    def test_ciphertext_length_matches_plaintext(self) -> None:
        blob = seal(CONTACTS, "correct horse")
        parsed = Container.from_bytes(blob)
        self.assertEqual(len(parsed.ciphertext), len(CONTACTS))
        self.assertNotEqual(parsed.ciphertext, CONTACTS)

    def test_fresh_salt_and_nonce(self) -> None:
        first = seal(CONTACTS, "correct horse")
        second = seal(CONTACTS, "correct horse")
        self.assertNotEqual(first, second)
        self.assertNotEqual(first[:SALT_LENGTH], second[:SALT_LENGTH])
        self.assertNotEqual(first[SALT_LENGTH:48], second[SALT_LENGTH:48])
        self.assertEqual(open_blob(first, "correct horse"), CONTACTS)
        self.assertEqual(open_blob(second, "correct horse"), CONTACTS)

    def test_tampering_detected_in_every_region(self) -> None:
        blob = seal(CONTACTS, "correct horse")
        positions = {
            "salt": (0, SALT_LENGTH - 1),
            "nonce": (32, 47),
            "tag": (48, 63),
            "ciphertext": (64, len(blob) - 1),
        }
        for region, indexes in positions.items():
            for index in indexes:
                with self.subTest(region=region, index=index):
                    with self.assertRaises(AuthenticationError):
                        open_blob(_flip_bit(blob, index), "correct horse")

    def test_truncated_ciphertext_detected(self) -> None:
        blob = seal(CONTACTS, "correct horse")
        with self.assertRaises(AuthenticationError):
            open_blob(blob[:-1], "correct horse")

    def test_short_blob_is_malformed_without_cipher(self) -> None:
        with mock.patch.object(container, "AESGCM") as aesgcm, \
                mock.patch.object(container, "derive_key") as derive:
            for size in (0, 1, HEADER_LENGTH - 1):
                with self.subTest(size=size):
                    with self.assertRaises(MalformedContainerError):
                        open_blob(b"\x00" * size, "correct horse")
            aesgcm.assert_not_called()
            derive.assert_not_called()

    def test_header_only_blob_fails_authentication(self) -> None:
        with self.assertRaises(AuthenticationError):
            open_blob(os.urandom(HEADER_LENGTH), "correct horse")

    def test_opens_blob_built_independently(self) -> None:
        salt = os.urandom(32)
        nonce = os.urandom(16)
        key = hashlib.pbkdf2_hmac("sha256", b"correct horse", salt, 100_000, 32)
        sealed = AESGCM(key).encrypt(nonce, CONTACTS, None)
        blob = salt + nonce + sealed[-16:] + sealed[:-16]
        self.assertEqual(open_blob(blob, "correct horse"), CONTACTS)

    def test_random_source_failure(self) -> None:
        with mock.patch.object(container.os, "urandom", side_effect=OSError("no entropy")):
            with self.assertRaises(EncryptionError):
                seal(CONTACTS, "correct horse")

    def test_cipher_failure(self) -> None:
        with mock.patch.object(container, "AESGCM") as aesgcm:
            aesgcm.return_value.encrypt.side_effect = ValueError("bad nonce")
            with self.assertRaises(EncryptionError) as ctx:
                seal(CONTACTS, "correct horse")
        self.assertIsInstance(ctx.exception.__cause__, ValueError)

    def test_open_alias(self) -> None:
        self.assertIs(container.open, open_blob)


class TestContainer(unittest.TestCase):
    def test_from_bytes_fields(self) -> None:
        blob = bytes(range(64)) + b"cipher"
        parsed = Container.from_bytes(blob)
        self.assertEqual(parsed.salt, bytes(range(32)))
        self.assertEqual(parsed.nonce, bytes(range(32, 48)))
        self.assertEqual(parsed.tag, bytes(range(48, 64)))
        self.assertEqual(parsed.ciphertext, b"cipher")
        self.assertEqual(parsed.to_bytes(), blob)

    def test_rejects_wrong_field_sizes(self) -> None:
        good = {"salt": b"s" * 32, "nonce": b"n" * 16, "tag": b"t" * 16}
        for name in good:
            with self.subTest(field=name):
                fields = dict(good, **{name: good[name][:-1]})
                with self.assertRaises(MalformedContainerError):
                    Container(ciphertext=b"", **fields)


if __name__ == "__main__":
    unittest.main()
