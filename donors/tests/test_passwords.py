import bcrypt
import pytest

from donors.services.passwords import hash_password, verify_password


@pytest.mark.parametrize('plaintext', ['', 'admin123', 'correct horse battery staple', 'ünïcødé-πass', 'x' * 100])
def test_hash_then_verify(plaintext):
    encoded = hash_password(plaintext)
    assert encoded != plaintext
    assert verify_password(plaintext, encoded) is True
    assert verify_password(plaintext + '!', encoded) is False


def test_hash_is_salted():
    assert hash_password('admin123') != hash_password('admin123')


def test_hash_uses_bcrypt_cost_10():
    encoded = hash_password('admin123')
    assert encoded.startswith('bcrypt_sha256$$2b$10$')


@pytest.mark.parametrize('garbage', ['', None, 'not-a-hash', 'bcrypt_sha256$nonsense', '$2b$10$short', 'pbkdf2_sha256$x'])
def test_verify_never_raises_on_malformed_hash(garbage):
    assert verify_password('admin123', garbage) is False


def test_verify_accepts_legacy_raw_bcrypt_hash():
    legacy = bcrypt.hashpw(b'12345', bcrypt.gensalt(rounds=4)).decode()
    assert verify_password('12345', legacy) is True
    assert verify_password('54321', legacy) is False
