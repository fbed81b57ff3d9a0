from __future__ import annotations

from user_service.security.passwords import DEFAULT_ROUNDS, PasswordHasher


def test_default_work_factor_is_ten_rounds():
    hasher = PasswordHasher()

    hashed = hasher.hash("Abcdef1")

    assert DEFAULT_ROUNDS == 10
    assert hashed.startswith("$2b$10$")
    assert hasher.verify("Abcdef1", hashed)


def test_hashes_are_salted():
    hasher = PasswordHasher(rounds=4)

    first = hasher.hash("Abcdef1")
    second = hasher.hash("Abcdef1")

    assert first != second
    assert hasher.verify("Abcdef1", first)
    assert hasher.verify("Abcdef1", second)


def test_verify_rejects_wrong_password_and_bad_hashes():
    hasher = PasswordHasher(rounds=4)
    hashed = hasher.hash("Abcdef1")

    assert not hasher.verify("abcdef1", hashed)
    assert not hasher.verify("Abcdef1", "plaintext-not-a-hash")
