import pytest

from src.jurnal_guru.jurnal_guru.security.hashing import (
    Sha256PasswordHasher,
    WerkzeugPasswordHasher,
    build_hasher,
)


def test_sha256_is_deterministic_and_verifies():
    hasher = Sha256PasswordHasher()
    digest = hasher.hash("Rahasia1!")

    assert digest == hasher.hash("Rahasia1!")
    assert len(digest) == 64
    assert "Rahasia1!" not in digest
    assert hasher.verify("Rahasia1!", digest) is True
    assert hasher.verify("Rahasia2!", digest) is False


def test_sha256_matches_known_digest():
    assert Sha256PasswordHasher().hash("admin123") == (
        "240be518fabd2724ddb6f04eeb1da5967448d7e831c08c8fa822809f74c720a9"
    )


def test_sha256_verify_never_raises_on_bad_input():
    hasher = Sha256PasswordHasher()

    assert hasher.verify("x", None) is False
    assert hasher.verify(None, "abc") is False


def test_werkzeug_hasher_is_salted_but_verifies():
    hasher = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")
    first = hasher.hash("Rahasia1!")
    second = hasher.hash("Rahasia1!")

    assert first != second
    assert hasher.verify("Rahasia1!", first) is True
    assert hasher.verify("salah", first) is False
    assert hasher.verify("Rahasia1!", "CHANGE_ME") is False


def test_build_hasher_by_name():
    assert isinstance(build_hasher("sha256"), Sha256PasswordHasher)
    assert isinstance(build_hasher(" Werkzeug "), WerkzeugPasswordHasher)
    with pytest.raises(ValueError):
        build_hasher("md5")


def test_sha256_verify_is_exact_match():
    hasher = Sha256PasswordHasher()
    digest = hasher.hash("Rahasia1!")

    assert hasher.verify("Rahasia1!", digest.upper()) is False
    assert hasher.verify("Rahasia1!", digest + " ") is False
    assert hasher.verify("Rahasia1!", "é" * 64) is False
