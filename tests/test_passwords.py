from __future__ import annotations

import pytest

from jobly.auth.passwords import PasswordHasher


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


def test_hash_is_salted_and_verifies(hasher: PasswordHasher) -> None:
    first = hasher.hash("hunter22")
    second = hasher.hash("hunter22")
    assert first != second
    assert first.startswith("$2b$04$")
    assert hasher.verify("hunter22", first)
    assert hasher.verify("hunter22", second)


@pytest.mark.parametrize("attempt", ["hunter23", "Hunter22", "", "hunter22 "])
def test_other_plaintext_does_not_verify(hasher: PasswordHasher, attempt: str) -> None:
    assert not hasher.verify(attempt, hasher.hash("hunter22"))


@pytest.mark.parametrize("digest", ["", "not-a-hash", "$2b$04$short", "$2b$99$" + "a" * 53])
def test_malformed_digest_is_a_failed_verification(hasher: PasswordHasher, digest: str) -> None:
    assert hasher.verify("hunter22", digest) is False


def test_work_factor_is_configurable() -> None:
    assert PasswordHasher(rounds=5).hash("pw").startswith("$2b$05$")
    assert PasswordHasher().rounds == 14


def test_long_passwords_hash_on_their_first_72_bytes(hasher: PasswordHasher) -> None:
    long_pw = "x" * 100
    assert hasher.verify(long_pw, hasher.hash(long_pw))


def test_decoy_digest_is_cached(hasher: PasswordHasher) -> None:
    assert hasher.decoy_digest is hasher.decoy_digest
    assert not hasher.verify("anything", hasher.decoy_digest)
