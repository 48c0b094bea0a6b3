from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from gamestore.core.exceptions import UnauthorizedException
from gamestore.core.security import PasswordHasher, TokenIssuer


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def issuer(clock):
    return TokenIssuer("signing-key", lifetime=timedelta(hours=1), clock=clock)


def test_hash_is_not_the_password_and_verifies():
    hasher = PasswordHasher(rounds=4)
    hashed = hasher.hash("hunter2")

    assert hashed != "hunter2"
    assert hashed.startswith("$2")
    assert hasher.verify("hunter2", hashed)
    assert not hasher.verify("hunter3", hashed)


def test_hash_uses_configured_work_factor():
    hashed = PasswordHasher(rounds=5).hash("pw")
    assert hashed.split("$")[2] == "05"


def test_verify_against_corrupt_hash_returns_false():
    assert PasswordHasher(rounds=4).verify("pw", "not-a-bcrypt-hash") is False


def test_issue_and_verify_roundtrip(issuer, clock):
    token = issuer.issue(42, email="gamer@gamestore.io")
    claims = issuer.verify(token)

    assert claims.user_id == 42
    assert claims.email == "gamer@gamestore.io"
    assert claims.exp - claims.iat == 3600
    assert claims.iat == int(clock().timestamp())


def test_email_claim_is_optional(issuer):
    claims = issuer.verify(issuer.issue(7))
    assert claims.user_id == 7
    assert claims.email is None


def test_token_valid_one_second_before_expiry(issuer, clock):
    token = issuer.issue(1)
    clock.advance(hours=1, seconds=-1)
    assert issuer.verify(token).user_id == 1


def test_token_rejected_after_expiry(issuer, clock):
    token = issuer.issue(1)
    clock.advance(hours=1, seconds=1)
    with pytest.raises(UnauthorizedException):
        issuer.verify(token)


def test_token_signed_with_other_key_is_rejected(issuer, clock):
    forged = TokenIssuer("other-key", clock=clock).issue(1)
    with pytest.raises(UnauthorizedException):
        issuer.verify(forged)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_tokens_are_rejected(issuer, token):
    with pytest.raises(UnauthorizedException) as exc_info:
        issuer.verify(token)
    assert exc_info.value.status_code == 401


def test_token_without_numeric_subject_is_rejected(issuer, clock):
    now = int(clock().timestamp())
    token = jwt.encode(
        {"sub": "not-a-number", "iat": now, "exp": now + 60}, "signing-key", algorithm="HS256"
    )
    with pytest.raises(UnauthorizedException):
        issuer.verify(token)


def test_issuer_requires_secret():
    with pytest.raises(ValueError):
        TokenIssuer("")
