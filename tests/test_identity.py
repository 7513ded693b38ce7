"""Tests for resolving the Authorization header into an identity context."""

from datetime import UTC, datetime, timedelta

import pytest

from src.services.auth import TokenService
from src.services.identity import ANONYMOUS, Anonymous, Authenticated, IdentityResolver


@pytest.fixture
def tokens():
    return TokenService("identity-secret")


@pytest.fixture
def user(repository):
    return repository.create_user(email="ann@example.com", password_hash="x", name="Ann")


@pytest.fixture
def resolver(tokens, repository):
    return IdentityResolver(tokens, repository)


def test_valid_bearer_token_resolves_user(resolver, tokens, user):
    identity = resolver.resolve(f"Bearer {tokens.issue(user.id)}")

    assert isinstance(identity, Authenticated)
    assert identity.user.id == user.id


def test_scheme_is_case_insensitive(resolver, tokens, user):
    identity = resolver.resolve(f"bearer {tokens.issue(user.id)}")
    assert isinstance(identity, Authenticated)


@pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Token abc", "Basic abc"])
def test_missing_or_malformed_header_is_anonymous(resolver, header):
    identity = resolver.resolve(header)
    assert identity == ANONYMOUS
    assert isinstance(identity, Anonymous)


def test_invalid_token_is_anonymous(resolver):
    assert isinstance(resolver.resolve("Bearer garbage"), Anonymous)


def test_expired_token_is_anonymous(resolver, tokens, user):
    expired = tokens.issue(user.id, now=datetime.now(UTC) - timedelta(days=30))
    assert isinstance(resolver.resolve(f"Bearer {expired}"), Anonymous)


def test_token_for_deleted_user_is_anonymous(resolver, tokens, user, db):
    token = tokens.issue(user.id)
    db.delete(user)
    db.commit()

    assert isinstance(resolver.resolve(f"Bearer {token}"), Anonymous)


def test_token_signed_with_other_key_is_anonymous(resolver, user):
    forged = TokenService("someone-else").issue(user.id)
    assert isinstance(resolver.resolve(f"Bearer {forged}"), Anonymous)
