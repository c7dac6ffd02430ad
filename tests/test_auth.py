"""
Tests for signup, login and the active session
"""

import hashlib
import pytest

from marketplace.auth import hash_password, hash_password_sync
from marketplace.db import StoreKeys
from marketplace.errors import DuplicateEmailError, InvalidCredentialsError


class TestPasswordDigest:
    """Tests for the password digest."""

    def test_hex_sha256(self):
        assert hash_password_sync("secret") == hashlib.sha256(b"secret").hexdigest()

    @pytest.mark.asyncio
    async def test_deterministic(self):
        assert await hash_password("p@ss") == await hash_password("p@ss")
        assert await hash_password("p@ss") != await hash_password("p@ss2")


class TestSignup:
    """Tests for user registration."""

    @pytest.mark.asyncio
    async def test_signup_stores_user(self, identity, store, sample_user):
        user = await identity.signup(**sample_user)

        assert user.id.startswith("user_")
        assert user.email == "test@example.com"
        assert user.password_hash == hash_password_sync("s3cret-pass")

        stored = await store.read(StoreKeys.USERS)
        assert len(stored) == 1
        assert stored[0]["id"] == user.id
        assert "s3cret-pass" not in str(stored)

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, identity, sample_user):
        await identity.signup(**sample_user)

        with pytest.raises(DuplicateEmailError) as exc_info:
            await identity.signup(name="Someone Else", email=sample_user["email"], password="other")

        assert exc_info.value.code == "DUPLICATE_EMAIL"
        assert len(await identity.list_users()) == 1

    @pytest.mark.asyncio
    async def test_email_match_is_case_sensitive(self, identity, sample_user):
        await identity.signup(**sample_user)
        await identity.signup(name="Upper", email="TEST@example.com", password="x")

        assert len(await identity.list_users()) == 2

    @pytest.mark.asyncio
    async def test_signup_does_not_log_in(self, identity, sample_user):
        await identity.signup(**sample_user)
        assert await identity.current_user() is None


class TestLogin:
    """Tests for login, logout and current_user."""

    @pytest.mark.asyncio
    async def test_login_opens_session(self, identity, sample_user):
        user = await identity.signup(**sample_user)

        logged_in = await identity.login(sample_user["email"], sample_user["password"])
        session = await identity.get_session()

        assert logged_in.id == user.id
        assert session.user_id == user.id
        assert (await identity.current_user()).id == user.id

    @pytest.mark.asyncio
    async def test_wrong_password(self, identity, sample_user):
        await identity.signup(**sample_user)

        with pytest.raises(InvalidCredentialsError):
            await identity.login(sample_user["email"], "wrong")
        assert await identity.get_session() is None

    @pytest.mark.asyncio
    async def test_unknown_email(self, identity):
        with pytest.raises(InvalidCredentialsError):
            await identity.login("nobody@example.com", "x")

    @pytest.mark.asyncio
    async def test_login_replaces_previous_session(self, identity):
        first = await identity.signup("A", "a@example.com", "pa")
        second = await identity.signup("B", "b@example.com", "pb")

        await identity.login("a@example.com", "pa")
        await identity.login("b@example.com", "pb")

        current = await identity.current_user()
        assert current.id == second.id
        assert current.id != first.id

    @pytest.mark.asyncio
    async def test_logout_keeps_cart(self, identity, cart, sample_user):
        await identity.signup(**sample_user)
        await identity.login(sample_user["email"], sample_user["password"])
        await cart.add("prod_1", 2)

        await identity.logout()

        assert await identity.current_user() is None
        assert len(await cart.list()) == 1

    @pytest.mark.asyncio
    async def test_logout_without_session(self, identity):
        await identity.logout()
        assert await identity.current_user() is None

    @pytest.mark.asyncio
    async def test_dangling_session_is_logged_out(self, identity, store, sample_user):
        await identity.signup(**sample_user)
        await identity.login(sample_user["email"], sample_user["password"])

        await store.write(StoreKeys.USERS, [])

        assert await identity.current_user() is None

    @pytest.mark.asyncio
    async def test_corrupt_session_is_logged_out(self, identity, store):
        await store.set_raw(StoreKeys.SESSION, "{broken")
        assert await identity.current_user() is None

    @pytest.mark.asyncio
    async def test_get_user(self, identity, sample_user):
        user = await identity.signup(**sample_user)

        assert (await identity.get_user(user.id)).email == sample_user["email"]
        assert await identity.get_user("user_missing") is None

    def test_public_dict_hides_hash(self):
        from marketplace.models import User

        user = User(name="N", email="n@example.com", password_hash="abc")
        data = user.public_dict()

        assert "password_hash" not in data
        assert data["email"] == "n@example.com"
