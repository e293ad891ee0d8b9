"""
Confession Board — User Service Unit Tests
===========================================

What:  Registration and login logic with a mocked session and hasher.

What we test:
    ✅ Register stores the hash (never the plaintext) and commits
    ✅ Login outcomes: unknown username, wrong password, success
    ✅ Failures become DatabaseError (plain text for register, JSON for login)
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from confession_board.exceptions import AuthenticationError, DatabaseError
from confession_board.services.user_service import UserService


def make_hasher(hashed="$2b$04$hashed", valid=True):
    hasher = MagicMock()
    hasher.hash_async = AsyncMock(return_value=hashed)
    hasher.verify_async = AsyncMock(return_value=valid)
    return hasher


class TestRegister:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_register_success(self, mock_db_session, sample_user_row):
        result = MagicMock()
        result.scalar_one.return_value = SimpleNamespace(**sample_user_row)
        mock_db_session.execute.return_value = result
        hasher = make_hasher(hashed=sample_user_row["password"])

        user = await self.service.register(mock_db_session, hasher, "alice", "s3cret")

        assert user.username == "alice"
        assert user.password == sample_user_row["password"]
        hasher.hash_async.assert_awaited_once_with("s3cret")
        statement = mock_db_session.execute.await_args.args[0]
        params = statement.compile().params
        assert params["password"] == sample_user_row["password"]
        assert "s3cret" not in params.values()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_register_constraint_violation(self, mock_db_session):
        mock_db_session.execute.side_effect = IntegrityError("INSERT", {}, Exception("duplicate"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.register(mock_db_session, make_hasher(), "alice", "pw")

        assert exc_info.value.plain_text is True
        assert exc_info.value.message == "An error occurred. Check server logs."

    @pytest.mark.asyncio
    async def test_register_hash_failure(self, mock_db_session):
        hasher = make_hasher()
        hasher.hash_async.side_effect = TypeError("secret must be unicode or bytes")

        with pytest.raises(DatabaseError):
            await self.service.register(mock_db_session, hasher, "alice", None)

        mock_db_session.execute.assert_not_awaited()


class TestLogin:

    def setup_method(self):
        self.service = UserService()

    def _lookup_returns(self, session, user):
        result = MagicMock()
        result.scalars.return_value.first.return_value = user
        session.execute.return_value = result

    @pytest.mark.asyncio
    async def test_unknown_username(self, mock_db_session):
        self._lookup_returns(mock_db_session, None)
        hasher = make_hasher()

        with pytest.raises(AuthenticationError, match="Invalid username"):
            await self.service.login(mock_db_session, hasher, "ghost", "pw")

        hasher.verify_async.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_password(self, mock_db_session, sample_user_row):
        self._lookup_returns(mock_db_session, SimpleNamespace(**sample_user_row))

        with pytest.raises(AuthenticationError, match="Authentication failed"):
            await self.service.login(mock_db_session, make_hasher(valid=False), "alice", "nope")

    @pytest.mark.asyncio
    async def test_success_returns_row(self, mock_db_session, sample_user_row):
        self._lookup_returns(mock_db_session, SimpleNamespace(**sample_user_row))
        hasher = make_hasher(valid=True)

        user = await self.service.login(mock_db_session, hasher, "alice", "s3cret")

        assert user.model_dump() == sample_user_row
        hasher.verify_async.assert_awaited_once_with("s3cret", sample_user_row["password"])

    @pytest.mark.asyncio
    async def test_lookup_failure_is_json_error(self, mock_db_session):
        mock_db_session.execute.side_effect = RuntimeError("connection reset")

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.login(mock_db_session, make_hasher(), "alice", "pw")

        assert exc_info.value.plain_text is False
