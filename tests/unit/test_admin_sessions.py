"""管理员会话单元测试。

测试覆盖：
- 登录凭据校验
- 会话校验与 7 天滑动过期
- 登出幂等
- 格式错误 / 损坏的会话记录
"""

from datetime import timedelta

import pytest

from src.core.infrastructure.redis.keys import RedisKeys
from src.modules.auth.application.session_service import (
    SessionManager,
    generate_session_id,
    is_well_formed_session_id,
)
from src.modules.auth.domain.exceptions import (
    InvalidCredentialsError,
    SessionInvalidError,
)
from src.modules.auth.infrastructure.mappers import AdminSessionMapper
from src.modules.auth.infrastructure.repositories import KVAdminSessionRepository

pytestmark = pytest.mark.anyio

SEVEN_DAYS = 7 * 24 * 3600


@pytest.fixture
def session_repository(kv) -> KVAdminSessionRepository:
    return KVAdminSessionRepository(kv, AdminSessionMapper())


@pytest.fixture
def manager(session_repository, clock) -> SessionManager:
    return SessionManager(
        session_repository,
        admin_username="admin",
        admin_password="admin123",
        ttl=timedelta(days=7),
        clock=clock,
    )


class TestSessionIds:
    """会话 id 生成与格式校验。"""

    def test_generated_ids_are_unique_and_well_formed(self):
        ids = {generate_session_id() for _ in range(50)}
        assert len(ids) == 50
        assert all(is_well_formed_session_id(i) for i in ids)

    @pytest.mark.parametrize(
        "session_id",
        [None, "", "short", "a" * 129, "abc def ghi jkl mno", "x" * 20 + ";", "../" * 8],
    )
    def test_malformed_ids(self, session_id):
        assert is_well_formed_session_id(session_id) is False


class TestLogin:
    """登录测试。"""

    async def test_login_creates_session_with_ttl(self, manager, kv, clock):
        session_id = await manager.login("admin", "admin123", user_agent="pytest")

        key = RedisKeys.session(session_id)
        assert kv.ttls[key] == SEVEN_DAYS
        assert await kv.get_json(key) == {
            "username": "admin",
            "loginTime": int(clock().timestamp() * 1000),
            "userAgent": "pytest",
        }

    @pytest.mark.parametrize(
        ("username", "password"),
        [("admin", "wrong"), ("root", "admin123"), ("", ""), ("Admin", "admin123")],
    )
    async def test_wrong_credentials(self, manager, kv, username, password):
        """用户名或密码任一错误都拒绝，且不创建会话。"""
        with pytest.raises(InvalidCredentialsError):
            await manager.login(username, password)
        assert kv.store == {}

    async def test_each_login_gets_a_new_session(self, manager):
        first = await manager.login("admin", "admin123")
        second = await manager.login("admin", "admin123")
        assert first != second
        assert await manager.validate(first) == "admin"
        assert await manager.validate(second) == "admin"


class TestValidate:
    """会话校验与滑动过期测试。"""

    async def test_fresh_session_is_valid(self, manager):
        session_id = await manager.login("admin", "admin123")
        assert await manager.validate(session_id) == "admin"

    async def test_session_expires_after_seven_days_of_inactivity(
        self, manager, kv, clock
    ):
        """8 天未访问的会话失效并被删除。"""
        session_id = await manager.login("admin", "admin123")

        clock.advance(days=8)

        with pytest.raises(SessionInvalidError):
            await manager.validate(session_id)
        assert RedisKeys.session(session_id) not in kv.store

    async def test_exactly_seven_days_is_still_valid(self, manager, clock):
        session_id = await manager.login("admin", "admin123")
        clock.advance(days=7)
        assert await manager.validate(session_id) == "admin"

    async def test_sliding_window(self, manager, kv, clock):
        """第 6 天访问一次后，第 12 天仍然有效。"""
        session_id = await manager.login("admin", "admin123")

        clock.advance(days=6)
        assert await manager.validate(session_id) == "admin"

        document = await kv.get_json(RedisKeys.session(session_id))
        assert document["loginTime"] == int(clock().timestamp() * 1000)
        assert kv.ttls[RedisKeys.session(session_id)] == SEVEN_DAYS

        clock.advance(days=6)
        assert await manager.validate(session_id) == "admin"

    async def test_unknown_session(self, manager):
        with pytest.raises(SessionInvalidError):
            await manager.validate(generate_session_id())

    @pytest.mark.parametrize("session_id", [None, "", "not a valid id"])
    async def test_malformed_session_id(self, manager, session_id):
        with pytest.raises(SessionInvalidError):
            await manager.validate(session_id)

    async def test_corrupt_session_record_is_discarded(self, manager, kv):
        session_id = generate_session_id()
        key = RedisKeys.session(session_id)
        await kv.set(key, "{not json")

        with pytest.raises(SessionInvalidError):
            await manager.validate(session_id)
        assert key not in kv.store

    async def test_incomplete_session_record_is_discarded(self, manager, kv):
        session_id = generate_session_id()
        key = RedisKeys.session(session_id)
        await kv.set_json(key, {"userAgent": "pytest"})

        with pytest.raises(SessionInvalidError):
            await manager.validate(session_id)
        assert key not in kv.store


class TestLogout:
    """登出测试。"""

    async def test_logout_invalidates_session(self, manager):
        session_id = await manager.login("admin", "admin123")

        await manager.logout(session_id)

        with pytest.raises(SessionInvalidError):
            await manager.validate(session_id)

    async def test_logout_is_idempotent(self, manager):
        session_id = await manager.login("admin", "admin123")
        await manager.logout(session_id)
        await manager.logout(session_id)
        await manager.logout(None)
        await manager.logout("not a valid id")

    async def test_logout_leaves_other_sessions(self, manager):
        first = await manager.login("admin", "admin123")
        second = await manager.login("admin", "admin123")

        await manager.logout(first)

        assert await manager.validate(second) == "admin"
