"""Fixtures for API tests: an in-process client and a stub caller."""

from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from airos.api.dependencies import get_current_user
from airos.api.main import app
from airos.core.entities.user import AuthPrincipal, UserRole



@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def login_as() -> Callable[[UserRole], AuthPrincipal]:
    """Make every request run as a user with the given role."""

    def _login(role: UserRole, user_id: int = 1) -> AuthPrincipal:
        principal = AuthPrincipal(user_id=user_id, role=role, session_id=1)
        app.dependency_overrides[get_current_user] = lambda: principal
        return principal

    return _login
