import pytest

from meetline.adapters.api_errors import ApiClientError
from meetline.domain.ports import UseCaseError
from meetline.tests.unit.viewmodels.helpers import StubAuthRepo, make_user
from meetline.usecases.get_session import GetSession
from meetline.usecases.login import Login
from meetline.usecases.logout import Logout
from meetline.usecases.register import Register
from meetline.usecases.request_password_reset import RequestPasswordReset, ResetPassword
from meetline.usecases.update_profile import UpdateProfile


@pytest.mark.asyncio
async def test_login_trims_email():
    repo = StubAuthRepo()

    user = await Login(repo)("  ana@example.com ", "secret")

    assert user == repo.user
    assert repo.calls == [("login", ("ana@example.com", "secret"))]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email, password, message",
    [("", "secret", "Email is required"), ("ana@example.com", "   ", "Password is required")],
)
async def test_login_requires_credentials(email, password, message):
    repo = StubAuthRepo()

    with pytest.raises(UseCaseError) as info:
        await Login(repo)(email, password)

    assert info.value.code == "VALIDATION"
    assert info.value.message == message
    assert repo.calls == []


@pytest.mark.asyncio
async def test_login_unexpected_error_uses_default_message():
    repo = StubAuthRepo()
    repo.errors["login"] = RuntimeError("")

    with pytest.raises(UseCaseError) as info:
        await Login(repo)("ana@example.com", "secret")

    assert info.value.code == "LOGIN_FAILED"
    assert info.value.message == "Sign in failed."


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "name, email, password, message",
    [
        ("", "ana@example.com", "secret1", "Name is required"),
        ("Ana", " ", "secret1", "Email is required"),
        ("Ana", "ana@example.com", "abc", "Password must be at least 6 characters"),
    ],
)
async def test_register_validation(name, email, password, message):
    with pytest.raises(UseCaseError) as info:
        await Register(StubAuthRepo())(name, email, "", password)

    assert info.value.message == message


@pytest.mark.asyncio
async def test_update_profile_requires_name():
    with pytest.raises(UseCaseError) as info:
        await UpdateProfile(StubAuthRepo())(make_user(name="  "))

    assert info.value.message == "Name is required"


@pytest.mark.asyncio
async def test_password_reset_flow_validation():
    repo = StubAuthRepo()

    await RequestPasswordReset(repo)(" ana@example.com ")
    with pytest.raises(UseCaseError):
        await RequestPasswordReset(repo)("")
    with pytest.raises(UseCaseError) as info:
        await ResetPassword(repo)("token", "123")
    await ResetPassword(repo)("token", "new-secret")

    assert info.value.message == "Password must be at least 6 characters"
    assert repo.calls == [
        ("request_password_reset", ("ana@example.com",)),
        ("reset_password", ("token", "new-secret")),
    ]


@pytest.mark.asyncio
async def test_reset_password_conflict_keeps_hint():
    repo = StubAuthRepo()
    repo.errors["reset_password"] = ApiClientError("reset", status=422, hint="Token expired")

    with pytest.raises(UseCaseError) as info:
        await ResetPassword(repo)("token", "new-secret")

    assert info.value.message == "Token expired"


def test_session_and_logout_are_local():
    user = make_user()
    repo = StubAuthRepo(session_user=user)

    assert GetSession(repo)() == user
    Logout(repo)()

    assert GetSession(repo)() is None
    assert repo.calls == []
