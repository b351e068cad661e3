import pytest

from meetline.adapters.api_errors import ApiClientError
from meetline.tests.unit.viewmodels.helpers import StubAuthRepo, make_user, record_states
from meetline.usecases.register import Register
from meetline.viewmodels.register_vm import RegisterUiState, RegisterVM


@pytest.mark.asyncio
async def test_register_duplicate_email_surfaces_backend_message():
    repo = StubAuthRepo()
    repo.errors["register"] = ApiClientError("register", status=409, hint="Email already exists")
    vm = RegisterVM(register=Register(repo))
    states = record_states(vm)

    vm.register("Ana", "ana@example.com", "3001234567", "secret1")
    await vm.join()

    assert states[1] == RegisterUiState(is_loading=True)
    assert vm.ui_state == RegisterUiState(
        is_loading=False,
        is_success=False,
        error="Email already exists",
        user=None,
    )


@pytest.mark.asyncio
async def test_register_success_keeps_created_user():
    user = make_user("u2")
    repo = StubAuthRepo(user=user)
    vm = RegisterVM(register=Register(repo))

    vm.register(" Ana ", "ana@example.com", "", "secret1")
    await vm.join()

    assert vm.ui_state == RegisterUiState(is_success=True, user=user)
    assert repo.calls == [("register", ("Ana", "ana@example.com", "", "secret1"))]


@pytest.mark.asyncio
async def test_register_short_password_is_rejected_locally():
    repo = StubAuthRepo()
    vm = RegisterVM(register=Register(repo))

    vm.register("Ana", "ana@example.com", "", "12345")
    await vm.join()

    assert vm.ui_state.error == "Password must be at least 6 characters"
    assert repo.calls == []

    vm.clear_error()
    assert vm.ui_state == RegisterUiState()
