import pytest

from meetline.adapters.api_errors import ApiServerError
from meetline.domain.entities import BusinessCategory
from meetline.tests.unit.viewmodels.helpers import StubBusinessRepo, make_business
from meetline.usecases.get_all_categories import GetAllCategories
from meetline.usecases.get_business_list import GetBusinessList
from meetline.viewmodels.business_list_vm import BusinessListVM

BARBER = make_business("biz_1", "Barber One", BusinessCategory.BARBERSHOP)
SPA = make_business("biz_2", "Calm Spa", BusinessCategory.SPA)
DENTIST = make_business("biz_3", "Bright Smile", BusinessCategory.DENTIST)


def _vm(repo: StubBusinessRepo, category_name=None) -> BusinessListVM:
    return BusinessListVM(
        get_business_list=GetBusinessList(repo),
        get_all_categories=GetAllCategories(repo),
        category_name=category_name,
    )


@pytest.mark.asyncio
async def test_initial_load_without_category_lists_everything():
    repo = StubBusinessRepo([BARBER, SPA, DENTIST])
    vm = _vm(repo)

    assert vm.ui_state.is_loading is True
    assert vm.ui_state.categories == tuple(BusinessCategory)
    await vm.join()

    assert vm.ui_state.is_loading is False
    assert vm.ui_state.businesses == (BARBER, SPA, DENTIST)
    assert vm.ui_state.selected_category is None


@pytest.mark.asyncio
async def test_navigation_category_is_preselected():
    repo = StubBusinessRepo([BARBER, SPA, DENTIST])
    vm = _vm(repo, category_name="SPA")
    await vm.join()

    assert vm.ui_state.selected_category is BusinessCategory.SPA
    assert vm.ui_state.businesses == (SPA,)
    assert repo.calls == [("get_business_list", (BusinessCategory.SPA,))]


@pytest.mark.asyncio
async def test_unknown_category_name_falls_back_to_all():
    repo = StubBusinessRepo([BARBER, SPA])
    vm = _vm(repo, category_name="NOT_A_CATEGORY")
    await vm.join()

    assert vm.ui_state.selected_category is None
    assert vm.ui_state.businesses == (BARBER, SPA)


@pytest.mark.asyncio
async def test_clearing_filter_returns_unfiltered_list():
    repo = StubBusinessRepo([BARBER, SPA, DENTIST])
    vm = _vm(repo)
    await vm.join()

    vm.filter_by_category(BusinessCategory.DENTIST)
    await vm.join()
    assert vm.ui_state.businesses == (DENTIST,)

    vm.filter_by_category(None)
    await vm.join()
    assert vm.ui_state.selected_category is None
    assert vm.ui_state.businesses == (BARBER, SPA, DENTIST)


@pytest.mark.asyncio
async def test_failed_fetch_records_error_and_empty_list():
    repo = StubBusinessRepo([BARBER])
    vm = _vm(repo)
    await vm.join()
    repo.errors["get_business_list"] = ApiServerError("projects", status=500)

    vm.filter_by_category(BusinessCategory.BARBERSHOP)
    await vm.join()

    assert vm.ui_state.is_loading is False
    assert vm.ui_state.businesses == ()
    assert vm.ui_state.error == "Server error, try again."

    vm.clear_error()
    assert vm.ui_state.error is None
    assert vm.ui_state.selected_category is BusinessCategory.BARBERSHOP
