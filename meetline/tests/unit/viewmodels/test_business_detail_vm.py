import pytest

from meetline.adapters.api_errors import ApiClientError
from meetline.tests.unit.viewmodels.helpers import StubBusinessRepo, make_business
from meetline.usecases.get_business_detail import GetBusinessDetail
from meetline.viewmodels.business_detail_vm import BusinessDetailUiState, BusinessDetailVM


@pytest.mark.asyncio
async def test_detail_loads_business_by_id():
    business = make_business("biz_7")
    repo = StubBusinessRepo([business])
    vm = BusinessDetailVM(get_business_detail=GetBusinessDetail(repo), business_id="biz_7")

    assert vm.ui_state == BusinessDetailUiState(is_loading=True)
    await vm.join()

    assert vm.ui_state == BusinessDetailUiState(is_loading=False, business=business)


@pytest.mark.asyncio
async def test_detail_not_found_sets_error():
    repo = StubBusinessRepo([])
    repo.errors["get_business_detail"] = ApiClientError("detail", status=404)
    vm = BusinessDetailVM(get_business_detail=GetBusinessDetail(repo), business_id="missing")
    await vm.join()

    assert vm.ui_state == BusinessDetailUiState(is_loading=False, error="Not found")
