import pytest

from meetline.adapters.api_errors import ApiClientError
from meetline.domain.entities import TimeSlot
from meetline.tests.unit.viewmodels.helpers import (
    StubAppointmentRepo,
    StubBusinessRepo,
    make_business,
    make_professional,
    make_service,
)
from meetline.usecases.create_appointment import CreateAppointment
from meetline.usecases.get_available_time_slots import GetAvailableTimeSlots
from meetline.usecases.get_business_detail import GetBusinessDetail
from meetline.viewmodels.booking_vm import BookingVM

CARLOS = make_professional("prof_1", "Carlos")
LAURA = make_professional("prof_2", "Laura")
CUT = make_service("srv_1", "Classic Cut")
SHAVE = make_service("srv_2", "Shave", duration=25)
BUSINESS = make_business("biz_1", professionals=[CARLOS, LAURA], services=[CUT, SHAVE])
SLOTS = [TimeSlot("09:00"), TimeSlot("09:30", is_available=False), TimeSlot("10:00")]
DAY = 1_700_000_000_000


def _vm(businesses=None, appointments=None, **kwargs) -> BookingVM:
    businesses = businesses or StubBusinessRepo([BUSINESS], slots=SLOTS)
    appointments = appointments or StubAppointmentRepo()
    return BookingVM(
        get_business_detail=GetBusinessDetail(businesses),
        get_available_time_slots=GetAvailableTimeSlots(businesses),
        create_appointment=CreateAppointment(appointments),
        business_id="biz_1",
        **kwargs,
    )


@pytest.mark.asyncio
async def test_load_preselects_first_professional_without_ids():
    vm = _vm()
    await vm.join()

    assert vm.ui_state.is_loading is False
    assert vm.ui_state.business == BUSINESS
    assert vm.ui_state.selected_professional == CARLOS
    assert vm.ui_state.selected_service is None


@pytest.mark.asyncio
async def test_load_preselects_requested_professional_and_service():
    vm = _vm(professional_id="prof_2", service_id="srv_2")
    await vm.join()

    assert vm.ui_state.selected_professional == LAURA
    assert vm.ui_state.selected_service == SHAVE


@pytest.mark.asyncio
async def test_select_date_loads_slots_for_selected_professional():
    businesses = StubBusinessRepo([BUSINESS], slots=SLOTS)
    vm = _vm(businesses=businesses)
    await vm.join()

    vm.select_date(DAY)
    assert vm.ui_state.is_loading_slots is True
    await vm.join()

    assert vm.ui_state.available_time_slots == tuple(SLOTS)
    assert ("get_available_time_slots", ("biz_1", "prof_1", DAY)) in businesses.calls


@pytest.mark.asyncio
async def test_changing_professional_resets_time_and_reloads_slots():
    businesses = StubBusinessRepo([BUSINESS], slots=SLOTS)
    vm = _vm(businesses=businesses)
    await vm.join()
    vm.select_date(DAY)
    await vm.join()
    vm.select_time("10:00")

    vm.select_professional(LAURA)
    await vm.join()

    assert vm.ui_state.selected_time is None
    assert ("get_available_time_slots", ("biz_1", "prof_2", DAY)) in businesses.calls


@pytest.mark.asyncio
async def test_confirm_is_noop_until_selection_complete():
    appointments = StubAppointmentRepo()
    vm = _vm(appointments=appointments)
    await vm.join()
    vm.select_date(DAY)
    await vm.join()

    assert vm.can_proceed() is False
    assert vm.confirm_booking() is None
    assert appointments.called("create_appointment") == 0


@pytest.mark.asyncio
async def test_confirm_books_selection():
    appointments = StubAppointmentRepo()
    vm = _vm(appointments=appointments)
    await vm.join()
    vm.select_service(CUT)
    vm.select_date(DAY)
    await vm.join()
    vm.select_time("09:00")

    assert vm.can_proceed() is True
    vm.confirm_booking(notes="  ")
    assert vm.ui_state.is_booking is True
    await vm.join()

    assert vm.ui_state.is_booking is False
    assert vm.ui_state.booking_success is True
    assert vm.ui_state.appointment.id == "apt_new"
    assert appointments.calls == [("create_appointment", ("biz_1", "prof_1", "srv_1", DAY, "09:00", None))]


@pytest.mark.asyncio
async def test_booking_failure_sets_error():
    appointments = StubAppointmentRepo()
    appointments.errors["create_appointment"] = ApiClientError("book", status=409, hint="Slot already taken")
    vm = _vm(appointments=appointments)
    await vm.join()
    vm.select_service(CUT)
    vm.select_date(DAY)
    await vm.join()
    vm.select_time("09:00")

    vm.confirm_booking()
    await vm.join()

    assert vm.ui_state.booking_success is False
    assert vm.ui_state.is_booking is False
    assert vm.ui_state.error == "Slot already taken"

    vm.clear_error()
    assert vm.ui_state.error is None
