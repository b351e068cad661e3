"""Adapter, use-case and view-model wiring for the client runtime.

``AppContainer`` owns one set of adapters built from :class:`AppSettings`
(either the REST stack or the offline ``MockCatalog``) and the use cases on
top of them. Screens ask it for fresh view-models through the factory
methods; each view-model gets its own ``ControllerScope``.
"""

from __future__ import annotations

import logging
from typing import Optional

from meetline.adapters.appointment_rest import AppointmentRestAdapter
from meetline.adapters.auth_rest import AuthRestAdapter
from meetline.adapters.business_rest import BusinessRestAdapter
from meetline.adapters.catalog_mock import MockCatalog
from meetline.adapters.http_client import HttpConfig, RetryingSession
from meetline.adapters.location_static import StaticLocationProvider
from meetline.adapters.session_local import SessionManager, SessionStoreLocal
from meetline.domain.ports import (
    AppointmentRepository,
    AuthRepository,
    BusinessRepository,
    LocationProvider,
)
from meetline.usecases.cancel_appointment import CancelAppointment
from meetline.usecases.create_appointment import CreateAppointment
from meetline.usecases.get_all_categories import GetAllCategories
from meetline.usecases.get_appointments import GetAppointments
from meetline.usecases.get_available_time_slots import GetAvailableTimeSlots
from meetline.usecases.get_business_detail import GetBusinessDetail
from meetline.usecases.get_business_list import GetBusinessList
from meetline.usecases.get_featured_businesses import GetFeaturedBusinesses
from meetline.usecases.get_my_active_appointments import GetMyActiveAppointments
from meetline.usecases.get_my_appointment_history import GetMyAppointmentHistory
from meetline.usecases.get_nearby_businesses import GetNearbyBusinesses
from meetline.usecases.get_session import GetSession
from meetline.usecases.get_user_profile import GetUserProfile
from meetline.usecases.login import Login
from meetline.usecases.logout import Logout
from meetline.usecases.register import Register
from meetline.usecases.request_password_reset import RequestPasswordReset, ResetPassword
from meetline.usecases.search_businesses import SearchBusinesses
from meetline.usecases.update_profile import UpdateProfile
from meetline.viewmodels.appointments_vm import AppointmentsVM
from meetline.viewmodels.booking_vm import BookingVM
from meetline.viewmodels.business_detail_vm import BusinessDetailVM
from meetline.viewmodels.business_list_vm import BusinessListVM
from meetline.viewmodels.home_vm import HomeVM
from meetline.viewmodels.login_vm import LoginVM
from meetline.viewmodels.profile_vm import ProfileVM
from meetline.viewmodels.register_vm import RegisterVM

from .settings import AppSettings

log = logging.getLogger(__name__)


class AppContainer:
    """Build and hold runtime adapters and use cases from settings.

    Call chain:
        ``meetline.app.main`` creates one instance per process; renderers
        call the ``*_vm`` factories whenever a screen is opened.
    """

    def __init__(
        self,
        settings: AppSettings,
        *,
        auth_repo: Optional[AuthRepository] = None,
        business_repo: Optional[BusinessRepository] = None,
        appointment_repo: Optional[AppointmentRepository] = None,
        location_provider: Optional[LocationProvider] = None,
    ) -> None:
        """Wire the object graph.

        Args:
            settings: Runtime settings selecting REST or offline mode.
            auth_repo: Override for the auth port (tests).
            business_repo: Override for the business port (tests).
            appointment_repo: Override for the appointment port (tests).
            location_provider: Override for the device location source.
        """
        self.settings = settings
        self.http: Optional[RetryingSession] = None
        if settings.use_mock:
            log.info("Using offline catalog")
            catalog = MockCatalog()
            self.sessions = catalog.sessions
            default_auth: AuthRepository = catalog
            default_business: BusinessRepository = catalog
            default_appointments: AppointmentRepository = catalog
        else:
            log.info("Using backend at %s", settings.api_base_url)
            self.sessions = SessionManager(SessionStoreLocal(settings.session_path))
            self.http = RetryingSession(
                settings.api_base_url,
                HttpConfig(request_timeout_s=settings.request_timeout_s, retries=settings.retries),
                session_manager=self.sessions,
            )
            default_auth = AuthRestAdapter(self.http, self.sessions)
            default_business = BusinessRestAdapter(self.http, settings.appointments_url)
            default_appointments = AppointmentRestAdapter(
                self.http, default_auth, settings.appointments_url
            )

        self.auth_repo = auth_repo or default_auth
        self.business_repo = business_repo or default_business
        self.appointment_repo = appointment_repo or default_appointments
        self.location_provider = location_provider or StaticLocationProvider(
            settings.latitude, settings.longitude
        )

        # ---- Auth ----
        self.uc_login = Login(self.auth_repo)
        self.uc_register = Register(self.auth_repo)
        self.uc_get_session = GetSession(self.auth_repo)
        self.uc_logout = Logout(self.auth_repo)
        self.uc_get_user_profile = GetUserProfile(self.auth_repo)
        self.uc_update_profile = UpdateProfile(self.auth_repo)
        self.uc_request_password_reset = RequestPasswordReset(self.auth_repo)
        self.uc_reset_password = ResetPassword(self.auth_repo)

        # ---- Businesses ----
        self.uc_get_business_list = GetBusinessList(self.business_repo)
        self.uc_get_featured = GetFeaturedBusinesses(self.business_repo)
        self.uc_get_nearby = GetNearbyBusinesses(self.business_repo)
        self.uc_search = SearchBusinesses(self.business_repo)
        self.uc_get_business_detail = GetBusinessDetail(self.business_repo)
        self.uc_get_time_slots = GetAvailableTimeSlots(self.business_repo)
        self.uc_get_all_categories = GetAllCategories(self.business_repo)

        # ---- Appointments ----
        self.uc_get_appointments = GetAppointments(self.appointment_repo)
        self.uc_get_active = GetMyActiveAppointments(self.appointment_repo)
        self.uc_get_history = GetMyAppointmentHistory(self.appointment_repo)
        self.uc_create_appointment = CreateAppointment(self.appointment_repo)
        self.uc_cancel_appointment = CancelAppointment(self.appointment_repo)

    # ------------------------------------------------------------------
    # View-model factories (call from a running event loop)
    # ------------------------------------------------------------------
    def login_vm(self) -> LoginVM:
        return LoginVM(login=self.uc_login, get_session=self.uc_get_session)

    def register_vm(self) -> RegisterVM:
        return RegisterVM(register=self.uc_register)

    def profile_vm(self) -> ProfileVM:
        return ProfileVM(
            get_session=self.uc_get_session,
            get_user_profile=self.uc_get_user_profile,
            update_profile=self.uc_update_profile,
            logout=self.uc_logout,
        )

    def home_vm(self) -> HomeVM:
        return HomeVM(
            get_session=self.uc_get_session,
            get_all_categories=self.uc_get_all_categories,
            get_featured_businesses=self.uc_get_featured,
            get_nearby_businesses=self.uc_get_nearby,
            get_appointments=self.uc_get_appointments,
            search_businesses=self.uc_search,
            location_provider=self.location_provider,
        )

    def business_list_vm(self, category_name: Optional[str] = None) -> BusinessListVM:
        return BusinessListVM(
            get_business_list=self.uc_get_business_list,
            get_all_categories=self.uc_get_all_categories,
            category_name=category_name,
        )

    def business_detail_vm(self, business_id: str) -> BusinessDetailVM:
        return BusinessDetailVM(get_business_detail=self.uc_get_business_detail, business_id=business_id)

    def booking_vm(
        self,
        business_id: str,
        professional_id: Optional[str] = None,
        service_id: Optional[str] = None,
    ) -> BookingVM:
        return BookingVM(
            get_business_detail=self.uc_get_business_detail,
            get_available_time_slots=self.uc_get_time_slots,
            create_appointment=self.uc_create_appointment,
            business_id=business_id,
            professional_id=professional_id,
            service_id=service_id,
        )

    def appointments_vm(self) -> AppointmentsVM:
        return AppointmentsVM(
            get_my_active_appointments=self.uc_get_active,
            get_my_appointment_history=self.uc_get_history,
            cancel_appointment=self.uc_cancel_appointment,
        )


__all__ = ["AppContainer"]
