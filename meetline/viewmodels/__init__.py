"""Screen view-models of the booking client.

Call context:
    ``meetline/app/composition.py`` builds these controllers and hands them to
    a renderer (or the headless session in ``meetline/app/main.py``).

Dependencies:
    Controllers depend on use cases and domain types only. Transport,
    persistence and error translation stay in adapters and use cases.

Responsibilities:
    - Hold one immutable UI-state snapshot per screen in a ``StateStream``.
    - Turn user intents into use-case calls owned by a ``ControllerScope``.
    - Fold every outcome into the next snapshot; failures never escape.
"""

from .appointments_vm import AppointmentsUiState, AppointmentsVM
from .base import ScreenController
from .booking_vm import BookingUiState, BookingVM
from .business_detail_vm import BusinessDetailUiState, BusinessDetailVM
from .business_list_vm import BusinessListUiState, BusinessListVM
from .home_vm import HomeUiState, HomeVM
from .login_vm import LoginUiState, LoginVM
from .profile_vm import ProfileUiState, ProfileVM
from .register_vm import RegisterUiState, RegisterVM
from .scope import ControllerScope
from .state import StateStream

__all__ = [
    "AppointmentsUiState",
    "AppointmentsVM",
    "BookingUiState",
    "BookingVM",
    "BusinessDetailUiState",
    "BusinessDetailVM",
    "BusinessListUiState",
    "BusinessListVM",
    "ControllerScope",
    "HomeUiState",
    "HomeVM",
    "LoginUiState",
    "LoginVM",
    "ProfileUiState",
    "ProfileVM",
    "RegisterUiState",
    "RegisterVM",
    "ScreenController",
    "StateStream",
]
