"""Headless client session behind ``python -m meetline``.

Signs in (or reuses the stored session), loads the home screen and prints a
short summary. Useful as a smoke check against a backend or the offline
catalog (``--mock``).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Callable, List, Optional

from meetline.adapters.catalog_mock import DEMO_EMAIL, DEMO_PASSWORD
from meetline.utils.logging import apply_debug_preference, configure_root, level_name

from .composition import AppContainer
from .settings import apply_overrides, load_settings

log = logging.getLogger(__name__)


async def run_session(
    container: AppContainer,
    email: Optional[str] = None,
    password: Optional[str] = None,
    *,
    out: Callable[[str], None] = print,
) -> int:
    """Drive the login and home controllers once; return a process exit code."""
    login_vm = container.login_vm()
    try:
        if not login_vm.ui_state.is_success:
            if not email or not password:
                out("Not signed in. Pass --email and --password.")
                return 2
            login_vm.login(email, password)
            await login_vm.join()
            if login_vm.ui_state.error:
                out(f"Login failed: {login_vm.ui_state.error}")
                return 1
    finally:
        login_vm.close()

    home_vm = container.home_vm()
    try:
        await home_vm.join()
        state = home_vm.ui_state
    finally:
        home_vm.close()

    name = state.user.name if state.user else "guest"
    out(f"Hello, {name}")
    out("Categories: " + ", ".join(c.display_name for c in state.categories))
    out(f"Featured ({len(state.featured_businesses)}):")
    for business in state.featured_businesses:
        out(f"  - {business.name} ({business.rating:.1f})")
    out(f"Nearby ({len(state.nearby_businesses)}):")
    for business in state.nearby_businesses:
        out(f"  - {business.name} {business.distance}")
    out(f"Upcoming ({len(state.upcoming_appointments)}):")
    for appointment in state.upcoming_appointments:
        out(f"  - {appointment.business.name} at {appointment.time} [{appointment.status.display_name}]")
    if state.error:
        out(f"Error: {state.error}")
    return 0


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="meetline", description="Headless MeetLine client session.")
    parser.add_argument("--settings", help="JSON settings file (overrides MEETLINE_SETTINGS_FILE).")
    parser.add_argument("--mock", action="store_true", help="Use the offline catalog instead of the backend.")
    parser.add_argument("--email", help="Account email used when no session is stored.")
    parser.add_argument("--password", help="Account password used when no session is stored.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    configure_root()
    try:
        settings = load_settings(path=args.settings)
    except ValueError as exc:
        print(f"Invalid settings: {exc}", file=sys.stderr)
        return 2
    if args.mock:
        settings = apply_overrides(settings, {"use_mock": True})
    level = apply_debug_preference(settings.debug_logging)
    log.debug("Log level %s", level_name(level))

    email, password = args.email, args.password
    if settings.use_mock and not email:
        email, password = DEMO_EMAIL, DEMO_PASSWORD
    container = AppContainer(settings)
    return asyncio.run(run_session(container, email, password))


if __name__ == "__main__":
    sys.exit(main())
