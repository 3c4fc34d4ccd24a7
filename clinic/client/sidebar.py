"""
Dashboard sidebar controller.

Fetches the caller's role and the tenant's plan, builds the navigation
model from them and keeps the responsive/open state.  Preferences are
read from the injected store once and written back on every change.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

import requests

from clinic.navigation import NavItem, NavSection, build_navigation

from .api import ApiClient
from .preferences import PreferenceStore, SidebarPreferences

logger = logging.getLogger(__name__)

MOBILE_BREAKPOINT = 768
LOCKED_TITLE = 'Feature in development'
LOCKED_MESSAGE = 'This feature is not available yet'
# Plan assumed when the subscription answer carries no planType
FALLBACK_PLAN = 'plus'


class Sidebar:
    def __init__(self, tenant: Optional[str], api: ApiClient, store: PreferenceStore,
                 user: Optional[dict] = None,
                 on_loading_change: Optional[Callable[[bool], None]] = None):
        self.tenant = tenant
        self.api = api
        self.store = store
        self.user = user or {}
        self.on_loading_change = on_loading_change

        prefs = store.load()
        self.is_open = prefs.sidebar_open
        self.open_sections = dict(prefs.open_sections)
        self.is_mobile = False
        self.is_modal_open = False
        self.is_loading = True
        self.role: Optional[str] = None
        self.plan: Optional[str] = None
        self.navigation: tuple[NavSection, ...] = ()

    # -- loading -----------------------------------------------------------
    def load(self) -> None:
        """Fetch role and plan for the tenant, then rebuild the navigation."""
        if not self.tenant:
            return
        self.is_loading = True
        try:
            if self.user.get('role'):
                self.role = self.user['role']
            else:
                resp = self.api.request('GET', f'/api/{self.tenant}/auth/verify-role', raise_for_status=False)
                if resp.ok:
                    self.role = resp.json().get('role')
                else:
                    logger.warning('Role check for %s answered %s', self.tenant, resp.status_code)

            resp = self.api.request('GET', f'/api/{self.tenant}/subscription', raise_for_status=False)
            if resp.ok:
                self.plan = resp.json().get('planType') or FALLBACK_PLAN
            else:
                logger.warning('Subscription lookup for %s answered %s', self.tenant, resp.status_code)
        except (requests.RequestException, ValueError):
            logger.exception('Failed to fetch user data')
        finally:
            self.is_loading = False
            if self.on_loading_change:
                self.on_loading_change(False)
        self._rebuild()

    def _rebuild(self) -> None:
        if self.tenant and self.role and self.plan:
            self.navigation = build_navigation(self.tenant, self.role, self.plan)

    @property
    def is_ready(self) -> bool:
        return bool(self.tenant and not self.is_loading and self.role and self.plan)

    # -- preferences -------------------------------------------------------
    def _persist(self) -> None:
        self.store.save(SidebarPreferences(sidebar_open=self.is_open, open_sections=dict(self.open_sections)))

    def set_open(self, value: bool) -> None:
        self.is_open = bool(value)
        self._persist()

    def toggle(self) -> None:
        self.set_open(not self.is_open)

    def toggle_section(self, label: str) -> None:
        self.open_sections[label] = not self.open_sections.get(label, False)
        self._persist()

    def is_section_open(self, label: str) -> bool:
        return bool(self.open_sections.get(label))

    # -- layout & navigation -----------------------------------------------
    def resize(self, width: int) -> None:
        self.is_mobile = width < MOBILE_BREAKPOINT
        if self.is_mobile:
            self.set_open(False)

    def click(self, item: NavItem) -> Optional[str]:
        """Return the path to navigate to, or None when the item is locked."""
        if item.locked:
            self.is_modal_open = True
            return None
        if self.is_mobile:
            self.set_open(False)
        return item.path

    def close_modal(self) -> None:
        self.is_modal_open = False

    @staticmethod
    def is_active(item: NavItem, current_path: str) -> bool:
        return not item.locked and current_path == item.path

    def logout(self) -> Optional[str]:
        """Log out through the API; returns the login path on success."""
        try:
            resp = self.api.request('POST', '/api/auth/logout', json={}, raise_for_status=False)
        except requests.RequestException:
            logger.exception('Logout error')
            return None
        if not resp.ok:
            logger.error('Logout failed with status %s', resp.status_code)
            return None
        self.api.clear_token()
        return f'/{self.tenant}/login'
