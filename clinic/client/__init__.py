"""Python client for the clinic API.

Carries the dashboard's client side behaviour (the sidebar shell and the
bill/income manager pages) as plain objects that talk to the API with
``requests``.  Nothing in this package imports Django.
"""
from .api import ApiClient
from .managers import BillManager, IncomeManager, ResourceManager
from .preferences import (
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
    PreferenceStore,
    SessionPreferenceStore,
    SidebarPreferences,
)
from .sidebar import Sidebar

__all__ = [
    'ApiClient',
    'BillManager',
    'IncomeManager',
    'ResourceManager',
    'JsonFilePreferenceStore',
    'MemoryPreferenceStore',
    'PreferenceStore',
    'SessionPreferenceStore',
    'SidebarPreferences',
    'Sidebar',
]
