"""
Role and plan based navigation model.

The dashboard sidebar is built from a tree of sections, each holding an
ordered list of entries.  The tree is a pure function of the tenant,
the caller's role and the tenant's subscription plan: it is rebuilt on
every load and never persisted.  Icons are lucide icon names; the
renderer decides how to draw them.
"""
from __future__ import annotations

from dataclasses import dataclass

from .constants import Plan, Role

# Roles that see the financial and management sections
STAFF_MANAGER_ROLES = frozenset({Role.ADMIN, Role.OWNER})


@dataclass(frozen=True)
class NavItem:
    icon: str
    label: str
    path: str
    locked: bool = False


@dataclass(frozen=True)
class NavSection:
    icon: str
    label: str
    sub_items: tuple[NavItem, ...]


def _medical_section(tenant: str, role: Role, plan: Plan) -> NavSection:
    items = [
        NavItem('calendar', 'Appointments', f'/{tenant}/appointments'),
        NavItem('stethoscope', 'Procedure Management', f'/{tenant}/procedures'),
    ]
    if role is not Role.USER and plan is not Plan.STARTER:
        items.append(NavItem('book-user', 'Patients', f'/{tenant}/patients'))
    return NavSection('briefcase-medical', 'Medical', tuple(items))


def _financial_section(tenant: str) -> NavSection:
    return NavSection('piggy-bank', 'Financial', (
        NavItem('layout-dashboard', 'Dashboard', f'/{tenant}/financeiro'),
        NavItem('file-text', 'Expenses', f'/{tenant}/despesas'),
        NavItem('piggy-bank', 'Income', f'/{tenant}/receitas'),
    ))


def _management_section(tenant: str, plan: Plan) -> NavSection:
    items = []
    if plan is Plan.PLUS:
        items.append(NavItem('package', 'Stock Management', f'/{tenant}/stock'))
    items.append(NavItem('circle-user-round', 'User Management', f'/{tenant}/users'))
    return NavSection('clipboard-list', 'Management', tuple(items))


def build_navigation(tenant: str, role, plan) -> tuple[NavSection, ...]:
    """Return the ordered navigation sections for a caller.

    ``role`` and ``plan`` may be enum members or raw strings.  Values
    that are not recognised are treated as the least privileged role
    and the smallest plan, so a missing or unexpected value yields the
    minimal Medical-only menu rather than an error.
    """
    if not tenant:
        raise ValueError('tenant is required to build navigation')
    role = Role.coerce(role)
    plan = Plan.coerce(plan)

    medical = _medical_section(tenant, role, plan)
    if role in STAFF_MANAGER_ROLES:
        return (_financial_section(tenant), medical, _management_section(tenant, plan))
    return (medical,)


def navigation_to_dict(sections: tuple[NavSection, ...]) -> list[dict]:
    return [
        {
            'icon': section.icon,
            'label': section.label,
            'subItems': [
                {'icon': item.icon, 'label': item.label, 'path': item.path, 'isLocked': item.locked}
                for item in section.sub_items
            ],
        }
        for section in sections
    ]
