"""
Shared enumerations and fixed label sets.

This module is imported both by the Django app and by the client
package, so it must not import anything from Django.
"""
from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    USER = 'user'
    DOCTOR = 'doctor'
    ADMIN = 'admin'
    OWNER = 'owner'

    @classmethod
    def coerce(cls, value) -> 'Role':
        """Map any value onto a role, defaulting to the least privileged."""
        try:
            return cls(value)
        except ValueError:
            return cls.USER


class Plan(str, Enum):
    STARTER = 'starter'
    PLUS = 'plus'

    @classmethod
    def coerce(cls, value) -> 'Plan':
        """Map any value onto a plan, defaulting to the smallest tier."""
        try:
            return cls(value)
        except ValueError:
            return cls.STARTER


ROLE_CHOICES = [
    (Role.USER.value, 'User'),
    (Role.DOCTOR.value, 'Doctor'),
    (Role.ADMIN.value, 'Administrator'),
    (Role.OWNER.value, 'Owner'),
]

PLAN_CHOICES = [
    (Plan.STARTER.value, 'Starter'),
    (Plan.PLUS.value, 'Plus'),
]

# Roles allowed to see and edit financial records
FINANCE_ROLES = {Role.ADMIN.value, Role.OWNER.value}

BILL_CATEGORIES = (
    'Medical Supplies',
    'Pharmaceuticals',
    'Equipment Maintenance',
    'Staff Salaries',
    'Patient Care',
    'Laboratory',
    'Radiology',
    'Emergency Services',
    'Administrative',
    'Facilities Management',
)

INCOME_CATEGORIES = (
    'Consultations',
    'Procedures',
    'Laboratory',
    'Radiology',
    'Pharmacy Sales',
    'Insurance Reimbursements',
    'Emergency Services',
    'Surgery',
    'Donations',
    'Other',
)
