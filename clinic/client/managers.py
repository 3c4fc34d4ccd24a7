"""
Bill and income manager pages.

A manager holds the list of records of one resource, a four field
input form, local month/category filters and the edit state.  Every
mutation goes to the API and is followed by a full reload of the list;
nothing is updated optimistically.  Failures are logged and surface as
one inline message per action.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

import requests

from clinic.constants import BILL_CATEGORIES, INCOME_CATEGORIES

from .api import ApiClient

logger = logging.getLogger(__name__)

FORM_FIELDS = ('name', 'amount', 'date', 'category')
ALL = 'all'

# network errors, non-2xx answers and unreadable bodies
CLIENT_ERRORS = (requests.RequestException, ValueError)


def empty_form() -> dict[str, str]:
    return {f: '' for f in FORM_FIELDS}


def _record_month(record: dict) -> int:
    return date.fromisoformat(str(record['date'])[:10]).month


class ResourceManager:
    resource = ''
    singular = ''
    plural = ''
    categories: tuple[str, ...] = ()

    def __init__(self, api: ApiClient):
        self.api = api
        self.records: list[dict] = []
        self.form = empty_form()
        self.month_filter = ALL
        self.category_filter = ALL
        self.editing_id = None
        self.is_loading = True
        self.error = ''

    # -- list --------------------------------------------------------------
    def fetch(self) -> bool:
        try:
            self.records = self.api.request('GET', self.resource).json()
            self.error = ''
            return True
        except CLIENT_ERRORS:
            logger.exception('Error fetching %s', self.plural)
            self.error = f'Failed to load {self.plural}. Please try again later.'
            return False
        finally:
            self.is_loading = False

    def _payload(self) -> dict:
        return {**self.form, 'amount': float(self.form['amount'])}

    def _reset_form(self) -> None:
        self.form = empty_form()

    def update_form(self, **fields) -> None:
        unknown = set(fields) - set(FORM_FIELDS)
        if unknown:
            raise ValueError(f'unknown form fields: {sorted(unknown)}')
        self.form.update(fields)

    # -- mutations ---------------------------------------------------------
    def add(self) -> bool:
        """Create a record from the form; does nothing unless all fields are filled."""
        if not all(self.form[f] for f in FORM_FIELDS):
            return False
        try:
            self.api.request('POST', self.resource, json=self._payload())
        except CLIENT_ERRORS:
            logger.exception('Error adding %s', self.singular)
            self.error = f'Failed to add {self.singular}. Please try again.'
            return False
        self.fetch()
        self._reset_form()
        return True

    def edit(self, record_id) -> bool:
        record = next((r for r in self.records if r['id'] == record_id), None)
        if record is None:
            return False
        self.form = {
            'name': record['name'],
            'amount': str(record['amount']),
            'date': str(record['date'])[:10],
            'category': record['category'],
        }
        self.editing_id = record_id
        return True

    def save(self, record_id) -> bool:
        try:
            self.api.request('PUT', self.resource, json={'id': record_id, **self._payload()})
        except CLIENT_ERRORS:
            logger.exception('Error updating %s', self.singular)
            self.error = f'Failed to update {self.singular}. Please try again.'
            return False
        self.fetch()
        self.editing_id = None
        self._reset_form()
        return True

    def cancel_edit(self) -> None:
        self.editing_id = None
        self._reset_form()

    def remove(self, record_id) -> bool:
        try:
            self.api.request('DELETE', f'{self.resource}/{record_id}')
        except CLIENT_ERRORS:
            logger.exception('Error deleting %s', self.singular)
            self.error = f'Failed to delete {self.singular}. Please try again.'
            return False
        self.fetch()
        return True

    def is_editing(self, record_id) -> bool:
        return self.editing_id is not None and self.editing_id == record_id

    # -- derived view ------------------------------------------------------
    def set_filters(self, month=None, category: Optional[str] = None) -> None:
        if month is not None:
            self.month_filter = ALL if month == ALL else int(month)
        if category is not None:
            self.category_filter = category

    @property
    def filtered(self) -> list[dict]:
        out = []
        for record in self.records:
            if self.month_filter != ALL and _record_month(record) != self.month_filter:
                continue
            if self.category_filter != ALL and record['category'] != self.category_filter:
                continue
            out.append(record)
        return out

    @property
    def total(self) -> float:
        return sum(float(r['amount']) for r in self.filtered)


class BillManager(ResourceManager):
    resource = '/api/bills'
    singular = 'bill'
    plural = 'bills'
    categories = BILL_CATEGORIES


class IncomeManager(ResourceManager):
    resource = '/api/income'
    singular = 'income'
    plural = 'income'
    categories = INCOME_CATEGORIES
