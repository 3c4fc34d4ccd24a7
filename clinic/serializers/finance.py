from decimal import ROUND_HALF_UP, Decimal

import bleach
from rest_framework import serializers

from ..constants import BILL_CATEGORIES, INCOME_CATEGORIES


class MoneyField(serializers.DecimalField):
    """Decimal field that rounds extra fraction digits to cents instead of rejecting them."""

    def __init__(self, **kwargs):
        kwargs.setdefault('max_digits', 12)
        kwargs.setdefault('decimal_places', 2)
        kwargs.setdefault('rounding', ROUND_HALF_UP)
        super().__init__(**kwargs)

    def validate_precision(self, value):
        cents = Decimal(1).scaleb(-self.decimal_places)
        return super().validate_precision(value.quantize(cents, rounding=self.rounding))


def contains_markup(text: str) -> bool:
    # stripping and escaping only disagree when the text holds HTML tags
    return bleach.clean(text, tags=set(), strip=True) != bleach.clean(text, tags=set())


class FinancialRecordSerializer(serializers.Serializer):
    """Validates the four user supplied fields of a bill or income entry.

    Names are stored exactly as typed; they are never HTML-escaped.
    """
    CATEGORIES: tuple[str, ...] = ()

    name = serializers.CharField(max_length=255)
    amount = MoneyField(min_value=Decimal('0.01'))
    date = serializers.DateField(input_formats=['iso-8601'])
    category = serializers.CharField(max_length=64)

    def validate_name(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Name is required')
        if contains_markup(v):
            raise serializers.ValidationError('Name must not contain HTML tags')
        return v

    def validate_category(self, v):
        if v not in self.CATEGORIES:
            raise serializers.ValidationError(f'Unknown category "{v}"')
        return v


class BillSerializer(FinancialRecordSerializer):
    CATEGORIES = BILL_CATEGORIES


class IncomeSerializer(FinancialRecordSerializer):
    CATEGORIES = INCOME_CATEGORIES


class SummaryQuerySerializer(serializers.Serializer):
    month = serializers.IntegerField(required=False, min_value=1, max_value=12)
    year = serializers.IntegerField(required=False, min_value=1900, max_value=9999)
