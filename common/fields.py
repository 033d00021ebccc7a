"""Strict serializer fields.

DRF's CharField/IntegerField coerce numbers to strings and numeric strings to
numbers. Request bodies coming from the checkout wizard are JSON, so a wrong
JSON type is a client bug and is rejected instead of coerced.
"""

import decimal

from rest_framework import serializers


class StrictCharField(serializers.CharField):
    default_error_messages = {"invalid": "Must be a string."}

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail("invalid")
        return super().to_internal_value(data)


class StrictListField(serializers.ListField):
    default_error_messages = {"not_a_list": "Must be an array."}


class StrictNumberField(serializers.FloatField):
    """JSON number (int or float); booleans and strings are rejected."""

    default_error_messages = {"invalid": "Must be a number."}

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail("invalid")
        return super().to_internal_value(data)


class StrictIntegerField(serializers.IntegerField):
    default_error_messages = {"invalid": "Must be a whole number."}

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail("invalid")
        return super().to_internal_value(data)


class StrictDecimalField(serializers.DecimalField):
    """JSON number bound for a fixed-precision money column.

    Extra fractional digits are rounded half up to `decimal_places`; numbers
    with more whole digits than the column holds are rejected.
    """

    default_error_messages = {"invalid": "Must be a number."}

    def __init__(self, **kwargs):
        kwargs.setdefault("max_digits", 10)
        kwargs.setdefault("decimal_places", 2)
        kwargs.setdefault("rounding", decimal.ROUND_HALF_UP)
        kwargs.setdefault("coerce_to_string", False)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail("invalid")
        return super().to_internal_value(data)

    def validate_precision(self, value):
        step = decimal.Decimal(1).scaleb(-self.decimal_places)
        try:
            value = value.quantize(step, rounding=self.rounding)
        except decimal.InvalidOperation:
            self.fail("max_digits", max_digits=self.max_digits)
        return super().validate_precision(value)
