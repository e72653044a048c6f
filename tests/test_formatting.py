# tests/test_formatting.py
import math

from socialcost.core.formatting import (
    format_currency,
    format_full_currency,
    format_number,
    format_parameter_value,
    format_percentage,
    format_years,
)


def test_format_currency_suffixes():
    assert format_currency(2.48176e12) == "$2.5T"
    assert format_currency(271.26e9) == "$271.3B"
    assert format_currency(13.7e6) == "$13.7M"
    assert format_currency(7000) == "$7.0K"
    assert format_currency(999) == "$999.0"


def test_non_finite_formats_as_zero():
    assert format_currency(math.nan) == "$0"
    assert format_full_currency(math.inf) == "$0"
    assert format_percentage(math.nan) == "0%"
    assert format_number(math.nan) == "0"
    assert format_parameter_value("vsl", math.nan) == "0"


def test_other_formats():
    assert format_full_currency(2_481_760_123_456.4) == "$2,481,760,123,456"
    assert format_percentage(10.3407) == "10.3%"
    assert format_number(5_000_000) == "5.0M"
    assert format_number(110_000) == "110K"
    assert format_years(1) == "1.0 year"
    assert format_years(4.5) == "4.5 years"


def test_parameter_values():
    assert format_parameter_value("attribution", 18) == "18%"
    assert format_parameter_value("productivity", 6000) == "$6.0K"
    assert format_parameter_value("duration", 4.5) == "4.5 years"
