"""
Number formatting helpers.

Used for the formula strings attached to every CostResult and for
per-parameter display values handed to the UI layer.
"""

from .parameters import is_finite_number as _is_finite


def format_currency(value: float, decimal_places: int = 1) -> str:
    """
    Format an amount with a T/B/M/K suffix.

    Args:
        value: Amount in USD
        decimal_places: Digits after the decimal point

    Returns:
        Formatted string, e.g. "$2.5T"
    """
    if not _is_finite(value):
        return "$0"

    abs_value = abs(value)
    if abs_value >= 1e12:
        return f"${value / 1e12:.{decimal_places}f}T"
    if abs_value >= 1e9:
        return f"${value / 1e9:.{decimal_places}f}B"
    if abs_value >= 1e6:
        return f"${value / 1e6:.{decimal_places}f}M"
    if abs_value >= 1e3:
        return f"${value / 1e3:.{decimal_places}f}K"
    return f"${value:.{decimal_places}f}"


def format_full_currency(value: float) -> str:
    """Format an amount with thousands separators and no suffix."""
    if not _is_finite(value):
        return "$0"
    return f"${round(value):,}"


def format_percentage(value: float, decimal_places: int = 1) -> str:
    """Format a value already expressed in percent (18 -> "18.0%")."""
    if not _is_finite(value):
        return "0%"
    return f"{value:.{decimal_places}f}%"


def format_number(value: float, decimal_places: int = 0) -> str:
    """Format a count, abbreviating millions and thousands."""
    if not _is_finite(value):
        return "0"

    abs_value = abs(value)
    if abs_value >= 1e6:
        return f"{value / 1e6:.1f}M"
    if abs_value >= 1e3:
        return f"{value / 1e3:.{decimal_places}f}K"
    return f"{value:,.{decimal_places}f}"


def format_years(value: float, decimal_places: int = 1) -> str:
    if not _is_finite(value):
        return "0 years"
    unit = "year" if value == 1 else "years"
    return f"{value:.{decimal_places}f} {unit}"


_PARAMETER_FORMATTERS = {
    "vsl": lambda v: f"${v:.1f}M",
    "suicides": lambda v: f"{round(v / 1000)}K",
    "attribution": lambda v: f"{round(v)}%",
    "depression": lambda v: f"{v / 1e6:.1f}M",
    "yld": lambda v: f"{v:.1f} years",
    "qol": lambda v: f"{round(v)}%",
    "healthcare": lambda v: f"${v / 1000:.1f}K",
    "productivity": lambda v: f"${v / 1000:.1f}K",
    "duration": lambda v: f"{v:.1f} years",
}


def format_parameter_value(name: str, value: float) -> str:
    """Format a parameter value the way its slider label shows it."""
    if not _is_finite(value):
        return "0"
    formatter = _PARAMETER_FORMATTERS.get(name)
    return formatter(value) if formatter else str(value)
