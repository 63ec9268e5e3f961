"""Presentation values shown next to artist and service data."""
from typing import Optional, Union

from artune.core.enums import AvailabilityStatus

Number = Union[int, float]


def format_money(amount: Optional[Number]) -> Optional[str]:
    """$500 for whole amounts, $75.50 otherwise."""
    if amount is None:
        return None
    if float(amount).is_integer():
        return f"${int(amount)}"
    return f"${amount:.2f}"


def rate_label(hourly_rate: Optional[Number]) -> Optional[str]:
    money = format_money(hourly_rate)
    return f"{money}/hr" if money else None


def status_label(status: Union[AvailabilityStatus, str]) -> str:
    value = status.value if isinstance(status, AvailabilityStatus) else str(status)
    return value[:1].upper() + value[1:]


def duration_label(minutes: Optional[int]) -> Optional[str]:
    if not minutes:
        return None
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest}m"


def experience_label(years: Optional[int], short: bool = False) -> Optional[str]:
    if years is None:
        return None
    return f"{years} yrs exp" if short else f"{years} years"
