"""Pricing calculator - client charge, implied hourly rate, cleaner payout and profit"""

from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple, Optional

from .constants import PRICING_HOURLY, PRICING_PER_CLEANING
from .errors import MissingConfiguration

_PRICING_ALIASES = {
    "per cleaning": PRICING_PER_CLEANING,
    "per_cleaning": PRICING_PER_CLEANING,
    "percleaning": PRICING_PER_CLEANING,
    "flat": PRICING_PER_CLEANING,
    "hourly": PRICING_HOURLY,
    "hourly rate": PRICING_HOURLY,
    "hourly_rate": PRICING_HOURLY,
}


class ChargeAndRate(NamedTuple):
    amount_charged: float
    client_hourly_rate: float


class PayoutAndProfit(NamedTuple):
    cleaner_pay: float
    profit: float


def round_half_up(value: float, places: int = 2) -> float:
    """Round like a cash register: 0.005 -> 0.01, 2.5 -> 3"""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def normalize_pricing_type(value: Optional[str]) -> str:
    """Canonical pricing type; clients without one are billed per cleaning"""
    if not value:
        return PRICING_PER_CLEANING
    pricing_type = _PRICING_ALIASES.get(value.strip().lower())
    if pricing_type is None:
        raise MissingConfiguration(f"Unknown pricing type: {value!r}")
    return pricing_type


def compute_charge_and_rate(
    pricing_type: Optional[str],
    duration_hours: float,
    charge_per_cleaning: Optional[float] = None,
    hourly_rate: Optional[float] = None,
) -> ChargeAndRate:
    """
    Derive the charged amount and the client's hourly rate for one cleaning.

    Per Cleaning: the flat charge is billed and the hourly rate is implied.
    Hourly Rate: the rate is billed for the duration.

    Raises:
        MissingConfiguration: if the rate required by the pricing type is not set
        ZeroDivisionError: if a per-cleaning rate is derived from a non-positive duration
    """
    pricing_type = normalize_pricing_type(pricing_type)

    if pricing_type == PRICING_PER_CLEANING:
        if charge_per_cleaning is None:
            raise MissingConfiguration("Charge per cleaning is required for Per Cleaning pricing")
        if duration_hours <= 0:
            raise ZeroDivisionError(
                "Duration must be positive to derive an hourly rate from a flat charge"
            )
        return ChargeAndRate(
            amount_charged=float(charge_per_cleaning),
            client_hourly_rate=round_half_up(charge_per_cleaning / duration_hours),
        )

    if hourly_rate is None:
        raise MissingConfiguration("Client hourly rate is required for Hourly Rate pricing")
    return ChargeAndRate(
        amount_charged=round_half_up(hourly_rate * duration_hours),
        client_hourly_rate=float(hourly_rate),
    )


def compute_payout_and_profit(
    amount_charged: float, cleaner_hourly_rate: float, duration_hours: float
) -> PayoutAndProfit:
    """Cleaner pay for the job and what is left for the business (may be negative)"""
    cleaner_pay = round_half_up(cleaner_hourly_rate * duration_hours)
    return PayoutAndProfit(
        cleaner_pay=cleaner_pay,
        profit=round_half_up(amount_charged - cleaner_pay),
    )
