"""
Progressive band allocation.

A schedule is an ordered list of bands, lowest rate first. Each band has a
capacity: the slice of taxable income that is taxed at that band's rate. The
last band is usually open-ended (``capacity=None``) and takes whatever is left.

Default schedule: Nigeria Tax Act 2025, effective January 1, 2026.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Sequence

from taxoga.services.money import HUNDRED, ZERO, to_decimal


@dataclass(frozen=True)
class BandSpec:
    label: str
    rate: Decimal  # percentage, 0-100
    capacity: Decimal | None  # None for the open-ended top band


@dataclass(frozen=True)
class TaxBand:
    band: str
    rate: Decimal
    taxable_amount: Decimal
    tax_paid: Decimal


NIGERIA_2026_SCHEDULE: tuple[BandSpec, ...] = (
    BandSpec("First ₦800,000", Decimal("0"), Decimal("800000")),
    BandSpec("Next ₦2,200,000", Decimal("15"), Decimal("2200000")),
    BandSpec("Next ₦9,000,000", Decimal("18"), Decimal("9000000")),
    BandSpec("Next ₦13,000,000", Decimal("21"), Decimal("13000000")),
    BandSpec("Next ₦25,000,000", Decimal("23"), Decimal("25000000")),
    BandSpec("Above ₦50,000,000", Decimal("25"), None),
)


def allocate_bands(taxable_income: Any, schedule: Iterable[BandSpec]) -> list[TaxBand]:
    """Spread taxable income over the schedule, filling lower bands first.

    Every band in the schedule is reported, including the ones that received
    nothing. Income beyond a schedule whose last band is bounded is left
    unallocated.
    """
    remaining = max(ZERO, to_decimal(taxable_income))
    bands: list[TaxBand] = []
    for spec in schedule:
        if remaining <= 0:
            allocated = ZERO
        elif spec.capacity is None:
            allocated = remaining
        else:
            allocated = min(remaining, spec.capacity)
        remaining -= allocated
        bands.append(
            TaxBand(
                band=spec.label,
                rate=spec.rate,
                taxable_amount=allocated,
                tax_paid=spec.rate / HUNDRED * allocated,
            )
        )
    return bands


def total_tax(bands: Iterable[TaxBand]) -> Decimal:
    return sum((band.tax_paid for band in bands), ZERO)


def validate_schedule(schedule: Sequence[BandSpec]) -> None:
    if not schedule:
        raise ValueError("schedule must contain at least one band")
    previous_rate: Decimal | None = None
    for index, spec in enumerate(schedule):
        if spec.rate < 0 or spec.rate > HUNDRED:
            raise ValueError(f"band {spec.label!r}: rate must be between 0 and 100")
        if previous_rate is not None and spec.rate < previous_rate:
            raise ValueError(f"band {spec.label!r}: rates must be ascending")
        if spec.capacity is None and index != len(schedule) - 1:
            raise ValueError(f"band {spec.label!r}: only the last band may be open-ended")
        if spec.capacity is not None and spec.capacity < 0:
            raise ValueError(f"band {spec.label!r}: capacity cannot be negative")
        previous_rate = spec.rate
