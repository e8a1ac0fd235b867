from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any, Mapping, Sequence

from taxoga.services.brackets import NIGERIA_2026_SCHEDULE, BandSpec, TaxBand, allocate_bands, total_tax
from taxoga.services.money import HUNDRED, MONTHS_PER_YEAR, ZERO, parse_whole_amount

# Shown next to the rent field. Not applied to the computation.
RENT_RELIEF_CAP = Decimal("500000")


def _sum_fields(instance) -> Decimal:
    return sum((getattr(instance, f.name) for f in fields(instance)), ZERO)


@dataclass(frozen=True)
class IncomeInputs:
    salary_income: Decimal = ZERO
    business_income: Decimal = ZERO
    rental_income: Decimal = ZERO
    investment_income: Decimal = ZERO
    other_income: Decimal = ZERO

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> IncomeInputs:
        return cls(**{f.name: parse_whole_amount(raw.get(f.name)) for f in fields(cls)})

    @property
    def total(self) -> Decimal:
        return _sum_fields(self)


@dataclass(frozen=True)
class DeductionInputs:
    rent: Decimal = ZERO
    pension_contribution: Decimal = ZERO
    nhf_contribution: Decimal = ZERO
    life_insurance: Decimal = ZERO
    nhis_premium: Decimal = ZERO
    gratuity: Decimal = ZERO

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> DeductionInputs:
        return cls(**{f.name: parse_whole_amount(raw.get(f.name)) for f in fields(cls)})

    @property
    def total(self) -> Decimal:
        return _sum_fields(self)


@dataclass(frozen=True)
class PersonalTaxResult:
    bands: list[TaxBand]
    annual_tax: Decimal
    monthly_tax: Decimal
    gross_income: Decimal
    total_deductions: Decimal
    taxable_income: Decimal
    net_income: Decimal
    effective_rate: Decimal


def taxable_income(income: IncomeInputs, deductions: DeductionInputs) -> Decimal:
    return max(income.total - deductions.total, ZERO)


def summarize_personal_tax(
    income: IncomeInputs,
    deductions: DeductionInputs,
    bands: Sequence[TaxBand],
) -> PersonalTaxResult:
    """Derive the headline figures from an already allocated band breakdown."""
    gross_income = income.total
    total_deductions = deductions.total
    annual_tax = total_tax(bands)
    effective_rate = annual_tax / gross_income * HUNDRED if gross_income > 0 else ZERO
    return PersonalTaxResult(
        bands=list(bands),
        annual_tax=annual_tax,
        monthly_tax=annual_tax / MONTHS_PER_YEAR,
        gross_income=gross_income,
        total_deductions=total_deductions,
        taxable_income=max(gross_income - total_deductions, ZERO),
        net_income=max(gross_income - total_deductions - annual_tax, ZERO),
        effective_rate=effective_rate,
    )


def calculate_personal_tax(
    income: IncomeInputs,
    deductions: DeductionInputs,
    schedule: Sequence[BandSpec] = NIGERIA_2026_SCHEDULE,
) -> PersonalTaxResult:
    bands = allocate_bands(taxable_income(income, deductions), schedule)
    return summarize_personal_tax(income, deductions, bands)
