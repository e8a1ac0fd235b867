"""
Company income tax for registered limited liability companies.

Taxability is decided by a fixed sequence of checks on the industry and the
answers given about the last financial year; the first check that applies
decides the outcome. Taxable companies pay a flat rate on net profit.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable

from taxoga.services.brackets import TaxBand
from taxoga.services.money import HUNDRED, MONTHS_PER_YEAR, ZERO, format_amount, format_rate

DEFAULT_TAX_RATE = Decimal("0.25")
DEFAULT_TAXABLE_AMOUNT_THRESHOLD = Decimal("10000000")

MADE_PROFIT_YES = "yes"
REVENUE_ABOVE = "above"
REVENUE_BELOW = "below"


class TaxReason(str, Enum):
    TAXABLE = "taxable"
    NO_PROFIT = "no_profit"
    BELOW_THRESHOLD = "below_threshold"
    NO_INCOME_TAX = "no_income_tax"
    EXEMPTION_APPLIES = "exemption_applies"


@dataclass(frozen=True)
class IndustryRules:
    requires_income_tax: bool = True
    has_exemption_period: bool = False
    exemption_period_years: int = 0


@dataclass(frozen=True)
class IndustryOption:
    id: str
    name: str
    value: str
    extra_properties: IndustryRules = field(default_factory=IndustryRules)


@dataclass(frozen=True)
class TaxConfiguration:
    tax_rate: Decimal = DEFAULT_TAX_RATE  # fraction, 0-1
    taxable_amount_threshold: Decimal = DEFAULT_TAXABLE_AMOUNT_THRESHOLD

    @classmethod
    def normalized(cls, tax_rate: Decimal, taxable_amount_threshold: Decimal) -> TaxConfiguration:
        """Build a configuration, reading rates above 1 as percentages."""
        if tax_rate > 1:
            tax_rate = tax_rate / HUNDRED
        return cls(tax_rate=tax_rate, taxable_amount_threshold=taxable_amount_threshold)


@dataclass(frozen=True)
class BusinessTaxInputs:
    industry: IndustryOption | None = None
    config: TaxConfiguration | None = None
    made_profit: str = ""
    revenue_range: str = ""
    net_profit: Decimal = ZERO
    incorporation_year: int | None = None


@dataclass(frozen=True)
class BusinessTaxResult:
    annual_tax: Decimal
    monthly_tax: Decimal
    effective_rate: Decimal
    total_net_profit: Decimal
    is_taxable: bool
    tax_rate: Decimal
    reason: TaxReason


def find_industry(industries: Iterable[IndustryOption], industry_id: str | None) -> IndustryOption | None:
    if not industry_id:
        return None
    return next((industry for industry in industries if industry.id == industry_id), None)


def calculate_business_tax(inputs: BusinessTaxInputs, current_year: int | None = None) -> BusinessTaxResult:
    if current_year is None:
        current_year = date.today().year

    tax_rate = inputs.config.tax_rate if inputs.config is not None else DEFAULT_TAX_RATE
    exempt = BusinessTaxResult(
        annual_tax=ZERO,
        monthly_tax=ZERO,
        effective_rate=tax_rate * HUNDRED,
        total_net_profit=inputs.net_profit,
        is_taxable=False,
        tax_rate=tax_rate,
        reason=TaxReason.NO_PROFIT,
    )

    # Reference data not loaded yet.
    if inputs.industry is None or inputs.config is None:
        return exempt

    rules = inputs.industry.extra_properties
    if not rules.requires_income_tax:
        return replace(exempt, reason=TaxReason.NO_INCOME_TAX)
    if inputs.made_profit != MADE_PROFIT_YES:
        return replace(exempt, reason=TaxReason.NO_PROFIT)
    if inputs.revenue_range != REVENUE_ABOVE:
        return replace(exempt, reason=TaxReason.BELOW_THRESHOLD)
    if rules.has_exemption_period and inputs.incorporation_year is not None:
        years_since_incorporation = current_year - inputs.incorporation_year
        # The final year of the window is still exempt.
        if years_since_incorporation <= rules.exemption_period_years:
            return replace(exempt, reason=TaxReason.EXEMPTION_APPLIES)

    annual_tax = tax_rate * inputs.net_profit
    return BusinessTaxResult(
        annual_tax=annual_tax,
        monthly_tax=annual_tax / MONTHS_PER_YEAR,
        effective_rate=tax_rate * HUNDRED,
        total_net_profit=inputs.net_profit,
        is_taxable=True,
        tax_rate=tax_rate,
        reason=TaxReason.TAXABLE,
    )


def business_tax_bands(result: BusinessTaxResult) -> list[TaxBand]:
    tax_free = TaxBand(band="Tax-Free", rate=ZERO, taxable_amount=ZERO, tax_paid=ZERO)
    if not result.is_taxable:
        return [replace(tax_free, taxable_amount=result.total_net_profit)]
    rate_pct = result.tax_rate * HUNDRED
    return [
        tax_free,
        TaxBand(
            band=f"{format_rate(rate_pct)}% Band",
            rate=rate_pct,
            taxable_amount=result.total_net_profit,
            tax_paid=result.annual_tax,
        ),
    ]


def revenue_range_options(config: TaxConfiguration | None) -> list[tuple[str, str]]:
    threshold = config.taxable_amount_threshold if config is not None else DEFAULT_TAXABLE_AMOUNT_THRESHOLD
    return [
        (REVENUE_BELOW, f"Less than {format_amount(threshold)}"),
        (REVENUE_ABOVE, f"More than {format_amount(threshold)}"),
    ]
