from decimal import Decimal

import pytest

from taxoga.services.business import (
    BusinessTaxInputs,
    IndustryOption,
    IndustryRules,
    TaxConfiguration,
    TaxReason,
    business_tax_bands,
    calculate_business_tax,
    find_industry,
    revenue_range_options,
)

D = Decimal
CURRENT_YEAR = 2026

GENERAL = IndustryOption(id="general", name="General Trading", value="general", extra_properties=IndustryRules())
AGRICULTURE = IndustryOption(
    id="agric",
    name="Agriculture",
    value="agric",
    extra_properties=IndustryRules(has_exemption_period=True, exemption_period_years=5),
)
EXEMPT = IndustryOption(
    id="charity",
    name="Charitable Organisation",
    value="charity",
    extra_properties=IndustryRules(requires_income_tax=False),
)
CONFIG = TaxConfiguration(tax_rate=D("0.25"), taxable_amount_threshold=D("10000000"))


def _inputs(**overrides) -> BusinessTaxInputs:
    values = dict(
        industry=GENERAL,
        config=CONFIG,
        made_profit="yes",
        revenue_range="above",
        net_profit=D("12000000"),
        incorporation_year=None,
    )
    values.update(overrides)
    return BusinessTaxInputs(**values)


def test_taxable_company_pays_flat_rate():
    result = calculate_business_tax(_inputs(), current_year=CURRENT_YEAR)
    assert result.reason is TaxReason.TAXABLE
    assert result.is_taxable is True
    assert result.annual_tax == D("3000000")
    assert result.monthly_tax == D("250000")
    assert result.effective_rate == D("25")
    assert result.total_net_profit == D("12000000")


def test_below_threshold_is_not_taxed():
    result = calculate_business_tax(_inputs(revenue_range="below"), current_year=CURRENT_YEAR)
    assert result.reason is TaxReason.BELOW_THRESHOLD
    assert result.annual_tax == 0
    assert result.is_taxable is False


@pytest.mark.parametrize("revenue_range", ["", "BELOW", "unknown"])
def test_anything_but_above_is_below_threshold(revenue_range):
    result = calculate_business_tax(_inputs(revenue_range=revenue_range), current_year=CURRENT_YEAR)
    assert result.reason is TaxReason.BELOW_THRESHOLD


@pytest.mark.parametrize("made_profit", ["", "no", "maybe"])
def test_no_profit_short_circuits_revenue_check(made_profit):
    result = calculate_business_tax(
        _inputs(made_profit=made_profit, revenue_range="below"),
        current_year=CURRENT_YEAR,
    )
    assert result.reason is TaxReason.NO_PROFIT
    assert result.annual_tax == 0


@pytest.mark.parametrize(
    ("made_profit", "revenue_range", "year"),
    [("yes", "above", None), ("no", "below", 2025), ("", "", None), ("yes", "above", 2000)],
)
def test_industry_without_income_tax_is_always_exempt(made_profit, revenue_range, year):
    result = calculate_business_tax(
        _inputs(industry=EXEMPT, made_profit=made_profit, revenue_range=revenue_range, incorporation_year=year),
        current_year=CURRENT_YEAR,
    )
    assert result.reason is TaxReason.NO_INCOME_TAX
    assert result.annual_tax == 0


def test_missing_reference_data_defaults_to_no_profit():
    for inputs in (_inputs(industry=None), _inputs(config=None), BusinessTaxInputs()):
        result = calculate_business_tax(inputs, current_year=CURRENT_YEAR)
        assert result.reason is TaxReason.NO_PROFIT
        assert result.is_taxable is False
        assert result.tax_rate == D("0.25")


@pytest.mark.parametrize(
    ("incorporation_year", "reason"),
    [
        (CURRENT_YEAR, TaxReason.EXEMPTION_APPLIES),
        (CURRENT_YEAR - 4, TaxReason.EXEMPTION_APPLIES),
        (CURRENT_YEAR - 5, TaxReason.EXEMPTION_APPLIES),
        (CURRENT_YEAR - 6, TaxReason.TAXABLE),
        (None, TaxReason.TAXABLE),
    ],
)
def test_exemption_window_includes_its_last_year(incorporation_year, reason):
    result = calculate_business_tax(
        _inputs(industry=AGRICULTURE, incorporation_year=incorporation_year),
        current_year=CURRENT_YEAR,
    )
    assert result.reason is reason


def test_exemption_window_ignored_without_exemption_flag():
    result = calculate_business_tax(_inputs(incorporation_year=CURRENT_YEAR), current_year=CURRENT_YEAR)
    assert result.reason is TaxReason.TAXABLE


def test_current_year_defaults_to_today():
    from datetime import date

    result = calculate_business_tax(_inputs(industry=AGRICULTURE, incorporation_year=date.today().year - 5))
    assert result.reason is TaxReason.EXEMPTION_APPLIES


def test_percentage_rate_is_normalized():
    config = TaxConfiguration.normalized(D("30"), D("25000000"))
    assert config.tax_rate == D("0.3")
    assert TaxConfiguration.normalized(D("0.2"), D("0")).tax_rate == D("0.2")
    result = calculate_business_tax(_inputs(config=config), current_year=CURRENT_YEAR)
    assert result.annual_tax == D("3600000")
    assert result.effective_rate == D("30")


def test_business_bands_for_taxable_result():
    result = calculate_business_tax(_inputs(), current_year=CURRENT_YEAR)
    tax_free, rate_band = business_tax_bands(result)
    assert tax_free.band == "Tax-Free"
    assert tax_free.taxable_amount == 0
    assert rate_band.band == "25% Band"
    assert rate_band.taxable_amount == D("12000000")
    assert rate_band.tax_paid == D("3000000")


def test_business_bands_for_exempt_result():
    result = calculate_business_tax(_inputs(revenue_range="below"), current_year=CURRENT_YEAR)
    (only,) = business_tax_bands(result)
    assert only.band == "Tax-Free"
    assert only.taxable_amount == D("12000000")
    assert only.tax_paid == 0


def test_revenue_range_options_use_threshold():
    assert revenue_range_options(CONFIG) == [
        ("below", "Less than ₦10,000,000"),
        ("above", "More than ₦10,000,000"),
    ]
    custom = TaxConfiguration(tax_rate=D("0.25"), taxable_amount_threshold=D("25000000"))
    assert revenue_range_options(custom)[1] == ("above", "More than ₦25,000,000")
    assert revenue_range_options(None)[0] == ("below", "Less than ₦10,000,000")


def test_find_industry_by_id():
    catalog = [GENERAL, AGRICULTURE, EXEMPT]
    assert find_industry(catalog, "agric") is AGRICULTURE
    assert find_industry(catalog, "missing") is None
    assert find_industry(catalog, None) is None
