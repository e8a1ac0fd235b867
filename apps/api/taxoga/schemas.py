from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field

from taxoga.services.brackets import TaxBand
from taxoga.services.business import BusinessTaxResult, IndustryOption, TaxReason
from taxoga.services.money import ZERO, parse_amount, parse_whole_amount, parse_year
from taxoga.services.personal import PersonalTaxResult


def _normalize_choice(raw: Any) -> str:
    if raw is None:
        return ""
    return str(raw).strip().lower()


# Accepts numbers or text such as "₦1,200,000"; anything unparseable is 0.
Amount = Annotated[Decimal, BeforeValidator(parse_amount)]
# Personal figures are whole naira, rounded half-up.
WholeAmount = Annotated[Decimal, BeforeValidator(parse_whole_amount)]
Year = Annotated[int | None, BeforeValidator(parse_year)]
Choice = Annotated[str, BeforeValidator(_normalize_choice)]


class IncomeModel(BaseModel):
    salary_income: WholeAmount = ZERO
    business_income: WholeAmount = ZERO
    rental_income: WholeAmount = ZERO
    investment_income: WholeAmount = ZERO
    other_income: WholeAmount = ZERO


class DeductionsModel(BaseModel):
    rent: WholeAmount = ZERO
    pension_contribution: WholeAmount = ZERO
    nhf_contribution: WholeAmount = ZERO
    life_insurance: WholeAmount = ZERO
    nhis_premium: WholeAmount = ZERO
    gratuity: WholeAmount = ZERO


class PersonalTaxRequest(BaseModel):
    income: IncomeModel = Field(default_factory=IncomeModel)
    deductions: DeductionsModel = Field(default_factory=DeductionsModel)


class TaxBandModel(BaseModel):
    band: str
    rate: float
    taxable_amount: float
    tax_paid: float

    @classmethod
    def from_band(cls, band: TaxBand) -> "TaxBandModel":
        return cls(
            band=band.band,
            rate=float(band.rate),
            taxable_amount=float(band.taxable_amount),
            tax_paid=float(band.tax_paid),
        )


class PersonalTaxResponse(BaseModel):
    bands: list[TaxBandModel]
    annual_tax: float
    monthly_tax: float
    gross_income: float
    total_deductions: float
    taxable_income: float
    net_income: float
    effective_rate: float
    data_error: str | None = None

    @classmethod
    def from_result(cls, result: PersonalTaxResult, data_error: str | None = None) -> "PersonalTaxResponse":
        return cls(
            bands=[TaxBandModel.from_band(band) for band in result.bands],
            annual_tax=float(result.annual_tax),
            monthly_tax=float(result.monthly_tax),
            gross_income=float(result.gross_income),
            total_deductions=float(result.total_deductions),
            taxable_income=float(result.taxable_income),
            net_income=float(result.net_income),
            effective_rate=float(result.effective_rate),
            data_error=data_error,
        )


class IndustryRulesModel(BaseModel):
    requires_income_tax: bool
    has_exemption_period: bool
    exemption_period_years: int


class IndustryModel(BaseModel):
    id: str
    name: str
    value: str
    extra_properties: IndustryRulesModel

    @classmethod
    def from_option(cls, option: IndustryOption) -> "IndustryModel":
        rules = option.extra_properties
        return cls(
            id=option.id,
            name=option.name,
            value=option.value,
            extra_properties=IndustryRulesModel(
                requires_income_tax=rules.requires_income_tax,
                has_exemption_period=rules.has_exemption_period,
                exemption_period_years=rules.exemption_period_years,
            ),
        )


class SelectOption(BaseModel):
    value: str
    label: str


class BusinessConfigurationResponse(BaseModel):
    tax_rate: float
    taxable_amount_threshold: float
    revenue_options: list[SelectOption]


class BusinessTaxRequest(BaseModel):
    industry_id: str | None = None
    made_profit: Choice = ""
    revenue_range: Choice = ""
    net_profit: Amount = ZERO
    incorporation_year: Year = None


class BusinessTaxResponse(BaseModel):
    annual_tax: float
    monthly_tax: float
    effective_rate: float
    total_net_profit: float
    is_taxable: bool
    tax_rate: float
    reason: TaxReason
    bands: list[TaxBandModel]
    data_error: str | None = None

    @classmethod
    def from_result(
        cls,
        result: BusinessTaxResult,
        bands: list[TaxBand],
        data_error: str | None = None,
    ) -> "BusinessTaxResponse":
        return cls(
            annual_tax=float(result.annual_tax),
            monthly_tax=float(result.monthly_tax),
            effective_rate=float(result.effective_rate),
            total_net_profit=float(result.total_net_profit),
            is_taxable=result.is_taxable,
            tax_rate=float(result.tax_rate),
            reason=result.reason,
            bands=[TaxBandModel.from_band(band) for band in bands],
            data_error=data_error,
        )
