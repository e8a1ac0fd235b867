from __future__ import annotations

import logging
from functools import lru_cache

from taxoga.config import Settings, get_settings
from taxoga.reference.base import BracketSource, ConfigurationSource, IndustryCatalog, ReferenceDataError
from taxoga.reference.factory import build_bracket_source, build_local_bracket_source, build_reference_sources
from taxoga.schemas import (
    BusinessConfigurationResponse,
    BusinessTaxRequest,
    BusinessTaxResponse,
    PersonalTaxRequest,
    PersonalTaxResponse,
    SelectOption,
)
from taxoga.services.business import (
    BusinessTaxInputs,
    IndustryOption,
    TaxConfiguration,
    business_tax_bands,
    calculate_business_tax,
    find_industry,
    revenue_range_options,
)
from taxoga.services.cache import ReferenceDataCache
from taxoga.services.personal import DeductionInputs, IncomeInputs, summarize_personal_tax

logger = logging.getLogger(__name__)

DATA_UNAVAILABLE_MESSAGE = "Failed to load calculator data. Please refresh the page."

_INDUSTRIES_KEY = "industries"
_CONFIGURATION_KEY = "business-tax-configuration"


class TaxCalculatorService:
    def __init__(
        self,
        bracket_source: BracketSource,
        fallback_bracket_source: BracketSource,
        industry_catalog: IndustryCatalog,
        configuration_source: ConfigurationSource,
        cache: ReferenceDataCache,
    ):
        self.bracket_source = bracket_source
        self.fallback_bracket_source = fallback_bracket_source
        self.industry_catalog = industry_catalog
        self.configuration_source = configuration_source
        self.cache = cache

    @classmethod
    def from_settings(cls, settings: Settings) -> TaxCalculatorService:
        industry_catalog, configuration_source = build_reference_sources(settings)
        return cls(
            bracket_source=build_bracket_source(settings),
            fallback_bracket_source=build_local_bracket_source(settings),
            industry_catalog=industry_catalog,
            configuration_source=configuration_source,
            cache=ReferenceDataCache(ttl_seconds=settings.reference_cache_ttl_seconds),
        )

    def industries(self) -> list[IndustryOption]:
        return self.cache.get_or_load(_INDUSTRIES_KEY, self.industry_catalog.list_industries)

    def configuration(self) -> TaxConfiguration:
        return self.cache.get_or_load(_CONFIGURATION_KEY, self.configuration_source.get_business_tax_configuration)

    def personal(self, request: PersonalTaxRequest) -> PersonalTaxResponse:
        income = IncomeInputs(**request.income.model_dump())
        deductions = DeductionInputs(**request.deductions.model_dump())
        data_error = None
        try:
            bands = self.bracket_source.compute_personal_bands(income, deductions)
        except ReferenceDataError as exc:
            logger.warning("Bracket source unavailable, using local schedule: %s", exc)
            bands = self.fallback_bracket_source.compute_personal_bands(income, deductions)
            data_error = DATA_UNAVAILABLE_MESSAGE
        result = summarize_personal_tax(income, deductions, bands)
        return PersonalTaxResponse.from_result(result, data_error=data_error)

    def business(self, request: BusinessTaxRequest) -> BusinessTaxResponse:
        industry = None
        config = None
        data_error = None
        try:
            industry = find_industry(self.industries(), request.industry_id)
            config = self.configuration()
        except ReferenceDataError as exc:
            logger.warning("Business tax reference data unavailable: %s", exc)
            data_error = DATA_UNAVAILABLE_MESSAGE

        result = calculate_business_tax(
            BusinessTaxInputs(
                industry=industry,
                config=config,
                made_profit=request.made_profit,
                revenue_range=request.revenue_range,
                net_profit=request.net_profit,
                incorporation_year=request.incorporation_year,
            )
        )
        return BusinessTaxResponse.from_result(result, business_tax_bands(result), data_error=data_error)

    def business_configuration(self) -> BusinessConfigurationResponse:
        config = self.configuration()
        return BusinessConfigurationResponse(
            tax_rate=float(config.tax_rate),
            taxable_amount_threshold=float(config.taxable_amount_threshold),
            revenue_options=[SelectOption(value=value, label=label) for value, label in revenue_range_options(config)],
        )


@lru_cache
def get_calculator_service() -> TaxCalculatorService:
    return TaxCalculatorService.from_settings(get_settings())
