from __future__ import annotations

import logging
from typing import Any

import requests

from taxoga.config import Settings
from taxoga.reference.base import BracketSource, ConfigurationSource, IndustryCatalog, ReferenceDataError
from taxoga.reference.decode import decode_bands, decode_configuration, decode_industries
from taxoga.services.brackets import TaxBand
from taxoga.services.business import IndustryOption, TaxConfiguration
from taxoga.services.personal import DeductionInputs, IncomeInputs

logger = logging.getLogger(__name__)

PAYE_CALCULATOR_PATH = "/tax/paye/calculator"
INDUSTRY_OPTIONS_PATH = "/option-type/TAX_INDUSTRIES/options"
BUSINESS_TAX_CONFIGURATION_PATH = "/system-configuration/COMPANY_INCOME_TAX_CONFIGURATION"
INDUSTRY_PAGE_SIZE = 500


def build_paye_payload(income: IncomeInputs, deductions: DeductionInputs) -> dict[str, dict[str, float]]:
    return {
        "income": {
            "salaryIncome": float(income.salary_income),
            "businessIncome": float(income.business_income),
            "rentalIncome": float(income.rental_income),
            "investmentIncome": float(income.investment_income),
            "otherIncome": float(income.other_income),
        },
        "deductions": {
            "rent": float(deductions.rent),
            "pensionContribution": float(deductions.pension_contribution),
            "nhfContribution": float(deductions.nhf_contribution),
            "lifeInsurance": float(deductions.life_insurance),
            "nhisPremium": float(deductions.nhis_premium),
            # Upstream field name.
            "gratitude": float(deductions.gratuity),
        },
    }


class TaxogaClient:
    """Thin JSON client for the public Taxoga API."""

    def __init__(self, settings: Settings, session: requests.Session | None = None):
        self.base_url = settings.taxoga_api_base_url.rstrip("/")
        self.timeout = settings.upstream_timeout_seconds
        self.session = session or requests.Session()

    def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._request("GET", path, params=params)

    def post_json(self, path: str, payload: dict[str, Any]) -> Any:
        return self._request("POST", path, json=payload)

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ReferenceDataError(f"{method} {path} failed: {exc}") from exc
        except ValueError as exc:
            logger.warning("%s %s returned invalid JSON", method, url)
            raise ReferenceDataError(f"{method} {path} returned invalid JSON") from exc


class RemoteBracketSource(BracketSource):
    def __init__(self, client: TaxogaClient):
        self.client = client

    def compute_personal_bands(self, income: IncomeInputs, deductions: DeductionInputs) -> list[TaxBand]:
        payload = self.client.post_json(PAYE_CALCULATOR_PATH, build_paye_payload(income, deductions))
        return decode_bands(payload)


class RemoteIndustryCatalog(IndustryCatalog):
    def __init__(self, client: TaxogaClient):
        self.client = client

    def list_industries(self) -> list[IndustryOption]:
        payload = self.client.get_json(
            INDUSTRY_OPTIONS_PATH,
            params={"pageNumber": 1, "pageSize": INDUSTRY_PAGE_SIZE},
        )
        return decode_industries(payload)


class RemoteConfigurationSource(ConfigurationSource):
    def __init__(self, client: TaxogaClient):
        self.client = client

    def get_business_tax_configuration(self) -> TaxConfiguration:
        return decode_configuration(self.client.get_json(BUSINESS_TAX_CONFIGURATION_PATH))
