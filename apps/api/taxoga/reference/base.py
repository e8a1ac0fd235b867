from __future__ import annotations

from abc import ABC, abstractmethod

from taxoga.services.brackets import TaxBand
from taxoga.services.business import IndustryOption, TaxConfiguration
from taxoga.services.personal import DeductionInputs, IncomeInputs


class ReferenceDataError(RuntimeError):
    """Reference data could not be obtained from its source."""


class BracketSource(ABC):
    @abstractmethod
    def compute_personal_bands(self, income: IncomeInputs, deductions: DeductionInputs) -> list[TaxBand]:
        raise NotImplementedError


class IndustryCatalog(ABC):
    @abstractmethod
    def list_industries(self) -> list[IndustryOption]:
        raise NotImplementedError


class ConfigurationSource(ABC):
    @abstractmethod
    def get_business_tax_configuration(self) -> TaxConfiguration:
        raise NotImplementedError
