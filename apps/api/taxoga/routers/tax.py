from fastapi import APIRouter, Depends, HTTPException, status

from taxoga.reference.base import ReferenceDataError
from taxoga.schemas import (
    BusinessConfigurationResponse,
    BusinessTaxRequest,
    BusinessTaxResponse,
    IndustryModel,
    PersonalTaxRequest,
    PersonalTaxResponse,
)
from taxoga.services.calculator import TaxCalculatorService, get_calculator_service

router = APIRouter(prefix="/v1/tax", tags=["tax"])


# Reference-data lookups block on HTTP; keep these endpoints sync.
@router.post("/personal", response_model=PersonalTaxResponse)
def personal_tax(
    request: PersonalTaxRequest,
    service: TaxCalculatorService = Depends(get_calculator_service),
) -> PersonalTaxResponse:
    return service.personal(request)


@router.get("/industries", response_model=list[IndustryModel])
def list_industries(
    service: TaxCalculatorService = Depends(get_calculator_service),
) -> list[IndustryModel]:
    try:
        industries = service.industries()
    except ReferenceDataError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return [IndustryModel.from_option(industry) for industry in industries]


@router.get("/business/configuration", response_model=BusinessConfigurationResponse)
def business_configuration(
    service: TaxCalculatorService = Depends(get_calculator_service),
) -> BusinessConfigurationResponse:
    try:
        return service.business_configuration()
    except ReferenceDataError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc


@router.post("/business", response_model=BusinessTaxResponse)
def business_tax(
    request: BusinessTaxRequest,
    service: TaxCalculatorService = Depends(get_calculator_service),
) -> BusinessTaxResponse:
    return service.business(request)
