"""
Decoding of upstream reference-data payloads.

Every endpoint has one canonical envelope, validated with pydantic:

* industries:    {"value": {"value": {"data": [item, ...]}}}
* configuration: {"value": {"value": record}}      (record may be a JSON string)
* PAYE bands:    {"value": {"statusCode": ..., "message": ..., "value": [band, ...]}}

Industry and configuration payloads never fail to decode: a bad envelope
gives an empty catalog or the default configuration, and individual fields
fall back to their defaults. Band payloads are required for a personal
calculation, so a bad band envelope raises ReferenceDataError.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from taxoga.reference.base import ReferenceDataError
from taxoga.services.brackets import TaxBand
from taxoga.services.business import (
    DEFAULT_TAX_RATE,
    DEFAULT_TAXABLE_AMOUNT_THRESHOLD,
    IndustryOption,
    IndustryRules,
    TaxConfiguration,
)

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}


class _IndustryPage(BaseModel):
    data: list[Any]


class _IndustryResult(BaseModel):
    value: _IndustryPage


class IndustryEnvelope(BaseModel):
    value: _IndustryResult


class _ConfigurationResult(BaseModel):
    value: dict[str, Any] | str


class ConfigurationEnvelope(BaseModel):
    value: _ConfigurationResult


class ConfigurationRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tax_rate: Any = Field(default=None, validation_alias=AliasChoices("TaxRate", "taxRate"))
    taxable_amount_threshold: Any = Field(
        default=None,
        validation_alias=AliasChoices("TaxableAmountThreshold", "taxableAmountThreshold"),
    )


class RemoteTaxBand(BaseModel):
    band: str
    rate: Decimal
    taxable_amount: Decimal = Field(alias="taxableAmount")
    tax_paid: Decimal = Field(alias="taxPaid")


class _BandResult(BaseModel):
    status_code: int | None = Field(default=None, alias="statusCode")
    message: str | None = None
    value: list[RemoteTaxBand]


class BandEnvelope(BaseModel):
    value: _BandResult


def _load_json_object(raw: Any) -> dict[str, Any]:
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except ValueError:
            return {}
        return parsed if isinstance(parsed, dict) else {}
    return {}


def _coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return default


def _coerce_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _coerce_years(value: Any) -> int:
    number = _coerce_decimal(value)
    if number is None:
        return 0
    return max(int(number), 0)


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def decode_industry_item(item: Mapping[str, Any]) -> IndustryOption:
    extra = _load_json_object(item.get("extraProperties"))
    identifier = _optional_text(item.get("id")) or _optional_text(item.get("value")) or ""
    return IndustryOption(
        id=identifier,
        name=_optional_text(item.get("name")) or _optional_text(item.get("label")) or "Unnamed",
        value=_optional_text(item.get("value")) or identifier,
        extra_properties=IndustryRules(
            requires_income_tax=_coerce_bool(extra.get("RequiresIncomeTax"), True),
            has_exemption_period=_coerce_bool(extra.get("HasExemptionPeriod"), False),
            exemption_period_years=_coerce_years(extra.get("ExemptionPeriodYears")),
        ),
    )


def decode_industry_items(items: Any) -> list[IndustryOption]:
    if not isinstance(items, list):
        logger.warning("Industry list is not an array: %r", type(items).__name__)
        return []
    industries: list[IndustryOption] = []
    for item in items:
        if not isinstance(item, Mapping):
            logger.warning("Skipping malformed industry entry: %r", item)
            continue
        industries.append(decode_industry_item(item))
    return industries


def decode_industries(payload: Any) -> list[IndustryOption]:
    try:
        envelope = IndustryEnvelope.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Industry catalog payload did not match the expected envelope: %s", exc)
        return []
    return decode_industry_items(envelope.value.value.data)


def decode_configuration_record(raw: Any) -> TaxConfiguration:
    record = ConfigurationRecord.model_validate(_load_json_object(raw))

    tax_rate = _coerce_decimal(record.tax_rate)
    if tax_rate is None or tax_rate < 0 or tax_rate > 100:
        tax_rate = DEFAULT_TAX_RATE

    threshold = _coerce_decimal(record.taxable_amount_threshold)
    if threshold is None or threshold < 0:
        threshold = DEFAULT_TAXABLE_AMOUNT_THRESHOLD

    return TaxConfiguration.normalized(tax_rate, threshold)


def decode_configuration(payload: Any) -> TaxConfiguration:
    try:
        envelope = ConfigurationEnvelope.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Configuration payload did not match the expected envelope, using defaults: %s", exc)
        return TaxConfiguration()
    return decode_configuration_record(envelope.value.value)


def decode_bands(payload: Any) -> list[TaxBand]:
    try:
        envelope = BandEnvelope.model_validate(payload)
    except ValidationError as exc:
        raise ReferenceDataError(f"Unexpected PAYE calculator response: {exc}") from exc
    return [
        TaxBand(band=row.band, rate=row.rate, taxable_amount=row.taxable_amount, tax_paid=row.tax_paid)
        for row in envelope.value.value
    ]
