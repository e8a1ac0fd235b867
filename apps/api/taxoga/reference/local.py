from __future__ import annotations

from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Sequence

import yaml

from taxoga.reference.base import BracketSource, ConfigurationSource, IndustryCatalog, ReferenceDataError
from taxoga.reference.decode import decode_configuration_record, decode_industry_items
from taxoga.services.brackets import NIGERIA_2026_SCHEDULE, BandSpec, TaxBand, allocate_bands, validate_schedule
from taxoga.services.business import IndustryOption, TaxConfiguration
from taxoga.services.personal import DeductionInputs, IncomeInputs, taxable_income


class ScheduleBracketSource(BracketSource):
    def __init__(self, schedule: Sequence[BandSpec] = NIGERIA_2026_SCHEDULE):
        validate_schedule(schedule)
        self.schedule = tuple(schedule)

    def compute_personal_bands(self, income: IncomeInputs, deductions: DeductionInputs) -> list[TaxBand]:
        return allocate_bands(taxable_income(income, deductions), self.schedule)


def _decimal_field(row: dict, key: str, label: str) -> Decimal:
    try:
        return Decimal(str(row[key]))
    except (KeyError, InvalidOperation) as exc:
        raise ValueError(f"band {label!r}: invalid {key}") from exc


def load_schedule(path: Path) -> tuple[BandSpec, ...]:
    """Read a progressive schedule from YAML.

    Expected shape::

        bands:
          - {label: "First ₦800,000", rate: 0, capacity: 800000}
          - {label: "Above ₦50,000,000", rate: 25}
    """
    if not path.exists():
        raise FileNotFoundError(f"Missing schedule file: {path}")
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    rows = raw.get("bands", [])
    if not isinstance(rows, list):
        raise ValueError("schedule file must contain top-level `bands` list")

    schedule: list[BandSpec] = []
    for row in rows:
        if not isinstance(row, dict):
            raise ValueError(f"invalid band entry: {row!r}")
        label = str(row.get("label", "")).strip() or f"Band {len(schedule) + 1}"
        capacity = None if row.get("capacity") is None else _decimal_field(row, "capacity", label)
        schedule.append(BandSpec(label=label, rate=_decimal_field(row, "rate", label), capacity=capacity))
    validate_schedule(schedule)
    return tuple(schedule)


def read_snapshot(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ReferenceDataError(f"Missing reference snapshot: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ReferenceDataError(f"Unreadable reference snapshot {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ReferenceDataError(f"Reference snapshot {path} must be a mapping")
    return raw


def write_snapshot(path: Path, industries: list[dict[str, Any]], configuration: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"industries": industries, "configuration": configuration}
    path.write_text(yaml.safe_dump(payload, sort_keys=False, allow_unicode=True), encoding="utf-8")


class SnapshotCatalog(IndustryCatalog, ConfigurationSource):
    """Industry catalog and configuration read from a YAML snapshot file."""

    def __init__(self, path: Path):
        self.path = path

    def list_industries(self) -> list[IndustryOption]:
        return decode_industry_items(read_snapshot(self.path).get("industries", []))

    def get_business_tax_configuration(self) -> TaxConfiguration:
        return decode_configuration_record(read_snapshot(self.path).get("configuration"))
