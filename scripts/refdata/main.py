from __future__ import annotations

import argparse
import sys
from pathlib import Path

from taxoga.config import get_settings
from taxoga.reference.base import ReferenceDataError
from taxoga.reference.factory import build_local_bracket_source
from taxoga.reference.local import SnapshotCatalog, write_snapshot
from taxoga.reference.remote import RemoteConfigurationSource, RemoteIndustryCatalog, TaxogaClient
from taxoga.services.business import IndustryOption, TaxConfiguration
from taxoga.services.money import format_amount, format_percent, format_rate
from taxoga.services.personal import DeductionInputs, IncomeInputs, RENT_RELIEF_CAP, summarize_personal_tax

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_SNAPSHOT_FILE = PROJECT_ROOT / ".tmp" / "refdata" / "snapshot.yaml"

PERSONAL_FLAGS = (
    ("salary", "salary_income"),
    ("business", "business_income"),
    ("rental", "rental_income"),
    ("investment", "investment_income"),
    ("other", "other_income"),
    ("rent", "rent"),
    ("pension", "pension_contribution"),
    ("nhf", "nhf_contribution"),
    ("life-insurance", "life_insurance"),
    ("nhis", "nhis_premium"),
    ("gratuity", "gratuity"),
)


def industry_to_item(industry: IndustryOption) -> dict:
    rules = industry.extra_properties
    return {
        "id": industry.id,
        "name": industry.name,
        "value": industry.value,
        "extraProperties": {
            "RequiresIncomeTax": rules.requires_income_tax,
            "HasExemptionPeriod": rules.has_exemption_period,
            "ExemptionPeriodYears": rules.exemption_period_years,
        },
    }


def configuration_to_record(config: TaxConfiguration) -> dict:
    return {
        "TaxRate": float(config.tax_rate),
        "TaxableAmountThreshold": float(config.taxable_amount_threshold),
    }


def command_fetch(args: argparse.Namespace) -> int:
    settings = get_settings()
    if args.base_url:
        settings = settings.model_copy(update={"taxoga_api_base_url": args.base_url})
    client = TaxogaClient(settings)
    try:
        industries = RemoteIndustryCatalog(client).list_industries()
        config = RemoteConfigurationSource(client).get_business_tax_configuration()
    except ReferenceDataError as exc:
        print(f"fetch failed: {exc}", file=sys.stderr)
        return 1

    output = Path(args.output)
    write_snapshot(output, [industry_to_item(i) for i in industries], configuration_to_record(config))
    print(f"wrote {len(industries)} industries to {output}")
    return 0


def command_verify(args: argparse.Namespace) -> int:
    snapshot = SnapshotCatalog(Path(args.snapshot))
    try:
        industries = snapshot.list_industries()
        config = snapshot.get_business_tax_configuration()
    except ReferenceDataError as exc:
        print(f"verify failed: {exc}", file=sys.stderr)
        return 1

    problems: list[str] = []
    if not industries:
        problems.append("snapshot contains no industries")
    if not 0 <= config.tax_rate <= 1:
        problems.append(f"tax rate out of range: {config.tax_rate}")
    missing_ids = [i.name for i in industries if not i.id]
    if missing_ids:
        problems.append(f"industries without id: {', '.join(missing_ids)}")

    for problem in problems:
        print(f"- {problem}")
    print(
        f"industries={len(industries)} rate={format_rate(config.tax_rate * 100)}% "
        f"threshold={format_amount(config.taxable_amount_threshold)}"
    )
    return 1 if problems else 0


def command_personal(args: argparse.Namespace) -> int:
    values = vars(args)
    income = IncomeInputs.from_raw(values)
    deductions = DeductionInputs.from_raw(values)
    source = build_local_bracket_source(get_settings())
    result = summarize_personal_tax(income, deductions, source.compute_personal_bands(income, deductions))

    for band in result.bands:
        print(f"{band.band:<22} {format_rate(band.rate):>3}%  {format_amount(band.taxable_amount):>16}  {format_amount(band.tax_paid):>14}")
    print(f"gross income      {format_amount(result.gross_income)}")
    print(f"deductions        -{format_amount(result.total_deductions)}")
    print(f"taxable income    {format_amount(result.taxable_income)}")
    print(f"annual tax        {format_amount(result.annual_tax)}")
    print(f"monthly tax       {format_amount(result.monthly_tax)}")
    print(f"net income        {format_amount(result.net_income)}")
    print(f"effective rate    {format_percent(result.effective_rate)}")
    if deductions.rent > RENT_RELIEF_CAP:
        print(f"note: rent relief is advertised as capped at {format_amount(RENT_RELIEF_CAP)} (not applied)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fetch, verify and exercise Taxoga reference data")
    sub = parser.add_subparsers(dest="command", required=True)

    fetch = sub.add_parser("fetch", help="Download the industry catalog and business tax configuration")
    fetch.add_argument("--output", default=str(DEFAULT_SNAPSHOT_FILE))
    fetch.add_argument("--base-url", default=None)
    fetch.set_defaults(func=command_fetch)

    verify = sub.add_parser("verify", help="Check a reference snapshot")
    verify.add_argument("--snapshot", default=str(DEFAULT_SNAPSHOT_FILE))
    verify.set_defaults(func=command_verify)

    personal = sub.add_parser("personal", help="Print a personal income tax breakdown")
    for flag, field in PERSONAL_FLAGS:
        personal.add_argument(f"--{flag}", dest=field, default="0")
    personal.set_defaults(func=command_personal)
    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
