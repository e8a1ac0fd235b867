from pathlib import Path

from taxoga.config import Settings
from taxoga.reference.base import BracketSource, ConfigurationSource, IndustryCatalog
from taxoga.reference.local import ScheduleBracketSource, SnapshotCatalog, load_schedule
from taxoga.reference.remote import (
    RemoteBracketSource,
    RemoteConfigurationSource,
    RemoteIndustryCatalog,
    TaxogaClient,
)
from taxoga.services.brackets import NIGERIA_2026_SCHEDULE


def build_local_bracket_source(settings: Settings) -> ScheduleBracketSource:
    if settings.personal_schedule_file:
        return ScheduleBracketSource(load_schedule(Path(settings.personal_schedule_file)))
    return ScheduleBracketSource(NIGERIA_2026_SCHEDULE)


def build_bracket_source(settings: Settings, client: TaxogaClient | None = None) -> BracketSource:
    if settings.bracket_mode == "remote":
        return RemoteBracketSource(client or TaxogaClient(settings))
    return build_local_bracket_source(settings)


def build_reference_sources(
    settings: Settings,
    client: TaxogaClient | None = None,
) -> tuple[IndustryCatalog, ConfigurationSource]:
    if settings.catalog_mode == "snapshot":
        if not settings.reference_snapshot_file:
            raise ValueError("catalog_mode=snapshot requires reference_snapshot_file")
        snapshot = SnapshotCatalog(Path(settings.reference_snapshot_file))
        return snapshot, snapshot
    client = client or TaxogaClient(settings)
    return RemoteIndustryCatalog(client), RemoteConfigurationSource(client)
