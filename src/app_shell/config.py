import logging
from pathlib import Path

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteCardStore, SQLiteTemplateStore, SQLiteViewStore
from src.components.distribution import DistributionConfig, DistributionFacade
from src.components.views import ViewLedger, ViewsConfig, ViewWindowPort
from src.rules.models import Rules

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when startup configuration is unusable."""


def validate_ops_rules(rules: Rules) -> None:
    """
    Validate operational requirements before startup.
    """
    base_url = rules.distribution.site_base_url
    if not base_url.startswith(("http://", "https://")):
        raise ConfigError(f"site_base_url must be an absolute http(s) URL, got {base_url!r}")

    if rules.views.dedupe_window_seconds == 0:
        logger.warning("View deduplication is disabled (dedupe_window_seconds = 0)")


def prepare_database(data_dir: Path, db_path: str, migrations_dir: str) -> list[str]:
    """Create the data directory if needed and apply pending migrations."""
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Data directory {data_dir} is not writable: {e}") from e

    applied = SQLiteMigrator(db_path, migrations_dir).run_migrations()
    if applied:
        logger.info("Applied %d migration(s): %s", len(applied), ", ".join(applied))
    return applied


def views_config(rules: Rules) -> ViewsConfig:
    return ViewsConfig(
        dedupe_window_seconds=rules.views.dedupe_window_seconds,
        max_device_info_length=rules.views.max_device_info_length,
        max_card_name_length=rules.views.max_card_name_length,
    )


def distribution_config(rules: Rules) -> DistributionConfig:
    return DistributionConfig(
        site_base_url=rules.distribution.site_base_url,
        card_path_prefix=rules.distribution.card_path_prefix,
        placeholder_name=rules.contact.placeholder_name,
        default_paper_settings=rules.paper.to_settings(),
        contact_download_device=rules.contact.download_device_label,
    )


def build_facade(
    db_path: str,
    rules: Rules,
    window: ViewWindowPort | None = None,
) -> DistributionFacade:
    """Wire the SQLite stores, view ledger and facade from rules."""
    cards = SQLiteCardStore(db_path)
    ledger = ViewLedger(
        store=SQLiteViewStore(db_path),
        cards=cards,
        window=window,
        config=views_config(rules),
    )
    return DistributionFacade(
        cards=cards,
        templates=SQLiteTemplateStore(db_path),
        ledger=ledger,
        config=distribution_config(rules),
    )
