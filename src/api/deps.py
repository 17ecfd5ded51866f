import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from src.app_shell.config import build_facade
from src.components.distribution import DistributionFacade
from src.components.views import InMemoryViewWindow
from src.rules.loader import load_rules
from src.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("CARD_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "cards.db")
        self.migrations_dir = str(self.base_dir / "migrations")
        self.rules_path = Path(os.environ.get("CARD_RULES_PATH", self.base_dir / "rules.yaml"))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


# The idempotency window must outlive a single request
@lru_cache
def get_view_window() -> InMemoryViewWindow:
    return InMemoryViewWindow()


# --- Services ---
def get_facade(
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> DistributionFacade:
    return build_facade(settings.db_path, rules, window=get_view_window())
