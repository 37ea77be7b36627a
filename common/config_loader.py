from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

DEFAULT_CONFIG_PATH = "config/tracker.yaml"
DEFAULT_PRICE_API_URL = "https://api.coingecko.com/api/v3/simple/price"

def load_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

@dataclass(frozen=True)
class TrackerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def price_api_url(self) -> str:
        return str(self._section("price_api").get("base_url", DEFAULT_PRICE_API_URL))

    @property
    def request_timeout(self) -> float:
        return float(self._section("price_api").get("timeout_seconds", 15))

    @property
    def refresh_interval(self) -> float:
        return float(self._section("refresh").get("interval_seconds", 60))

    @property
    def storage_path(self) -> Path:
        return Path(self._section("storage").get("path", "data/holdings.json"))

    @property
    def storage_key(self) -> str:
        return str(self._section("storage").get("key", "cryptoHoldings"))

    @property
    def log_level(self) -> str:
        return str(self._section("logging").get("level", "INFO")).upper()

    @property
    def log_file(self) -> Optional[str]:
        return self._section("logging").get("file")

def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> TrackerConfig:
    """Load tracker settings, falling back to defaults when the file is absent."""
    try:
        raw = load_yaml(path)
    except FileNotFoundError:
        raw = {}
    return TrackerConfig(raw=raw)
