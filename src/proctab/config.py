"""Configuration management for proctab."""

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional


@dataclass
class CollectorConfig:
    """Collector configuration."""

    procfs_root: str = "/proc"
    verify_mount: bool = True
    max_workers: int = 1
    owner_cache_ttl: float = 300.0  # seconds
    process_name: Optional[str] = None
    log_level: str = "INFO"


class ConfigManager:
    """Manages collector configuration."""

    def __init__(self, config_path: str = "/etc/proctab/config.json"):
        self.config_path = Path(config_path)

    def load(self) -> CollectorConfig:
        """Load configuration from file."""
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, "r") as f:
            data = json.load(f)

        return CollectorConfig(**data)

    def load_or_default(self) -> CollectorConfig:
        """Load configuration from file, or the defaults if there is none."""
        if not self.exists():
            return CollectorConfig()
        return self.load()

    def save(self, config: CollectorConfig) -> None:
        """Save configuration to file."""
        # Ensure directory exists
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, "w") as f:
            json.dump(asdict(config), f, indent=2)

    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()
