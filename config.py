"""Configuration management for Billfold.

Reads configuration from ~/.config/billfold.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional
import tomllib
import tomli_w


ID_SCHEMES = ("uuid", "counter")


@dataclass
class BillMatchingSettings:
    """Thresholds used when matching transactions to bill occurrences."""

    amount_tolerance: Decimal = Decimal("5.00")
    date_window_days: int = 5
    minimum_score: int = 50
    require_description_match: bool = False
    require_amount_match: bool = False
    require_date_window: bool = True


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    log_level: str
    log_dir: Path
    export_dir: Path
    categories_file: Optional[Path] = None
    id_scheme: str = "uuid"
    bill_matching: BillMatchingSettings = field(default_factory=BillMatchingSettings)

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "billfold"
        return cls(
            base_dir=base_dir,
            log_level="INFO",
            log_dir=base_dir / "logs",
            export_dir=base_dir / "exports",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "billfold.toml"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Args:
        config_path: Optional override of the config file location.

    Returns:
        Config object with loaded or default values.

    Raises:
        ValueError: If the configured id scheme is unknown.
    """
    config_path = config_path or get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config, config_path)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "billfold"))

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    export_config = data.get("export", {})
    export_dir = Path(export_config.get("export_dir", base_dir / "exports"))

    categories_config = data.get("categories", {})
    defaults_file = categories_config.get("defaults_file")
    categories_file = Path(defaults_file) if defaults_file else None

    id_scheme = data.get("ids", {}).get("scheme", "uuid")
    if id_scheme not in ID_SCHEMES:
        raise ValueError(
            f"Unknown id scheme '{id_scheme}', expected one of: {', '.join(ID_SCHEMES)}"
        )

    matching_config = data.get("bill_matching", {})
    defaults = BillMatchingSettings()
    bill_matching = BillMatchingSettings(
        amount_tolerance=Decimal(
            str(matching_config.get("amount_tolerance", defaults.amount_tolerance))
        ),
        date_window_days=int(
            matching_config.get("date_window_days", defaults.date_window_days)
        ),
        minimum_score=int(matching_config.get("minimum_score", defaults.minimum_score)),
        require_description_match=bool(
            matching_config.get(
                "require_description_match", defaults.require_description_match
            )
        ),
        require_amount_match=bool(
            matching_config.get("require_amount_match", defaults.require_amount_match)
        ),
        require_date_window=bool(
            matching_config.get("require_date_window", defaults.require_date_window)
        ),
    )

    return Config(
        base_dir=base_dir,
        log_level=log_level,
        log_dir=log_dir,
        export_dir=export_dir,
        categories_file=categories_file,
        id_scheme=id_scheme,
        bill_matching=bill_matching,
    )


def _write_config(config: Config, config_path: Optional[Path] = None) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
        config_path: Optional override of the config file location.
    """
    config_path = config_path or get_config_path()

    # Ensure config directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    matching = config.bill_matching
    data = {
        "base_dir": str(config.base_dir),
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "export": {
            "export_dir": str(config.export_dir),
        },
        "ids": {
            "scheme": config.id_scheme,
        },
        "bill_matching": {
            "amount_tolerance": float(matching.amount_tolerance),
            "date_window_days": matching.date_window_days,
            "minimum_score": matching.minimum_score,
            "require_description_match": matching.require_description_match,
            "require_amount_match": matching.require_amount_match,
            "require_date_window": matching.require_date_window,
        },
    }
    # TOML has no null, so an unset defaults file is left out
    if config.categories_file is not None:
        data["categories"] = {"defaults_file": str(config.categories_file)}

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
