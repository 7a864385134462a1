"""User settings for the kiparse command-line tools."""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

ENV_PREFIX = "KIPARSE"


@dataclass
class Settings:
    """Defaults for the CLI; each can still be overridden per invocation."""
    output_format: str = "text"
    update_interval: float = 1.0  # seconds between re-renders in watch mode
    verbose: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Settings':
        """Create from a dictionary, ignoring keys this version does not know."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def default_settings_path() -> Path:
    return Path.home() / ".kiparse" / "settings.json"


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings; fall back to defaults if the file is missing or unreadable."""
    path = path or default_settings_path()
    if not path.exists():
        return Settings()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return Settings.from_dict(data)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.warning(f"Ignoring unreadable settings file {path}: {e}")
        return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    path = path or default_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(settings.to_dict(), f, indent=2)
    return path
