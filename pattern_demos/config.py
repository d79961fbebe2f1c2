"""
Configuration for the demo runner, with YAML support.

The demos themselves have nothing to configure; this only selects which
demos run and how diagnostics are logged.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from pattern_demos.observability.logging import LogLevel
from pattern_demos.runner import DEMO_NAMES


@dataclass
class DemoConfig:
    """Configuration for a demo session.

    Attributes:
        demos: Names of the demos to run, in order
        log_level: Minimum level for diagnostic logging
        json_logs: Whether console logs are JSON instead of readable lines
        use_colors: Whether readable console logs use ANSI colors
        log_file: Optional file receiving JSON logs
    """

    demos: List[str] = field(default_factory=lambda: list(DEMO_NAMES))
    log_level: str = "WARNING"
    json_logs: bool = False
    use_colors: bool = True
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        unknown = [name for name in self.demos if name not in DEMO_NAMES]
        if unknown:
            raise ValueError(
                f"Unknown demo(s): {', '.join(unknown)}. "
                f"Available: {', '.join(DEMO_NAMES)}"
            )
        if self.log_level.upper() not in LogLevel.__members__:
            raise ValueError(f"Unknown log level: {self.log_level}")
        self.log_level = self.log_level.upper()

    @classmethod
    def from_yaml(cls, path: Path | str) -> "DemoConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file

        Returns:
            DemoConfig instance with values from the file

        Raises:
            FileNotFoundError: If the YAML file doesn't exist
            yaml.YAMLError: If the YAML is malformed
            ValueError: If the file holds unknown keys or values
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Demo config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data: Optional[Dict[str, Any]] = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DemoConfig":
        """Create configuration from a dictionary.

        Raises:
            ValueError: If the dictionary holds unknown keys or values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config key(s): {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "demos": list(self.demos),
            "log_level": self.log_level,
            "json_logs": self.json_logs,
            "use_colors": self.use_colors,
            "log_file": self.log_file,
        }

    def to_yaml(self, path: Path | str) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
