#!/usr/bin/env python3
"""
Design Pattern Demos.

Plays back small demonstrations of four classic design patterns:
1. Observer - a weather station pushing readings to displays
2. State - a context switching between two states
3. Strategy - ducks composed from swappable behaviors
4. Decorator - condiments wrapped around beverages

Usage:
    python main.py              # interactive menu
    python main.py state        # run one demo
    python main.py all          # run the configured demos
"""
# pylint: disable=wrong-import-position

import os
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv

load_dotenv(override=True)

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from pattern_demos import DEMO_NAMES, DemoConfig, DemoRunner, configure_logging

DEFAULT_CONFIG = PROJECT_ROOT / "config" / "demos.yaml"


def load_config() -> DemoConfig:
    """Load the config named by PATTERN_DEMOS_CONFIG, or the bundled one."""
    config_path = os.getenv("PATTERN_DEMOS_CONFIG")
    if config_path:
        config = DemoConfig.from_yaml(config_path)
    elif DEFAULT_CONFIG.exists():
        config = DemoConfig.from_yaml(DEFAULT_CONFIG)
    else:
        config = DemoConfig()

    level = os.getenv("PATTERN_DEMOS_LOG_LEVEL")
    if level:
        config = DemoConfig.from_dict({**config.to_dict(), "log_level": level})

    return config


def choose_demos(config: DemoConfig) -> Optional[List[str]]:
    """Ask which demo to run. Returns None when the user quits."""
    print("=" * 60)
    print("Design Pattern Demos")
    print("=" * 60)

    print("\nAvailable demos:")
    for number, name in enumerate(DEMO_NAMES, start=1):
        print(f"{number}. {name.capitalize()}")
    print("a. All configured demos")
    print("q. Quit")

    choice = input("\nSelect demo (1/2/3/4/a/q): ").strip().lower()

    if choice in ("q", "quit", "exit"):
        return None
    if choice in ("a", "all"):
        return list(config.demos)
    if choice.isdigit() and 1 <= int(choice) <= len(DEMO_NAMES):
        return [DEMO_NAMES[int(choice) - 1]]
    if choice in DEMO_NAMES:
        return [choice]

    raise ValueError(f"Invalid choice: {choice!r}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv

    try:
        config = load_config()
        configure_logging(
            level=config.log_level,
            log_file=config.log_file,
            json_format=config.json_logs,
            use_colors=config.use_colors,
        )

        if not args:
            names = choose_demos(config)
            if names is None:
                print("Goodbye!")
                return 0
        elif args == ["all"]:
            names = list(config.demos)
        else:
            names = args

        DemoRunner().run_many(names, separator=len(names) > 1)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.")
        return 0
    except (ValueError, RuntimeError, LookupError, OSError, yaml.YAMLError) as e:
        print(f"\nError: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
