from pathlib import Path
import logging
import pandas as pd
from dynaconf import Dynaconf
import yaml

logger = logging.getLogger(__name__)

def load_results(results_file: Path) -> pd.DataFrame:
    """Load a decade results table previously saved with ``--save``."""
    results_file = Path(results_file)
    if not results_file.is_file():
        raise FileNotFoundError(f"Results file not found: {results_file}")

    return pd.read_csv(results_file, index_col=['month', 'decade'])

def load_config(config_path: str | Path, env: str = "default", base_config: str = "config.yaml") -> Dynaconf:
    """
    Load configuration from YAML file with optional environment selection.

    Args:
        config_path: Path to configuration directory
        env: Environment name in the YAML file
        base_config: Name of base config file

    Returns:
        Dynaconf: Configuration object with loaded settings
    """
    base_dir = Path(config_path)
    config_file = base_dir / base_config
    if not config_file.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    with open(config_file, 'r', encoding='utf-8') as f:
        yaml_config = yaml.safe_load(f) or {}

    if env != "default" and env not in yaml_config:
        logger.warning("Environment %s not found in %s, using default settings", env, config_file)

    # Environment sections override the default section
    if env in yaml_config or "default" in yaml_config:
        base_settings = yaml_config.get("default", {}) or {}
        env_settings = yaml_config.get(env, {}) or {}
        _deep_merge(base_settings, env_settings)
        yaml_config = base_settings

    return Dynaconf(settings_files=False, env=env, **yaml_config)

def _deep_merge(base: dict, update: dict) -> None:
    """
    Recursively merge two dictionaries, modifying the base dictionary.

    Args:
        base: Base dictionary to update
        update: Dictionary with values to merge
    """
    for key, value in update.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
