"""Read proclimits settings from YAML."""

import os
from pathlib import Path

import yaml

from proclimits.config.models import ProcLimitsConfig

CONFIG_ENV_VAR = "PROCLIMITS_CONFIG"


def load_config(config_path: str | Path | None = None) -> ProcLimitsConfig:
    """Build the procfs reader settings.

    Without an explicit path the file named by ``PROCLIMITS_CONFIG`` is used;
    with neither, reads go to ``/proc`` with the default buffer and logging.

    Args:
        config_path: YAML file holding ``proc_root``, ``buffer_size`` and a
            ``logging`` section, all optional.

    Returns:
        Validated ProcLimitsConfig.

    Raises:
        FileNotFoundError: If the named settings file is missing.
        ValueError: If the file is empty, is not a mapping, or holds values
            such as a relative ``proc_root`` or an out-of-range buffer size.
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR)
        if not config_path:
            return ProcLimitsConfig()

    config_path = Path(config_path)
    if not config_path.is_file():
        raise FileNotFoundError(f"proclimits settings file not found: {config_path}")

    settings = yaml.safe_load(config_path.read_text())
    if settings is None:
        raise ValueError(f"proclimits settings file is empty: {config_path}")
    if not isinstance(settings, dict):
        raise ValueError(
            f"proclimits settings must be a mapping, got {type(settings).__name__}: "
            f"{config_path}"
        )

    try:
        return ProcLimitsConfig(**settings)
    except Exception as e:
        raise ValueError(f"Invalid proclimits settings in {config_path}: {e}") from e
