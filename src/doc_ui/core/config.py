"""
Application Configuration
=========================

Settings that can change without rebuilding the tool: the calibration
profile, patch size, file discovery rules, redo behaviour and logging.

Settings are read from a JSON file. The path comes from the ``path``
argument or the ``DOC_UI_CONFIG`` environment variable; without either the
defaults below apply.

Example file::

    {
        "calibration": {"name": "lab_2025", "offset": 201.3, "slope": -40.9},
        "patch_size": 200,
        "case_sensitive_extensions": false,
        "redo_policy": "append",
        "log_level": "INFO",
        "log_file": "doc_ui.log"
    }

``calibration`` may also be the name of a registered profile, e.g.
``"b_ws"``.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
import json
import logging
import os

from .calibration import CalibrationProfile, DEFAULT_PROFILE, get_profile

logger = logging.getLogger(__name__)

CONFIG_ENV = "DOC_UI_CONFIG"


class ConfigError(ValueError):
    """Raised for unreadable or invalid configuration."""


class RedoPolicy(str, Enum):
    """What happens to the earlier record when a measurement is redone."""

    APPEND = "append"  # keep it, the redo adds a second row
    RETRACT = "retract"  # drop it if it is still the last row


@dataclass
class AppConfig:
    calibration: CalibrationProfile = field(default_factory=lambda: get_profile(DEFAULT_PROFILE))
    patch_size: int = 200
    case_sensitive_extensions: bool = False
    redo_policy: RedoPolicy = RedoPolicy.APPEND
    log_level: str = "INFO"
    log_file: str | None = None


def _parse_calibration(value) -> CalibrationProfile:
    if isinstance(value, str):
        try:
            return get_profile(value)
        except KeyError as e:
            raise ConfigError(str(e.args[0])) from e
    if isinstance(value, dict):
        try:
            return CalibrationProfile(
                str(value.get("name", "custom")),
                float(value["offset"]),
                float(value["slope"]),
            )
        except KeyError as e:
            raise ConfigError(f"Calibration is missing {e.args[0]!r}") from e
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid calibration: {e}") from e
    raise ConfigError(f"Calibration must be a profile name or object, got {value!r}")


def config_from_dict(data: dict) -> AppConfig:
    """
    Build an AppConfig from parsed JSON.

    Parameters
    ----------
    data : dict
        Mapping with any subset of the AppConfig keys

    Returns
    -------
    AppConfig
        Defaults overridden by ``data``

    Raises
    ------
    ConfigError
        On unknown keys or invalid values
    """
    cfg = AppConfig()
    unknown = set(data) - set(AppConfig.__dataclass_fields__)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
    if "calibration" in data:
        cfg.calibration = _parse_calibration(data["calibration"])
    if "patch_size" in data:
        size = data["patch_size"]
        if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
            raise ConfigError(f"patch_size must be a positive integer, got {size!r}")
        cfg.patch_size = size
    if "case_sensitive_extensions" in data:
        flag = data["case_sensitive_extensions"]
        if not isinstance(flag, bool):
            raise ConfigError(f"case_sensitive_extensions must be true or false, got {flag!r}")
        cfg.case_sensitive_extensions = flag
    if "redo_policy" in data:
        try:
            cfg.redo_policy = RedoPolicy(data["redo_policy"])
        except ValueError as e:
            raise ConfigError(f"redo_policy must be 'append' or 'retract', got {data['redo_policy']!r}") from e
    if "log_level" in data:
        level = str(data["log_level"]).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigError(f"Unknown log_level {data['log_level']!r}")
        cfg.log_level = level
    if "log_file" in data:
        cfg.log_file = data["log_file"] or None
    return cfg


def load_config(path: str | Path | None = None) -> AppConfig:
    """
    Load settings from a JSON file.

    Parameters
    ----------
    path : str or Path, optional
        Config file. Falls back to ``$DOC_UI_CONFIG``, then to defaults.

    Returns
    -------
    AppConfig

    Raises
    ------
    ConfigError
        If the file is missing or unreadable, is not valid JSON, or holds
        invalid settings

    Examples
    --------
    >>> cfg = load_config()
    >>> cfg.calibration.offset, cfg.calibration.slope
    (199.92, -41.45)
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV)
    if not path:
        return AppConfig()
    p = Path(path)
    try:
        with open(p, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {p}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {p}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read config file {p}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {p} must contain a JSON object")
    cfg = config_from_dict(data)
    logger.info("Configuration loaded from %s (calibration %s)", p, cfg.calibration.name)
    return cfg
