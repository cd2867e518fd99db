from __future__ import annotations

import json
import logging
from pathlib import Path

from code_guardian.models import AppConfig, Rule


DEFAULT_CONFIG_FILES = (".codeguardianrc.json", "codeguardian.config.json")
EMBEDDED_CONFIG = Path(__file__).with_name("default_config.json")

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    pass


class ConfigNotFoundError(ConfigError):
    pass


class ConfigParseError(ConfigError):
    pass


def load_config(path: str | Path | None = None, *, cwd: str | Path | None = None) -> AppConfig:
    """Load the first configuration found.

    An explicit ``path`` must exist. Otherwise the well-known file names are
    tried in ``cwd`` before falling back to the rules shipped with the package.
    """
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigNotFoundError(f"Config file not found: {config_path}")
        return _read_config(config_path, source=str(config_path))

    base = Path(cwd) if cwd is not None else Path.cwd()
    for name in DEFAULT_CONFIG_FILES:
        candidate = base / name
        if candidate.exists():
            return _read_config(candidate, source=str(candidate))

    return _read_config(EMBEDDED_CONFIG, source="<default>")


def _read_config(config_path: Path, *, source: str) -> AppConfig:
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ConfigParseError(f"Invalid JSON in config file {config_path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigParseError(f"Config file {config_path} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigParseError(f"Config file {config_path} must contain a JSON object")

    rules_raw = raw.get("rules", [])
    if not isinstance(rules_raw, list):
        raise ConfigParseError("'rules' must be a list")

    rules: list[Rule] = []
    for index, item in enumerate(rules_raw):
        if not isinstance(item, dict):
            logger.debug("skipping rule #%d: not an object", index)
            continue
        if not isinstance(item.get("pattern"), str):
            logger.debug("skipping rule #%d: pattern must be a string", index)
            continue
        rules.append(
            Rule(
                name=_optional_str(item.get("name")),
                pattern=item["pattern"],
                flags=str(item.get("flags") or "g"),
            )
        )

    return AppConfig(
        rules=tuple(rules),
        ignore_files=tuple(_ensure_string_list(raw.get("ignoreFiles", []))),
        source=source,
    )


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _ensure_string_list(value: object) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigParseError("'ignoreFiles' must be a list of strings")
    return [str(item) for item in value]
