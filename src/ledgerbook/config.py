from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel, Field

from .interest import InterestPolicy


_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z0-9_]+)\}")


def _expand_env_vars(value: object) -> object:
    if isinstance(value, str):
        def repl(match: re.Match[str]) -> str:
            var = match.group(1)
            return os.getenv(var, "")

        return _ENV_VAR_PATTERN.sub(repl, value)
    if isinstance(value, list):
        return [_expand_env_vars(v) for v in value]
    if isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    return value


def _deep_merge(base: object, override: object) -> object:
    if isinstance(base, dict) and isinstance(override, dict):
        out = dict(base)
        for k, v in override.items():
            if k in out:
                out[k] = _deep_merge(out[k], v)
            else:
                out[k] = v
        return out
    return override


def _default_config_from_env() -> dict:
    """
    Env-only defaults so a `.env` file is enough; YAML is an optional override.

    Interest rules are not read from env: they only change through an explicit `interest:` block.
    """
    return {
        "store": {
            "db_path": os.getenv("LEDGER_DB_PATH", "data/ledger.db"),
        },
        "export": {
            "path": os.getenv("LEDGER_EXPORT_PATH", "data/ledger_export.csv"),
        },
        "logging": {
            "level": os.getenv("LOG_LEVEL", "INFO"),
            "file_path": os.getenv("LOG_FILE", "data/ledgerbook.log"),
        },
    }


class StoreConfig(BaseModel):
    db_path: str = "data/ledger.db"


class ExportConfig(BaseModel):
    path: str = "data/ledger_export.csv"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    file_path: str = "data/ledgerbook.log"


class AppConfig(BaseModel):
    store: StoreConfig = StoreConfig()
    export: ExportConfig = ExportConfig()
    logging: LoggingConfig = LoggingConfig()
    interest: InterestPolicy = Field(default_factory=InterestPolicy)


def load_config(path: Union[str, Path]) -> AppConfig:
    p = Path(path)
    raw: dict = {}
    if p.exists():
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        raw = _expand_env_vars(raw)  # supports ${ENV_VAR} in YAML

    merged = _deep_merge(_default_config_from_env(), raw)
    return AppConfig.model_validate(merged)
