"""Load env and checklist configuration."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from resumefit.errors import ConfigError
from resumefit.log import get_logger

log = get_logger(__name__)

load_dotenv()

PACKAGE_DIR: Path = Path(__file__).resolve().parent
CHECKLIST_PATH: Path = PACKAGE_DIR / "ats_checklist.yaml"

DEFAULT_KEYWORD_MODEL = "gpt-4o"
DEFAULT_VALIDATION_MODEL = "gpt-4o-mini"
DEFAULT_ANALYSIS_MODEL = "gpt-4o"
DEFAULT_ORACLE_TIMEOUT = 60.0
DEFAULT_JOB_SEARCH_TIMEOUT = 15.0


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def get_float_env(key: str, default: float) -> float:
    raw = get_env(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning("Ignoring non-numeric %s=%r, using %s", key, raw, default)
        return default


def keyword_model() -> str:
    return get_env("OPENAI_KEYWORD_MODEL", DEFAULT_KEYWORD_MODEL)


def validation_model() -> str:
    return get_env("OPENAI_VALIDATION_MODEL", DEFAULT_VALIDATION_MODEL)


def analysis_model() -> str:
    return get_env("OPENAI_ANALYSIS_MODEL", DEFAULT_ANALYSIS_MODEL)


def oracle_timeout() -> float:
    return get_float_env("ORACLE_TIMEOUT_SECONDS", DEFAULT_ORACLE_TIMEOUT)


def job_search_timeout() -> float:
    return get_float_env("JOB_SEARCH_TIMEOUT_SECONDS", DEFAULT_JOB_SEARCH_TIMEOUT)


def job_search_api_key() -> str:
    return get_env("RAPIDAPI_KEY") or get_env("JSEARCH_API_KEY")


def checklist_path() -> Path:
    override = get_env("ATS_CHECKLIST_PATH")
    return Path(override) if override else CHECKLIST_PATH


def load_checklist_config(path: Path | None = None) -> dict[str, Any]:
    """Read the ATS checklist file: ``criteria`` (ordered) and ``metrics``."""
    path = path or checklist_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigError(f"Cannot read checklist config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Checklist config {path} must be a mapping")
    data.setdefault("criteria", [])
    data.setdefault("metrics", [])
    return data
