from __future__ import annotations
import json
import os
from dataclasses import dataclass
from pathlib import Path

from workflows.prospect_research.logger import get_logger

REPO_ROOT = Path(__file__).resolve().parents[2]
LLM_SETTINGS_PATH = REPO_ROOT / "settings" / "llm.json"

_def_llm_cfg = {"provider": "gemini", "model": "", "temperature": 0.2, "timeout_sec": 55}

_DEFAULT_MODELS = {"gemini": "gemini-2.0-flash", "openai": "gpt-4o-mini"}

_log = get_logger()


def load_llm_cfg(path: Path | None = None) -> dict:
    """Model tuning from settings/llm.json merged over the built-in defaults."""
    cfg = dict(_def_llm_cfg)
    p = Path(path or LLM_SETTINGS_PATH)
    if not p.exists():
        return cfg
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        _log.warning(f"⚠️ Ignoring unreadable {p}: {e}")
        return cfg
    if isinstance(data, dict):
        cfg.update({k: v for k, v in data.items() if v is not None})
    return cfg


def _coerce(value, cast, default, source: str):
    try:
        return cast(value)
    except (TypeError, ValueError):
        _log.warning(f"Invalid value {value!r} for {source}; falling back to {default}")
        return default


def _get_str_env(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def _get_int_env(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError:
        _log.warning(f"Invalid int for {name}={val!r}; falling back to {default}")
        return default


def _get_float_env(name: str, default: float) -> float:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return float(val)
    except ValueError:
        _log.warning(f"Invalid float for {name}={val!r}; falling back to {default}")
        return default


@dataclass(frozen=True)
class Settings:
    llm_provider: str = "gemini"
    llm_model: str = "gemini-2.0-flash"
    llm_temperature: float = 0.2
    llm_timeout_sec: int = 55
    gemini_api_key: str = ""
    openai_api_key: str = ""

    min_companies: int = 15
    max_companies: int = 20

    google_service_account_file: str = ""
    google_client_id: str = ""
    google_client_secret: str = ""
    google_refresh_token: str = ""

    @classmethod
    def from_env(cls, llm_settings_path: Path | None = None) -> "Settings":
        """Env vars win over settings/llm.json, which wins over defaults."""
        cfg = load_llm_cfg(llm_settings_path)

        provider = _get_str_env("LLM_PROVIDER", str(cfg["provider"])).lower()
        # a model pinned in llm.json belongs to the provider named there
        file_model = str(cfg.get("model") or "") if str(cfg["provider"]).lower() == provider else ""
        model = _get_str_env("LLM_MODEL", file_model) or _DEFAULT_MODELS.get(provider, "")

        file_temperature = _coerce(cfg["temperature"], float, _def_llm_cfg["temperature"], "llm.json temperature")
        file_timeout = _coerce(cfg["timeout_sec"], int, _def_llm_cfg["timeout_sec"], "llm.json timeout_sec")

        min_companies = _get_int_env("PROSPECT_MIN_COMPANIES", 15)
        max_companies = _get_int_env("PROSPECT_MAX_COMPANIES", 20)
        if max_companies < min_companies:
            _log.warning(
                f"PROSPECT_MAX_COMPANIES={max_companies} is below PROSPECT_MIN_COMPANIES={min_companies}; using {min_companies}"
            )
            max_companies = min_companies

        return cls(
            llm_provider=provider,
            llm_model=model,
            llm_temperature=_get_float_env("LLM_TEMPERATURE", file_temperature),
            llm_timeout_sec=_get_int_env("LLM_TIMEOUT_SEC", file_timeout),
            gemini_api_key=_get_str_env("GEMINI_API_KEY") or _get_str_env("GOOGLE_AI_API_KEY"),
            openai_api_key=_get_str_env("OPENAI_API_KEY"),
            min_companies=min_companies,
            max_companies=max_companies,
            google_service_account_file=_get_str_env("GOOGLE_SERVICE_ACCOUNT_FILE"),
            google_client_id=_get_str_env("GOOGLE_CLIENT_ID"),
            google_client_secret=_get_str_env("GOOGLE_CLIENT_SECRET"),
            google_refresh_token=_get_str_env("GOOGLE_REFRESH_TOKEN"),
        )
