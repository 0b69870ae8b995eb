from __future__ import annotations
import logging
import math
import os
from dotenv import load_dotenv

load_dotenv()

log = logging.getLogger(__name__)

GENERATION_DELAY_KEY = "EXAM_BLUEPRINT_GENERATION_DELAY"
LOG_LEVEL_KEY = "EXAM_BLUEPRINT_LOG_LEVEL"
MAX_UPLOAD_MB_KEY = "EXAM_BLUEPRINT_MAX_UPLOAD_MB"

DEFAULT_GENERATION_DELAY = 1.0
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_UPLOAD_MB = 5


def get_setting(name: str, default: str | None = None) -> str | None:
    # 1) Streamlit secrets
    try:
        import streamlit as st
        if name in st.secrets:
            return str(st.secrets[name])
    except Exception:
        pass

    # 2) env var / .env
    return os.getenv(name, default)


def _get_number(name: str, default, cast):
    raw = get_setting(name)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        log.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    if not math.isfinite(value) or value < 0:
        log.warning("Ignoring out-of-range %s=%r, using %s", name, raw, default)
        return default
    return value


def get_generation_delay() -> float:
    """Seconds the mock generator waits before answering."""
    return _get_number(GENERATION_DELAY_KEY, DEFAULT_GENERATION_DELAY, float)


def get_max_upload_bytes() -> int:
    return _get_number(MAX_UPLOAD_MB_KEY, DEFAULT_MAX_UPLOAD_MB, int) * 1024 * 1024


def get_log_level() -> str:
    return (get_setting(LOG_LEVEL_KEY, DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper()
