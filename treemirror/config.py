import os
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

loaded = load_dotenv()
if not loaded and Path(".env").exists():
	raise RuntimeError(".env file present but failed to load")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw


def get_optional_str_env(name: str) -> Optional[str]:
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return None
	return raw.strip()


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_optional_int_env(name: str) -> Optional[int]:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return None
	try:
		return int(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return None


def get_float_env(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return float(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_bool_env(name: str, default: bool) -> bool:
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return default
	value = raw.strip().lower()
	if value in _TRUE_VALUES:
		return True
	if value in _FALSE_VALUES:
		return False
	logging.warning("Invalid %s: %r", name, raw)
	return default


USER_AGENT = get_str_env("USER_AGENT", "treemirror/0.1")
HTTP_TIMEOUT = get_float_env("HTTP_TIMEOUT", 30.0)
LOG_LEVEL = get_str_env("LOG_LEVEL", "INFO").upper()


def workers() -> int:
	return get_int_env("TREEMIRROR_WORKERS", 1)


def pool_size() -> Optional[int]:
	return get_optional_int_env("TREEMIRROR_POOL_SIZE")


def dry_run() -> bool:
	return get_bool_env("TREEMIRROR_DRY_RUN", False)


def storage_root() -> str:
	return get_str_env("TREEMIRROR_STORAGE_ROOT", "./mirror")


def bind_address() -> Optional[str]:
	return get_optional_str_env("TREEMIRROR_BIND_ADDRESS")


def repair_links() -> bool:
	return get_bool_env("TREEMIRROR_REPAIR_LINKS", False)


def recheck_directories() -> bool:
	return get_bool_env("TREEMIRROR_RECHECK_DIRECTORIES", True)
