"""
Runtime configuration for parse-core, read from the environment.
A .env file in the working directory is loaded first.

  PARSE_CORE_SOURCE_ENCODING   encoding of source files       (utf-8)
  PARSE_CORE_MAX_WORKERS       extraction threads, 1 = serial  (1)
  PARSE_CORE_PRESERVE_ORDER    results in input order          (true)
  PARSE_CORE_LOG_LEVEL         logging level name              (INFO)
"""

from __future__ import annotations

import codecs
import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv  # type: ignore

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}
_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    source_encoding: str = "utf-8"
    max_workers: int = 1
    preserve_order: bool = True
    log_level: str = "INFO"


def _env(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


def _encoding(name: str) -> str:
    value = _env(name, "utf-8")
    try:
        codecs.lookup(value)
    except LookupError:
        raise ValueError(f"{name}: unknown encoding {value!r}")
    return value


def _workers(name: str) -> int:
    value = _env(name, "1")
    try:
        workers = int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if workers < 1:
        raise ValueError(f"{name} must be at least 1, got {workers}")
    return workers


def _flag(name: str, default: str) -> bool:
    value = _env(name, default).lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be true or false, got {value!r}")


def _level(name: str) -> str:
    value = _env(name, "INFO").upper()
    if value not in _LEVELS:
        raise ValueError(f"{name} must be one of {sorted(_LEVELS)}, got {value!r}")
    return value


def load_settings() -> Settings:
    load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        source_encoding=_encoding("PARSE_CORE_SOURCE_ENCODING"),
        max_workers=_workers("PARSE_CORE_MAX_WORKERS"),
        preserve_order=_flag("PARSE_CORE_PRESERVE_ORDER", "true"),
        log_level=_level("PARSE_CORE_LOG_LEVEL"),
    )


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or load_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level), format=LOG_FORMAT)
