#!/usr/bin/env python3
"""
Configuration - Startup settings sourced from the environment

A .env file in the working directory is honoured via python-dotenv; real
environment variables always win. Settings are read once at startup and
passed explicitly to whatever needs them.
"""
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv

REQUIRED_VARIABLES = (
    "JIRA_DOMAIN",
    "JIRA_EMAIL",
    "JIRA_API_TOKEN",
    "SN_INSTANCE",
    "SN_USERNAME",
    "SN_PASSWORD",
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Required configuration is missing or malformed"""


@dataclass(frozen=True)
class Settings:
    jira_domain: str
    jira_email: str
    jira_api_token: str = field(repr=False)
    sn_instance: str
    sn_username: str
    sn_password: str = field(repr=False)
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Read settings from the given mapping, or from os.environ after loading .env.

    Raises:
        ConfigError: a required variable is missing/blank or PORT is not an integer
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    values = {name: (environ.get(name) or "").strip() for name in REQUIRED_VARIABLES}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    raw_port = environ.get("PORT") or "3000"
    try:
        port = int(raw_port)
    except ValueError:
        raise ConfigError(f"PORT must be an integer, got {raw_port!r}") from None

    log_level = (environ.get("LOG_LEVEL") or "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    return Settings(
        jira_domain=values["JIRA_DOMAIN"],
        jira_email=values["JIRA_EMAIL"],
        jira_api_token=values["JIRA_API_TOKEN"],
        sn_instance=values["SN_INSTANCE"],
        sn_username=values["SN_USERNAME"],
        sn_password=values["SN_PASSWORD"],
        host=environ.get("HOST") or "0.0.0.0",
        port=port,
        log_level=log_level,
    )
