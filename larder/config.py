"""TOML configuration loader."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


@dataclass
class ReminderConfig:
    threshold_days: int = 3
    schedule: str = "0 0 * * *"


@dataclass
class InventoryConfig:
    receipt_expiry_days: int = 7
    seed_demo: bool = False


@dataclass
class GeminiGatewayConfig:
    api_key: str = ""
    model: str = "gemini-2.5-flash"


@dataclass
class ClaudeGatewayConfig:
    api_key: str = ""
    model: str = "claude-sonnet-4-5-20250929"


@dataclass
class GatewayConfig:
    backend: str = "gemini"
    gemini: GeminiGatewayConfig = field(default_factory=GeminiGatewayConfig)
    claude: ClaudeGatewayConfig = field(default_factory=ClaudeGatewayConfig)


@dataclass
class LarderConfig:
    reminders: ReminderConfig = field(default_factory=ReminderConfig)
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    gateway: GatewayConfig = field(default_factory=GatewayConfig)


def load_config(path: str | Path | None = None, *, dotenv: bool = False) -> LarderConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    API keys can be supplied via environment variables; with ``dotenv=True``
    a ``.env`` file in the working directory is read first.
    """
    if dotenv:
        from dotenv import find_dotenv, load_dotenv

        load_dotenv(find_dotenv(usecwd=True))

    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    rem = raw.get("reminders", {})
    inv = raw.get("inventory", {})
    gw = raw.get("gateway", {})

    gemini_cfg = gw.get("gemini", {})
    claude_cfg = gw.get("claude", {})

    # Resolve API keys: config file → environment variable
    gemini_api_key = (
        gemini_cfg.get("api_key", "")
        or os.environ.get("GEMINI_API_KEY", "")
        or os.environ.get("API_KEY", "")
    )
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )

    threshold = rem.get("threshold_days", 3)
    if not isinstance(threshold, int) or threshold < 0:
        raise ValueError(f"reminders.threshold_days must be >= 0, got {threshold!r}")

    return LarderConfig(
        reminders=ReminderConfig(
            threshold_days=threshold,
            schedule=rem.get("schedule", "0 0 * * *"),
        ),
        inventory=InventoryConfig(
            receipt_expiry_days=inv.get("receipt_expiry_days", 7),
            seed_demo=inv.get("seed_demo", False),
        ),
        gateway=GatewayConfig(
            backend=gw.get("backend", "gemini"),
            gemini=GeminiGatewayConfig(
                api_key=gemini_api_key,
                model=gemini_cfg.get("model", "gemini-2.5-flash"),
            ),
            claude=ClaudeGatewayConfig(
                api_key=claude_api_key,
                model=claude_cfg.get("model", "claude-sonnet-4-5-20250929"),
            ),
        ),
    )
