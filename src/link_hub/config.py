"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


def _env(key: str) -> str:
    """Read an environment variable, tolerating stray whitespace."""
    value = os.getenv(key)
    return value.strip() if value else ""


@dataclass
class DataConfig:
    """Where the hub documents live."""
    base_url: Optional[str] = None
    data_dir: Path = Path("public/data")
    categories_file: str = "categories.json"
    links_file: str = "links.json"
    events_file: str = "events.json"
    updates_file: str = "updates.json"
    default_variant: str = "poe1"
    variants: list[str] = field(default_factory=lambda: ["poe1", "poe2"])
    request_timeout: float = 30.0


@dataclass
class EmailJSConfig:
    """EmailJS settings for event suggestions."""
    service_id: str = ""
    public_key: str = ""
    template_id: str = ""
    event_template_id: str = ""
    subject_prefix: str = "Event Suggestion from PoE Link Collection"
    service_page: str = ""

    @property
    def effective_template_id(self) -> str:
        """Event template, falling back to the contact template."""
        return self.event_template_id or self.template_id

    @property
    def uses_contact_template(self) -> bool:
        return not self.event_template_id and bool(self.template_id)

    def missing_keys(self) -> list[str]:
        """Environment variables that still need to be set."""
        missing = []
        if not self.service_id:
            missing.append("EMAILJS_SERVICE_ID")
        if not self.public_key:
            missing.append("EMAILJS_PUBLIC_KEY")
        if not self.effective_template_id:
            missing.append("EMAILJS_EVENT_TEMPLATE_ID or EMAILJS_TEMPLATE_ID")
        return missing


@dataclass
class Settings:
    """Application settings."""

    data: DataConfig = field(default_factory=DataConfig)
    emailjs: EmailJSConfig = field(default_factory=EmailJSConfig)

    @property
    def data_dir(self) -> Path:
        return self.data.data_dir

    @property
    def default_variant(self) -> str:
        return self.data.default_variant


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    # Keys come from the environment only
    settings = Settings(
        emailjs=EmailJSConfig(
            service_id=_env("EMAILJS_SERVICE_ID"),
            public_key=_env("EMAILJS_PUBLIC_KEY"),
            template_id=_env("EMAILJS_TEMPLATE_ID"),
            event_template_id=_env("EMAILJS_EVENT_TEMPLATE_ID"),
        ),
    )

    if "data" in config:
        for key, value in config["data"].items():
            if key == "data_dir":
                value = Path(value)
            setattr(settings.data, key, value)

    if "emailjs" in config:
        for key in ("subject_prefix", "service_page"):
            if key in config["emailjs"]:
                setattr(settings.emailjs, key, config["emailjs"][key])

    return settings
