"""Tests for configuration loading."""

from pathlib import Path
from tempfile import TemporaryDirectory

from link_hub.config import EmailJSConfig, get_settings


def test_defaults_without_config_file(monkeypatch) -> None:
    """Test defaults when no config.yaml exists."""
    for key in ("EMAILJS_SERVICE_ID", "EMAILJS_PUBLIC_KEY", "EMAILJS_TEMPLATE_ID", "EMAILJS_EVENT_TEMPLATE_ID"):
        monkeypatch.delenv(key, raising=False)

    settings = get_settings(Path("does-not-exist.yaml"))

    assert settings.data_dir == Path("public/data")
    assert settings.default_variant == "poe1"
    assert settings.data.base_url is None
    assert settings.emailjs.missing_keys() == [
        "EMAILJS_SERVICE_ID",
        "EMAILJS_PUBLIC_KEY",
        "EMAILJS_EVENT_TEMPLATE_ID or EMAILJS_TEMPLATE_ID",
    ]


def test_yaml_and_environment(monkeypatch) -> None:
    """Test YAML sections and stripped environment keys."""
    monkeypatch.setenv("EMAILJS_SERVICE_ID", "  service_123 ")
    monkeypatch.setenv("EMAILJS_PUBLIC_KEY", "public_abc")
    monkeypatch.setenv("EMAILJS_TEMPLATE_ID", "contact")
    monkeypatch.delenv("EMAILJS_EVENT_TEMPLATE_ID", raising=False)

    with TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "config.yaml"
        config_path.write_text(
            "data:\n"
            "  data_dir: site/data\n"
            "  default_variant: poe2\n"
            "  base_url: https://hub.example.com/data\n"
            "emailjs:\n"
            "  service_page: https://hub.example.com\n",
            encoding="utf-8",
        )

        settings = get_settings(config_path)

    assert settings.data_dir == Path("site/data")
    assert settings.default_variant == "poe2"
    assert settings.data.base_url == "https://hub.example.com/data"
    assert settings.emailjs.service_id == "service_123"
    assert settings.emailjs.service_page == "https://hub.example.com"
    assert settings.emailjs.missing_keys() == []
    assert settings.emailjs.uses_contact_template


def test_event_template_preferred() -> None:
    """Test the event template wins over the contact template."""
    config = EmailJSConfig(template_id="contact", event_template_id="event")
    assert config.effective_template_id == "event"
    assert not config.uses_contact_template
