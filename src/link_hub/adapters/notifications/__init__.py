"""Notification adapters."""

from link_hub.adapters.notifications.emailjs_sender import EmailJSSender

__all__ = ["EmailJSSender"]
