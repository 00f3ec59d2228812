"""Spam checking adapters."""

from .honeypot import HoneypotSpamChecker

__all__ = ["HoneypotSpamChecker"]
