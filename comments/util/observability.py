"""Observability configuration using Logfire.

Comment traffic carries personal data (guest names, emails, IP
addresses). Unless the privacy settings allow IP retention, those
attributes are scrubbed before spans leave the process.

Usage:
    import logfire

    logfire.info("Comment saved", comment_id=str(comment.id))

    with logfire.span("flag_service.toggle_flag", comment_id=str(comment.id)):
        ...
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from comments.config import Settings
from comments.util.error import ConfigurationError

DEFAULT_JWT_SECRET = "CHANGE_ME_IN_PRODUCTION"

# Attribute names that identify a commenter
PERSONAL_DATA_PATTERNS = ["ip_address", "last_ip", "client_host", "user_agent"]

# Path parameters worth indexing requests by
TRACKED_PATH_PARAMS = ("comment_id", "owner_id")


def check_production_settings(settings: Settings) -> None:
    """Refuse to start production with development defaults.

    Missing webhooks are only warned about: notifications then go to the
    log, which keeps the service usable while delivery is being set up.

    Raises:
        ConfigurationError: If a required production setting is missing
    """
    if settings.environment != "production":
        return
    if settings.auth.jwt_secret == DEFAULT_JWT_SECRET:
        raise ConfigurationError("AUTH__JWT_SECRET", "must be set in production")

    notifications = settings.notifications
    wants_delivery = (
        notifications.moderator_enabled
        or notifications.author_enabled
        or notifications.reply_enabled
        or notifications.subscribe_enabled
    )
    if wants_delivery and not notifications.webhook_url:
        logfire.warn("Notifications enabled without NOTIFICATIONS__WEBHOOK_URL")
    if settings.comments.allow_guest and not settings.security.enable_spam_checks:
        logfire.warn("Guest comments accepted with spam checks disabled")


def _send_to_logfire(settings: Settings) -> bool:
    """Explicit setting wins, otherwise send whenever a token is present."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def _scrubbing(settings: Settings) -> logfire.ScrubbingOptions:
    patterns = ["email"]
    if not settings.privacy.store_user_ips:
        patterns.extend(PERSONAL_DATA_PATTERNS)
    return logfire.ScrubbingOptions(extra_patterns=patterns)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Token Configuration:
    - OBSERVABILITY__LOGFIRE_TOKEN enables sending to Logfire cloud
    - OBSERVABILITY__SEND_TO_LOGFIRE overrides that decision

    Args:
        settings: Application settings
    """
    send_to_logfire = _send_to_logfire(settings)

    config_kwargs: dict[str, Any] = {
        "service_name": "comments-backend",
        "service_version": settings.git_sha,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "scrubbing": _scrubbing(settings),
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }
    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        store_user_ips=settings.privacy.store_user_ips,
    )


def instrument_fastapi(app: FastAPI, settings: Settings) -> None:
    """Instrument FastAPI application with Logfire.

    Headers are captured in debug mode only: they include the auth and
    guest session cookies.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """

    def _map_request_attributes(request, attributes):
        result = {**attributes}
        if hasattr(request, "method"):
            result["method"] = request.method
        if hasattr(request, "url"):
            result["path"] = request.url.path

        path_params = getattr(request, "path_params", None) or {}
        for name in TRACKED_PATH_PARAMS:
            if name in path_params:
                result[name] = path_params[name]

        if settings.privacy.store_user_ips and request.client:
            result["client_host"] = request.client.host
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=settings.debug,
        request_attributes_mapper=_map_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # SQL comments carry the span context
    )
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Instrument outbound httpx requests (notification webhooks)."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
