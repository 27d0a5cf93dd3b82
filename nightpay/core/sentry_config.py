# nightpay/core/sentry_config.py
"""
Sentry configuration for error tracking in production.

Sentry captures exceptions and breadcrumbs (shift ends, weekend edits) so a
failed recompute or a lost write can be traced back to the action behind it.
"""

import logging
import os

from nightpay.core.config import IS_PRODUCTION

logger = logging.getLogger(__name__)


def init_sentry() -> bool:
    """
    Initialize Sentry error tracking.

    Returns:
        True if Sentry was initialized successfully, False otherwise.
    """
    sentry_dsn = os.getenv("SENTRY_DSN", "").strip()

    # Only initialize in production
    if not IS_PRODUCTION:
        logger.info("Sentry disabled in development mode")
        return False

    if not sentry_dsn:
        logger.warning(
            "SENTRY_DSN not set. Error tracking disabled. "
            "Set SENTRY_DSN environment variable to enable Sentry in production."
        )
        return False

    try:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration
        from sentry_sdk.integrations.logging import LoggingIntegration
        from sentry_sdk.integrations.starlette import StarletteIntegration

        # Logging integration - send error logs to Sentry
        logging_integration = LoggingIntegration(
            level=logging.INFO,  # Breadcrumbs from INFO and above
            event_level=logging.ERROR,  # Send errors and above as events
        )

        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FastApiIntegration(),
                StarletteIntegration(),
                logging_integration,
            ],
            traces_sample_rate=0.1,
            sample_rate=1.0,
            release=os.getenv("RELEASE_VERSION", "nightpay@0.1.0"),
            environment=os.getenv("SENTRY_ENVIRONMENT", "production"),
            send_default_pii=False,
            attach_stacktrace=True,
            before_send=before_send_hook,
        )

        env = os.getenv("SENTRY_ENVIRONMENT", "production")
        logger.info(f"Sentry initialized successfully (environment: {env})")
        return True

    except ImportError:
        logger.warning("Sentry SDK not installed. Install with: pip install sentry-sdk[fastapi]")
        return False
    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}", exc_info=True)
        return False


def before_send_hook(event, hint):
    """
    Filter sensitive data before sending to Sentry.

    Salary figures travel in request bodies and responses, so bodies are
    dropped and only the request line is kept.

    Args:
        event: Sentry event data
        hint: Additional context

    Returns:
        Modified event or None to drop the event
    """
    request = event.get("request")
    if request:
        request.pop("data", None)
        if "headers" in request:
            for header in ("cookie", "authorization"):
                if header in request["headers"]:
                    request["headers"][header] = "[Filtered]"

    return event


def capture_exception(error: Exception, context: dict = None):
    """
    Manually capture an exception to Sentry with additional context.

    Args:
        error: Exception to capture
        context: Additional context to send with the error
    """
    try:
        import sentry_sdk

        if context:
            with sentry_sdk.new_scope() as scope:
                for key, value in context.items():
                    scope.set_context(key, value)
                sentry_sdk.capture_exception(error)
        else:
            sentry_sdk.capture_exception(error)

    except ImportError:
        # Sentry not installed, just log
        logger.error(f"Error occurred: {error}", exc_info=True)


def add_breadcrumb(message: str, category: str = "default", level: str = "info", data: dict = None):
    """
    Add a breadcrumb for debugging.

    Breadcrumbs are trails of events that happened before an error.

    Args:
        message: Breadcrumb message
        category: Category (shift, weekend, storage, etc.)
        level: Severity level
        data: Additional data
    """
    try:
        import sentry_sdk

        sentry_sdk.add_breadcrumb(message=message, category=category, level=level, data=data or {})
    except ImportError:
        pass
