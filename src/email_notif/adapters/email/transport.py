"""SMTP notification transport.

Provides send_notification, which makes exactly one delivery attempt for a
plain-text message via btx_lib_mail. The connection is opened and closed
within the call.
"""

from __future__ import annotations

import logging

from btx_lib_mail.lib_mail import send as btx_send

from email_notif.domain.errors import ConfigurationError, DeliveryError

from .config import EmailConfig

logger = logging.getLogger(__name__)

# Keywords that may indicate sensitive data in exception messages
_SENSITIVE_KEYWORDS = frozenset(
    {
        "password",
        "credential",
        "auth",
        "secret",
        "token",
        "key",
        "login",
    }
)


def _sanitize_exception_message(exc: Exception) -> str:
    """Sanitize exception message to prevent credential exposure.

    Returns a generic message when the original exception text contains
    keywords suggesting sensitive data (passwords, credentials, tokens).
    The full exception is preserved in the chain for DEBUG-level logging.

    Example:
        >>> class FakeExc(Exception): pass
        >>> _sanitize_exception_message(FakeExc("Connection failed"))
        'Connection failed'
        >>> _sanitize_exception_message(FakeExc("Auth password rejected"))
        'Email delivery failed. Check SMTP configuration.'
    """
    message = str(exc).lower()
    if any(keyword in message for keyword in _SENSITIVE_KEYWORDS):
        return "Email delivery failed. Check SMTP configuration."
    return str(exc)


def _resolve_addresses(config: EmailConfig) -> tuple[str, str]:
    """Return (sender, recipient), ensuring the message can be addressed.

    Args:
        config: Email configuration to validate.

    Returns:
        Sender and recipient addresses.

    Raises:
        ConfigurationError: When smtp_host, sender_address or recipient_address is unset.
    """
    if config.smtp_host is None:
        raise ConfigurationError("No SMTP host configured (email.smtp_host is empty)")
    if config.sender_address is None:
        raise ConfigurationError("No sender configured (email.sender_address is empty)")
    if config.recipient_address is None:
        raise ConfigurationError("No recipient configured (email.recipient_address is empty)")
    return config.sender_address, config.recipient_address


def send_notification(
    *,
    config: EmailConfig,
    subject: str,
    message: str,
) -> bool:
    """Send one plain-text notification email.

    Args:
        config: Email configuration with server, addresses and credentials.
        subject: Subject line (UTF-8 supported).
        message: Plain-text body.

    Returns:
        True when delivery succeeds; False if the underlying transport
        reports failure without raising.

    Raises:
        ConfigurationError: Server, sender or recipient not configured.
        DeliveryError: Connection, authentication or delivery failed.

    Side Effects:
        Sends email via SMTP. Logs the attempt at INFO level.
    """
    sender, recipient = _resolve_addresses(config)

    logger.info(
        "Sending notification email",
        extra={"sender": sender, "recipient": recipient, "subject": subject, "smtp_host": config.smtp_endpoint},
    )

    try:
        result = btx_send(
            mail_from=sender,
            mail_recipients=[recipient],
            mail_subject=subject,
            mail_body=message,
            smtphosts=[config.smtp_endpoint],
            credentials=config.credentials,
            use_starttls=config.use_starttls,
            timeout=config.timeout,
        )
    except RuntimeError as exc:
        logger.debug("SMTP delivery failed", exc_info=True)
        raise DeliveryError(_sanitize_exception_message(exc)) from exc

    if result:
        logger.info("Notification email sent", extra={"recipient": recipient, "subject": subject})
    else:
        logger.warning("Notification email send returned failure", extra={"recipient": recipient, "subject": subject})

    return result


__all__ = ["send_notification"]
