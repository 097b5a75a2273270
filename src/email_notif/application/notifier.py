"""The notifier: tagged update, success and error emails around a unit of work.

Contents:
    * :class:`EmailNotifier` - sends tagged notifications and runs work under
      :meth:`EmailNotifier.capture`, which guarantees exactly one terminal
      notification per run.

System Role:
    Application service. Talks to the mail server only through the
    :class:`~email_notif.application.ports.SendNotification` port handed
    in at construction, so tests substitute an in-memory spy.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, ParamSpec, TypeVar, cast

from ..domain.enums import DeliveryFailurePolicy
from ..domain.errors import DeliveryError
from ..domain.notifications import Notification, build_error, build_success, build_update
from ..domain.outcome import Outcome

if TYPE_CHECKING:
    from ..adapters.email.config import EmailConfig
    from .ports import SendNotification

logger = logging.getLogger(__name__)

T = TypeVar("T")
P = ParamSpec("P")


class EmailNotifier:
    """Configuration and a tag, with methods to send email about a process.

    Construct one per monitored process. Each send is independent: no state
    is kept between calls and nothing is queued or deduplicated.

    Args:
        tag: Descriptive name of the monitored process. Converted with
            ``str()`` and included in every subject line.
        config: Complete email configuration.
        send: Mail transport port; called exactly once per notification.

    Raises:
        ConfigurationError: When the configuration lacks a server, sender
            or recipient.

    Example:
        >>> from email_notif.adapters.email.config import EmailConfig
        >>> from email_notif.adapters.memory import NotificationSpy
        >>> spy = NotificationSpy()
        >>> config = EmailConfig(
        ...     smtp_host="smtp.example.com",
        ...     sender_address="bot@example.com",
        ...     recipient_address="ops@example.com",
        ... )
        >>> notifier = EmailNotifier("Nightly", config, send=spy.send_notification)
        >>> notifier.capture(lambda n: n.send_update("halfway"))
        True
        >>> [sent["subject"] for sent in spy.sent_notifications]
        ['Nightly Update', 'Nightly Complete']
    """

    def __init__(self, tag: object, config: EmailConfig, *, send: SendNotification) -> None:
        self._tag = str(tag)
        self._config = config.require_complete()
        self._send = send

    def __repr__(self) -> str:
        return f"EmailNotifier(tag={self._tag!r}, config={self._config!r})"

    @property
    def tag(self) -> str:
        """Name of the monitored process."""
        return self._tag

    @property
    def config(self) -> EmailConfig:
        """Configuration used for every send."""
        return self._config

    def send_update(self, body: str) -> bool:
        """Send an update email about the running process with the given body text."""
        return self._deliver(build_update(self._tag, body))

    def send_success(self) -> bool:
        """Send a message indicating the process has completed successfully."""
        return self._deliver(build_success(self._tag))

    def send_error(self) -> bool:
        """Send a message indicating the process has failed."""
        return self._deliver(build_error(self._tag))

    def capture(self, work: Callable[[EmailNotifier], T]) -> T:
        """Run ``work`` and send exactly one terminal notification.

        ``work`` receives this notifier so it can call :meth:`send_update`
        while it runs. When it returns, :meth:`send_success` is sent and its
        return value is handed back. When it raises, :meth:`send_error` is
        sent and the original exception is re-raised unchanged.

        Args:
            work: Callable taking the notifier.

        Returns:
            Whatever ``work`` returned.

        Raises:
            BaseException: The exception raised by ``work``, after the error
                notification was attempted.
            DeliveryError: The success notification could not be delivered
                and the delivery failure policy is ``raise``.
        """
        outcome = Outcome.of(work, self)
        if outcome.succeeded:
            self.send_success()
        else:
            self._send_error_while_failing(outcome.error)
        return cast(T, outcome.unwrap())

    @contextmanager
    def capturing(self) -> Iterator[EmailNotifier]:
        """Context-manager form of :meth:`capture`.

        Example:
            >>> with notifier.capturing() as n:  # doctest: +SKIP
            ...     n.send_update("step 1 done")
        """
        try:
            yield self
        except BaseException as exc:
            self._send_error_while_failing(exc)
            raise
        self.send_success()

    def monitor(self, func: Callable[P, T]) -> Callable[P, T]:
        """Decorate ``func`` so every call runs under :meth:`capture`.

        Example:
            >>> @notifier.monitor  # doctest: +SKIP
            ... def nightly_build() -> None: ...
        """

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return self.capture(lambda _notifier: func(*args, **kwargs))

        return wrapper

    def _send_error_while_failing(self, fault: BaseException | None) -> None:
        """Send the error notification without letting it replace ``fault``.

        The work's exception is what the caller must observe, so a failure
        to send is logged instead of raised.
        """
        try:
            self.send_error()
        except Exception:
            logger.error(
                "Error notification could not be sent; re-raising the original failure",
                extra={"tag": self._tag, "fault_type": type(fault).__name__},
                exc_info=True,
            )

    def _deliver(self, notification: Notification) -> bool:
        """Hand one notification to the transport and apply the failure policy."""
        kind = notification.kind.value
        logger.info(
            "Sending %s notification",
            kind,
            extra={"tag": self._tag, "kind": kind, "subject": notification.subject},
        )
        try:
            delivered = self._send(config=self._config, subject=notification.subject, message=notification.body)
        except DeliveryError as exc:
            return self._delivery_failed(notification, exc)

        if not delivered:
            return self._delivery_failed(
                notification,
                DeliveryError(f"Mail server did not accept the {kind} notification for {self._tag}"),
            )
        return True

    def _delivery_failed(self, notification: Notification, exc: DeliveryError) -> bool:
        """Raise or downgrade a delivery failure according to the configured policy."""
        extra = {"tag": self._tag, "kind": notification.kind.value, "error": str(exc)}
        if self._config.delivery_failure is DeliveryFailurePolicy.WARN:
            logger.warning("Notification not delivered", extra=extra)
            return False
        logger.error("Notification not delivered", extra=extra)
        raise exc


__all__ = ["EmailNotifier"]
