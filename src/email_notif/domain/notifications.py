"""Pure builders for the subject and body of every notification kind."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import NotificationKind


@dataclass(frozen=True, slots=True)
class Notification:
    """An outbound message derived from a tag and an event kind.

    Ephemeral: it has no identity and is never stored.

    Attributes:
        kind: Which event produced the message.
        subject: Subject line.
        body: Plain-text body.
    """

    kind: NotificationKind
    subject: str
    body: str


def build_update(tag: str, body: str) -> Notification:
    """Return the progress notification for ``tag`` carrying ``body`` verbatim.

    Example:
        >>> build_update("Nightly", "step 3 of 5 done")
        Notification(kind=<NotificationKind.UPDATE: 'update'>, subject='Nightly Update', body='step 3 of 5 done')
    """
    return Notification(NotificationKind.UPDATE, f"{tag} Update", body)


def build_success(tag: str) -> Notification:
    """Return the terminal notification for a run that completed normally.

    Example:
        >>> build_success("Test2").subject
        'Test2 Complete'
        >>> build_success("Test2").body
        'Test2 has completed successfully.'
    """
    return Notification(
        NotificationKind.SUCCESS,
        f"{tag} Complete",
        f"{tag} has completed successfully.",
    )


def build_error(tag: str) -> Notification:
    """Return the terminal notification for a run that raised.

    Example:
        >>> build_error("Test3").subject
        'Test3 Error!'
        >>> build_error("Test3").body
        'Test3 has encountered a error and has panicked.'
    """
    return Notification(
        NotificationKind.ERROR,
        f"{tag} Error!",
        f"{tag} has encountered a error and has panicked.",
    )


__all__ = [
    "Notification",
    "build_error",
    "build_success",
    "build_update",
]
