"""Notification message model and the notifier interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class AttachmentField:
    """One row of an attachment table."""

    label: str
    value: str


@dataclass
class Attachment:
    """A titled two-column table attached to a message."""

    title: str
    fields: list[AttachmentField] = field(default_factory=list)


@dataclass
class NotificationMessage:
    """A chat message with optional tabular attachments."""

    display_name: str
    icon_hint: str
    text: str
    attachments: list[Attachment] = field(default_factory=list)


class Notifier(ABC):
    """Deliver a message to a single configured destination."""

    @abstractmethod
    def send(self, message: NotificationMessage) -> None:
        """
        Deliver the message with a single attempt.

        Raises:
            DeliveryError: If delivery fails.
        """
        pass
