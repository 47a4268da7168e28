from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class WelcomeEmail:
    """
    Welcome message handed to the email backend.

    :ivar email: Recipient address.
    :ivar display_name: Name used in the greeting.
    :ivar verification_link: Link the recipient follows to verify the address.
    """

    email: str
    display_name: str
    verification_link: str


class EmailSender(Protocol):
    """Port for delivering transactional email."""

    def send_welcome_email(self, *, email: str, display_name: str, verification_link: str) -> None:
        """
        Send the welcome/verification email.

        :raises EmailDeliveryError: When the backend rejects or fails the send.
        """


class InMemoryEmailSender(EmailSender):
    """Email sender that records messages instead of sending them."""

    def __init__(self) -> None:
        self._outbox: list[WelcomeEmail] = []
        self._lock = threading.Lock()

    def send_welcome_email(self, *, email: str, display_name: str, verification_link: str) -> None:
        with self._lock:
            self._outbox.append(
                WelcomeEmail(
                    email=email,
                    display_name=display_name,
                    verification_link=verification_link,
                )
            )

    @property
    def outbox(self) -> list[WelcomeEmail]:
        """Messages sent so far, oldest first."""
        with self._lock:
            return list(self._outbox)

    def clear(self) -> None:
        with self._lock:
            self._outbox.clear()
