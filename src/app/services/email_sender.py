from abc import ABC, abstractmethod


class IEmailSender(ABC):
    """Outbound email collaborator - application layer"""

    @abstractmethod
    async def send(self, to: str, subject: str, html_body: str) -> bool:
        """
        Deliver a single email.

        Returns:
            True when the message was handed off, False on delivery failure
        """
        pass
