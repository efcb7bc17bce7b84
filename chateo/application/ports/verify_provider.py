from typing import Protocol

APPROVED = "approved"


class VerifyProvider(Protocol):
    """Hosted verification service: generates, delivers and checks codes."""

    def start_verification(self, to: str, channel: str = "sms") -> str:
        ...

    def check_verification(self, to: str, code: str) -> str:
        ...
