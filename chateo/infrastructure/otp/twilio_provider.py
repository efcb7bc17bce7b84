from twilio.rest import Client
from typing import Optional
from ...core.config import settings, ConfigurationError
from ...application.ports.verify_provider import VerifyProvider
from .twilio_client import get_twilio_client

class TwilioVerifyProvider(VerifyProvider):
    def __init__(self, client: Optional[Client] = None, verify_sid: Optional[str] = None):
        self.client = client or get_twilio_client()
        self.verify_sid = verify_sid or settings.TWILIO_VERIFY_SERVICE_SID
        if not self.verify_sid:
            raise ConfigurationError("Twilio Verify Service SID not configured")

    def start_verification(self, to: str, channel: str = "sms") -> str:
        verification = self.client.verify.v2.services(self.verify_sid).verifications.create(to=to, channel=channel)
        return verification.sid

    def check_verification(self, to: str, code: str) -> str:
        check = self.client.verify.v2.services(self.verify_sid).verification_checks.create(to=to, code=code)
        return check.status
