import os

# Settings are read at import time; provide the required values before any chateo import.
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("TWILIO_ACCOUNT_SID", "ACtest")
os.environ.setdefault("TWILIO_AUTH_TOKEN", "test-token")
os.environ.setdefault("TWILIO_VERIFY_SERVICE_SID", "VAtest")
os.environ.setdefault("DATABASE_URL", "sqlite://")
