# chateo/db/models/auth/verification.py
from sqlmodel import SQLModel, Field
from sqlalchemy import Index
from datetime import datetime
from pydantic import NaiveDatetime
from typing import Optional
import uuid

class VerificationCode(SQLModel, table=True):
    __tablename__ = "verification_codes"
    __table_args__ = (
        Index("idx_verification_codes_phone_created", "phone_number", "created_at"),
    )
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    phone_number: str = Field(max_length=16, index=True)
    code: Optional[str] = Field(default=None, max_length=6)  # unused with hosted verify
    verified: bool = Field(default=False)
    expires_at: NaiveDatetime
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
