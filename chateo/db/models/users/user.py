# chateo/db/models/users/user.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime
from pydantic import NaiveDatetime
import uuid

class User(SQLModel, table=True):
    __tablename__ = "users"
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    phone_number: str = Field(max_length=16, unique=True, index=True)
    first_name: str = Field(max_length=50)
    last_name: Optional[str] = Field(default=None, max_length=50)
    profile_image_url: Optional[str] = Field(default=None, max_length=255)
    online_status: bool = Field(default=False)
    created_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
    updated_at: NaiveDatetime = Field(default_factory=datetime.utcnow)
