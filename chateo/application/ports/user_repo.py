from typing import Protocol, Optional
from datetime import datetime

class UserDto:
    def __init__(self, id: str, phone_number: str, first_name: str, last_name: Optional[str],
                 profile_image_url: Optional[str], online_status: bool,
                 created_at: datetime, updated_at: datetime):
        self.id = id
        self.phone_number = phone_number
        self.first_name = first_name
        self.last_name = last_name
        self.profile_image_url = profile_image_url
        self.online_status = online_status
        self.created_at = created_at
        self.updated_at = updated_at

class UserRepository(Protocol):
    def get_by_phone(self, phone_number: str) -> Optional[UserDto]:
        ...

    def get_by_id(self, user_id: str) -> Optional[UserDto]:
        ...

    def create(self, phone_number: str, first_name: str, last_name: Optional[str]) -> UserDto:
        ...
