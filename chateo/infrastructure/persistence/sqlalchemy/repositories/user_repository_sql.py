from typing import Optional
from sqlmodel import Session, select

from .....db.models import User
from .....application.ports.user_repo import UserRepository, UserDto

class SqlUserRepository(UserRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, user: User) -> UserDto:
        return UserDto(
            id=user.id,
            phone_number=user.phone_number,
            first_name=user.first_name,
            last_name=user.last_name,
            profile_image_url=user.profile_image_url,
            online_status=bool(user.online_status),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def get_by_phone(self, phone_number: str) -> Optional[UserDto]:
        user = self.session.exec(select(User).where(User.phone_number == phone_number)).first()
        return self._to_dto(user) if user else None

    def get_by_id(self, user_id: str) -> Optional[UserDto]:
        user = self.session.get(User, user_id)
        return self._to_dto(user) if user else None

    def create(self, phone_number: str, first_name: str, last_name: Optional[str]) -> UserDto:
        user = User(phone_number=phone_number, first_name=first_name, last_name=last_name)
        self.session.add(user)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(user)
        return self._to_dto(user)
