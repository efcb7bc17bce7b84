from datetime import datetime
from typing import Optional
from sqlalchemy import func
from sqlmodel import Session, select

from .....db.models import VerificationCode
from .....application.ports.verification_repo import VerificationRepository, VerificationAttemptDto


class SqlVerificationRepository(VerificationRepository):
    def __init__(self, session: Session):
        self.session = session

    def _commit(self) -> None:
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def _to_dto(self, rec: VerificationCode) -> VerificationAttemptDto:
        return VerificationAttemptDto(
            id=rec.id,
            phone_number=rec.phone_number,
            code=rec.code,
            verified=rec.verified,
            expires_at=rec.expires_at,
            created_at=rec.created_at,
        )

    def count_since(self, phone_number: str, since: datetime) -> int:
        stmt = select(func.count()).select_from(VerificationCode).where(
            VerificationCode.phone_number == phone_number,
            VerificationCode.created_at >= since,
        )
        return int(self.session.exec(stmt).one())

    def create(self, phone_number: str, created_at: datetime, expires_at: datetime, code: Optional[str] = None) -> VerificationAttemptDto:
        rec = VerificationCode(phone_number=phone_number, code=code, created_at=created_at, expires_at=expires_at)
        self.session.add(rec)
        self._commit()
        self.session.refresh(rec)
        return self._to_dto(rec)

    def find_latest_pending(self, phone_number: str, now: datetime) -> Optional[VerificationAttemptDto]:
        rec = self.session.exec(
            select(VerificationCode)
            .where(
                VerificationCode.phone_number == phone_number,
                VerificationCode.verified == False,  # noqa: E712
                VerificationCode.expires_at >= now,
            )
            .order_by(VerificationCode.created_at.desc())
        ).first()
        return self._to_dto(rec) if rec else None

    def mark_verified(self, attempt_id: str) -> None:
        rec = self.session.get(VerificationCode, attempt_id)
        if not rec:
            return
        rec.verified = True
        self.session.add(rec)
        self._commit()

    def has_verified(self, phone_number: str) -> bool:
        rec = self.session.exec(
            select(VerificationCode.id).where(
                VerificationCode.phone_number == phone_number,
                VerificationCode.verified == True,  # noqa: E712
            )
        ).first()
        return rec is not None
