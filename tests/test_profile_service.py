from datetime import datetime
from typing import Optional

from chateo.application.ports.user_repo import UserDto
from chateo.application.results import ErrorKind
from chateo.application.services.profile_service import ProfileService
from chateo.application.services.session_service import SessionService

PHONE = "+12125551234"
SECRET = "test-secret-key-that-is-long-enough-for-hs256"


class FakeUsers:
    def __init__(self):
        self.users = {}
        self.fail_create = False

    def get_by_phone(self, phone_number: str) -> Optional[UserDto]:
        return self.users.get(phone_number)

    def create(self, phone_number: str, first_name: str, last_name: Optional[str]) -> UserDto:
        if self.fail_create:
            raise RuntimeError("unique constraint")
        now = datetime.utcnow()
        user = UserDto(f"user-{len(self.users) + 1}", phone_number, first_name, last_name, None, False, now, now)
        self.users[phone_number] = user
        return user


class FakeVerifications:
    def __init__(self, verified_phones=()):
        self.verified = set(verified_phones)
        self.calls = []

    def has_verified(self, phone_number: str) -> bool:
        self.calls.append(phone_number)
        return phone_number in self.verified


def make_service(verified_phones=(PHONE,)):
    users = FakeUsers()
    verifications = FakeVerifications(verified_phones)
    svc = ProfileService(user_repo=users, verification_repo=verifications, session_service=SessionService(secret=SECRET))
    return svc, users, verifications


def test_create_profile_creates_user_and_session():
    svc, users, _ = make_service()
    result = svc.create_profile(PHONE, "John")
    assert result.success is True
    assert result.user_id == "user-1"
    assert users.users[PHONE].first_name == "John"
    assert users.users[PHONE].last_name is None
    assert SessionService(secret=SECRET).verify_token(result.session_token) == "user-1"


def test_create_profile_trims_names():
    svc, users, _ = make_service()
    result = svc.create_profile(f" {PHONE} ", "  John ", "  Doe  ")
    assert result.success is True
    assert users.users[PHONE].first_name == "John"
    assert users.users[PHONE].last_name == "Doe"


def test_blank_last_name_stored_as_null():
    svc, users, _ = make_service()
    assert svc.create_profile(PHONE, "John", "   ").success is True
    assert users.users[PHONE].last_name is None


def test_create_profile_input_validation_order():
    svc, _, verifications = make_service()
    assert svc.create_profile(None, "John").error == ErrorKind.INVALID_INPUT
    assert svc.create_profile(PHONE, 5).error == ErrorKind.INVALID_INPUT
    assert svc.create_profile(PHONE, "John", 7).error == ErrorKind.INVALID_INPUT
    assert svc.create_profile("12125551234", "").error == ErrorKind.INVALID_PHONE_FORMAT
    assert svc.create_profile(PHONE, "   ").error == ErrorKind.FIRST_NAME_REQUIRED
    assert svc.create_profile(PHONE, "x" * 51).error == ErrorKind.FIRST_NAME_TOO_LONG
    assert svc.create_profile(PHONE, "John", "y" * 51).error == ErrorKind.LAST_NAME_TOO_LONG
    assert verifications.calls == []


def test_fifty_character_names_are_accepted():
    svc, _, _ = make_service()
    assert svc.create_profile(PHONE, "x" * 50, "y" * 50).success is True


def test_create_profile_requires_verified_phone():
    svc, users, _ = make_service(verified_phones=())
    result = svc.create_profile(PHONE, "John")
    assert result.success is False
    assert result.error == ErrorKind.PHONE_NOT_VERIFIED
    assert users.users == {}


def test_verified_check_runs_before_existing_account_check():
    svc, users, _ = make_service(verified_phones=())
    users.create(PHONE, "Existing", None)
    assert svc.create_profile(PHONE, "John").error == ErrorKind.PHONE_NOT_VERIFIED


def test_create_profile_rejects_existing_account():
    svc, users, _ = make_service()
    users.create(PHONE, "Existing", None)
    result = svc.create_profile(PHONE, "John")
    assert result.error == ErrorKind.ACCOUNT_EXISTS
    assert result.session_token is None


def test_storage_failure_is_transient():
    svc, users, _ = make_service()
    users.fail_create = True
    result = svc.create_profile(PHONE, "John")
    assert result.success is False
    assert result.error == ErrorKind.TRANSIENT_FAILURE
