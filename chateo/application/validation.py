import re

E164_REGEX = re.compile(r"^\+[1-9][0-9]{1,14}$")
OTP_REGEX = re.compile(r"^[0-9]{6}$")


def is_valid_e164(phone_number) -> bool:
    """True for '+' plus a nonzero digit and 1-14 more digits. Does not trim."""
    if not isinstance(phone_number, str):
        return False
    return E164_REGEX.fullmatch(phone_number) is not None


def is_valid_otp(code) -> bool:
    if not isinstance(code, str):
        return False
    return OTP_REGEX.fullmatch(code) is not None
