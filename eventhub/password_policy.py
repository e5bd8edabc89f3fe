import re

SPECIAL_CHARACTERS = "@$!%*?&"

_SPECIAL = re.escape(SPECIAL_CHARACTERS)

# Min 8 chars from letters, digits and the special set; at least one of each class.
_STRONG_PASSWORD_RE = re.compile(
    rf"(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[{_SPECIAL}])[A-Za-z\d{_SPECIAL}]{{8,}}",
    re.ASCII,
)

PASSWORD_POLICY_MESSAGE = (
    "Password must be at least 8 chars and include uppercase, lowercase, "
    "number and special char"
)


def is_strong_password(candidate) -> bool:
    """Return True when ``candidate`` satisfies the password strength rules."""
    if not isinstance(candidate, str):
        return False
    return _STRONG_PASSWORD_RE.fullmatch(candidate) is not None
