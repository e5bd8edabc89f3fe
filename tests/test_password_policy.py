import pytest

from eventhub.password_policy import is_strong_password


@pytest.mark.parametrize(
    "candidate",
    ["Abcdef1!", "Str0ng&Pass", "aA1@aA1@", "ZZZzzz9?", "Passw0rd%%%%"],
)
def test_strong_passwords_accepted(candidate):
    assert is_strong_password(candidate) is True


@pytest.mark.parametrize(
    "candidate, reason",
    [
        ("Abcde1!", "too short"),
        ("abcdef1!", "no uppercase"),
        ("ABCDEF1!", "no lowercase"),
        ("Abcdefg!", "no digit"),
        ("Abcdefg1", "no special character"),
        ("Abcdef1#", "special character outside the allowed set"),
        ("Abc def1!", "space"),
        ("Abcdéf1!", "non-ascii letter"),
        ("Abcdef1!\n", "trailing newline"),
        ("", "empty"),
    ],
)
def test_weak_passwords_rejected(candidate, reason):
    assert is_strong_password(candidate) is False, reason


def test_non_string_rejected():
    assert is_strong_password(None) is False
    assert is_strong_password(12345678) is False
