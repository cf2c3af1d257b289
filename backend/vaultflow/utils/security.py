import re
from typing import Literal

PasswordStrength = Literal["strong", "weak"]

STRONG_MIN_LENGTH = 16

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")
# Underscore is a word character, so it does not count as a symbol.
_NON_WORD = re.compile(r"\W", re.ASCII)


def password_length(password: str) -> int:
    # Length in UTF-16 code units, as the UI counts it; astral characters count twice.
    return len(password.encode("utf-16-le", "surrogatepass")) // 2


def check_password_strength(password: str) -> PasswordStrength:
    if (
        password_length(password) >= STRONG_MIN_LENGTH
        and _UPPER.search(password)
        and _LOWER.search(password)
        and _DIGIT.search(password)
        and _NON_WORD.search(password)
    ):
        return "strong"
    return "weak"
