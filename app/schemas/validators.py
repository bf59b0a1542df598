"""
Общие валидаторы для Pydantic схем.
"""

import unicodedata
from typing import Optional

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 64


def require_text(value: Optional[str]) -> Optional[str]:
    """Обрезать пробелы и запретить пустую строку (None пропускается)."""
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        raise ValueError("must not be blank")
    return stripped


def optional_text(value: Optional[str]) -> Optional[str]:
    """Обрезать пробелы, пустая строка превращается в None."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def validate_strong_password(value: str) -> str:
    """
    Проверка сложности пароля.

    Требования (после нормализации NFKC): длина 8-64 символа, хотя бы одна
    заглавная и одна строчная буква, цифра и спецсимвол, без пробелов.
    """
    normalized = unicodedata.normalize("NFKC", value)
    if not PASSWORD_MIN_LENGTH <= len(normalized) <= PASSWORD_MAX_LENGTH:
        raise ValueError(
            f"password must be between {PASSWORD_MIN_LENGTH} and {PASSWORD_MAX_LENGTH} characters"
        )

    has_upper = has_lower = has_digit = has_special = False
    for char in normalized:
        if char.isspace():
            raise ValueError("password must not contain whitespace")
        category = unicodedata.category(char)
        if category == "Lu":
            has_upper = True
        elif category == "Ll":
            has_lower = True
        elif category == "Nd":
            has_digit = True
        else:
            has_special = True

    if not (has_upper and has_lower and has_digit and has_special):
        raise ValueError(
            "password must contain upper and lower case letters, a digit and a special character"
        )
    return value
