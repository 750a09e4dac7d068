# garage/validators/result.py
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None
    warning: Optional[str] = None

    def to_dict(self) -> dict:
        body = {"isValid": self.is_valid}
        if self.error:
            body["error"] = self.error
        if self.warning:
            body["warning"] = self.warning
        return body


VALID = ValidationResult(True)


def invalid(message: str) -> ValidationResult:
    return ValidationResult(False, error=message)


def as_text(value) -> str:
    """Stripped string form of a scalar form value; '' for None."""
    if value is None:
        return ""
    return value.strip() if isinstance(value, str) else str(value).strip()


def is_blank(value) -> bool:
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return as_text(value) == ""
