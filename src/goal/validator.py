"""
Goal Validator

Field rules for goal form submissions and the errors they raise.
"""

import logging
import re
from enum import Enum
from typing import Any, Dict, List, Optional

from .models import MAX_PROGRESS, MIN_PROGRESS

logger = logging.getLogger(__name__)


class ValidationErrorKind(Enum):
    """Why a submission was rejected"""
    EMPTY_TITLE = "empty_title"
    INVALID_PROGRESS = "invalid_progress"
    OUT_OF_RANGE_PROGRESS = "out_of_range_progress"


class ProgressPolicy(Enum):
    """What to do with numeric progress outside [0, 100]"""
    CLAMP = "clamp"
    REJECT = "reject"


class ValidationError(ValueError):
    """A submission failed validation; nothing was created"""

    kind: ValidationErrorKind = ValidationErrorKind.INVALID_PROGRESS
    field: str = ""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.message = message
        self.value = value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "field": self.field,
            "message": self.message,
        }


class EmptyTitleError(ValidationError):
    kind = ValidationErrorKind.EMPTY_TITLE
    field = "title"


class InvalidProgressError(ValidationError):
    kind = ValidationErrorKind.INVALID_PROGRESS
    field = "progress"


class OutOfRangeProgressError(ValidationError):
    kind = ValidationErrorKind.OUT_OF_RANGE_PROGRESS
    field = "progress"


# Optional sign followed by digits only; "4.5", "1e2" and "" are not progress
INTEGER_PATTERN = re.compile(r"^([+-]?)(\d+)$")

# Any magnitude with more digits than this is out of range whatever its value
MAX_PROGRESS_DIGITS = len(str(MAX_PROGRESS))


class GoalValidator:
    """
    Validates raw form fields.

    Out-of-range progress is clamped by default. Clamping is a recovered
    condition: it is logged, not raised. With ProgressPolicy.REJECT the
    same input raises OutOfRangeProgressError instead.
    """

    def __init__(self, policy: ProgressPolicy = ProgressPolicy.CLAMP):
        self.policy = policy

    def validate_title(self, raw: Optional[str]) -> str:
        """
        Trim and check a title.

        Raises:
            EmptyTitleError: If nothing is left after trimming
        """
        title = (raw or "").strip()
        if not title:
            raise EmptyTitleError("Goal title must not be empty", raw)
        return title

    def validate_progress(self, raw: Any) -> int:
        """
        Parse progress into an integer within [0, 100].

        Args:
            raw: Form value, usually a string; ints are accepted as-is

        Returns:
            Bounded progress value

        Raises:
            InvalidProgressError: If raw is not an integer
            OutOfRangeProgressError: If out of range under REJECT policy
        """
        value = self._parse_integer(raw)

        if MIN_PROGRESS <= value <= MAX_PROGRESS:
            return value

        if self.policy == ProgressPolicy.REJECT:
            raise OutOfRangeProgressError(
                f"Progress must be between {MIN_PROGRESS} and {MAX_PROGRESS}, got {_shorten(raw)}",
                raw,
            )

        clamped = max(MIN_PROGRESS, min(MAX_PROGRESS, value))
        logger.warning(f"Progress {_shorten(raw)} out of range, clamped to {clamped}")
        return clamped

    def split_list(self, raw: Optional[str], delimiter: str = ",") -> List[str]:
        """Split a delimited field, trimming tokens and dropping empty ones."""
        if not raw:
            return []
        tokens = (token.strip() for token in raw.split(delimiter))
        return [token for token in tokens if token]

    def _parse_integer(self, raw: Any) -> int:
        if isinstance(raw, bool):
            raise InvalidProgressError(f"Progress must be a whole number, got {raw!r}", raw)
        if isinstance(raw, int):
            return raw
        match = INTEGER_PATTERN.match(raw.strip()) if isinstance(raw, str) else None
        if match:
            sign, digits = match.groups()
            digits = digits.lstrip("0") or "0"
            if len(digits) > MAX_PROGRESS_DIGITS:
                # int() refuses very long digit strings; only the sign matters here
                return MIN_PROGRESS - 1 if sign == "-" else MAX_PROGRESS + 1
            return int(sign + digits)
        raise InvalidProgressError(f"Progress must be a whole number, got {raw!r}", raw)


def _shorten(raw: Any, limit: int = 20) -> str:
    text = str(raw).strip()
    return text if len(text) <= limit else text[:limit] + "..."
