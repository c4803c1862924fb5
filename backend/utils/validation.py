import re
from typing import Optional

from config.constants import CLAIM_LIMITS
from exceptions import ValidationException


class InputValidator:

    CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')

    @staticmethod
    def sanitize_claim(claim: Optional[str]) -> str:
        if not claim or not claim.strip():
            raise ValidationException("claim", "Please enter a claim to analyze.")

        claim = InputValidator.CONTROL_CHARS_PATTERN.sub('', claim)

        claim = re.sub(r'\s+', ' ', claim).strip()

        if len(claim) < CLAIM_LIMITS.MIN_LENGTH:
            raise ValidationException(
                "claim", f"Claim must be at least {CLAIM_LIMITS.MIN_LENGTH} characters long"
            )

        if len(claim) > CLAIM_LIMITS.MAX_LENGTH:
            raise ValidationException(
                "claim", f"Claim cannot exceed {CLAIM_LIMITS.MAX_LENGTH} characters"
            )

        return claim

    @staticmethod
    def validate_claim(claim: Optional[str]) -> tuple[bool, Optional[str]]:
        try:
            InputValidator.sanitize_claim(claim)
            return True, None
        except ValidationException as e:
            return False, e.reason
