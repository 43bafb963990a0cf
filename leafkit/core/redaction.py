# leafkit/core/redaction.py
from __future__ import annotations
import re

__all__ = ["redactText"]

_MASK = "***"

# Env keys leaf manifests use for credentials, e.g. STRIPE_SECRET_KEY, DB_PASSWORD
_SECRET_ENV_NAME = r"[A-Z0-9_]*(?:SECRET|PASSWORD|TOKEN|API_KEY|PRIVATE_KEY)[A-Z0-9_]*"

# Each rule keeps the `keep` group and masks what follows it
_RULES: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?i)(?P<keep>\bBearer\s+)[\w.\-]+"),
    re.compile(r"(?i)(?P<keep>\bAuthorization\s*[:=]\s*)(?!Bearer\b)[\w.\-]+"),
    re.compile(r'(?i)(?P<keep>"(?:password|api[_\-]?key|token|secret)"\s*:\s*")[^"]+(?=")'),
    re.compile(r"(?P<keep>\b" + _SECRET_ENV_NAME + r"=)[^\s\"',&]+"),
    re.compile(r"(?i)(?P<keep>[?&]token=)[^&\s\"']+"),
)



def _mask(match: re.Match[str]) -> str:
    return match.group("keep") + _MASK



def redactText(text: str) -> str:
    """Replace credentials in a formatted log line with ***."""
    for rule in _RULES:
        text = rule.sub(_mask, text)
    return text
