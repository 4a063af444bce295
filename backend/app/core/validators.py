"""Reusable parameter and contact-field validators."""

import re
from typing import Annotated

from fastapi import Path

# Positive integer ID validator for path parameters
PositiveIntId = Annotated[int, Path(gt=0, description="Resource ID (must be positive)")]

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    return bool(email) and _EMAIL_RE.match(email) is not None
