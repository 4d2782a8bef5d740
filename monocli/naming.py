"""
monocli/naming.py

Alternative names for workspaces whose first choice is already taken.
"""

import datetime
import hashlib
import re
from typing import Callable, List, Optional

NAME_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

SUFFIXES = ["app", "dev", "workspace", "kit", "core", "project"]
PREFIXES = ["my", "new", "fx"]
MAX_SUGGESTIONS = 5
_HASH_SUFFIX = re.compile(r"-[a-f0-9]{3}$")


def is_valid_name(name: str) -> bool:
    """Lowercase letters and digits, separated by single hyphens."""
    return bool(NAME_PATTERN.match(name))


def suggest_names(
    name: str, kind: str, is_available: Callable[[str], bool], today: Optional[datetime.date] = None
) -> List[str]:
    year = (today or datetime.date.today()).year
    candidates = [f"{name}-{suffix}" for suffix in SUFFIXES]
    candidates += [
        f"{name}-{hashlib.md5(f'{name}{year}{i}'.encode()).hexdigest()[:3]}" for i in range(3)
    ]
    candidates.append(f"{name}-{year}")
    candidates += [f"{prefix}-{name}" for prefix in PREFIXES]
    candidates.append(f"{name}-{kind}")

    suggestions: List[str] = []
    for candidate in candidates:
        if candidate not in suggestions and is_available(candidate):
            suggestions.append(candidate)
        if len(suggestions) == MAX_SUGGESTIONS:
            break
    return suggestions


def best_suggestion(suggestions: List[str]) -> Optional[str]:
    """Prefer short names ending in a meaningful suffix over hashed ones."""

    def score(candidate: str) -> int:
        value = -len(candidate)
        if any(candidate.endswith(f"-{suffix}") for suffix in SUFFIXES):
            value += 10
        if _HASH_SUFFIX.search(candidate):
            value -= 5
        return value

    if not suggestions:
        return None
    return max(suggestions, key=score)
