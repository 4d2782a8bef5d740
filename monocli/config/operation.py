"""
monocli/config/operation.py

A pending mutation of one KEY=VALUE file.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping


class ConfigAction(str, Enum):
    SET = "set"
    MERGE = "merge"
    APPEND = "append"


@dataclass(frozen=True)
class ConfigOperation:
    target_file: str
    action: ConfigAction
    payload: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        try:
            action = ConfigAction(self.action)
        except ValueError:
            valid = ", ".join(a.value for a in ConfigAction)
            raise ValueError(f"Invalid config action '{self.action}'. Expected one of: {valid}") from None
        object.__setattr__(self, "action", action)
        object.__setattr__(
            self, "payload", {str(k): _stringify(v) for k, v in self.payload.items()}
        )

    @classmethod
    def set(cls, target_file: str, values: Mapping[str, object]) -> "ConfigOperation":
        return cls(target_file, ConfigAction.SET, dict(values))

    @classmethod
    def merge(cls, target_file: str, values: Mapping[str, object]) -> "ConfigOperation":
        return cls(target_file, ConfigAction.MERGE, dict(values))

    @classmethod
    def append(cls, target_file: str, values: Mapping[str, object]) -> "ConfigOperation":
        return cls(target_file, ConfigAction.APPEND, dict(values))


def _stringify(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)
