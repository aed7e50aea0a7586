from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict


class ConditionState(str, Enum):
    """Client-observed lifecycle of a condition. Re-read on every query, never cached."""

    UNPREPARED = 'unprepared'
    PREPARED = 'prepared'
    RESOLVED = 'resolved'


@dataclass(frozen=True)
class ConditionLog:
    """Parsed ConditionPreparation event."""

    condition_id: str
    oracle: str
    question_id: str
    outcome_slot_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
