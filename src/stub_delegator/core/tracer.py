"""
Generation Trace Logger.

Records the step-by-step execution of a generator run:
1. State transitions (``idle -> header_matched -> ... -> persisted``).
2. Text edits applied to either file (region, before and after).
3. Failures, with the state in which they occurred.

The output is a list of plain dictionaries suitable for JSON serialization.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from stub_delegator.enums import GenerationState


class TraceEventType(str, Enum):
  STATE_CHANGE = "state_change"
  TEXT_EDIT = "text_edit"
  FAILURE = "failure"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Collects trace events for one or more generator runs.
  """

  def __init__(self) -> None:
    self._events: List[TraceEvent] = []
    self.state = GenerationState.IDLE

  def transition(self, state: GenerationState, detail: str = "") -> None:
    """Records entering ``state``."""
    previous = self.state
    self.state = state
    self._log(
      TraceEventType.STATE_CHANGE,
      f"{previous.value} -> {state.value}",
      {"from": previous.value, "to": state.value, "detail": detail},
    )

  def log_edit(self, target: str, start: int, end: int, before: str, after: str) -> None:
    """Logs a replacement of ``[start, end)`` in ``target``."""
    self._log(
      TraceEventType.TEXT_EDIT,
      f"Edited {target}",
      {"target": target, "start": start, "end": end, "before": before, "after": after},
    )

  def log_failure(self, error: Exception) -> None:
    self._log(
      TraceEventType.FAILURE,
      str(error),
      {"error": type(error).__name__, "state": self.state.value},
    )

  def reset_state(self) -> None:
    """Returns to ``idle`` for a new run while keeping earlier events."""
    self.state = GenerationState.IDLE

  def _log(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any]) -> None:
    self._events.append(TraceEvent(id=str(uuid.uuid4()), type=evt_type, timestamp=time.time(), description=desc, metadata=meta))

  def export(self, since: Optional[int] = None) -> List[Dict[str, Any]]:
    """Returns events (optionally from index ``since``) as dicts."""
    events = self._events[since:] if since else self._events
    return [asdict(e) for e in events]

  def __len__(self) -> int:
    return len(self._events)
