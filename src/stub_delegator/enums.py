"""
Enumerations for stub-delegator.
"""

from enum import Enum


class GenerationState(str, Enum):
  """
  Progress of a single generator invocation.

  A run walks these states in declaration order. ``ABORTED`` is reached only
  when parsing fails, in which case neither file was modified. A rewrite
  failure leaves the run in the last state it reached.
  """

  IDLE = "idle"
  HEADER_MATCHED = "header_matched"
  BODY_VALIDATED = "body_validated"
  PRIMARY_EDITED = "primary_edited"
  SECONDARY_LOCATED = "secondary_located"
  SECONDARY_EDITED = "secondary_edited"
  PERSISTED = "persisted"
  ABORTED = "aborted"


class StubStatus(str, Enum):
  """Classification of a method header found by the scanner."""

  STUB = "stub"  # body is unimplemented!("...");
  IMPLEMENTED = "implemented"
