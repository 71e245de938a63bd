# errors.py — Pipeline error kinds for the Reef Check tidy pipeline
# Last Updated (UTC): 2026-10-19
# Description:
# • Every failure is fatal to the run. Each error carries the stage name and a
#   context dict (group key, row index, column) so the defect can be located.

from typing import Any, Dict, Optional


class ReefPipelineError(ValueError):
    """Base class for all pipeline failures."""

    def __init__(self, message: str, stage: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.stage = stage
        self.context = dict(context or {})
        prefix = f"[{stage}] " if stage else ""
        details = ""
        if self.context:
            details = " (" + ", ".join(f"{k}={v!r}" for k, v in self.context.items()) + ")"
        super().__init__(f"{prefix}{message}{details}")


class SchemaError(ReefPipelineError):
    """Expected column absent, or labels collide after normalization."""


class AggregationError(ReefPipelineError):
    """Degenerate group, e.g. zero possible points."""


class InvariantViolationError(ReefPipelineError):
    """Post-aggregation uniqueness check failed. Signals a logic defect."""


class UnitConversionError(ReefPipelineError):
    """Malformed degrees/minutes/seconds coordinate or cardinal direction."""


class TypeCoercionError(ReefPipelineError):
    """Value in a field targeted for numeric conversion does not parse."""
