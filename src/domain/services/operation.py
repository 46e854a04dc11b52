"""Per-operation lifecycle tracking.

    RECEIVED -> AUTHORITY_VERIFIED -> VALIDATED -> APPLIED

A failure at any stage before APPLIED moves straight to REJECTED. Since the unit of work
is only committed at APPLIED, a rejected operation never leaves writes
behind.
"""

from enum import IntEnum
from types import TracebackType
from typing import Any, Optional

import structlog

from core.exceptions import AppException

logger = structlog.get_logger()


class OperationStage(IntEnum):
    """Lifecycle stages. Higher value = further along."""

    RECEIVED = 0
    AUTHORITY_VERIFIED = 10
    VALIDATED = 20
    APPLIED = 30
    REJECTED = 99


class Operation:
    """Context manager that records how far an operation got.

    Usage:
        with Operation("update_post", post=str(address)) as op:
            ...
            op.advance(OperationStage.AUTHORITY_VERIFIED)
    """

    def __init__(self, name: str, **context: Any) -> None:
        self.name = name
        self.stage = OperationStage.RECEIVED
        self._log = logger.bind(operation=name, **context)

    def advance(self, stage: OperationStage) -> None:
        if self.stage == OperationStage.REJECTED or stage <= self.stage:
            raise RuntimeError(
                f"{self.name}: cannot move from {self.stage.name} to {stage.name}"
            )
        self.stage = stage
        if stage == OperationStage.APPLIED:
            self._log.info("operation_applied")

    def __enter__(self) -> "Operation":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> bool:
        if exc_val is None:
            return False

        failed_at = self.stage
        self.stage = OperationStage.REJECTED
        if isinstance(exc_val, AppException):
            self._log.warning(
                "operation_rejected",
                stage=failed_at.name,
                error_code=exc_val.error_code.value,
                message=exc_val.message,
            )
        else:
            self._log.error(
                "operation_failed",
                stage=failed_at.name,
                error=str(exc_val),
                error_type=type(exc_val).__name__,
            )
        return False
