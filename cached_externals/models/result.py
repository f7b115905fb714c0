"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .external import ExternalState


class OperationStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"
    IN_PROGRESS = "in_progress"


@dataclass
class ErrorDetail:
    """Detailed error information"""

    code: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat()
        }


@dataclass
class Result:
    """Base result class"""

    status: OperationStatus
    message: str = ""
    errors: List[ErrorDetail] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    start_time: datetime = field(default_factory=datetime.utcnow)
    end_time: Optional[datetime] = None

    @property
    def is_success(self) -> bool:
        """Check if operation was successful"""
        return self.status == OperationStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        """Check if operation failed"""
        return self.status == OperationStatus.FAILED

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def add_error(self, code: str, message: str, **context) -> None:
        """Add an error"""
        self.errors.append(ErrorDetail(code=code, message=message, context=context))

    def add_warning(self, message: str) -> None:
        """Add a warning"""
        self.warnings.append(message)

    def complete(self, status: Optional[OperationStatus] = None) -> None:
        """Mark operation as complete"""
        self.end_time = datetime.utcnow()
        if status:
            self.status = status


@dataclass
class ExternalResult(Result):
    """Result of configuring a single external module"""

    state: Optional[ExternalState] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "status": self.status.value,
            "message": self.message,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": self.warnings,
        }
        if self.state:
            data.update(self.state.to_dict())
        return data


@dataclass
class ExternalsResult(Result):
    """Result of a setup or update run over the whole manifest"""

    operation: str = ""
    stage: str = ""
    externals: List[ExternalResult] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.externals)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "status": self.status.value,
            "operation": self.operation,
            "stage": self.stage,
            "message": self.message,
            "externals": [r.to_dict() for r in self.externals],
            "errors": [e.to_dict() for e in self.errors],
            "warnings": self.warnings,
            "duration": self.duration,
        }
