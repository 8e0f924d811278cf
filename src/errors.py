"""Structured error reporting for pipeline runs."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class ErrorKind(StrEnum):
    """Closed set of failure kinds a pipeline run can report."""

    MALFORMED_INPUT = "malformed_input"
    VALIDATION_FAILED = "validation_failed"
    IMAGE_UPLOAD_REQUIRED = "image_upload_required"
    INVALID_REQUEST = "invalid_request"


class PipelineError(BaseModel):
    """A single error captured during a pipeline run."""

    stage: str
    kind: ErrorKind
    message: str = ""
    recoverable: bool = True


class PipelineReport(BaseModel):
    """Summary report of one parse/validate/render run."""

    stages_completed: list[str] = Field(default_factory=list)
    errors: list[PipelineError] = Field(default_factory=list)

    def add_error(
        self,
        stage: str,
        message: str,
        *,
        kind: ErrorKind,
        recoverable: bool = True,
    ) -> None:
        """Record an error during pipeline execution."""
        self.errors.append(
            PipelineError(stage=stage, kind=kind, message=message, recoverable=recoverable)
        )

    def mark_stage_complete(self, stage: str) -> None:
        """Record that a pipeline stage completed."""
        if stage not in self.stages_completed:
            self.stages_completed.append(stage)

    @property
    def success(self) -> bool:
        """True if no unrecoverable errors occurred."""
        return not any(not e.recoverable for e in self.errors)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def has(self, kind: ErrorKind) -> bool:
        return any(e.kind == kind for e in self.errors)

    def summary_text(self) -> str:
        """Human-readable summary of the pipeline run."""
        status = "completed" if self.success else "failed"
        lines = [f"Pipeline {status}"]

        if self.stages_completed:
            lines.append(f"Stages: {', '.join(self.stages_completed)}")

        if self.errors:
            lines.append(f"Errors: {len(self.errors)}")
            for err in self.errors[:5]:
                prefix = "[recoverable]" if err.recoverable else "[FATAL]"
                lines.append(f"  {prefix} {err.stage}: {err.message}")
            if len(self.errors) > 5:
                lines.append(f"  ... and {len(self.errors) - 5} more")

        return "\n".join(lines)
