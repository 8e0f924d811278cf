"""Tests for PipelineError and PipelineReport."""

from postcraft.errors import ErrorKind, PipelineError, PipelineReport


class TestPipelineError:
    def test_basic_error(self):
        err = PipelineError(stage="parse", kind=ErrorKind.MALFORMED_INPUT, message="nothing found")
        assert err.stage == "parse"
        assert err.recoverable is True

    def test_non_recoverable_error(self):
        err = PipelineError(stage="request", kind=ErrorKind.INVALID_REQUEST, recoverable=False)
        assert err.recoverable is False


class TestPipelineReport:
    def test_empty_report_success(self):
        report = PipelineReport()
        assert report.success is True
        assert report.error_count == 0

    def test_add_error(self):
        report = PipelineReport()
        report.add_error("validate", "H1 missing", kind=ErrorKind.VALIDATION_FAILED)
        assert report.error_count == 1
        assert report.errors[0].kind == ErrorKind.VALIDATION_FAILED
        assert report.success is True
        assert report.has(ErrorKind.VALIDATION_FAILED)
        assert not report.has(ErrorKind.IMAGE_UPLOAD_REQUIRED)

    def test_unrecoverable_error_fails(self):
        report = PipelineReport()
        report.add_error("request", "bad", kind=ErrorKind.INVALID_REQUEST, recoverable=False)
        assert report.success is False

    def test_mark_stage_complete_once(self):
        report = PipelineReport()
        report.mark_stage_complete("parse")
        report.mark_stage_complete("parse")
        assert report.stages_completed == ["parse"]

    def test_summary_text(self):
        report = PipelineReport()
        report.mark_stage_complete("parse")
        report.add_error("validate", "H1 missing", kind=ErrorKind.VALIDATION_FAILED)
        text = report.summary_text()
        assert "Pipeline completed" in text
        assert "Stages: parse" in text
        assert "[recoverable] validate: H1 missing" in text

    def test_summary_truncates(self):
        report = PipelineReport()
        for i in range(7):
            report.add_error("validate", f"error {i}", kind=ErrorKind.VALIDATION_FAILED)
        text = report.summary_text()
        assert "error 4" in text
        assert "error 5" not in text
        assert "... and 2 more" in text
