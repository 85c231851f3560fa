"""
Stream Pipeline
Sequential decode -> validate -> apply loop for one producer stream.
"""

from collections.abc import AsyncIterator, Iterable
from dataclasses import dataclass, field
from typing import Any

from returns.pipeline import is_successful

from .core.errors import IdleTimeout, MessageRejected
from .core.logging_config import LogContext, get_logger
from .monitoring.metrics import MetricsCollector, metrics_collector
from .protocol.models import ProducerError, ValidatedMessage
from .protocol.validator import EnvelopeValidator
from .streaming.decoder import Fragment, LineDecoder, StreamDecoder
from .surface.state import ApplyOutcome, Surface

logger = get_logger(__name__)

EXCERPT_LENGTH = 120


@dataclass(frozen=True)
class RejectedLine:
    """A candidate line that was skipped, and why."""

    line_number: int
    kind: str
    errors: tuple[str, ...]
    excerpt: str


@dataclass
class StreamReport:
    """Counters and findings for one processed stream."""

    lines: int = 0
    applied: int = 0
    ignored: int = 0
    rejected: list[RejectedLine] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    producer_errors: list[str] = field(default_factory=list)
    time_to_first_line: float | None = None
    outcome: str = "complete"

    def to_dict(self) -> dict[str, Any]:
        return {
            "outcome": self.outcome,
            "lines": self.lines,
            "applied": self.applied,
            "ignored": self.ignored,
            "rejected": [
                {"line": r.line_number, "kind": r.kind, "errors": list(r.errors), "excerpt": r.excerpt}
                for r in self.rejected
            ],
            "warnings": self.warnings,
            "producerErrors": self.producer_errors,
            "timeToFirstLine": self.time_to_first_line,
        }


class StreamProcessor:
    """
    Drives surfaces from a producer stream.

    Each candidate line is validated and applied before the next one is
    read. Line- and message-level failures are recorded and skipped; only
    ``IdleTimeout`` ends processing early.
    """

    def __init__(
        self,
        surfaces: Surface | Iterable[Surface],
        validator: EnvelopeValidator,
        metrics: MetricsCollector | None = None,
        idle_timeout: float | None = None,
    ) -> None:
        if isinstance(surfaces, Surface):
            surfaces = [surfaces]
        self.surfaces = {surface.surface_id: surface for surface in surfaces}
        self.validator = validator
        self.metrics = metrics or metrics_collector
        self.idle_timeout = idle_timeout if idle_timeout is not None else validator.limits.idle_timeout

    def process_line(self, line: str | bytes, report: StreamReport) -> None:
        """Validate and apply one candidate line, updating ``report``."""
        line_number = report.lines + 1
        report.lines = line_number

        result = self.validator.validate(line)
        if not is_successful(result):
            self._record_rejection(result.failure(), line, line_number, report)
            return

        validated: ValidatedMessage = result.unwrap()
        message_type = validated.type.value

        if isinstance(validated.message, ProducerError):
            error = validated.message.message or "producer reported an error"
            logger.warning("producer_error", error=error, line=line_number)
            report.producer_errors.append(error)
            self.metrics.record_message(message_type, "ignored")
            return

        report.warnings.extend(str(issue) for issue in validated.warnings)

        surface = self.surfaces.get(validated.surface_id)
        if surface is None:
            logger.debug("message_ignored", target=validated.surface_id, type=message_type, reason="no_surface")
            report.ignored += 1
            self.metrics.record_message(message_type, ApplyOutcome.IGNORED.value, len(validated.warnings))
            return

        try:
            outcome = surface.apply(validated)
        except MessageRejected as e:
            self._record_rejection(e, line, line_number, report)
            return

        if outcome is ApplyOutcome.APPLIED:
            report.applied += 1
        else:
            report.ignored += 1
        self.metrics.record_message(message_type, outcome.value, len(validated.warnings))

    async def process(self, source: AsyncIterator[Fragment]) -> StreamReport:
        """
        Process an async fragment stream to completion.

        Args:
            source: Async iterator of text or byte fragments

        Returns:
            StreamReport for the stream

        Raises:
            IdleTimeout: If the producer stalls; ``messages_applied`` is filled in
        """
        decoder = StreamDecoder(self.idle_timeout)
        report = StreamReport()

        with LogContext(surfaces=",".join(self.surfaces)):
            try:
                async for line in decoder.decode(source):
                    self.process_line(line, report)
            except IdleTimeout as e:
                e.messages_applied = report.applied
                report.outcome = "idle_timeout"
                self._finish(report, decoder.lines, decoder.time_to_first_line)
                raise

        self._finish(report, decoder.lines, decoder.time_to_first_line)
        return report

    def process_sync(self, source: Iterable[Fragment]) -> StreamReport:
        """Process a finite sync stream (file, list of chunks). No idle timer."""
        decoder = LineDecoder()
        report = StreamReport()

        with LogContext(surfaces=",".join(self.surfaces)):
            for fragment in source:
                for line in decoder.feed(fragment):
                    self.process_line(line, report)
            for line in decoder.finish():
                self.process_line(line, report)

        self._finish(report, decoder, None)
        return report

    def _finish(self, report: StreamReport, decoder: LineDecoder, first_line: float | None) -> None:
        report.time_to_first_line = first_line
        if report.outcome != "idle_timeout" and decoder.lines_decoded == 0:
            report.outcome = "empty"

        self.metrics.record_lines(decoder.lines_decoded, decoder.fences_dropped, decoder.blanks_dropped)
        if first_line is not None:
            self.metrics.record_first_line(first_line)
        self.metrics.record_stream(report.outcome)

        logger.info(
            "stream_processed",
            outcome=report.outcome,
            lines=report.lines,
            applied=report.applied,
            ignored=report.ignored,
            rejected=len(report.rejected),
            warnings=len(report.warnings),
        )

    def _record_rejection(
        self, error: MessageRejected, line: str | bytes, line_number: int, report: StreamReport
    ) -> None:
        text = line.decode("utf-8", errors="replace") if isinstance(line, bytes) else line
        report.rejected.append(
            RejectedLine(
                line_number=line_number,
                kind=error.kind.value,
                errors=tuple(error.errors),
                excerpt=text[:EXCERPT_LENGTH],
            )
        )
        report.warnings.extend(error.warnings)
        self.metrics.record_rejection(error.kind.value)


__all__ = ["StreamProcessor", "StreamReport", "RejectedLine"]
