# models.py
# Data contracts shared by the catalog, the run orchestrator and the presenter.
# All of them are immutable; a new instance is built for every change.

import enum
import math
import numbers
from dataclasses import dataclass

from exceptions import MalformedResponseError


class StatusKind(str, enum.Enum):
    SUCCESS = "SUCCESS"
    COMPILE_ERROR = "COMPILE_ERROR"
    RUNTIME_ERROR = "RUNTIME_ERROR"
    TIMEOUT = "TIMEOUT"
    MEMORY_EXCEEDED = "MEMORY_EXCEEDED"
    ERROR = "ERROR"  # transport failure, synthesized locally


class EditorTheme(str, enum.Enum):
    DARK = "vs-dark"
    LIGHT = "light"

    def toggled(self):
        return EditorTheme.LIGHT if self is EditorTheme.DARK else EditorTheme.DARK


@dataclass(frozen=True)
class LanguageDescriptor:
    id: str
    display_name: str
    file_extension: str
    sample_source: str

    @classmethod
    def from_payload(cls, payload):
        """
        Decodes one entry of ``GET /languages``: ``{id, name, extension, sampleCode}``.

        Raises:
            MalformedResponseError: If the entry is not an object or has no usable id.
        """
        if not isinstance(payload, dict):
            raise MalformedResponseError(f"Language entry is not an object: {payload!r}")
        language_id = payload.get("id")
        if not isinstance(language_id, str) or not language_id:
            raise MalformedResponseError(f"Language entry has no id: {payload!r}")
        name = payload.get("name")
        extension = payload.get("extension")
        sample = payload.get("sampleCode")
        return cls(
            id=language_id,
            display_name=name if isinstance(name, str) and name else language_id.capitalize(),
            file_extension=extension if isinstance(extension, str) else "",
            sample_source=sample if isinstance(sample, str) else "",
        )


@dataclass(frozen=True)
class ExecutionRequest:
    language_id: str
    source_code: str = ""
    stdin: str | None = None

    def __post_init__(self):
        if not self.language_id:
            raise ValueError("ExecutionRequest needs a language id")
        if self.source_code is None:
            object.__setattr__(self, "source_code", "")

    def to_payload(self):
        payload = {"language": self.language_id, "code": self.source_code}
        if self.stdin is not None:
            payload["stdin"] = self.stdin
        return payload


@dataclass(frozen=True)
class ExecutionResult:
    stdout: str
    stderr: str
    duration_ms: float
    status_kind: StatusKind

    def __post_init__(self):
        if not math.isfinite(self.duration_ms) or self.duration_ms < 0:
            raise ValueError(f"duration_ms must be a finite non-negative number, got {self.duration_ms}")

    @property
    def has_duration(self):
        # Transport failures never reach the remote timer.
        return self.status_kind is not StatusKind.ERROR

    @property
    def is_success(self):
        return self.status_kind is StatusKind.SUCCESS

    @classmethod
    def from_payload(cls, payload):
        """
        Decodes the body of ``POST /execute``: ``{output, error, executionTime, status}``.

        Raises:
            MalformedResponseError: On an unknown status or mistyped fields.
        """
        if not isinstance(payload, dict):
            raise MalformedResponseError(f"Execution response is not an object: {payload!r}")
        try:
            status = StatusKind(payload.get("status"))
        except ValueError:
            raise MalformedResponseError(f"Unknown execution status: {payload.get('status')!r}") from None

        stdout = payload.get("output")
        stderr = payload.get("error")
        duration = payload.get("executionTime")
        stdout = "" if stdout is None else stdout
        stderr = "" if stderr is None else stderr
        duration = 0 if duration is None else duration
        if not isinstance(stdout, str) or not isinstance(stderr, str):
            raise MalformedResponseError("Execution output and error must be strings")
        if isinstance(duration, bool) or not isinstance(duration, numbers.Real) \
           or not math.isfinite(duration) or duration < 0:
            raise MalformedResponseError(f"Invalid execution time: {duration!r}")
        return cls(stdout=stdout, stderr=stderr, duration_ms=duration, status_kind=status)

    @classmethod
    def transport_error(cls, message):
        return cls(stdout="", stderr=message, duration_ms=0, status_kind=StatusKind.ERROR)


class RunPhase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(frozen=True)
class RunState:
    """
    The orchestrator's single run state.

    Exactly one of ``request``/``result`` is set, matching ``phase``:
    IDLE carries neither, RUNNING carries the in-flight request and
    COMPLETED carries the result. Build instances with the class methods.
    """
    phase: RunPhase
    request: ExecutionRequest | None = None
    result: ExecutionResult | None = None

    @classmethod
    def idle(cls):
        return cls(RunPhase.IDLE)

    @classmethod
    def running(cls, request):
        return cls(RunPhase.RUNNING, request=request)

    @classmethod
    def completed(cls, result):
        return cls(RunPhase.COMPLETED, result=result)

    @property
    def is_idle(self):
        return self.phase is RunPhase.IDLE

    @property
    def is_running(self):
        return self.phase is RunPhase.RUNNING

    @property
    def is_completed(self):
        return self.phase is RunPhase.COMPLETED
