# result_presenter.py
# Pure mapping from a RunState to what the output panel shows. Nothing here keeps
# state or mutates its input, so the functions can be called on every repaint.

from dataclasses import dataclass

from models import StatusKind

ICON_TERMINAL = "terminal"
ICON_SPINNER = "spinner"
ICON_CHECK = "check-circle"
ICON_ALERT_CIRCLE = "alert-circle"
ICON_CLOCK = "clock"
ICON_ALERT_TRIANGLE = "alert-triangle"

SEVERITY_NEUTRAL = "neutral"
SEVERITY_SUCCESS = "success"
SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"
SEVERITY_CAUTION = "caution"

SEVERITY_COLORS = {
    SEVERITY_NEUTRAL: "#9CA3AF",
    SEVERITY_SUCCESS: "#22C55E",
    SEVERITY_ERROR: "#EF4444",
    SEVERITY_WARNING: "#EAB308",
    SEVERITY_CAUTION: "#F97316",
}

NO_OUTPUT_TEXT = "Program executed successfully with no output."
IDLE_HINT = "Run your code to see the output"
BUSY_HINT = "Executing code..."


@dataclass(frozen=True)
class DisplayModel:
    icon_kind: str
    label: str
    severity: str


@dataclass(frozen=True)
class OutputSections:
    stdout: str = ""
    error_heading: str = ""
    stderr: str = ""
    placeholder: str = ""
    duration_text: str = ""


IDLE_DISPLAY = DisplayModel(ICON_TERMINAL, "Output", SEVERITY_NEUTRAL)
RUNNING_DISPLAY = DisplayModel(ICON_SPINNER, "Running...", SEVERITY_NEUTRAL)

STATUS_DISPLAY = {
    StatusKind.SUCCESS: DisplayModel(ICON_CHECK, "Execution Successful", SEVERITY_SUCCESS),
    StatusKind.COMPILE_ERROR: DisplayModel(ICON_ALERT_CIRCLE, "Compilation Error", SEVERITY_ERROR),
    StatusKind.RUNTIME_ERROR: DisplayModel(ICON_ALERT_CIRCLE, "Runtime Error", SEVERITY_ERROR),
    StatusKind.TIMEOUT: DisplayModel(ICON_CLOCK, "Time Limit Exceeded", SEVERITY_WARNING),
    StatusKind.MEMORY_EXCEEDED: DisplayModel(ICON_ALERT_TRIANGLE, "Memory Limit Exceeded", SEVERITY_CAUTION),
    StatusKind.ERROR: DisplayModel(ICON_ALERT_CIRCLE, "Error", SEVERITY_ERROR),
}


def present(state):
    """Header classification (icon, label, severity) for a RunState."""
    if state is None or state.is_idle:
        return IDLE_DISPLAY
    if state.is_running:
        return RUNNING_DISPLAY
    return STATUS_DISPLAY.get(state.result.status_kind, IDLE_DISPLAY)


def present_output(state):
    """Body sections of the output panel for a RunState."""
    if state is None or state.is_idle:
        return OutputSections(placeholder=IDLE_HINT)
    if state.is_running:
        return OutputSections(placeholder=BUSY_HINT)

    result = state.result
    duration_text = f"Execution time: {_format_ms(result.duration_ms)}ms" if result.has_duration else ""
    if not result.stdout and not result.stderr:
        return OutputSections(placeholder=NO_OUTPUT_TEXT, duration_text=duration_text)

    error_heading = ""
    if result.stderr:
        # Runtime errors share the generic heading; only compile errors get their own.
        error_heading = "Compilation Error" if result.status_kind is StatusKind.COMPILE_ERROR else "Error Output"
    return OutputSections(
        stdout=result.stdout,
        error_heading=error_heading,
        stderr=result.stderr,
        duration_text=duration_text,
    )


def _format_ms(value):
    return int(value) if float(value).is_integer() else round(value, 2)


def severity_color(severity):
    return SEVERITY_COLORS.get(severity, SEVERITY_COLORS[SEVERITY_NEUTRAL])
