import pytest

import result_presenter
from models import ExecutionRequest, ExecutionResult, RunState, StatusKind


def _completed(status, stdout="", stderr="", duration=5):
    return RunState.completed(ExecutionResult(stdout, stderr, duration, status))


@pytest.mark.parametrize(
    "status, icon, label, severity",
    [
        (StatusKind.SUCCESS, "check-circle", "Execution Successful", "success"),
        (StatusKind.COMPILE_ERROR, "alert-circle", "Compilation Error", "error"),
        (StatusKind.RUNTIME_ERROR, "alert-circle", "Runtime Error", "error"),
        (StatusKind.TIMEOUT, "clock", "Time Limit Exceeded", "warning"),
        (StatusKind.MEMORY_EXCEEDED, "alert-triangle", "Memory Limit Exceeded", "caution"),
        (StatusKind.ERROR, "alert-circle", "Error", "error"),
    ],
)
def test_status_table(status, icon, label, severity):
    display = result_presenter.present(_completed(status))
    assert (display.icon_kind, display.label, display.severity) == (icon, label, severity)


def test_idle_and_running_defaults():
    assert result_presenter.present(None).label == "Output"
    assert result_presenter.present(RunState.idle()).label == "Output"
    running = RunState.running(ExecutionRequest("python", "print(1)"))
    assert result_presenter.present(running).label == "Running..."
    assert result_presenter.present_output(running).placeholder == result_presenter.BUSY_HINT
    assert result_presenter.present_output(RunState.idle()).placeholder == result_presenter.IDLE_HINT


def test_presenting_is_idempotent_and_does_not_mutate():
    state = _completed(StatusKind.TIMEOUT, stderr="killed")
    first = (result_presenter.present(state), result_presenter.present_output(state))
    second = (result_presenter.present(state), result_presenter.present_output(state))
    assert first == second
    assert state == _completed(StatusKind.TIMEOUT, stderr="killed")


def test_success_without_output_uses_placeholder():
    sections = result_presenter.present_output(_completed(StatusKind.SUCCESS))
    assert sections.placeholder == result_presenter.NO_OUTPUT_TEXT
    assert sections.stdout == ""
    assert sections.duration_text == "Execution time: 5ms"


def test_error_heading_depends_on_status():
    compile_error = result_presenter.present_output(_completed(StatusKind.COMPILE_ERROR, stderr="bad"))
    runtime_error = result_presenter.present_output(_completed(StatusKind.RUNTIME_ERROR, stderr="boom"))
    assert compile_error.error_heading == "Compilation Error"
    assert runtime_error.error_heading == "Error Output"
    assert runtime_error.placeholder == ""


def test_transport_error_hides_duration():
    state = RunState.completed(ExecutionResult.transport_error("Connection refused"))
    sections = result_presenter.present_output(state)
    assert sections.duration_text == ""
    assert sections.stderr == "Connection refused"


def test_fractional_duration_is_rounded():
    sections = result_presenter.present_output(_completed(StatusKind.SUCCESS, stdout="x", duration=12.3456))
    assert sections.duration_text == "Execution time: 12.35ms"


def test_severity_color_defaults_to_neutral():
    assert result_presenter.severity_color("unknown") == result_presenter.SEVERITY_COLORS["neutral"]
