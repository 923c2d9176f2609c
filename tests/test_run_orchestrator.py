import pytest

import config
from models import ExecutionResult, RunPhase, StatusKind
from run_orchestrator import RunOrchestrator, transport_error_message


@pytest.fixture()
def orchestrator(network):
    return RunOrchestrator(network)


def test_run_issues_request_and_completes_with_server_result(orchestrator, network):
    assert orchestrator.run("rust", "fn main() {}")

    request, call = network.last_execute
    assert request.language_id == "rust"
    assert request.source_code == "fn main() {}"
    assert orchestrator.state.phase is RunPhase.RUNNING
    assert orchestrator.state.request == request

    call.resolve({"status": "SUCCESS", "output": "", "error": "", "executionTime": 5})

    assert orchestrator.state.phase is RunPhase.COMPLETED
    assert orchestrator.result == ExecutionResult("", "", 5, StatusKind.SUCCESS)
    assert not orchestrator.is_running


def test_run_while_running_is_dropped(orchestrator, network):
    assert orchestrator.run("python", "print(1)")
    running_state = orchestrator.state

    assert not orchestrator.run("python", "print(2)")
    assert not orchestrator.run("go", "package main")

    assert len(network.execute_calls) == 1
    assert orchestrator.state is running_state


def test_run_without_language_is_dropped(orchestrator, network):
    assert not orchestrator.run("", "print(1)")
    assert not orchestrator.run(None, "print(1)")
    assert network.execute_calls == []
    assert orchestrator.state.is_idle


def test_network_failure_synthesizes_transport_error(orchestrator, network, api_error):
    orchestrator.run("rust", "fn main() {}")
    network.last_execute[1].reject(api_error("Connection refused"))

    result = orchestrator.result
    assert result.status_kind is StatusKind.ERROR
    assert result.duration_ms == 0
    assert result.stdout == ""
    assert result.stderr == "Connection refused"


def test_server_error_message_is_preferred(orchestrator, network, api_error):
    orchestrator.run("python", "print(1)")
    body = b'{"status": 500, "error": "Executor crashed"}'
    network.last_execute[1].reject(api_error("Internal Server Error", status_code=500, body=body))

    assert orchestrator.result.stderr == "Executor crashed"


def test_empty_transport_message_uses_generic_text(orchestrator, network, api_error):
    orchestrator.run("python", "print(1)")
    network.last_execute[1].reject(api_error(""))

    assert orchestrator.result.stderr == config.EXECUTION_FAILED_MESSAGE


def test_malformed_response_is_transport_error(orchestrator, network):
    orchestrator.run("python", "print(1)")
    network.last_execute[1].resolve({"status": "EXPLODED"})

    result = orchestrator.result
    assert result.status_kind is StatusKind.ERROR
    assert result.duration_ms == 0
    assert result.stderr


def test_reported_failures_are_normal_results(orchestrator, network):
    orchestrator.run("c", "int main() {")
    network.last_execute[1].resolve({
        "status": "COMPILE_ERROR", "output": "", "error": "expected '}'", "executionTime": 120,
    })

    assert orchestrator.result.status_kind is StatusKind.COMPILE_ERROR
    assert orchestrator.result.stderr == "expected '}'"
    assert orchestrator.result.duration_ms == 120


def test_notification_order_clears_running_flag_last(orchestrator, network, recorder):
    recorder.track("state", orchestrator.state_changed)
    recorder.track("finished", orchestrator.run_finished)
    recorder.track("running", orchestrator.running_changed)
    seen_while_completing = []
    orchestrator.run_finished.connect(lambda result: seen_while_completing.append(orchestrator.state.phase))

    orchestrator.run("python", "print(1)")
    network.last_execute[1].resolve({"status": "SUCCESS", "output": "1\n", "error": "", "executionTime": 3})

    assert recorder.names() == ["state", "running", "state", "finished", "running"]
    assert recorder.events[1] == ("running", True)
    assert recorder.events[-1] == ("running", False)
    assert seen_while_completing == [RunPhase.COMPLETED]


def test_new_run_clears_previous_result(orchestrator, network):
    orchestrator.run("python", "print(1)")
    network.last_execute[1].resolve({"status": "SUCCESS", "output": "1\n", "error": "", "executionTime": 3})

    orchestrator.run("python", "print(2)")

    assert orchestrator.state.is_running
    assert orchestrator.result is None


def test_run_can_be_started_from_finished_handler(orchestrator, network):
    restarted = []
    orchestrator.run_finished.connect(lambda result: restarted.append(orchestrator.run("python", "again")))

    orchestrator.run("python", "print(1)")
    network.last_execute[1].resolve({"status": "SUCCESS", "output": "", "error": "", "executionTime": 1})

    assert restarted == [True]
    assert len(network.execute_calls) == 2


def test_clear_result_only_affects_completed_state(orchestrator, network):
    orchestrator.clear_result()
    assert orchestrator.state.is_idle

    orchestrator.run("python", "print(1)")
    orchestrator.clear_result()
    assert orchestrator.state.is_running

    network.last_execute[1].resolve({"status": "SUCCESS", "output": "", "error": "", "executionTime": 1})
    orchestrator.clear_result()
    assert orchestrator.state.is_idle


def test_stdin_is_forwarded(orchestrator, network):
    orchestrator.run("python", "print(input())", stdin="42")

    request, _ = network.last_execute
    assert request.to_payload() == {"language": "python", "code": "print(input())", "stdin": "42"}


def test_trigger_bridge_runs_through_subscriber(orchestrator, network):
    orchestrator.trigger_bridge.subscribe(lambda: orchestrator.run("python", "print(1)"))

    orchestrator.trigger_bridge.request_run()
    orchestrator.trigger_bridge.request_run()

    assert len(network.execute_calls) == 1


def test_transport_error_message_without_error():
    assert transport_error_message(None) == config.EXECUTION_FAILED_MESSAGE


def test_non_finite_execution_time_is_transport_error(orchestrator, network):
    orchestrator.run("python", "print(1)")
    network.last_execute[1].resolve({"status": "SUCCESS", "output": "", "error": "", "executionTime": float("nan")})

    result = orchestrator.result
    assert result.status_kind is StatusKind.ERROR
    assert result.duration_ms == 0
    assert result.stderr
