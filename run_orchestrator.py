# run_orchestrator.py
# The RunOrchestrator governs one execution attempt at a time. It owns the single
# RunState (idle -> running -> completed) and the TriggerBridge through which the
# editor asks for a run. Every attempt ends in a completed state holding either the
# server's result or a locally synthesized transport-error result; nothing is raised
# to the caller.

import logging

from PySide6.QtCore import QObject, Signal

import config
from exceptions import ApiError, MalformedResponseError
from models import ExecutionRequest, ExecutionResult, RunState
from trigger_bridge import TriggerBridge

logger = logging.getLogger(__name__)


def transport_error_message(error):
    """Best diagnostic for a failed exchange: server text, then transport text, then a generic message."""
    if isinstance(error, ApiError) and error.server_message:
        return error.server_message
    text = str(error).strip() if error is not None else ""
    return text or config.EXECUTION_FAILED_MESSAGE


class RunOrchestrator(QObject):
    # --- Signals ---
    # Emitted with the new RunState on every transition.
    state_changed = Signal(object)
    # Emitted with the ExecutionResult once a run is settled.
    run_finished = Signal(object)
    # Emitted with True when a run starts and False after its state is settled.
    running_changed = Signal(bool)

    def __init__(self, network_manager, parent=None):
        super().__init__(parent)
        self.network_manager = network_manager
        self.trigger_bridge = TriggerBridge(self)
        self._state = RunState.idle()
        self._call = None

    @property
    def state(self):
        return self._state

    @property
    def is_running(self):
        return self._state.is_running

    @property
    def result(self):
        return self._state.result

    def run(self, language_id, source_code, stdin=None):
        """
        Starts a run unless one is already in flight.

        Args:
            language_id (str): Id of the active language.
            source_code (str): Text to execute; may be empty.
            stdin (str, optional): Standard input for the program.

        Returns:
            bool: True if a request was issued, False if the trigger was dropped.
        """
        if self._state.is_running:
            logger.debug("RunOrchestrator: run already in progress, trigger ignored.")
            return False
        if not language_id:
            logger.debug("RunOrchestrator: no active language, trigger ignored.")
            return False

        request = ExecutionRequest(language_id=language_id, source_code=source_code or "", stdin=stdin)
        self._set_state(RunState.running(request))
        self.running_changed.emit(True)
        logger.info("RunOrchestrator: executing %s (%d characters).", language_id, len(request.source_code))

        call = self.network_manager.execute(request)
        self._call = call
        call.succeeded.connect(lambda payload: self._on_execute_succeeded(call, payload))
        call.failed.connect(lambda error: self._on_execute_failed(call, error))
        return True

    def clear_result(self):
        """Discards a completed result. An in-flight run is left untouched."""
        if self._state.is_completed:
            self._set_state(RunState.idle())

    def _on_execute_succeeded(self, call, payload):
        if call is not self._call:
            return
        try:
            result = ExecutionResult.from_payload(payload)
        except MalformedResponseError as e:
            logger.error("RunOrchestrator: malformed execution response: %s", e)
            result = ExecutionResult.transport_error(transport_error_message(e))
        self._complete(result)

    def _on_execute_failed(self, call, error):
        if call is not self._call:
            return
        logger.error("RunOrchestrator: execution request failed: %s", error)
        self._complete(ExecutionResult.transport_error(transport_error_message(error)))

    def _complete(self, result):
        self._call = None
        self._set_state(RunState.completed(result))
        logger.info("RunOrchestrator: run finished with status %s.", result.status_kind.value)
        self.run_finished.emit(result)
        # Last, so nobody observes a completed state with the running indicator still on.
        # A run_finished handler may already have started the next run.
        if not self._state.is_running:
            self.running_changed.emit(False)

    def _set_state(self, state):
        self._state = state
        self.state_changed.emit(state)
