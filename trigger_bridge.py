from PySide6.QtCore import QObject, Signal


class TriggerBridge(QObject):
    """
    Carries "run requested" gestures from the editing widget to whoever owns
    the run. The widget only calls request_run(); it never sees the orchestrator.
    Each gesture is delivered once, with no debouncing or queuing.
    """
    run_requested = Signal()

    def subscribe(self, callback):
        self.run_requested.connect(callback)

    def unsubscribe(self, callback):
        try:
            self.run_requested.disconnect(callback)
        except (RuntimeError, TypeError):
            pass  # Not connected

    def request_run(self):
        self.run_requested.emit()
