# session.py
# CoderSession wires the non-visual core together for one editing session:
# startup loads the catalog, the user selects a language and edits text, and a run
# trigger (toolbar action or the editor's bridged gesture) goes to the orchestrator.
# The window only talks to this object; it never mutates catalog or run state directly.

import logging

from PySide6.QtCore import QObject, Signal, Slot

from language_catalog import LanguageCatalog
from models import EditorTheme
from network_manager import NetworkManager
from run_orchestrator import RunOrchestrator

logger = logging.getLogger(__name__)


class CoderSession(QObject):
    theme_changed = Signal(object)  # EditorTheme
    health_checked = Signal(bool)

    def __init__(self, network_manager=None, parent=None):
        super().__init__(parent)
        self.network_manager = network_manager if network_manager is not None else NetworkManager(self)
        self.catalog = LanguageCatalog(self.network_manager, self)
        self.orchestrator = RunOrchestrator(self.network_manager, self)
        self.theme = EditorTheme.DARK
        self.stdin_text = None
        self.trigger_bridge.subscribe(self.run)

    @property
    def trigger_bridge(self):
        return self.orchestrator.trigger_bridge

    def start(self):
        logger.info("CoderSession: starting, loading language catalog.")
        self.catalog.load()
        self.check_health()

    def select_language(self, language_id):
        self.catalog.select_language(language_id)
        self.orchestrator.clear_result()
        self.catalog.dismiss_advisory()

    def set_source_text(self, text):
        self.catalog.set_source_text(text)

    def set_stdin(self, text):
        self.stdin_text = text if text else None

    @Slot()
    def run(self):
        """Runs the active language with the current text. Returns False if nothing was issued."""
        language = self.catalog.active_language
        if language is None:
            logger.debug("CoderSession: run requested without an active language.")
            return False
        started = self.orchestrator.run(language.id, self.catalog.source_text, stdin=self.stdin_text)
        if started:
            self.catalog.dismiss_advisory()
        return started

    def reset(self):
        if self.catalog.active_language is None:
            return
        self.catalog.reset_source_text()
        self.orchestrator.clear_result()
        self.catalog.dismiss_advisory()

    def toggle_theme(self):
        self.theme = self.theme.toggled()
        self.theme_changed.emit(self.theme)
        return self.theme

    def check_health(self):
        call = self.network_manager.check_health()
        call.succeeded.connect(lambda _: self._on_health(True))
        call.failed.connect(lambda _: self._on_health(False))

    def _on_health(self, reachable):
        logger.info("CoderSession: execution service %s.", "reachable" if reachable else "unreachable")
        self.health_checked.emit(reachable)
