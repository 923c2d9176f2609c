# main_window.py
# This file defines the MainWindow class, the user interface of the Coder Runner
# client. It integrates the language selector, the code editor, the advisory banner,
# the output panel and the footer. All state lives in the CoderSession; the window
# forwards user actions to it and re-renders from its signals.

from PySide6.QtWidgets import (
    QMainWindow, QStatusBar, QToolBar, QComboBox, QDockWidget, QTabWidget,
    QPlainTextEdit, QVBoxLayout, QHBoxLayout, QWidget, QLabel, QPushButton, QStyle
)
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtCore import Slot, Qt

import config
from code_editor import CodeEditor
from models import EditorTheme
from output_panel import OutputPanel

THEME_STYLESHEETS = {
    EditorTheme.DARK: "QPlainTextEdit, QTextBrowser { background-color: #1E1E1E; color: #D4D4D4; }",
    EditorTheme.LIGHT: "QPlainTextEdit, QTextBrowser { background-color: #FFFFFF; color: #1F2937; }",
}


class MainWindow(QMainWindow):
    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session

        self.setWindowTitle("Coder Platform")
        self.setGeometry(100, 100, 1200, 800)

        self._setup_central_widget()
        self._setup_toolbar()
        self._setup_output_dock()
        self._setup_menus()
        self._setup_footer()
        self._connect_session_signals()

        self._apply_theme(self.session.theme)
        self._on_running_changed(False)

    def _setup_central_widget(self):
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        # Advisory banner (offline mode), hidden until the catalog falls back.
        self.banner = QWidget()
        self.banner.setStyleSheet("background-color: #CA8A04; color: white;")
        banner_layout = QHBoxLayout(self.banner)
        banner_layout.setContentsMargins(8, 4, 8, 4)
        self.banner_label = QLabel()
        self.banner_label.setAlignment(Qt.AlignCenter)
        banner_layout.addWidget(self.banner_label, 1)
        dismiss_button = QPushButton("Dismiss")
        dismiss_button.setFlat(True)
        dismiss_button.clicked.connect(self.session.catalog.dismiss_advisory)
        banner_layout.addWidget(dismiss_button)
        self.banner.hide()
        layout.addWidget(self.banner)

        self.editor_header = QLabel("Select a language to start coding")
        self.editor_header.setContentsMargins(8, 4, 8, 4)
        layout.addWidget(self.editor_header)

        self.code_editor = CodeEditor(self.session.trigger_bridge)
        self.code_editor.source_edited.connect(self.session.set_source_text)
        layout.addWidget(self.code_editor, 1)

        self.setCentralWidget(central)

    def _setup_toolbar(self):
        toolbar = QToolBar("Execution Toolbar")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self.language_selector = QComboBox()
        self.language_selector.setMinimumWidth(160)
        self.language_selector.setPlaceholderText("Select Language")
        self.language_selector.activated.connect(self._on_language_activated)
        toolbar.addWidget(self.language_selector)

        self.reset_action = QAction(self.style().standardIcon(QStyle.StandardPixmap.SP_BrowserReload), "Reset", self)
        self.reset_action.setToolTip("Reset to sample code")
        self.reset_action.triggered.connect(self.session.reset)
        toolbar.addAction(self.reset_action)

        self.theme_action = QAction("Theme", self)
        self.theme_action.triggered.connect(self.session.toggle_theme)
        toolbar.addAction(self.theme_action)

        self.play_action = QAction(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPlay), "Run", self)
        self.play_action.setToolTip("Run (Ctrl+Enter)")
        self.play_action.triggered.connect(self.session.trigger_bridge.request_run)
        toolbar.addAction(self.play_action)

    def _setup_output_dock(self):
        self.output_dock = QDockWidget("Output", self)
        self.output_dock.setAllowedAreas(Qt.BottomDockWidgetArea | Qt.RightDockWidgetArea)
        self.output_dock.setFeatures(QDockWidget.DockWidgetMovable | QDockWidget.DockWidgetFloatable)
        self.output_tabs = QTabWidget()
        self.output_panel = OutputPanel()
        self.output_tabs.addTab(self.output_panel, "Output")
        self.stdin_edit = QPlainTextEdit()
        self.stdin_edit.setPlaceholderText("Standard input passed to the program")
        self.stdin_edit.textChanged.connect(lambda: self.session.set_stdin(self.stdin_edit.toPlainText()))
        self.output_tabs.addTab(self.stdin_edit, "Input")
        self.output_dock.setWidget(self.output_tabs)
        self.addDockWidget(Qt.RightDockWidgetArea, self.output_dock)

    def _setup_menus(self):
        run_menu = self.menuBar().addMenu("&Run")
        self.execute_action = QAction("Run Code", self)
        self.execute_action.setShortcut(QKeySequence("F5"))
        self.execute_action.triggered.connect(self.session.trigger_bridge.request_run)
        run_menu.addAction(self.execute_action)
        run_menu.addAction(self.reset_action)

        view_menu = self.menuBar().addMenu("&View")
        view_menu.addAction(self.theme_action)

    def _setup_footer(self):
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        limits = QLabel(
            f"Time Limit: {config.EXECUTION_TIME_LIMIT_MS // 1000}s • "
            f"Memory Limit: {config.MEMORY_LIMIT_BYTES // 1048576}MB"
        )
        self.status_bar.addWidget(limits)
        self.status_bar.addPermanentWidget(QLabel("Press Ctrl+Enter to run"))

    def _connect_session_signals(self):
        catalog = self.session.catalog
        catalog.catalog_loaded.connect(self._on_catalog_loaded)
        catalog.active_language_changed.connect(self._on_active_language_changed)
        catalog.source_text_changed.connect(self.code_editor.set_source_text)
        catalog.advisory_raised.connect(self._show_banner)
        catalog.advisory_dismissed.connect(self.banner.hide)

        orchestrator = self.session.orchestrator
        orchestrator.state_changed.connect(self.output_panel.show_state)
        orchestrator.running_changed.connect(self._on_running_changed)

        self.session.theme_changed.connect(self._apply_theme)
        self.session.health_checked.connect(self._on_health_checked)

    @Slot(object)
    def _on_catalog_loaded(self, languages):
        self.language_selector.clear()
        for language in languages:
            self.language_selector.addItem(f"{language.display_name}  {language.file_extension}", language.id)
        self._on_running_changed(self.session.orchestrator.is_running)

    @Slot(object)
    def _on_active_language_changed(self, language):
        if language is None:
            self.language_selector.setCurrentIndex(-1)
            self.editor_header.setText("Select a language to start coding")
        else:
            self.language_selector.setCurrentIndex(self.language_selector.findData(language.id))
            self.editor_header.setText(f"{language.display_name} • {language.file_extension}")
        self._on_running_changed(self.session.orchestrator.is_running)

    @Slot(int)
    def _on_language_activated(self, index):
        language_id = self.language_selector.itemData(index)
        if language_id:
            self.session.select_language(language_id)
            self.code_editor.setFocus()

    @Slot(str)
    def _show_banner(self, message):
        self.banner_label.setText(message)
        self.banner.show()

    @Slot(bool)
    def _on_running_changed(self, running):
        has_language = self.session.catalog.active_language is not None
        self.play_action.setEnabled(has_language and not running)
        self.execute_action.setEnabled(has_language and not running)
        self.play_action.setText("Running..." if running else "Run")

    @Slot(object)
    def _apply_theme(self, theme):
        self.setStyleSheet(THEME_STYLESHEETS[theme])
        self.theme_action.setText("Light Theme" if theme is EditorTheme.DARK else "Dark Theme")
        self.theme_action.setToolTip("Switch to light theme" if theme is EditorTheme.DARK else "Switch to dark theme")

    @Slot(bool)
    def _on_health_checked(self, reachable):
        if reachable:
            self.status_bar.showMessage("Connected to execution service.", 3000)
        else:
            self.status_bar.showMessage("Execution service unreachable.", 5000)
