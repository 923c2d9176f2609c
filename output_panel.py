# output_panel.py
# Read-only panel that renders the current RunState through result_presenter.

import html

from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QTextBrowser, QStyle
from PySide6.QtCore import Slot

import result_presenter

ICON_PIXMAPS = {
    result_presenter.ICON_TERMINAL: QStyle.StandardPixmap.SP_ComputerIcon,
    result_presenter.ICON_SPINNER: QStyle.StandardPixmap.SP_BrowserReload,
    result_presenter.ICON_CHECK: QStyle.StandardPixmap.SP_DialogApplyButton,
    result_presenter.ICON_ALERT_CIRCLE: QStyle.StandardPixmap.SP_MessageBoxCritical,
    result_presenter.ICON_CLOCK: QStyle.StandardPixmap.SP_MessageBoxWarning,
    result_presenter.ICON_ALERT_TRIANGLE: QStyle.StandardPixmap.SP_MessageBoxWarning,
}


class OutputPanel(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        header = QHBoxLayout()
        self.icon_label = QLabel()
        self.status_label = QLabel()
        self.status_label.setStyleSheet("font-weight: bold;")
        self.duration_label = QLabel()
        header.addWidget(self.icon_label)
        header.addWidget(self.status_label)
        header.addStretch(1)
        header.addWidget(self.duration_label)
        layout.addLayout(header)

        self.output_view = QTextBrowser()
        self.output_view.setReadOnly(True)
        layout.addWidget(self.output_view)

        self.show_state(None)

    @Slot(object)
    def show_state(self, state):
        display = result_presenter.present(state)
        sections = result_presenter.present_output(state)
        color = result_presenter.severity_color(display.severity)

        pixmap = ICON_PIXMAPS.get(display.icon_kind, QStyle.StandardPixmap.SP_ComputerIcon)
        self.icon_label.setPixmap(self.style().standardIcon(pixmap).pixmap(16, 16))
        self.status_label.setText(display.label)
        self.status_label.setStyleSheet(f"font-weight: bold; color: {color};")
        self.duration_label.setText(sections.duration_text)
        self.output_view.setHtml(self._render_sections(sections))

    def _render_sections(self, sections):
        parts = []
        if sections.stdout:
            parts.append(self._block("Standard Output", sections.stdout, "#4ADE80"))
        if sections.stderr:
            parts.append(self._block(sections.error_heading, sections.stderr, "#F87171"))
        if sections.placeholder:
            parts.append(f"<p style='color: #6B7280; font-style: italic;'>{html.escape(sections.placeholder)}</p>")
        return "".join(parts)

    @staticmethod
    def _block(heading, text, color):
        return (
            f"<div style='color: {color}; font-size: small;'>{html.escape(heading.upper())}</div>"
            f"<pre style='white-space: pre-wrap;'>{html.escape(text)}</pre>"
        )
