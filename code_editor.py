# code_editor.py

import sys
from PySide6.QtWidgets import QPlainTextEdit, QApplication
from PySide6.QtGui import QKeyEvent, QTextCursor, QFont
from PySide6.QtCore import Qt, Signal


class CodeEditor(QPlainTextEdit):
    """
    A QPlainTextEdit subclass with bracket/quote auto-pairing.
    It knows nothing about running code: Ctrl+Enter is forwarded to the
    TriggerBridge it was given, and user edits are reported via source_edited.
    """
    source_edited = Signal(str)

    def __init__(self, trigger_bridge=None, parent=None):
        super().__init__(parent)
        self.trigger_bridge = trigger_bridge
        self._is_setting_text = False

        self.pairs = {'(': ')', '{': '}', '[': ']', '"': '"', "'": "'"}

        font = QFont("Monospace", 11)
        if sys.platform == "darwin": font.setFamily("Monaco")
        elif sys.platform == "win32": font.setFamily("Consolas")
        font.setStyleHint(QFont.StyleHint.Monospace)
        self.setFont(font)
        self.setTabStopDistance(self.fontMetrics().horizontalAdvance(" ") * 4)

        self.textChanged.connect(self._on_text_changed)

    def set_source_text(self, text: str):
        """Replaces the content without reporting it as a user edit."""
        if text == self.toPlainText():
            return
        self._is_setting_text = True
        try:
            self.setPlainText(text)
        finally:
            self._is_setting_text = False

    def _on_text_changed(self):
        if not self._is_setting_text:
            self.source_edited.emit(self.toPlainText())

    def keyPressEvent(self, event: QKeyEvent):
        # --- Run gesture ---
        if event.key() in (Qt.Key_Return, Qt.Key_Enter) and \
           event.modifiers() & (Qt.ControlModifier | Qt.MetaModifier):
            if self.trigger_bridge:
                self.trigger_bridge.request_run()
            event.accept()
            return

        key_text = event.text()
        cursor = self.textCursor()

        # Smart Deletion
        if event.key() == Qt.Key_Backspace:
            char_before_cursor = self.document().characterAt(cursor.position() - 1)
            char_after_cursor = self.document().characterAt(cursor.position())
            if not cursor.hasSelection() and self.pairs.get(char_before_cursor) == char_after_cursor:
                cursor.beginEditBlock()
                cursor.deletePreviousChar()
                cursor.deleteChar()
                cursor.endEditBlock()
                self.setTextCursor(cursor)
                event.accept()
                return

        # Selection Wrapping
        if key_text in self.pairs and cursor.hasSelection():
            selected_text = cursor.selectedText()
            cursor.insertText(key_text + selected_text + self.pairs[key_text])
            event.accept()
            return

        # Over-Typing Closing Character
        if key_text and key_text in self.pairs.values():
            char_after_cursor = self.document().characterAt(cursor.position())
            if key_text == char_after_cursor:
                cursor.movePosition(QTextCursor.NextCharacter)
                self.setTextCursor(cursor)
                event.accept()
                return

        # Auto-Insertion of Opening Character (and its pair)
        if key_text and key_text in self.pairs:
            cursor.insertText(key_text + self.pairs[key_text])
            cursor.movePosition(QTextCursor.PreviousCharacter) # Move cursor between the pair
            self.setTextCursor(cursor)
            event.accept()
            return

        super().keyPressEvent(event)


if __name__ == '__main__':
    from trigger_bridge import TriggerBridge

    app = QApplication(sys.argv)
    bridge = TriggerBridge()
    bridge.subscribe(lambda: print("Run requested"))
    editor = CodeEditor(bridge)
    editor.setWindowTitle("Code Editor Test")
    editor.set_source_text('print("Hello, World!")\n')
    editor.show()
    sys.exit(app.exec())
