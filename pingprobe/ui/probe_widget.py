"""Toggleable ping time display."""

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

from pingprobe.probe import LatencyProbe

SHOW_TEXT = "Show ping time"
HIDE_TEXT = "Hide ping time"


class ProbeWidget(QWidget):
    """Button toggling a LatencyProbe and a label rendering its display text.

    The label is only visible while the probe is armed, and hiding it
    disables the probe, so a hidden display never polls.
    """

    def __init__(self, probe: LatencyProbe, parent=None):
        super().__init__(parent)
        self.probe = probe

        layout = QVBoxLayout(self)

        self.toggle_button = QPushButton(SHOW_TEXT)
        self.toggle_button.clicked.connect(self.probe.toggle)
        layout.addWidget(self.toggle_button)

        self.ping_label = QLabel()
        self.ping_label.setAlignment(Qt.AlignCenter)
        self.ping_label.setStyleSheet("padding: 5px; font-family: monospace;")
        layout.addWidget(self.ping_label)

        self.probe.display_changed.connect(self.render_display)
        self.probe.armed_changed.connect(self.on_armed_changed)

        self.render_display(self.probe.current_display())
        self.on_armed_changed(self.probe.is_armed)

    def hideEvent(self, event):
        """Stop polling whenever the display is hidden."""
        self.probe.disable()
        super().hideEvent(event)

    def render_display(self, text: str):
        self.ping_label.setText(f"Ping: {text}")

    def on_armed_changed(self, armed: bool):
        self.toggle_button.setText(HIDE_TEXT if armed else SHOW_TEXT)
        self.ping_label.setVisible(armed)
        if armed:
            self.render_display(self.probe.current_display())
