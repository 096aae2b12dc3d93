"""Main window for the pingprobe application."""

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QLabel, QMainWindow, QVBoxLayout, QWidget

from pingprobe.probe import LatencyProbe
from pingprobe.ui.probe_widget import ProbeWidget


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, probe: LatencyProbe):
        super().__init__()
        self.setWindowTitle("Ping Time")
        self.setGeometry(100, 100, 320, 160)

        self.probe = probe

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)

        self.probe_widget = ProbeWidget(probe)
        layout.addWidget(self.probe_widget)

        layout.addStretch()

        self.status_label = QLabel("Status: Ready")
        self.status_label.setAlignment(Qt.AlignCenter)
        self.status_label.setStyleSheet("font-weight: bold;")
        layout.addWidget(self.status_label)

    def closeEvent(self, event: QCloseEvent) -> None:
        """Handle application close event - clean up resources."""
        self.probe.disable()

        # In-flight round trips finish on their own; results are discarded
        shutdown = getattr(self.probe.transport, "shutdown", None)
        if shutdown is not None:
            shutdown(1000)

        super().closeEvent(event)
