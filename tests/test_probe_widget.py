"""Tests for ProbeWidget and MainWindow."""

import pytest
from PySide6.QtCore import QCoreApplication

from pingprobe.probe import NO_DATA, LatencyProbe
from pingprobe.ui.main_window import MainWindow
from pingprobe.ui.probe_widget import HIDE_TEXT, SHOW_TEXT, ProbeWidget


@pytest.fixture
def probe(transport, clock):
    return LatencyProbe(transport, interval_ms=1000, clock=clock)


@pytest.fixture
def widget(probe):
    win = ProbeWidget(probe)
    yield win
    probe.disable()
    win.deleteLater()
    QCoreApplication.processEvents()


class TestProbeWidget:
    """Test suite for the ping time display."""

    def test_initial_state(self, widget):
        """Probe disabled, label hidden, button offers to show."""
        assert widget.toggle_button.text() == SHOW_TEXT
        assert widget.ping_label.isHidden()
        assert widget.ping_label.text() == f"Ping: {NO_DATA}"

    def test_toggle_button_arms_probe(self, widget, probe):
        widget.toggle_button.click()

        assert probe.is_armed
        assert probe.timer.isActive()
        assert widget.toggle_button.text() == HIDE_TEXT
        assert not widget.ping_label.isHidden()

    def test_toggle_button_twice_stops_polling(self, widget, probe):
        widget.toggle_button.click()
        widget.toggle_button.click()

        assert not probe.is_armed
        assert not probe.timer.isActive()
        assert widget.ping_label.isHidden()
        assert widget.toggle_button.text() == SHOW_TEXT

    def test_label_renders_probe_display(self, widget, probe, transport, clock):
        widget.toggle_button.click()
        clock.now_ms = 1000
        probe.on_tick()
        clock.now_ms = 1075
        transport.ack(1000)

        assert widget.ping_label.text() == "Ping: 75 ms"

    def test_hiding_disables_probe(self, widget, probe):
        """A hidden display performs no polling."""
        widget.show()
        widget.toggle_button.click()
        assert probe.timer.isActive()

        widget.hide()

        assert not probe.is_armed
        assert not probe.timer.isActive()


class TestMainWindow:
    """Test main window lifecycle."""

    def test_close_disables_probe_and_shuts_down_transport(self, probe, transport):
        shutdowns = []
        transport.shutdown = lambda timeout_ms: shutdowns.append(timeout_ms)

        window = MainWindow(probe)
        window.show()
        window.probe_widget.toggle_button.click()
        assert probe.is_armed

        window.close()

        assert not probe.is_armed
        assert shutdowns == [1000]
        window.deleteLater()
        QCoreApplication.processEvents()

    def test_status_label(self, probe):
        window = MainWindow(probe)
        assert window.status_label.text() == "Status: Ready"
        window.deleteLater()
