import logging

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..model import SimulationStatus

logger = logging.getLogger(__name__)


class LayoutDriver(QObject):
    """Runs a GraphEngine on a QTimer frame clock.

    One engine tick per timeout. The timer is stopped while the engine is
    converged or paused and re-armed as soon as a command is posted to the
    engine (drag, resume, reset...).
    """

    snapshotReady = pyqtSignal(object)  # Snapshot
    statusChanged = pyqtSignal(str)  # SimulationStatus value
    converged = pyqtSignal()

    def __init__(self, engine, interval=16, parent=None):
        super().__init__(parent)
        self.engine = engine
        self._last_status = engine.status

        # Physics Timer
        self.timer = QTimer(self)
        self.timer.setInterval(interval)  # ~60 FPS
        self.timer.timeout.connect(self.physics_loop)

        engine.add_listener(self._on_snapshot)
        engine.add_wake_listener(self.wake)

    @property
    def active(self):
        return self.timer.isActive()

    def start(self):
        if not self.timer.isActive():
            self.timer.start()

    def stop(self):
        self.timer.stop()

    def wake(self):
        # Commands are applied by the next timeout, never right here.
        self.start()

    def _on_snapshot(self, snapshot):
        self.snapshotReady.emit(snapshot)
        # A fresh load publishes a running snapshot outside the timer.
        if snapshot.status is SimulationStatus.RUNNING:
            self.start()

    def physics_loop(self):
        self.engine.tick()
        status = self.engine.status
        if status is not self._last_status:
            self._last_status = status
            self.statusChanged.emit(status.value)
            if status is SimulationStatus.CONVERGED:
                logger.info(f"Converged at tick {self.engine.tick_count}, stopping timer")
                self.converged.emit()
        if status is not SimulationStatus.RUNNING and not self.engine.pending:
            self.stop()
