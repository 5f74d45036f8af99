"""Main application window (UI layer).

Layout:
+---------------------------+
|        Hourglass          |
|            9              |  <- whole seconds left
|   [Reset]  [Play/Pause]   |
+---------------------------+
"""

from __future__ import annotations

import logging
import os
import sys

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QFont, QGuiApplication
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..core.timer import Event, State, TimerController, TimerState
from ..utils.logs import configure_logging
from .hourglass import HourglassWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, controller: TimerController | None = None):
        super().__init__()
        self.setWindowTitle("Sand Timer")
        self.setGeometry(100, 100, 360, 640)
        self.controller = (
            controller if controller is not None else TimerController(self)
        )
        self._createMenuBar()
        self._createLayout()
        self._unsubscribe = self.controller.subscribe(self._onState)
        self._onState(self.controller.current_state())

    def centerOnPreferredScreen(self):
        """Center the window on the selected screen.

        Selection priority:
        1. Environment variable SANDTIMER_SCREEN_INDEX if valid.
        2. Primary screen.
        """
        try:
            screens = QGuiApplication.screens()
            if not screens:
                return
            idx_env = os.getenv("SANDTIMER_SCREEN_INDEX")
            screen = None
            if idx_env is not None:
                try:
                    idx = int(idx_env)
                    if 0 <= idx < len(screens):
                        screen = screens[idx]
                except ValueError:
                    logger.debug("ignoring SANDTIMER_SCREEN_INDEX=%r", idx_env)
            if screen is None:
                screen = QGuiApplication.primaryScreen() or screens[0]
            geo = screen.availableGeometry()
            win_geo = self.frameGeometry()
            win_geo.moveCenter(geo.center())
            self.move(win_geo.topLeft())
        except Exception as e:
            logger.debug("window centering skipped: %s", e)

    def _createMenuBar(self):
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("File")
        exit_action = QAction("Exit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)
        about_menu = menu_bar.addMenu("About")
        about_action = QAction("About Sand Timer", self)
        about_action.triggered.connect(self._showAboutDialog)
        about_menu.addAction(about_action)

    def _showAboutDialog(self):
        QMessageBox.about(
            self,
            "About Sand Timer",
            "Sand Timer\nA ten second countdown drawn as an hourglass.",
        )

    def _createLayout(self):
        central_widget = QWidget()
        layout = QVBoxLayout()
        layout.setAlignment(Qt.AlignTop | Qt.AlignHCenter)  # type: ignore
        layout.addSpacing(48)

        self.hourglass = HourglassWidget()
        layout.addWidget(self.hourglass, 0, Qt.AlignHCenter)  # type: ignore

        self.time_label = QLabel()
        font = QFont()
        font.setPointSize(36)
        self.time_label.setFont(font)
        self.time_label.setAlignment(Qt.AlignCenter)  # type: ignore
        layout.addWidget(self.time_label)

        buttons = QHBoxLayout()
        self.reset_btn = QPushButton("Reset")
        self.play_pause_btn = QPushButton("Play")
        for b in (self.reset_btn, self.play_pause_btn):
            b.setMinimumWidth(96)
            b.setMinimumHeight(40)
            buttons.addWidget(b)
        layout.addLayout(buttons)

        self.reset_btn.clicked.connect(
            lambda: self.controller.action(Event.ResetClicked)
        )
        self.play_pause_btn.clicked.connect(self._onPlayPauseClicked)

        central_widget.setLayout(layout)
        self.setCentralWidget(central_widget)

    def _onPlayPauseClicked(self):
        if self.controller.current_state().timer_state is TimerState.RUNNING:
            self.controller.action(Event.PauseClicked)
        else:
            self.controller.action(Event.PlayClicked)

    def _onState(self, state: State):
        self.hourglass.setPercentage(state.percentage)
        self.hourglass.setRunning(state.is_running)
        self.time_label.setText(state.display_seconds)
        ts = state.timer_state
        # expired has no play/pause transition; only Reset stays available
        self.play_pause_btn.setVisible(ts is not TimerState.EXPIRED)
        self.play_pause_btn.setText("Pause" if ts is TimerState.RUNNING else "Play")

    def closeEvent(self, event):  # type: ignore[override]
        self.controller.pause()
        self._unsubscribe()
        super().closeEvent(event)


def run():  # convenience launcher
    configure_logging()
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    window.centerOnPreferredScreen()
    sys.exit(app.exec())


__all__ = ["MainWindow", "run"]
