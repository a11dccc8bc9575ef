"""Voice note recorder/player widget built on QtMultimedia."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
import tempfile

from PySide6.QtCore import QTimer, QUrl, Signal
from PySide6.QtMultimedia import (
    QAudioInput,
    QAudioOutput,
    QMediaCaptureSession,
    QMediaDevices,
    QMediaPlayer,
    QMediaRecorder,
)
from PySide6.QtWidgets import QHBoxLayout, QLabel, QProgressBar, QPushButton, QWidget
from loguru import logger

from app.views.media_utils import format_duration
from core.models import VoiceNote
from core.services.interfaces import CaptureDeniedError, MemoryAppError


class VoiceRecorderWidget(QWidget):
    """Record, play back and remove a single voice note.

    The microphone is held only between start and stop; `shutdown()` must be
    called when the owning dialog closes so an unfinished capture releases
    the device.
    """

    recordingFinished = Signal(str, int)  # local file path, whole seconds
    cleared = Signal()

    def __init__(
        self,
        note: VoiceNote | None = None,
        parent: QWidget | None = None,
        read_only: bool = False,
        on_error: Callable[[MemoryAppError], None] | None = None,
    ) -> None:
        super().__init__(parent)
        self._note = note
        self._read_only = read_only
        self._on_error = on_error
        self._closing = False
        self._elapsed = 0
        self._tmp_dir: tempfile.TemporaryDirectory | None = None

        self._session = QMediaCaptureSession(self)
        self._recorder = QMediaRecorder(self)
        self._session.setRecorder(self._recorder)
        self._audio_input: QAudioInput | None = None
        self._recorder.recorderStateChanged.connect(self._on_recorder_state)
        self._recorder.errorOccurred.connect(self._on_recorder_error)

        self._player = QMediaPlayer(self)
        self._audio_output = QAudioOutput(self)
        self._player.setAudioOutput(self._audio_output)
        self._player.playbackStateChanged.connect(self._sync_play_button)

        self._timer = QTimer(self)
        self._timer.setInterval(1000)
        self._timer.timeout.connect(self._tick)

        self._setup_ui()
        self._refresh()

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        self._btn_record = QPushButton("Record Voice")
        self._btn_stop = QPushButton("Stop")
        self._btn_play = QPushButton("Play")
        self._btn_delete = QPushButton("Delete")
        self._level = QProgressBar()
        self._level.setRange(0, 0)  # busy indicator while recording
        self._level.setTextVisible(False)
        self._time = QLabel("0:00")
        for w in (self._btn_record, self._level, self._time, self._btn_stop, self._btn_play, self._btn_delete):
            layout.addWidget(w)
        self._btn_record.clicked.connect(self.start_recording)
        self._btn_stop.clicked.connect(self.stop_recording)
        self._btn_play.clicked.connect(self.toggle_playback)
        self._btn_delete.clicked.connect(self.delete_recording)

    # State
    @property
    def is_recording(self) -> bool:
        return self._recorder.recorderState() == QMediaRecorder.RecordingState

    def set_note(self, note: VoiceNote | None) -> None:
        self._player.stop()
        self._player.setSource(QUrl())
        self._note = note
        self._refresh()

    def _refresh(self) -> None:
        recording = self.is_recording
        has_note = self._note is not None
        self._btn_record.setVisible(not recording and not has_note and not self._read_only)
        self._level.setVisible(recording)
        self._btn_stop.setVisible(recording)
        self._btn_play.setVisible(has_note and not recording)
        self._btn_delete.setVisible(has_note and not recording and not self._read_only)
        self._time.setVisible(recording or has_note)
        if recording:
            self._time.setText(format_duration(self._elapsed))
        elif has_note:
            self._time.setText(format_duration(self._note.duration))

    # Capture
    def start_recording(self) -> None:
        device = QMediaDevices.defaultAudioInput()
        if device.isNull():
            self._report(CaptureDeniedError("Could not access microphone. Please allow permissions."))
            return
        self._audio_input = QAudioInput(device, self)
        self._session.setAudioInput(self._audio_input)
        if self._tmp_dir is None:
            self._tmp_dir = tempfile.TemporaryDirectory(prefix="voice_", ignore_cleanup_errors=True)
        out = Path(self._tmp_dir.name) / "recording"
        self._recorder.setOutputLocation(QUrl.fromLocalFile(str(out)))
        self._elapsed = 0
        self._recorder.record()
        self._timer.start()
        logger.info("Voice capture started on {}", device.description())
        self._refresh()

    def stop_recording(self) -> None:
        if not self.is_recording:
            return
        self._timer.stop()
        self._recorder.stop()

    def _release_input(self) -> None:
        self._session.setAudioInput(None)
        if self._audio_input is not None:
            self._audio_input.deleteLater()
            self._audio_input = None

    def _tick(self) -> None:
        self._elapsed += 1
        self._time.setText(format_duration(self._elapsed))

    def _on_recorder_state(self, state) -> None:
        if state != QMediaRecorder.StoppedState:
            self._refresh()
            return
        self._timer.stop()
        self._release_input()
        path = self._recorder.actualLocation().toLocalFile()
        logger.info("Voice capture stopped: {} ({}s)", path, self._elapsed)
        self._refresh()
        if path and Path(path).exists() and not self._closing:
            self.recordingFinished.emit(path, self._elapsed)

    def _on_recorder_error(self, _error, message: str) -> None:
        logger.error("Voice capture error: {}", message)
        self._timer.stop()
        self._release_input()
        self._report(CaptureDeniedError(message or "Recording failed."))
        self._refresh()

    def _report(self, ex: MemoryAppError) -> None:
        logger.warning("{}: {}", ex.title, ex)
        if self._on_error is not None:
            self._on_error(ex)

    # Playback
    def toggle_playback(self) -> None:
        if self._note is None:
            return
        if self._player.playbackState() == QMediaPlayer.PlayingState:
            self._player.pause()
            return
        if self._player.source().isEmpty():
            self._player.setSource(QUrl(self._note.url))
        self._player.play()

    def _sync_play_button(self, state) -> None:
        self._btn_play.setText("Pause" if state == QMediaPlayer.PlayingState else "Play")

    def delete_recording(self) -> None:
        self._player.stop()
        self._player.setSource(QUrl())
        self._note = None
        self._refresh()
        self.cleared.emit()

    def shutdown(self) -> None:
        """Stop capture/playback and release the microphone."""
        self._closing = True
        self._timer.stop()
        self._player.stop()
        if self.is_recording:
            self._recorder.stop()
        self._release_input()
        if self._tmp_dir is not None:
            self._tmp_dir.cleanup()
            self._tmp_dir = None
