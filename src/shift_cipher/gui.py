import json
import sys
from pathlib import Path
from typing import Dict, Optional

from PyQt5 import QtCore, QtGui, QtWidgets

from .classical import CipherConfig, Mode, decipher_text, encipher_text
from .config import load_defaults
from .diagnostics import completion_message, render_report
from .errors import CipherError
from .history import log_event
from .transform import CipherRun, cipher_file
from .utils import SHIFT_MAX, SHIFT_MIN

SETTINGS_PATH = Path.home() / ".shift_cipher_gui.json"


def run_file_job(in_path: str, out_path: Optional[str], config: CipherConfig) -> CipherRun:
    """File run for the window, honouring the saved encoding and history defaults."""
    defaults = load_defaults()
    run = cipher_file(in_path, out_path, config, encoding=defaults.encoding)
    if defaults.history:
        log_event(
            action=config.mode.value,
            payload={
                "in_file": str(run.in_path),
                "out_file": str(run.out_path),
                "shift": config.shift,
                "chars": run.chars_processed,
                "gui": True,
            },
        )
    return run


class FileDropLineEdit(QtWidgets.QLineEdit):
    fileDropped = QtCore.pyqtSignal(str)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.setAcceptDrops(True)
        self.setPlaceholderText("Drop a text file here or type its path")

    def dragEnterEvent(self, event: QtGui.QDragEnterEvent) -> None:  # type: ignore
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            super().dragEnterEvent(event)

    def dropEvent(self, event: QtGui.QDropEvent) -> None:  # type: ignore
        if event.mimeData().hasUrls():
            path = event.mimeData().urls()[0].toLocalFile()
            self.setText(path)
            self.fileDropped.emit(path)
            event.acceptProposedAction()
        else:
            super().dropEvent(event)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Shift Cipher")
        self.resize(760, 520)
        self.settings = self._load_settings()

        self.mode_combo = QtWidgets.QComboBox()
        self.mode_combo.addItems([mode.value for mode in Mode])
        self.mode_combo.setCurrentText(str(self.settings.get("mode", Mode.ENCIPHER.value)))
        self.shift_spin = QtWidgets.QSpinBox()
        self.shift_spin.setRange(SHIFT_MIN, SHIFT_MAX)
        self.shift_spin.setValue(int(self.settings.get("shift", 5)))
        self.digits_check = QtWidgets.QCheckBox("Digits")
        self.digits_check.setChecked(bool(self.settings.get("include_digits", False)))
        self.puncts_check = QtWidgets.QCheckBox("Punctuation")
        self.puncts_check.setChecked(bool(self.settings.get("include_punctuation", False)))

        options = QtWidgets.QHBoxLayout()
        options.addWidget(QtWidgets.QLabel("Mode"))
        options.addWidget(self.mode_combo)
        options.addWidget(QtWidgets.QLabel("Shift"))
        options.addWidget(self.shift_spin)
        options.addWidget(self.digits_check)
        options.addWidget(self.puncts_check)
        options.addStretch(1)

        tabs = QtWidgets.QTabWidget()
        tabs.addTab(self._build_text_tab(), "Text")
        tabs.addTab(self._build_file_tab(), "File")

        central = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(central)
        layout.addLayout(options)
        layout.addWidget(tabs)
        self.setCentralWidget(central)

    def _build_text_tab(self) -> QtWidgets.QWidget:
        widget = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(widget)
        self.input_edit = QtWidgets.QTextEdit()
        self.output_edit = QtWidgets.QTextEdit()
        self.output_edit.setReadOnly(True)
        run_btn = QtWidgets.QPushButton("Run")
        run_btn.clicked.connect(self._run_text_op)
        layout.addWidget(QtWidgets.QLabel("Input"))
        layout.addWidget(self.input_edit)
        layout.addWidget(run_btn)
        layout.addWidget(QtWidgets.QLabel("Output"))
        layout.addWidget(self.output_edit)
        return widget

    def _build_file_tab(self) -> QtWidgets.QWidget:
        widget = QtWidgets.QWidget()
        layout = QtWidgets.QGridLayout(widget)
        self.file_path_edit = FileDropLineEdit()
        self.file_path_edit.fileDropped.connect(self._suggest_output_path)
        self.out_path_edit = QtWidgets.QLineEdit()
        self.out_path_edit.setPlaceholderText("Leave empty to append .ciph / .dec")
        choose_btn = QtWidgets.QPushButton("Browse")
        choose_btn.clicked.connect(self._choose_input_file)
        run_btn = QtWidgets.QPushButton("Run")
        run_btn.clicked.connect(self._run_file_op)
        self.file_result = QtWidgets.QTextEdit()
        self.file_result.setReadOnly(True)

        layout.addWidget(QtWidgets.QLabel("Input file"), 0, 0)
        layout.addWidget(self.file_path_edit, 0, 1)
        layout.addWidget(choose_btn, 0, 2)
        layout.addWidget(QtWidgets.QLabel("Output file"), 1, 0)
        layout.addWidget(self.out_path_edit, 1, 1, 1, 2)
        layout.addWidget(run_btn, 2, 2)
        layout.addWidget(self.file_result, 3, 0, 1, 3)
        return widget

    def _current_config(self) -> CipherConfig:
        return CipherConfig(
            shift=self.shift_spin.value(),
            include_digits=self.digits_check.isChecked(),
            include_punctuation=self.puncts_check.isChecked(),
            mode=Mode(self.mode_combo.currentText()),
        )

    def _run_text_op(self) -> None:
        config = self._current_config()
        func = encipher_text if config.mode is Mode.ENCIPHER else decipher_text
        text = self.input_edit.toPlainText()
        self.output_edit.setPlainText(
            func(text, config.shift, config.include_digits, config.include_punctuation)
        )
        self._save_settings()

    def _suggest_output_path(self, path: str) -> None:
        if not self.out_path_edit.text().strip():
            self.out_path_edit.setPlaceholderText(path + Mode(self.mode_combo.currentText()).suffix)

    def _choose_input_file(self) -> None:
        path, _ = QtWidgets.QFileDialog.getOpenFileName(self, "Choose input file")
        if path:
            self.file_path_edit.setText(path)
            self._suggest_output_path(path)

    def _run_file_op(self) -> None:
        config = self._current_config()
        in_path = self.file_path_edit.text().strip()
        out_path = self.out_path_edit.text().strip() or None
        try:
            run = run_file_job(in_path, out_path, config)
        except CipherError as exc:  # pragma: no cover - GUI feedback
            QtWidgets.QMessageBox.warning(self, "Cipher failed", str(exc))
            return
        self.file_result.setPlainText(completion_message(run) + "\n\n" + render_report(run, "shift-cipher gui"))
        self._save_settings()

    def _load_settings(self) -> Dict[str, object]:
        if SETTINGS_PATH.exists():
            try:
                return json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                return {}
        return {}

    def _save_settings(self) -> None:
        self.settings.update(
            {
                "mode": self.mode_combo.currentText(),
                "shift": self.shift_spin.value(),
                "include_digits": self.digits_check.isChecked(),
                "include_punctuation": self.puncts_check.isChecked(),
            }
        )
        try:
            SETTINGS_PATH.write_text(json.dumps(self.settings, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError:
            pass


def run_gui() -> int:
    app = QtWidgets.QApplication(sys.argv)
    window = MainWindow()
    window.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(run_gui())
