# passmeter/gui.py
# PassMeter GUI: live evaluator, background generator, session history with CSV export

import sys
import typing
from functools import partial

from PySide6.QtCore import QObject, Qt, QTimer, Signal
from PySide6.QtGui import QClipboard
from PySide6.QtWidgets import (
    QAbstractItemView, QApplication, QCheckBox, QDialog, QDialogButtonBox,
    QFileDialog, QGridLayout, QGroupBox, QHBoxLayout, QLabel, QLineEdit,
    QMessageBox, QProgressBar, QPushButton, QSpinBox, QTableWidget,
    QTableWidgetItem, QTextEdit, QVBoxLayout, QWidget
)

from passmeter.config import configure_logging, load_config, save_config
from passmeter.evaluator import score_password
from passmeter.history import SessionHistory
from passmeter.storage import export_history_csv
from passmeter.suggestions import format_suggestions
from passmeter.worker import GenerationWorker, GeneratorBusyError

CFG = load_config()
DEFAULT_CLEAR_CLIP_SECONDS = int(CFG.get("clipboard_clear_seconds", 20))
DEFAULT_LENGTH = int(CFG.get("default_length", 26))

HISTORY_COLUMNS = ("#", "Password", "Score", "Verdict", "Time")


def bar_color(score: int) -> str:
    if score < 25:
        return "red"
    elif score < 60:
        return "orange"
    return "green"


# ---------------- UI building helpers ----------------

def make_evaluator_group():
    box = QGroupBox("Evaluator")
    layout = QVBoxLayout()
    box.setLayout(layout)

    lbl_input = QLabel("Type or paste a password (press Enter to record it):")
    row = QHBoxLayout()
    input_pw = QLineEdit()
    input_pw.setEchoMode(QLineEdit.Password)
    chk_show = QCheckBox("Show")
    row.addWidget(input_pw)
    row.addWidget(chk_show)

    bar = QProgressBar()
    bar.setRange(0, 100)
    bar.setValue(0)
    bar.setTextVisible(True)

    lbl_result = QLabel("Enter a password")
    lbl_result.setAlignment(Qt.AlignCenter)
    font = lbl_result.font()
    font.setBold(True)
    lbl_result.setFont(font)

    txt_suggestions = QTextEdit()
    txt_suggestions.setReadOnly(True)
    txt_suggestions.setMaximumHeight(160)

    layout.addWidget(lbl_input)
    layout.addLayout(row)
    layout.addWidget(bar)
    layout.addWidget(lbl_result)
    layout.addWidget(QLabel("Suggestions:"))
    layout.addWidget(txt_suggestions)

    return {
        "widget": box,
        "input_pw": input_pw,
        "chk_show": chk_show,
        "bar": bar,
        "lbl_result": lbl_result,
        "txt_suggestions": txt_suggestions,
    }


def make_generator_group():
    box = QGroupBox("Generator")
    layout = QGridLayout()
    box.setLayout(layout)

    spin_len = QSpinBox()
    spin_len.setRange(4, 128)
    spin_len.setValue(DEFAULT_LENGTH)

    btn_generate = QPushButton("Generate")
    btn_copy = QPushButton("Copy (auto-clear)")
    btn_settings = QPushButton("Settings")
    txt_generated = QLineEdit()
    txt_generated.setReadOnly(True)

    layout.addWidget(QLabel("Length:"), 0, 0)
    layout.addWidget(spin_len, 0, 1)
    layout.addWidget(btn_generate, 1, 0)
    layout.addWidget(btn_copy, 1, 1)
    layout.addWidget(btn_settings, 2, 0, 1, 2)
    layout.addWidget(txt_generated, 3, 0, 1, 2)

    return {
        "widget": box,
        "spin_len": spin_len,
        "btn_generate": btn_generate,
        "btn_copy": btn_copy,
        "btn_settings": btn_settings,
        "txt_generated": txt_generated,
    }


def make_history_group():
    box = QGroupBox("Session history")
    layout = QVBoxLayout()
    box.setLayout(layout)

    table = QTableWidget(0, len(HISTORY_COLUMNS))
    table.setHorizontalHeaderLabels(list(HISTORY_COLUMNS))
    table.setEditTriggers(QAbstractItemView.NoEditTriggers)
    table.setSelectionBehavior(QAbstractItemView.SelectRows)
    table.verticalHeader().setVisible(False)
    table.horizontalHeader().setStretchLastSection(True)

    row = QHBoxLayout()
    btn_export = QPushButton("Export CSV")
    btn_clear = QPushButton("Clear")
    row.addWidget(btn_export)
    row.addWidget(btn_clear)

    layout.addWidget(table)
    layout.addLayout(row)

    return {
        "widget": box,
        "table": table,
        "btn_export": btn_export,
        "btn_clear": btn_clear,
    }


class GenerationRelay(QObject):
    """Carries the worker-thread result back to the GUI thread."""
    finished = Signal(str)
    failed = Signal(str)


class SettingsDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumSize(400, 180)
        cfg = load_config()
        self.layout = QVBoxLayout()
        self.setLayout(self.layout)

        self.spin_clip = QSpinBox()
        self.spin_clip.setRange(2, 600)
        self.spin_clip.setValue(int(cfg.get("clipboard_clear_seconds", DEFAULT_CLEAR_CLIP_SECONDS)))

        self.spin_len = QSpinBox()
        self.spin_len.setRange(4, 128)
        self.spin_len.setValue(int(cfg.get("default_length", DEFAULT_LENGTH)))

        self.layout.addWidget(QLabel("Clipboard auto-clear (seconds):"))
        self.layout.addWidget(self.spin_clip)
        self.layout.addWidget(QLabel("Default generated length:"))
        self.layout.addWidget(self.spin_len)

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.layout.addWidget(btns)
        btns.accepted.connect(self.accept)
        btns.rejected.connect(self.reject)

    def values(self):
        return {"clipboard_clear_seconds": int(self.spin_clip.value()), "default_length": int(self.spin_len.value())}


class PassMeterGUI(QWidget):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("PassMeter — Evaluator & Generator")
        self.setMinimumSize(920, 560)
        self.clip_timer: typing.Optional[QTimer] = None

        self.cfg = load_config()
        self.clip_clear_seconds = int(self.cfg.get("clipboard_clear_seconds", DEFAULT_CLEAR_CLIP_SECONDS))
        self.history = SessionHistory(mask_char=self.cfg.get("mask_char") or "•")
        self.worker = GenerationWorker()
        self.relay = GenerationRelay()

        # build UI
        main = QVBoxLayout()
        self.setLayout(main)
        top = QHBoxLayout()
        main.addLayout(top, 1)

        evalg = make_evaluator_group()
        gen = make_generator_group()
        hist = make_history_group()

        top.addWidget(evalg["widget"], 2)
        top.addWidget(gen["widget"], 1)
        main.addWidget(hist["widget"], 1)

        # Wire up evaluator
        evalg["input_pw"].textChanged.connect(partial(self.on_password_changed, evalg))
        evalg["input_pw"].returnPressed.connect(partial(self.on_commit, evalg))
        evalg["chk_show"].toggled.connect(partial(self.on_toggle_show, evalg))

        # Wire up generator
        gen["btn_generate"].clicked.connect(partial(self.on_generate_click, gen))
        gen["btn_copy"].clicked.connect(partial(self.on_copy_generated, gen))
        gen["btn_settings"].clicked.connect(partial(self.on_settings, gen))
        self.relay.finished.connect(self.on_generated)
        self.relay.failed.connect(self.on_generation_failed)

        # Wire up history
        hist["btn_export"].clicked.connect(self.on_export)
        hist["btn_clear"].clicked.connect(self.on_clear_history)

        self.evalg = evalg
        self.gen = gen
        self.hist = hist

    # ----------------- Evaluator -----------------
    def on_toggle_show(self, evalg, checked: bool):
        evalg["input_pw"].setEchoMode(QLineEdit.Normal if checked else QLineEdit.Password)

    def on_password_changed(self, evalg, text: str):
        result = score_password(text)
        bar = evalg["bar"]
        bar.setValue(result.score)
        bar.setStyleSheet(f"QProgressBar::chunk {{ background-color: {bar_color(result.score)}; }}")
        if result.is_valid:
            evalg["lbl_result"].setText(f"{result.label} — {result.score}/100")
        else:
            evalg["lbl_result"].setText(result.label)
        evalg["txt_suggestions"].setPlainText(format_suggestions(result.suggestions))

    def on_commit(self, evalg):
        pw = evalg["input_pw"].text()
        result = score_password(pw)
        if not result.is_valid:
            evalg["lbl_result"].setText(result.label)
            return
        self.history.commit(pw, result)
        self.refresh_history()

    # ----------------- Generator -----------------
    def on_generate_click(self, gen):
        try:
            fut = self.worker.submit(gen["spin_len"].value(), callback=self.relay.finished.emit)
        except GeneratorBusyError:
            return
        fut.add_done_callback(self._check_generation)
        gen["btn_generate"].setEnabled(False)
        gen["btn_generate"].setText("Generating…")

    def _check_generation(self, fut):
        # runs on the worker thread
        exc = fut.exception()
        if exc is not None:
            self.relay.failed.emit(str(exc))

    def _reset_generate_button(self):
        self.gen["btn_generate"].setEnabled(True)
        self.gen["btn_generate"].setText("Generate")

    def on_generation_failed(self, message: str):
        self._reset_generate_button()
        QMessageBox.critical(self, "Generator", f"Could not generate a password: {message}")

    def on_generated(self, pw: str):
        gen = self.gen
        self._reset_generate_button()
        gen["txt_generated"].setText(pw)
        # placing it in the evaluator re-scores it
        self.evalg["input_pw"].setText(pw)

    def on_copy_generated(self, gen):
        pw = gen["txt_generated"].text()
        if not pw:
            return
        clipboard: QClipboard = QApplication.clipboard()
        clipboard.setText(pw, mode=QClipboard.Clipboard)
        if clipboard.supportsSelection():
            clipboard.setText(pw, mode=QClipboard.Selection)

        btn = gen["btn_copy"]
        old_text = btn.text()
        btn.setText("Copied ✓")
        btn.setEnabled(False)
        QTimer.singleShot(1500, lambda: (btn.setText(old_text), btn.setEnabled(True)))

        self.start_clipboard_clear_timer(self.clip_clear_seconds)

    # ----------------- History -----------------
    def refresh_history(self):
        table = self.hist["table"]
        entries = self.history.entries
        table.setRowCount(len(entries))
        for row, e in enumerate(entries):
            cells = (str(e.index), e.masked, str(e.score), e.verdict.value, e.timestamp.strftime("%H:%M:%S"))
            for col, value in enumerate(cells):
                table.setItem(row, col, QTableWidgetItem(value))

    def on_export(self):
        if not len(self.history):
            QMessageBox.information(self, "Nothing to export", "Record a password first (press Enter).")
            return
        path, _ = QFileDialog.getSaveFileName(self, "Export history", "passmeter-history.csv", "CSV files (*.csv)")
        if not path:
            return
        try:
            export_history_csv(self.history.export_records(), path)
        except OSError as e:
            QMessageBox.critical(self, "Export failed", f"Could not write {path}: {e}")
            return
        QMessageBox.information(self, "Exported", f"Saved {len(self.history)} entries to {path}.")

    def on_clear_history(self):
        confirm = QMessageBox.question(self, "Clear", "Clear the session history?")
        if confirm != QMessageBox.Yes:
            return
        self.history.clear()
        self.refresh_history()

    # ----------------- Settings -----------------
    def on_settings(self, gen):
        dlg = SettingsDialog(self)
        if dlg.exec() != QDialog.Accepted:
            return
        self.cfg.update(dlg.values())
        try:
            save_config(self.cfg)
        except OSError as e:
            QMessageBox.critical(self, "Settings", f"Could not save settings: {e}")
            return
        self.clip_clear_seconds = int(self.cfg["clipboard_clear_seconds"])
        gen["spin_len"].setValue(int(self.cfg["default_length"]))
        QMessageBox.information(self, "Saved", "Settings saved.")

    # ----------------- Clipboard -----------------
    def start_clipboard_clear_timer(self, seconds: int):
        if self.clip_timer and self.clip_timer.isActive():
            self.clip_timer.stop()
        self.clip_timer = QTimer(self)
        self.clip_timer.setSingleShot(True)
        self.clip_timer.timeout.connect(self.clear_clipboard)
        self.clip_timer.start(seconds * 1000)

    def clear_clipboard(self):
        clipboard: QClipboard = QApplication.clipboard()
        clipboard.setText("", mode=QClipboard.Clipboard)
        if clipboard.supportsSelection():
            clipboard.setText("", mode=QClipboard.Selection)

    def closeEvent(self, event):
        # generation is bounded; let it finish before the relay goes away
        self.relay.finished.disconnect(self.on_generated)
        self.relay.failed.disconnect(self.on_generation_failed)
        self.worker.shutdown(wait=True)
        super().closeEvent(event)


def main():
    configure_logging(CFG.get("log_level"))
    app = QApplication(sys.argv)
    gui = PassMeterGUI()
    gui.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
