# Copyright (c) 2026 Signer — MIT License

"""Password Generator: desktop front-end for passgen with live entropy feedback."""

import os
import sys
import threading
from datetime import datetime

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_DIR = os.path.dirname(SCRIPT_DIR)
sys.path.insert(0, PROJECT_DIR)

from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLineEdit, QLabel, QFrame, QListWidget, QPushButton, QProgressBar,
    QCheckBox, QSpinBox, QGridLayout,
)
from PySide6.QtCore import Qt, Signal, QTimer

from passgen import (
    MAX_WORDS, MIN_WORDS, char_pool_size, estimate_bits, format_crack_time, generate,
    get_wordlist, parse_options, regenerate, verify_sampler,
)

HISTORY_SIZE = 6

# Word count / length per preset, keyed by mode
PRESETS = {
    "Easy": {"passphrase": 3, "character": 10},
    "Medium": {"passphrase": 4, "character": 14},
    "Hard": {"passphrase": 5, "character": 20},
}


# ── Light theme styles ─────────────────────────────────────

STYLE = """
QMainWindow { background: #f5f5f7; }
QLineEdit, QSpinBox {
    background: #ffffff;
    border: 1px solid #d8d8e0;
    border-radius: 8px;
    padding: 5px 8px;
    color: #2c2c3a;
    font-size: 13px;
}
QLineEdit:focus, QSpinBox:focus { border: 1px solid #2a9a5a; }
QCheckBox { color: #2c2c3a; font-size: 12px; spacing: 6px; }
QListWidget {
    background: #ffffff;
    border: 1px solid #e4e4ec;
    border-radius: 10px;
    padding: 4px;
    font-size: 11px;
    color: #6a6a80;
}
"""

TOGGLE_ACTIVE = (
    "QPushButton { background: #2c2c3a; color: #ffffff; border: none;"
    " border-radius: 10px; font-size: 12px; font-weight: 600; padding: 4px 14px; }"
)
TOGGLE_INACTIVE = (
    "QPushButton { background: #e8e8f0; color: #6a6a80; border: none;"
    " border-radius: 10px; font-size: 12px; font-weight: 500; padding: 4px 14px; }"
    "QPushButton:hover { background: #dcdce8; }"
)
GENERATE_BTN = (
    "QPushButton { background: #2a9a5a; color: #ffffff; border: none;"
    " border-radius: 10px; font-size: 13px; font-weight: 600; padding: 6px 20px; }"
    "QPushButton:hover { background: #23884e; }"
    "QPushButton:pressed { background: #1d7542; }"
    "QPushButton:disabled { background: #b8d8c4; }"
)
SMALL_BTN = (
    "QPushButton { background: #e8e8f0; color: #6a6a80; border: none;"
    " border-radius: 10px; font-size: 11px; font-weight: 500; padding: 4px 10px; }"
    "QPushButton:hover { background: #dcdce8; }"
    "QPushButton:disabled { color: #b0b0c0; }"
)
CARD = "QFrame { background: #ffffff; border: 1px solid #e4e4ec; border-radius: 10px; }"
SECTION_LABEL = (
    "color: #8888a0; font-size: 11px; font-weight: 600; letter-spacing: 0.5px;"
    " background: none; border: none;"
)
INFO_LABEL = "color: #2c2c3a; font-size: 12px; background: none; border: none;"
MUTED_LABEL = "color: #9898a8; font-size: 12px; background: none; border: none;"
WARN_LABEL = "color: #d04040; font-size: 12px; font-weight: 600; background: none; border: none;"


def _section(text):
    label = QLabel(text.upper())
    label.setStyleSheet(SECTION_LABEL)
    return label


class GeneratorWindow(QMainWindow):

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Password Generator")
        self.setMinimumSize(480, 640)
        self.resize(520, 780)
        self.setStyleSheet(STYLE)
        self.mode = "passphrase"
        self._last = None       # last GeneratedSecret, for regenerate
        self._shown = True
        self._wordlist = get_wordlist()

        # Coalesce rapid option edits into one estimate refresh
        self._estimate_timer = QTimer()
        self._estimate_timer.setSingleShot(True)
        self._estimate_timer.setInterval(150)
        self._estimate_timer.timeout.connect(self._update_estimate)

        central = QWidget()
        central.setStyleSheet("background: #f5f5f7;")
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(20, 16, 20, 16)
        main_layout.setSpacing(10)

        # Header
        title = QLabel("Password Generator")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(
            "color: #1a1a2a; font-size: 22px; font-weight: 700; letter-spacing: 1px;"
        )
        main_layout.addWidget(title)

        subtitle = QLabel(f"Exact entropy accounting  ·  {len(self._wordlist)} words loaded")
        subtitle.setAlignment(Qt.AlignCenter)
        subtitle.setStyleSheet("color: #8888a0; font-size: 12px;")
        main_layout.addWidget(subtitle)

        # Mode toggle + presets
        mode_row = QHBoxLayout()
        mode_row.setSpacing(6)
        self.btn_passphrase = QPushButton("Passphrase")
        self.btn_character = QPushButton("Characters")
        for btn, mode in ((self.btn_passphrase, "passphrase"), (self.btn_character, "character")):
            btn.setCursor(Qt.PointingHandCursor)
            btn.clicked.connect(lambda _=False, m=mode: self._set_mode(m))
            mode_row.addWidget(btn)
        mode_row.addStretch()
        for name in PRESETS:
            btn = QPushButton(name)
            btn.setCursor(Qt.PointingHandCursor)
            btn.setStyleSheet(SMALL_BTN)
            btn.clicked.connect(lambda _=False, n=name: self._apply_preset(n))
            mode_row.addWidget(btn)
        main_layout.addLayout(mode_row)

        # Passphrase options
        self.passphrase_frame = QFrame()
        self.passphrase_frame.setStyleSheet(CARD)
        pgrid = QGridLayout(self.passphrase_frame)
        pgrid.setContentsMargins(16, 12, 16, 12)
        pgrid.setSpacing(8)
        pgrid.addWidget(_section("Words"), 0, 0)
        self.num_words = QSpinBox()
        self.num_words.setRange(MIN_WORDS, MAX_WORDS)
        self.num_words.setValue(4)
        pgrid.addWidget(self.num_words, 0, 1)
        pgrid.addWidget(_section("Separator"), 1, 0)
        self.separator = QLineEdit("-")
        self.separator.setMaxLength(3)
        pgrid.addWidget(self.separator, 1, 1)
        pgrid.addWidget(_section("Personal hint"), 2, 0)
        self.personal = QLineEdit()
        self.personal.setPlaceholderText("optional, may replace a word")
        pgrid.addWidget(self.personal, 2, 1)
        self.cap_check = QCheckBox("Random capitals")
        self.leet_check = QCheckBox("Leet substitution")
        self.extras_check = QCheckBox("Insert digits && symbols")
        pgrid.addWidget(self.cap_check, 3, 0)
        pgrid.addWidget(self.leet_check, 3, 1)
        pgrid.addWidget(self.extras_check, 4, 0)
        main_layout.addWidget(self.passphrase_frame)

        # Character options
        self.character_frame = QFrame()
        self.character_frame.setStyleSheet(CARD)
        cgrid = QGridLayout(self.character_frame)
        cgrid.setContentsMargins(16, 12, 16, 12)
        cgrid.setSpacing(8)
        cgrid.addWidget(_section("Length"), 0, 0)
        self.length = QSpinBox()
        self.length.setRange(1, 128)
        self.length.setValue(16)
        cgrid.addWidget(self.length, 0, 1)
        self.lower_check = QCheckBox("a-z")
        self.upper_check = QCheckBox("A-Z")
        self.digits_check = QCheckBox("0-9")
        self.symbols_check = QCheckBox("Symbols")
        for i, check in enumerate((self.lower_check, self.upper_check,
                                   self.digits_check, self.symbols_check)):
            check.setChecked(True)
            cgrid.addWidget(check, 1 + i // 2, i % 2)
        main_layout.addWidget(self.character_frame)

        # Guess rate
        rate_row = QHBoxLayout()
        rate_row.addWidget(_section("Guesses / second"))
        self.guess_rate = QLineEdit("1e10")
        self.guess_rate.setFixedWidth(140)
        rate_row.addWidget(self.guess_rate)
        rate_row.addStretch()
        main_layout.addLayout(rate_row)

        # Pre-generation estimate
        self.pre_bits = QLabel("")
        self.pre_bits.setStyleSheet(INFO_LABEL)
        self.pre_crack = QLabel("")
        self.pre_crack.setStyleSheet(MUTED_LABEL)
        self.pre_crack.setWordWrap(True)
        main_layout.addWidget(self.pre_bits)
        main_layout.addWidget(self.pre_crack)

        # Generate / regenerate
        gen_row = QHBoxLayout()
        self.generate_btn = QPushButton("Generate")
        self.generate_btn.setFixedHeight(34)
        self.generate_btn.setCursor(Qt.PointingHandCursor)
        self.generate_btn.setStyleSheet(GENERATE_BTN)
        self.generate_btn.clicked.connect(self._generate)
        gen_row.addWidget(self.generate_btn, 1)
        self.regen_btn = QPushButton("Regenerate")
        self.regen_btn.setFixedHeight(34)
        self.regen_btn.setCursor(Qt.PointingHandCursor)
        self.regen_btn.setStyleSheet(SMALL_BTN)
        self.regen_btn.setEnabled(False)
        self.regen_btn.clicked.connect(self._regenerate)
        gen_row.addWidget(self.regen_btn)
        main_layout.addLayout(gen_row)

        # Output
        out_row = QHBoxLayout()
        self.output = QLineEdit()
        self.output.setReadOnly(True)
        self.output.setStyleSheet(
            "QLineEdit { background: #ffffff; border: 1px solid #d8d8e0; border-radius: 8px;"
            " padding: 8px; font-family: monospace; font-size: 15px; color: #1a1a2a; }"
        )
        out_row.addWidget(self.output, 1)
        self.copy_btn = QPushButton("Copy")
        self.show_btn = QPushButton("Hide")
        for btn, slot in ((self.copy_btn, self._copy), (self.show_btn, self._toggle_shown)):
            btn.setCursor(Qt.PointingHandCursor)
            btn.setStyleSheet(SMALL_BTN)
            btn.setEnabled(False)
            btn.clicked.connect(slot)
            out_row.addWidget(btn)
        main_layout.addLayout(out_row)

        self.post_bits = QLabel("")
        self.post_bits.setStyleSheet(INFO_LABEL)
        self.post_crack = QLabel("")
        self.post_crack.setStyleSheet(MUTED_LABEL)
        self.post_crack.setWordWrap(True)
        main_layout.addWidget(self.post_bits)
        main_layout.addWidget(self.post_crack)

        # History (never holds the secrets themselves)
        main_layout.addWidget(_section("History"))
        self.history = QListWidget()
        self.history.setFixedHeight(120)
        main_layout.addWidget(self.history)

        verify_btn = QPushButton("Verify sampler")
        verify_btn.setCursor(Qt.PointingHandCursor)
        verify_btn.setStyleSheet(SMALL_BTN)
        verify_btn.clicked.connect(self._open_sampler_dialog)
        main_layout.addWidget(verify_btn, 0, Qt.AlignRight)
        main_layout.addStretch()

        # Any option change refreshes the live estimate
        for spin in (self.num_words, self.length):
            spin.valueChanged.connect(self._schedule_estimate)
        for edit in (self.separator, self.personal, self.guess_rate):
            edit.textChanged.connect(self._schedule_estimate)
        for check in (self.cap_check, self.leet_check, self.extras_check, self.lower_check,
                      self.upper_check, self.digits_check, self.symbols_check):
            check.toggled.connect(self._schedule_estimate)

        self._set_mode("passphrase")

    # ── options ───────────────────────────────────────────
    def _options(self):
        return parse_options({
            "mode": self.mode,
            "length": self.length.value(),
            "lower": self.lower_check.isChecked(),
            "upper": self.upper_check.isChecked(),
            "digits": self.digits_check.isChecked(),
            "symbols": self.symbols_check.isChecked(),
            "num_words": self.num_words.value(),
            "separator": self.separator.text(),
            "personal": self.personal.text(),
            "capitalize": self.cap_check.isChecked(),
            "leet": self.leet_check.isChecked(),
            "insert_extras": self.extras_check.isChecked(),
            "guesses_per_second": self.guess_rate.text(),
        })

    def _set_mode(self, mode):
        self.mode = mode
        self.btn_passphrase.setStyleSheet(TOGGLE_ACTIVE if mode == "passphrase" else TOGGLE_INACTIVE)
        self.btn_character.setStyleSheet(TOGGLE_ACTIVE if mode == "character" else TOGGLE_INACTIVE)
        self.passphrase_frame.setVisible(mode == "passphrase")
        self.character_frame.setVisible(mode == "character")
        self._update_estimate()

    def _apply_preset(self, name):
        value = PRESETS[name][self.mode]
        if self.mode == "passphrase":
            self.num_words.setValue(value)
        else:
            self.length.setValue(value)

    # ── estimate ──────────────────────────────────────────
    def _schedule_estimate(self, *_):
        self._estimate_timer.start()

    def _update_estimate(self):
        opts = self._options()
        bits = estimate_bits(opts, len(self._wordlist))
        crack = format_crack_time(bits, opts.guesses_per_second)
        if opts.mode == "character":
            pool = char_pool_size(opts.lower, opts.upper, opts.digits, opts.symbols)
            self.pre_bits.setText(f"Bits of entropy: {bits:.2f} (pool: {pool})")
        else:
            self.pre_bits.setText(
                f"Bits of entropy (estimate): {bits:.2f} "
                f"(words: {opts.num_words} × {len(self._wordlist)})"
            )
        self.pre_crack.setText(
            f"Estimated time to crack at {opts.guesses_per_second:,.0f} guesses/sec: {crack.label}"
        )

    # ── generate ──────────────────────────────────────────
    def _generate(self):
        self._show_result(generate(self._options(), wordlist=self._wordlist))

    def _regenerate(self):
        if self._last is not None:
            self._show_result(regenerate(self._last, wordlist=self._wordlist))

    def _show_result(self, secret):
        opts = secret.options
        if not secret.text:
            self.output.clear()
            self.post_bits.setText("Select at least one character set.")
            self.post_bits.setStyleSheet(WARN_LABEL)
            self.post_crack.setText("")
            return

        self._last = secret
        self.output.setText(secret.text)
        self._set_shown(True)
        for btn in (self.copy_btn, self.show_btn, self.regen_btn):
            btn.setEnabled(True)

        crack = format_crack_time(secret.bits, opts.guesses_per_second)
        self.post_bits.setStyleSheet(INFO_LABEL)
        self.post_bits.setText(f"Bits of entropy: {secret.bits:.2f}")
        self.post_crack.setText(
            f"Estimated time to crack at {opts.guesses_per_second:,.0f} guesses/sec: {crack.label}"
        )

        stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        self.history.insertItem(0, f"{stamp}: generated ({secret.mode}), {secret.bits:.1f} bits")
        while self.history.count() > HISTORY_SIZE:
            self.history.takeItem(self.history.count() - 1)

    # ── copy / show ───────────────────────────────────────
    def _flash_copied(self, btn):
        """Temporarily show 'Copied!' feedback on a button."""
        orig_text = btn.text()
        orig_style = btn.styleSheet()
        btn.setText("Copied!")
        btn.setStyleSheet(
            "QPushButton { background: #d0f0d8; color: #2a9a5a; border: none;"
            " border-radius: 10px; font-size: 11px; font-weight: 600; padding: 4px 10px; }"
        )
        QTimer.singleShot(1200, lambda: (btn.setText(orig_text), btn.setStyleSheet(orig_style)))

    def _copy(self):
        if self.output.text():
            QApplication.clipboard().setText(self.output.text())
            self._flash_copied(self.copy_btn)

    def _set_shown(self, shown):
        self._shown = shown
        self.output.setEchoMode(QLineEdit.Normal if shown else QLineEdit.Password)
        self.show_btn.setText("Hide" if shown else "Show")

    def _toggle_shown(self):
        self._set_shown(not self._shown)

    def _open_sampler_dialog(self):
        if hasattr(self, '_sampler_dialog') and self._sampler_dialog and self._sampler_dialog.isVisible():
            self._sampler_dialog.raise_()
            self._sampler_dialog.activateWindow()
            return
        self._sampler_dialog = SamplerDialog()
        self._sampler_dialog.show()


SAMPLER_RANGES = (3, 7, 251)


class SamplerDialog(QMainWindow):
    """Window that runs the chi-squared sampler check with a progress bar."""
    _result_ready = Signal(object)

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Sampler Verification")
        self.setFixedSize(420, 300)
        self.setStyleSheet("QMainWindow { background: #f5f5f7; }")

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(8)

        title = QLabel("Sampler Verification")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(
            "color: #1a1a2a; font-size: 18px; font-weight: 700;"
            " letter-spacing: 0.5px; background: none; border: none;"
        )
        layout.addWidget(title)

        self.progress = QProgressBar()
        self.progress.setFixedHeight(6)
        self.progress.setRange(0, 0)  # indeterminate
        self.progress.setTextVisible(False)
        self.progress.setStyleSheet(
            "QProgressBar { background: #e8e8f0; border: none; border-radius: 3px; }"
            "QProgressBar::chunk { background: #2a9a5a; border-radius: 3px; }"
        )
        layout.addWidget(self.progress)

        self._rows = {}
        for n in SAMPLER_RANGES:
            row = QLabel(f"uniform_index({n}) ...")
            row.setStyleSheet(MUTED_LABEL)
            layout.addWidget(row)
            self._rows[n] = row

        self.overall_label = QLabel("")
        self.overall_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.overall_label)
        layout.addStretch()

        self.close_btn = QPushButton("Continue")
        self.close_btn.setFixedHeight(32)
        self.close_btn.setStyleSheet(GENERATE_BTN)
        self.close_btn.clicked.connect(self.close)
        self.close_btn.hide()
        layout.addWidget(self.close_btn)

        self._result_ready.connect(self._on_result)
        QTimer.singleShot(100, self._start_test)

    def _start_test(self):
        def _run():
            results = [verify_sampler(n) for n in SAMPLER_RANGES]
            self._result_ready.emit(results)
        threading.Thread(target=_run, daemon=True).start()

    def _on_result(self, results):
        self.progress.setRange(0, 100)
        self.progress.setValue(100)

        all_pass = True
        for result in results:
            passed = result["pass"]
            all_pass = all_pass and passed
            row = self._rows[result["n"]]
            mark = "✔" if passed else "✘"
            row.setText(f"{mark}  uniform_index({result['n']}): {result['detail']}")
            row.setStyleSheet(INFO_LABEL if passed else WARN_LABEL)

        if all_pass:
            self.overall_label.setText("✔  Sampler is uniform")
            self.overall_label.setStyleSheet(
                "color: #2a9a5a; font-size: 14px; font-weight: 700; background: none; border: none;"
            )
        else:
            self.overall_label.setText("✘  Bias detected!")
            self.overall_label.setStyleSheet(
                "color: #d04040; font-size: 14px; font-weight: 700; background: none; border: none;"
            )
        self.close_btn.show()


if __name__ == "__main__":
    app = QApplication(sys.argv)
    window = GeneratorWindow()
    window.show()
    sys.exit(app.exec())
