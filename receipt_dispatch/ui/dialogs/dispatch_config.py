# receipt_dispatch/ui/dialogs/dispatch_config.py
"""Dialog for editing a dispatch profile's configuration."""
from __future__ import annotations

from PySide6 import QtWidgets

from ...printing.profiles import DEFAULT_CONFIG
from ...printing.strategies import shell_args_from


def shell_args_text(cfg: dict) -> str:
    """Shell arguments as the single line shown in the dialog."""
    return " ".join(shell_args_from(cfg))


def show_dispatch_config_dialog(
    dispatch_cfg: dict,
    parent: QtWidgets.QWidget | None = None,
) -> dict | None:
    """
    Show a modal dialog to edit dispatch settings.

    *dispatch_cfg* is read for current values but is **not** mutated.
    Returns a new dict of updated settings if accepted, or *None* if cancelled.
    """
    cfg = dict(DEFAULT_CONFIG)
    cfg.update(dispatch_cfg or {})

    d = QtWidgets.QDialog(parent)
    d.setWindowTitle("Dispatch Settings")
    form = QtWidgets.QFormLayout(d)

    strategy = QtWidgets.QComboBox()
    strategy_map = {
        "shell": "Shell command (login shell)",
        "script": "External script",
        "dry_run": "Dry run (nothing is sent)",
    }
    strategy_rev = {v: k for k, v in strategy_map.items()}
    strategy.addItems(strategy_map.values())
    strategy.setCurrentText(strategy_map.get(cfg.get("strategy", "shell"), strategy_map["shell"]))

    shell = QtWidgets.QLineEdit(cfg.get("shell", ""))
    shell_args = QtWidgets.QLineEdit(shell_args_text(cfg))
    template = QtWidgets.QLineEdit(cfg.get("command_template", ""))
    template.setToolTip("{receipt} is replaced by the single-quote-escaped receipt JSON.")

    interpreter = QtWidgets.QLineEdit(cfg.get("interpreter", ""))
    script_path = QtWidgets.QLineEdit(cfg.get("script_path", ""))
    action = QtWidgets.QLineEdit(cfg.get("action", ""))
    base_dir = QtWidgets.QLineEdit(cfg.get("base_dir", ""))
    base_dir.setPlaceholderText("Working directory (blank = current)")

    timeout_sb = QtWidgets.QDoubleSpinBox()
    timeout_sb.setRange(0.0, 600.0)
    timeout_sb.setDecimals(1)
    timeout_sb.setSingleStep(5.0)
    timeout_sb.setValue(float(cfg.get("timeout") or 0.0))
    timeout_sb.setToolTip("0 waits until the program exits.")

    encoding = QtWidgets.QLineEdit(cfg.get("encoding", "utf-8"))

    form.addRow("Strategy:", strategy)
    form.addRow("Shell:", shell)
    form.addRow("Shell arguments:", shell_args)
    form.addRow("Command template:", template)
    form.addRow("Interpreter:", interpreter)
    form.addRow("Script path:", script_path)
    form.addRow("Action:", action)
    form.addRow("Base directory:", base_dir)
    form.addRow("Timeout (seconds):", timeout_sb)
    form.addRow("Output encoding:", encoding)

    btns = QtWidgets.QDialogButtonBox(
        QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel
    )
    form.addRow(btns)

    result: dict | None = None

    def _apply():
        nonlocal result
        result = {
            "strategy": strategy_rev.get(strategy.currentText(), "shell"),
            "shell": shell.text().strip() or DEFAULT_CONFIG["shell"],
            "shell_args": shell_args.text().split(),
            "command_template": template.text() or DEFAULT_CONFIG["command_template"],
            "interpreter": interpreter.text().strip() or DEFAULT_CONFIG["interpreter"],
            "script_path": script_path.text().strip() or DEFAULT_CONFIG["script_path"],
            "action": action.text().strip(),
            "base_dir": base_dir.text().strip(),
            "timeout": float(timeout_sb.value()),
            "encoding": encoding.text().strip() or "utf-8",
        }
        d.accept()

    btns.accepted.connect(_apply)
    btns.rejected.connect(d.reject)
    d.exec()

    return result
