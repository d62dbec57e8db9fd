from __future__ import annotations
from PySide6 import QtCore, QtGui, QtWidgets
import logging

from ..core.models import LineItem, ReceiptPayload
from ..printing.profiles import DispatchProfile, load_profiles, save_profiles
from ..printing.worker import DispatchWorker
from .dialogs import show_dispatch_config_dialog

log = logging.getLogger(__name__)

# -------------------------
# App constants / QSettings
# -------------------------
ORG_NAME = "ReceiptDispatch"
APP_NAME = "ReceiptDispatch"
APP_VERSION = "0.3.0"

COL_NAME, COL_QTY, COL_PRICE, COL_TOTAL = range(4)
CLOSE_WAIT_MS = 3000


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, settings: QtCore.QSettings | None = None):
        super().__init__()

        self.setWindowTitle(f"Receipt Dispatch — {APP_VERSION}")
        self.resize(720, 640)
        self.settings = settings if settings is not None else QtCore.QSettings(ORG_NAME, APP_NAME)

        self.profiles: list[DispatchProfile] = load_profiles(self.settings)
        self.current_profile_index: int = 0
        self._workers: set[DispatchWorker] = set()

        self._build_form()
        self._build_toolbar()
        self._refresh_profile_combo()
        self._recalculate()
        self.statusBar().showMessage("Ready.")

    # -------------------------
    # building
    # -------------------------
    def _build_form(self) -> None:
        central = QtWidgets.QWidget(self)
        layout = QtWidgets.QVBoxLayout(central)

        header = QtWidgets.QFormLayout()
        self.title_edit = QtWidgets.QLineEdit("Receipt")
        self.address_edit = QtWidgets.QLineEdit()
        self.phone_edit = QtWidgets.QLineEdit()
        self.footer_edit = QtWidgets.QLineEdit()
        self.footer_edit.setPlaceholderText("Thank you for your purchase!")
        header.addRow("Business name:", self.title_edit)
        header.addRow("Address:", self.address_edit)
        header.addRow("Phone:", self.phone_edit)
        header.addRow("Footer:", self.footer_edit)
        layout.addLayout(header)

        self.items_table = QtWidgets.QTableWidget(0, 4)
        self.items_table.setHorizontalHeaderLabels(["Item", "Qty", "Price", "Total"])
        self.items_table.horizontalHeader().setSectionResizeMode(
            COL_NAME, QtWidgets.QHeaderView.Stretch
        )
        self.items_table.itemChanged.connect(self._recalculate)
        layout.addWidget(self.items_table)

        row_btns = QtWidgets.QHBoxLayout()
        add_btn = QtWidgets.QPushButton("Add item")
        add_btn.clicked.connect(lambda: self.add_item_row())
        del_btn = QtWidgets.QPushButton("Remove item")
        del_btn.clicked.connect(self.remove_selected_rows)
        row_btns.addWidget(add_btn)
        row_btns.addWidget(del_btn)
        row_btns.addStretch(1)
        layout.addLayout(row_btns)

        totals = QtWidgets.QFormLayout()
        self.tax_rate_sb = QtWidgets.QDoubleSpinBox()
        self.tax_rate_sb.setRange(0.0, 100.0)
        self.tax_rate_sb.setDecimals(2)
        self.tax_rate_sb.setSuffix(" %")
        self.tax_rate_sb.valueChanged.connect(self._recalculate)
        self.subtotal_lbl = QtWidgets.QLabel()
        self.tax_lbl = QtWidgets.QLabel()
        self.total_lbl = QtWidgets.QLabel()
        totals.addRow("Tax rate:", self.tax_rate_sb)
        totals.addRow("Subtotal:", self.subtotal_lbl)
        totals.addRow("Tax:", self.tax_lbl)
        totals.addRow("Total:", self.total_lbl)
        layout.addLayout(totals)

        self.setCentralWidget(central)

    def _build_toolbar(self) -> None:
        tb = self.addToolBar("Dispatch")
        tb.setObjectName("DispatchToolbar")

        self.profile_combo = QtWidgets.QComboBox()
        self.profile_combo.currentIndexChanged.connect(self._on_profile_changed)
        tb.addWidget(QtWidgets.QLabel(" Profile: "))
        tb.addWidget(self.profile_combo)
        tb.addSeparator()

        self.act_print = QtGui.QAction("Print", self)
        self.act_print.setShortcut(QtGui.QKeySequence.Print)
        self.act_print.triggered.connect(self.print_now)
        tb.addAction(self.act_print)

        self.act_copy = QtGui.QAction("Copy JSON", self)
        self.act_copy.triggered.connect(self.copy_json)
        tb.addAction(self.act_copy)

        self.act_settings = QtGui.QAction("Dispatch Settings…", self)
        self.act_settings.triggered.connect(self.edit_dispatch_settings)
        tb.addAction(self.act_settings)

    # -------------------------
    # items
    # -------------------------
    def add_item_row(self, name: str = "", quantity: int = 1, price: float = 0.0) -> None:
        t = self.items_table
        t.blockSignals(True)
        row = t.rowCount()
        t.insertRow(row)
        t.setItem(row, COL_NAME, QtWidgets.QTableWidgetItem(name))
        t.setItem(row, COL_QTY, QtWidgets.QTableWidgetItem(str(quantity)))
        t.setItem(row, COL_PRICE, QtWidgets.QTableWidgetItem(f"{price:.2f}"))
        total_item = QtWidgets.QTableWidgetItem()
        total_item.setFlags(total_item.flags() & ~QtCore.Qt.ItemIsEditable)
        t.setItem(row, COL_TOTAL, total_item)
        t.blockSignals(False)
        self._recalculate()

    def remove_selected_rows(self) -> None:
        rows = sorted({i.row() for i in self.items_table.selectedIndexes()}, reverse=True)
        for r in rows:
            self.items_table.removeRow(r)
        self._recalculate()

    def _cell_text(self, row: int, col: int) -> str:
        item = self.items_table.item(row, col)
        return item.text().strip() if item is not None else ""

    def line_items(self) -> list[LineItem]:
        items: list[LineItem] = []
        for row in range(self.items_table.rowCount()):
            name = self._cell_text(row, COL_NAME)
            if not name:
                continue
            try:
                qty = int(self._cell_text(row, COL_QTY) or 0)
            except ValueError:
                qty = 0
            try:
                price = float(self._cell_text(row, COL_PRICE) or 0.0)
            except ValueError:
                price = 0.0
            items.append(LineItem.create(name, max(qty, 0), price))
        return items

    def build_payload(self) -> ReceiptPayload:
        return ReceiptPayload.build(
            self.line_items(),
            self.tax_rate_sb.value(),
            title=self.title_edit.text().strip(),
            address=self.address_edit.text().strip(),
            phone=self.phone_edit.text().strip(),
            footer=self.footer_edit.text().strip(),
        )

    def _recalculate(self, *_args) -> None:
        t = self.items_table
        t.blockSignals(True)
        try:
            for row in range(t.rowCount()):
                try:
                    total = int(self._cell_text(row, COL_QTY) or 0) * float(
                        self._cell_text(row, COL_PRICE) or 0.0
                    )
                    text = f"{total:.2f}"
                except ValueError:
                    text = "—"
                item = t.item(row, COL_TOTAL)
                if item is not None:
                    item.setText(text)
        finally:
            t.blockSignals(False)

        payload = self.build_payload()
        self.subtotal_lbl.setText(f"{payload.subtotal:.2f}")
        self.tax_lbl.setText(f"{payload.tax:.2f}")
        self.total_lbl.setText(f"{payload.total:.2f}")

    # -------------------------
    # profiles
    # -------------------------
    @property
    def dispatch_cfg(self) -> dict:
        return dict(self.profiles[self.current_profile_index].config)

    def _refresh_profile_combo(self) -> None:
        self.profile_combo.blockSignals(True)
        self.profile_combo.clear()
        for p in self.profiles:
            self.profile_combo.addItem(p.name)
        self.profile_combo.setCurrentIndex(self.current_profile_index)
        self.profile_combo.blockSignals(False)

    def _on_profile_changed(self, index: int) -> None:
        if 0 <= index < len(self.profiles):
            self.current_profile_index = index
            self.statusBar().showMessage(f"Using profile: {self.profiles[index].name}", 3000)

    def edit_dispatch_settings(self) -> None:
        cfg = show_dispatch_config_dialog(self.dispatch_cfg, self)
        if cfg is None:
            return
        self.profiles[self.current_profile_index].config = cfg
        save_profiles(self.profiles, self.settings)
        self.statusBar().showMessage("Dispatch settings saved.", 3000)

    # -------------------------
    # actions
    # -------------------------
    def copy_json(self) -> None:
        QtWidgets.QApplication.clipboard().setText(self.build_payload().to_json())
        self.statusBar().showMessage("Receipt data copied to clipboard", 3000)

    def print_now(self) -> DispatchWorker:
        """
        Serialize the receipt and hand it to a dispatch worker thread.
        """
        receipt_text = self.build_payload().to_json()
        worker = DispatchWorker(receipt_text, self.dispatch_cfg)
        self.act_print.setEnabled(False)
        self.statusBar().showMessage("Sending print command…")

        def _on_success(output: str):
            if output.strip():
                log.info("print command output: %s", output.strip())
            self.statusBar().showMessage("Command sent successfully!", 5000)

        def _on_error(err: str):
            self.statusBar().showMessage(f"Error sending print command: {err}", 8000)
            QtWidgets.QMessageBox.warning(self, "Print command failed", err)

        def _on_finished():
            self.act_print.setEnabled(True)
            self._workers.discard(worker)

        worker.signals.succeeded.connect(_on_success)
        worker.signals.error.connect(_on_error)
        worker.signals.finished.connect(_on_finished)
        worker.finished.connect(worker.deleteLater)
        self._workers.add(worker)
        worker.start()
        return worker

    def closeEvent(self, e: QtGui.QCloseEvent):
        # dispatch has no cancellation; running workers stay referenced in
        # self._workers until their finished signal
        for w in list(self._workers):
            if not w.wait(CLOSE_WAIT_MS):
                log.warning("print command still running at close; leaving it to finish")
        super().closeEvent(e)


__all__ = ["MainWindow"]
