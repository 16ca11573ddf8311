from __future__ import annotations
from typing import Optional, Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication, QDialog, QVBoxLayout, QLabel, QListWidget, QListWidgetItem,
    QPushButton, QMessageBox, QHBoxLayout
)

from root_boot.platforms.common import current_platform
from root_boot.models import BootDevice


class DevicePickerDialog(QDialog):
    def __init__(self, devices: Sequence[BootDevice]):
        super().__init__()
        self.setWindowTitle('Select a device to restart and boot into')
        self.resize(560, 360)
        self.devices = list(devices)
        self.selected: Optional[BootDevice] = None

        self._build_ui()
        self._populate()

    def _build_ui(self):
        layout = QVBoxLayout(self)
        layout.addWidget(QLabel(f'Platform: {current_platform()}'))

        self.list = QListWidget()
        layout.addWidget(self.list, 1)

        btn_row = QHBoxLayout()
        self.btn_reboot = QPushButton('Reboot into selected')
        self.btn_exit = QPushButton('Exit')
        btn_row.addWidget(self.btn_reboot)
        btn_row.addWidget(self.btn_exit)
        layout.addLayout(btn_row)

        self.btn_reboot.clicked.connect(self.apply_selection)
        self.btn_exit.clicked.connect(self.reject)
        self.list.itemDoubleClicked.connect(lambda _item: self.apply_selection())

    def _populate(self):
        for i, d in enumerate(self.devices, start=1):
            item = QListWidgetItem(f"{i}) {d}")
            item.setData(Qt.UserRole, i - 1)
            self.list.addItem(item)
        if self.devices:
            self.list.setCurrentRow(0)

    def apply_selection(self):
        item = self.list.currentItem()
        if not item:
            QMessageBox.information(self, 'Notice', 'Please select a device')
            return
        device = self.devices[item.data(Qt.UserRole)]
        ret = QMessageBox.question(
            self, 'Confirm reboot',
            f'Reboot into {device}? Save your work first.',
        )
        if ret != QMessageBox.Yes:
            return
        self.selected = device
        self.accept()


def select_device_gui(devices: Sequence[BootDevice]) -> Optional[BootDevice]:
    app = QApplication.instance() or QApplication([])
    dialog = DevicePickerDialog(devices)
    dialog.exec()
    app.processEvents()
    return dialog.selected
