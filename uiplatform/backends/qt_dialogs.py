"""Message box and file chooser on top of QDialog / QFileDialog."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from PyQt6 import QtCore, QtWidgets

from uiplatform import log
from uiplatform.base import FileDialog, MessageDialog, MessageType, Response, Window, prepare_title
from uiplatform.errors import ContractViolation

_STANDARD_ICONS = {
    MessageType.INFORMATION: QtWidgets.QStyle.StandardPixmap.SP_MessageBoxInformation,
    MessageType.QUESTION: QtWidgets.QStyle.StandardPixmap.SP_MessageBoxQuestion,
    MessageType.WARNING: QtWidgets.QStyle.StandardPixmap.SP_MessageBoxWarning,
    MessageType.ERROR: QtWidgets.QStyle.StandardPixmap.SP_MessageBoxCritical,
}

_ICON_SIZE = 48


def _dialog_title(title: str) -> str:
    return prepare_title(title, QtCore.QCoreApplication.applicationName())


def _parent_widget(parent: Optional[Window]) -> Optional[QtWidgets.QWidget]:
    if parent is None:
        return None
    return parent.native_widget


class QtMessageDialog(MessageDialog):
    """
    Диалог сообщения.

    Построен на QDialog, а не на QMessageBox: закрытие окна или Escape
    должны давать Response.NONE, а не «кнопку отмены».
    """

    def __init__(self, parent: Optional[Window] = None):
        self._dialog = QtWidgets.QDialog(_parent_widget(parent))
        self.set_title("Message")
        self._dialog.setModal(True)

        self._icon = QtWidgets.QLabel(self._dialog)
        self._message = QtWidgets.QLabel(self._dialog)
        self._message.setWordWrap(True)
        font = self._message.font()
        font.setBold(True)
        self._message.setFont(font)

        self._description = QtWidgets.QLabel(self._dialog)
        self._description.setWordWrap(True)
        self._description.hide()

        self._buttons = QtWidgets.QDialogButtonBox(self._dialog)
        self._buttons.clicked.connect(self._on_clicked)

        text_column = QtWidgets.QVBoxLayout()
        text_column.addWidget(self._message)
        text_column.addWidget(self._description)
        text_column.addStretch(1)

        body = QtWidgets.QHBoxLayout()
        body.addWidget(self._icon, 0, QtCore.Qt.AlignmentFlag.AlignTop)
        body.addLayout(text_column, 1)

        layout = QtWidgets.QVBoxLayout(self._dialog)
        layout.addLayout(body)
        layout.addWidget(self._buttons)

        self._responses: Dict[QtWidgets.QAbstractButton, Response] = {}
        self._result = Response.NONE

        self.set_type(MessageType.INFORMATION)

    @property
    def dialog(self) -> QtWidgets.QDialog:
        return self._dialog

    def set_type(self, type: MessageType) -> None:
        icon = self._dialog.style().standardIcon(_STANDARD_ICONS[MessageType(type)])
        self._icon.setPixmap(icon.pixmap(_ICON_SIZE, _ICON_SIZE))

    def set_title(self, title: str) -> None:
        self._dialog.setWindowTitle(_dialog_title(title))

    def set_message(self, message: str) -> None:
        self._message.setText(message)

    def set_description(self, description: str) -> None:
        self._description.setText(description)
        self._description.setVisible(bool(description))

    def _add_button(self, label: str, response: Response, is_default: bool) -> None:
        button = self._buttons.addButton(label, QtWidgets.QDialogButtonBox.ButtonRole.ActionRole)
        self._responses[button] = response
        if is_default:
            button.setDefault(True)
            button.setFocus()

    def _on_clicked(self, button: QtWidgets.QAbstractButton) -> None:
        response = self._responses.get(button)
        if response is None:
            raise ContractViolation("Unexpected button clicked in message dialog")
        self._result = response
        self._dialog.accept()

    def _run(self) -> Response:
        self._result = Response.NONE
        self._dialog.exec()
        log.debug(f"[Dialogs] message dialog closed with {self._result.name}")
        return self._result


class QtFileDialog(FileDialog):
    """
    Выбор файла для открытия или сохранения.

    Используется не-нативный QFileDialog: только у него есть доступ к полю
    имени файла, которое нужно переписывать при смене фильтра.
    """

    def __init__(self, parent: Optional[Window] = None, is_save: bool = False):
        super().__init__()
        self._is_save = is_save
        self._name_filters: List[str] = []
        self._current_name = ""

        self._dialog = QtWidgets.QFileDialog(_parent_widget(parent))
        self._dialog.setOption(QtWidgets.QFileDialog.Option.DontUseNativeDialog, True)
        if is_save:
            self._dialog.setAcceptMode(QtWidgets.QFileDialog.AcceptMode.AcceptSave)
            self._dialog.setFileMode(QtWidgets.QFileDialog.FileMode.AnyFile)
            self.set_title("Save File")
        else:
            self._dialog.setAcceptMode(QtWidgets.QFileDialog.AcceptMode.AcceptOpen)
            self._dialog.setFileMode(QtWidgets.QFileDialog.FileMode.ExistingFile)
            self.set_title("Open File")

        self._dialog.filterSelected.connect(self._on_filter_selected)

    @property
    def dialog(self) -> QtWidgets.QFileDialog:
        return self._dialog

    def _on_filter_selected(self, _name_filter: str) -> None:
        self._filter_changed()

    def is_save_dialog(self) -> bool:
        return self._is_save

    def set_title(self, title: str) -> None:
        self._dialog.setWindowTitle(_dialog_title(title))

    def _name_edit(self) -> Optional[QtWidgets.QLineEdit]:
        return self._dialog.findChild(QtWidgets.QLineEdit, "fileNameEdit")

    def set_current_name(self, name: str) -> None:
        self._current_name = name
        edit = self._name_edit()
        if edit is not None:
            edit.setText(name)
        else:
            self._dialog.selectFile(name)

    def get_current_name(self) -> str:
        edit = self._name_edit()
        if edit is not None:
            return edit.text()
        return self._current_name

    def get_filename(self) -> Path:
        selected = self._dialog.selectedFiles()
        if not selected:
            return Path()
        return Path(selected[0])

    def set_filename(self, path: Path) -> None:
        path = Path(path)
        self._current_name = path.name
        self._dialog.selectFile(str(path))

    def get_current_folder(self) -> str:
        return self._dialog.directory().absolutePath()

    def set_current_folder(self, folder: str) -> None:
        self._dialog.setDirectory(folder)

    def _add_native_filter(self, description: str) -> None:
        self._name_filters.append(description)
        self._dialog.setNameFilters(self._name_filters)

    def _current_filter_index(self) -> int:
        try:
            return self._name_filters.index(self._dialog.selectedNameFilter())
        except ValueError:
            return -1

    def _select_filter(self, index: int) -> None:
        if 0 <= index < len(self._name_filters):
            self._dialog.selectNameFilter(self._name_filters[index])
            # selectNameFilter() does not emit filterSelected.
            self._filter_changed()

    def _untitled(self) -> str:
        return QtCore.QCoreApplication.translate("FileDialog", "untitled")

    def _run(self) -> bool:
        accepted = self._dialog.exec() == QtWidgets.QDialog.DialogCode.Accepted.value
        log.debug(f"[Dialogs] file dialog {'accepted' if accepted else 'cancelled'}")
        return accepted
