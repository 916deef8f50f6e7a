"""
PyQt6 dialogs for askpass requests.
"""

from __future__ import annotations
import sys
from typing import Optional

from PyQt6.QtWidgets import (
    QApplication, QDialog, QVBoxLayout, QLabel, QLineEdit,
    QCheckBox, QDialogButtonBox, QMessageBox, QWidget
)
from PyQt6.QtCore import Qt

from .base import AskpassResponse, Interaction


class PasswordDialog(QDialog):
    """
    Masked entry dialog with an optional "remember" checkbox.

    The checkbox is only shown when there is somewhere to remember to.
    """

    def __init__(
            self,
            prompt: str,
            allow_remember: bool = False,
            title: str = "QSshAskpass",
            parent: QWidget = None
    ):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setMinimumWidth(400)
        self.setModal(True)

        layout = QVBoxLayout(self)

        self._prompt_label = QLabel(prompt)
        self._prompt_label.setWordWrap(True)
        self._prompt_label.setTextFormat(Qt.TextFormat.PlainText)
        layout.addWidget(self._prompt_label)

        self._password_input = QLineEdit()
        self._password_input.setEchoMode(QLineEdit.EchoMode.Password)
        layout.addWidget(self._password_input)

        self._keep_check = QCheckBox("Remember password")
        self._keep_check.setVisible(allow_remember)
        self._keep_check.setEnabled(allow_remember)
        layout.addWidget(self._keep_check)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok |
            QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self._password_input.setFocus()

    def prompt(self) -> str:
        return self._prompt_label.text()

    def password(self) -> str:
        """Entered value."""
        return self._password_input.text()

    def keep_password(self) -> bool:
        """Was "remember" offered and ticked?"""
        return self._keep_check.isEnabled() and self._keep_check.isChecked()


class QtInteraction(Interaction):
    """
    Shows PasswordDialog / a question box, creating the QApplication
    on first use.
    """

    def __init__(self, title: str = "QSshAskpass"):
        self.title = title
        self._app: Optional[QApplication] = None

    def _ensure_app(self) -> QApplication:
        app = QApplication.instance()
        if app is None:
            app = QApplication(sys.argv[:1])
        self._app = app
        return app

    def present_secret_prompt(self, text: str, allow_remember: bool) -> AskpassResponse:
        self._ensure_app()
        dialog = PasswordDialog(text, allow_remember=allow_remember, title=self.title)

        if not dialog.exec():
            return AskpassResponse(success=False)

        return AskpassResponse(
            success=True,
            value=dialog.password(),
            remember=dialog.keep_password(),
        )

    def present_confirmation(self, text: str) -> bool:
        self._ensure_app()
        box = QMessageBox(QMessageBox.Icon.Question, self.title, text)
        box.setTextFormat(Qt.TextFormat.PlainText)
        box.addButton("Accept", QMessageBox.ButtonRole.AcceptRole)
        cancel_btn = box.addButton(QMessageBox.StandardButton.Cancel)
        box.setDefaultButton(cancel_btn)
        box.exec()

        clicked = box.clickedButton()
        return clicked is not None and box.buttonRole(clicked) == QMessageBox.ButtonRole.AcceptRole
