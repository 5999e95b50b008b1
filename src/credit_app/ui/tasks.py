"""Background worker tasks used by the main GUI window."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, QRunnable, Signal

if TYPE_CHECKING:
    from credit_app.resources.credit_resource import CreditResource


class LoadSignals(QObject):
    """Signals for background loading tasks."""

    done = Signal(list)
    error = Signal(object)


class LoadCreditsTask(QRunnable):
    """Load a customer's credit list without blocking the UI thread."""

    def __init__(self, credit_resource: CreditResource, customer_id: int):
        super().__init__()
        self.credit_resource = credit_resource
        self.customer_id = customer_id
        self.signals = LoadSignals()

    def run(self) -> None:
        try:
            credits = self.credit_resource.find_all_by_customer(self.customer_id)
            self.signals.done.emit(credits)
        except Exception as error:  # pylint: disable=broad-except
            # Worker boundary: hand the failure back to the UI thread.
            self.signals.error.emit(error)
