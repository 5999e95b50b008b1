"""Main GUI window for customer and credit management."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from PySide6.QtCore import QThreadPool, Qt
from PySide6.QtWidgets import (
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QScrollArea,
    QTableWidget,
    QTableWidgetItem,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from credit_app.core.dates import plus_months
from credit_app.core.errors import FieldValidationError, FieldViolation
from credit_app.models.credit import CreditCreate, CreditView
from credit_app.models.customer import CustomerCreate, CustomerView
from credit_app.resources.credit_resource import CreditResource
from credit_app.resources.customer_resource import CustomerResource
from credit_app.resources.exception_handler import ERROR_STATUS_TABLE, to_problem_details
from credit_app.ui.tasks import LoadCreditsTask


def _optional_decimal(raw: str, field: str) -> Decimal | None:
    value = raw.strip()
    if not value:
        return None
    try:
        return Decimal(value)
    except InvalidOperation as error:
        raise FieldValidationError(
            [FieldViolation(field, "Enter a number, e.g. 5000 or 5000.50")]
        ) from error


def _optional_int(raw: str, field: str) -> int | None:
    value = raw.strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError as error:
        raise FieldValidationError([FieldViolation(field, "Enter a whole number")]) from error


def _optional_date(raw: str, field: str) -> date | None:
    value = raw.strip()
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as error:
        raise FieldValidationError([FieldViolation(field, "Use the YYYY-MM-DD format")]) from error


class MainWindow(QMainWindow):
    """GUI for customer registration and credit issuance."""

    def __init__(self, customer_resource: CustomerResource, credit_resource: CreditResource):
        super().__init__()
        self.customer_resource = customer_resource
        self.credit_resource = credit_resource
        self.thread_pool = QThreadPool.globalInstance()

        self.setWindowTitle("Credit Application System")
        self.resize(1100, 800)

        self.tabs = QTabWidget()
        self._build_customer_tab()
        self._build_credit_tab()
        self._build_lookup_tab()
        self._build_help_tab()
        self._build_exit_tab()
        self.setCentralWidget(self.tabs)

    def _build_customer_tab(self) -> None:
        tab = QWidget()
        layout = QVBoxLayout(tab)

        form = QFormLayout()
        self.first_name_input = QLineEdit()
        self.last_name_input = QLineEdit()
        self.cpf_input = QLineEdit()
        self.income_input = QLineEdit()
        self.email_input = QLineEdit()
        self.password_input = QLineEdit()
        self.password_input.setEchoMode(QLineEdit.EchoMode.Password)
        self.zip_code_input = QLineEdit()
        self.street_input = QLineEdit()

        for widget in [
            self.first_name_input,
            self.last_name_input,
            self.cpf_input,
            self.income_input,
            self.email_input,
            self.password_input,
            self.zip_code_input,
            self.street_input,
        ]:
            widget.returnPressed.connect(self.register_customer)

        form.addRow("First name", self.first_name_input)
        form.addRow("Last name", self.last_name_input)
        form.addRow("CPF", self.cpf_input)
        form.addRow("Income", self.income_input)
        form.addRow("Email", self.email_input)
        form.addRow("Password", self.password_input)
        form.addRow("Zip code", self.zip_code_input)
        form.addRow("Street", self.street_input)

        buttons = QHBoxLayout()
        register_button = QPushButton("Register customer")
        register_button.clicked.connect(self.register_customer)
        clear_button = QPushButton("Clear")
        clear_button.clicked.connect(self.clear_customer_form)
        buttons.addWidget(register_button)
        buttons.addWidget(clear_button)

        lookup_row = QHBoxLayout()
        self.customer_lookup_input = QLineEdit()
        self.customer_lookup_input.setPlaceholderText("Customer ID")
        self.customer_lookup_input.returnPressed.connect(self.show_customer)
        lookup_button = QPushButton("Show customer")
        lookup_button.clicked.connect(self.show_customer)
        lookup_row.addWidget(self.customer_lookup_input)
        lookup_row.addWidget(lookup_button)

        self.customer_detail_view = QPlainTextEdit()
        self.customer_detail_view.setReadOnly(True)

        layout.addLayout(form)
        layout.addLayout(buttons)
        layout.addWidget(QLabel("Customer lookup (CPF masked)"))
        layout.addLayout(lookup_row)
        layout.addWidget(self.customer_detail_view)

        self.tabs.addTab(tab, "Customers")

    def _build_credit_tab(self) -> None:
        tab = QWidget()
        layout = QVBoxLayout(tab)

        form = QFormLayout()
        self.credit_customer_id_input = QLineEdit()
        self.credit_value_input = QLineEdit()
        self.first_installment_input = QLineEdit()
        self.first_installment_input.setPlaceholderText("YYYY-MM-DD")
        self.first_installment_input.setText(plus_months(date.today(), 1).isoformat())
        self.installments_input = QLineEdit()
        self.installments_input.setText("12")

        for widget in [
            self.credit_customer_id_input,
            self.credit_value_input,
            self.first_installment_input,
            self.installments_input,
        ]:
            widget.returnPressed.connect(self.issue_credit)

        form.addRow("Customer ID", self.credit_customer_id_input)
        form.addRow("Credit value", self.credit_value_input)
        form.addRow("First installment", self.first_installment_input)
        form.addRow("Installments (1-48)", self.installments_input)

        buttons = QHBoxLayout()
        issue_button = QPushButton("Issue credit")
        issue_button.clicked.connect(self.issue_credit)
        clear_button = QPushButton("Clear")
        clear_button.clicked.connect(self.clear_credit_form)
        refresh_button = QPushButton("Refresh list")
        refresh_button.clicked.connect(self.refresh_credits)
        buttons.addWidget(issue_button)
        buttons.addWidget(clear_button)
        buttons.addWidget(refresh_button)

        self.credits_table = QTableWidget(0, 3)
        self.credits_table.setHorizontalHeaderLabels(["Credit code", "Value", "Installments"])
        self.credits_table.cellClicked.connect(self._on_credit_row_selected)

        layout.addLayout(form)
        layout.addLayout(buttons)
        layout.addWidget(QLabel("Credits of the customer above"))
        layout.addWidget(self.credits_table)

        self.tabs.addTab(tab, "Credits")

    def _build_lookup_tab(self) -> None:
        tab = QWidget()
        layout = QVBoxLayout(tab)

        form = QFormLayout()
        self.lookup_customer_id_input = QLineEdit()
        self.lookup_credit_code_input = QLineEdit()
        self.lookup_credit_code_input.returnPressed.connect(self.lookup_credit)
        form.addRow("Customer ID", self.lookup_customer_id_input)
        form.addRow("Credit code", self.lookup_credit_code_input)

        lookup_button = QPushButton("Find credit")
        lookup_button.clicked.connect(self.lookup_credit)

        self.credit_detail_view = QPlainTextEdit()
        self.credit_detail_view.setReadOnly(True)

        layout.addLayout(form)
        layout.addWidget(lookup_button)
        layout.addWidget(self.credit_detail_view)

        self.tabs.addTab(tab, "Lookup")

    def _build_exit_tab(self) -> None:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        exit_button = QPushButton("Quit")
        exit_button.clicked.connect(self.close)
        layout.addWidget(QLabel("Press the button to close the application."))
        layout.addWidget(exit_button)
        self.tabs.addTab(tab, "Exit")

    def _build_help_tab(self) -> None:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        content = QLabel(
            """
<h2>Help</h2>
<ol>
  <li>Register the customer in the <b>Customers</b> tab and note the ID.</li>
  <li>Issue credits for that ID in the <b>Credits</b> tab.</li>
  <li>Fetch a single credit with the customer ID and credit code in <b>Lookup</b>.</li>
</ol>

<h3>Rules</h3>
<ul>
  <li>CPF: 11 digits with valid check digits</li>
  <li>Credit value: positive number</li>
  <li>Installments: 1 to 48</li>
  <li>First installment: a future date, earlier than 3 months from today</li>
  <li>A credit code only resolves for the customer that owns it</li>
</ul>
"""
        )
        content.setTextFormat(Qt.TextFormat.RichText)
        content.setWordWrap(True)
        content.setTextInteractionFlags(Qt.TextInteractionFlag.NoTextInteraction)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        wrapper = QWidget()
        wrapper_layout = QVBoxLayout(wrapper)
        wrapper_layout.addWidget(content)
        wrapper_layout.addStretch(1)
        scroll.setWidget(wrapper)

        layout.addWidget(scroll)
        self.tabs.addTab(tab, "Help")

    def _show_error(self, error: Exception) -> None:
        if not isinstance(error, tuple(ERROR_STATUS_TABLE)):
            QMessageBox.critical(self, "Error", str(error))
            return
        problem = to_problem_details(error)
        lines = [f"{key}: {value}" for key, value in problem.details.items()]
        QMessageBox.critical(self, f"{problem.status} {problem.title}", "\n".join(lines))

    def _customer_payload_from_form(self) -> CustomerCreate:
        return CustomerCreate(
            first_name=self.first_name_input.text(),
            last_name=self.last_name_input.text(),
            cpf=self.cpf_input.text(),
            income=_optional_decimal(self.income_input.text(), "income"),
            email=self.email_input.text(),
            password=self.password_input.text(),
            zip_code=self.zip_code_input.text(),
            street=self.street_input.text(),
        )

    def _credit_payload_from_form(self) -> CreditCreate:
        return CreditCreate(
            credit_value=_optional_decimal(self.credit_value_input.text(), "credit_value"),
            day_first_of_installment=_optional_date(
                self.first_installment_input.text(),
                "day_first_of_installment",
            ),
            number_of_installments=_optional_int(
                self.installments_input.text(),
                "number_of_installments",
            ),
            customer_id=_optional_int(self.credit_customer_id_input.text(), "customer_id"),
        )

    def register_customer(self) -> None:
        try:
            view = self.customer_resource.save(self._customer_payload_from_form())
            QMessageBox.information(self, "Done", f"Customer registered. ID={view.id}")
            self.clear_customer_form()
            self.customer_lookup_input.setText(str(view.id))
            self.credit_customer_id_input.setText(str(view.id))
            self._render_customer(view)
        except Exception as error:  # pylint: disable=broad-except
            self._show_error(error)

    def show_customer(self) -> None:
        try:
            customer_id = _optional_int(self.customer_lookup_input.text(), "customer_id")
            if customer_id is None:
                raise FieldValidationError([FieldViolation("customer_id", "Enter a customer ID")])
            self._render_customer(self.customer_resource.find_by_id(customer_id))
        except Exception as error:  # pylint: disable=broad-except
            self.customer_detail_view.setPlainText("")
            self._show_error(error)

    def issue_credit(self) -> None:
        try:
            view = self.credit_resource.save(self._credit_payload_from_form())
            QMessageBox.information(self, "Done", f"Credit issued. Code={view.credit_code}")
            self.lookup_customer_id_input.setText(str(view.customer_id))
            self.lookup_credit_code_input.setText(str(view.credit_code))
            self.refresh_credits()
        except Exception as error:  # pylint: disable=broad-except
            self._show_error(error)

    def lookup_credit(self) -> None:
        try:
            customer_id = _optional_int(self.lookup_customer_id_input.text(), "customer_id")
            if customer_id is None:
                raise FieldValidationError([FieldViolation("customer_id", "Enter a customer ID")])
            view = self.credit_resource.find_by_credit_code(
                customer_id,
                self.lookup_credit_code_input.text(),
            )
            self._render_credit(view)
        except Exception as error:  # pylint: disable=broad-except
            self.credit_detail_view.setPlainText("")
            self._show_error(error)

    def refresh_credits(self) -> None:
        try:
            customer_id = _optional_int(self.credit_customer_id_input.text(), "customer_id")
        except FieldValidationError as error:
            self._show_error(error)
            return
        if customer_id is None:
            self.credits_table.setRowCount(0)
            return

        task = LoadCreditsTask(self.credit_resource, customer_id)
        task.signals.done.connect(self._render_credits)
        task.signals.error.connect(self._show_error)
        self.thread_pool.start(task)

    def clear_customer_form(self) -> None:
        self.first_name_input.clear()
        self.last_name_input.clear()
        self.cpf_input.clear()
        self.income_input.clear()
        self.email_input.clear()
        self.password_input.clear()
        self.zip_code_input.clear()
        self.street_input.clear()

    def clear_credit_form(self) -> None:
        self.credit_value_input.clear()
        self.first_installment_input.setText(plus_months(date.today(), 1).isoformat())
        self.installments_input.setText("12")

    def _on_credit_row_selected(self, row: int, _column: int) -> None:
        item = self.credits_table.item(row, 0)
        if item is None:
            return
        self.lookup_customer_id_input.setText(self.credit_customer_id_input.text().strip())
        self.lookup_credit_code_input.setText(item.text())

    def _render_customer(self, view: CustomerView) -> None:
        self.customer_detail_view.setPlainText(
            "\n".join(
                [
                    f"ID: {view.id}",
                    f"Name: {view.first_name} {view.last_name}",
                    f"CPF: {view.cpf}",
                    f"Income: {view.income}",
                    f"Email: {view.email}",
                    f"Address: {view.street}, {view.zip_code}",
                ]
            )
        )

    def _render_credit(self, view: CreditView) -> None:
        self.credit_detail_view.setPlainText(
            "\n".join(
                [
                    f"Credit code: {view.credit_code}",
                    f"Value: {view.credit_value}",
                    f"Installments: {view.number_of_installments}",
                    f"First installment: {view.day_first_of_installment.isoformat()}",
                    f"Status: {view.status.value}",
                    f"Customer ID: {view.customer_id}",
                    f"Customer email: {view.email_customer}",
                    f"Customer income: {view.income_customer}",
                ]
            )
        )

    def _render_credits(self, credits: list) -> None:
        self.credits_table.setRowCount(len(credits))
        for row_index, credit in enumerate(credits):
            self.credits_table.setItem(row_index, 0, QTableWidgetItem(str(credit.credit_code)))
            self.credits_table.setItem(row_index, 1, QTableWidgetItem(str(credit.credit_value)))
            self.credits_table.setItem(
                row_index, 2, QTableWidgetItem(str(credit.number_of_installments))
            )
