"""WhatsApp collection reminders for invoices."""

import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from urllib.parse import quote

WHATSAPP_BASE_URL = "https://wa.me"

MESSAGE_TEMPLATE = (
    "Hi {name}!\n"
    "\n"
    "Hope you are doing well! 🎾\n"
    "\n"
    "This is a reminder about your tennis lessons fee:\n"
    "💰 Amount: {amount}\n"
    "📅 Due date: {due_date}\n"
    "\n"
    "To keep your lessons up to date, please make the payment by the due date.\n"
    "\n"
    "Any questions, just let me know!\n"
    "\n"
    "Thank you! 😊"
)


def normalize_phone(phone: str | None, country_code: str = "55") -> str | None:
    digits = re.sub(r"\D", "", phone or "")
    if not digits:
        return None
    if digits.startswith(country_code):
        return digits
    return f"{country_code}{digits}"


def format_currency(amount, symbol: str = "R$") -> str:
    """Format like ``R$ 1.234,56``."""
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    formatted = f"{value:,.2f}".translate(str.maketrans({",": ".", ".": ","}))
    return f"{symbol} {formatted}"


def format_due_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def compose_collection_message(student_name: str, amount, due_date: date, currency_symbol: str = "R$") -> str:
    return MESSAGE_TEMPLATE.format(
        name=student_name,
        amount=format_currency(amount, currency_symbol),
        due_date=format_due_date(due_date),
    )


def build_whatsapp_link(phone: str, message: str) -> str:
    return f"{WHATSAPP_BASE_URL}/{phone}?text={quote(message, safe='')}"
