"""Plain-text and HTML bodies for the new-order email."""

from __future__ import annotations

from email.message import EmailMessage
from html import escape

from storefront.domain.model.order import Order


def build_order_email(order: Order, sender: str, recipient: str) -> EmailMessage:
    fields = [
        ("Product", order.product_name),
        ("Size", order.size),
        ("Color", order.color),
        ("Quantity", str(order.quantity)),
        ("Price", str(order.unit_price)),
        ("Total", str(order.total)),
    ]
    employee = [
        ("Employee Code", order.submitter.employee_code),
        ("Name", order.submitter.name),
        ("Email", order.submitter.email),
        ("Phone", order.submitter.phone),
    ]

    text = "Order Details\n\n"
    text += "".join(f"{label}: {value}\n" for label, value in fields)
    text += "\nEmployee Information\n"
    text += "".join(f"{label}: {value}\n" for label, value in employee)

    html = "<h2>New Order</h2>\n"
    html += "".join(f"<p><b>{label}:</b> {escape(value)}</p>\n" for label, value in fields)
    html += "<hr />\n<h3>Employee Information</h3>\n"
    html += "".join(f"<p><b>{label}:</b> {escape(value)}</p>\n" for label, value in employee)

    message = EmailMessage()
    message["Subject"] = f"New Order - {order.product_name}"
    message["From"] = sender
    message["To"] = recipient
    message.set_content(text)
    message.add_alternative(html, subtype="html")
    return message
