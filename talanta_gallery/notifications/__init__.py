"""
Email notifications.

- mailer: template rendering and delivery (SMTP or SendGrid)
- order_receipts: order receipts and contact-form emails
- artist_approval: registration, approval and rejection notices
- password_reset: password reset links

Every ``send_*`` function returns True when the message was handed to the
provider and False otherwise; none of them raise on delivery failure.
"""

from .mailer import Mailer, MailDeliveryError, OutgoingEmail, build_mailer

__all__ = ["MailDeliveryError", "Mailer", "OutgoingEmail", "build_mailer"]
