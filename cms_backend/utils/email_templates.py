"""
HTML and plain-text bodies for outbound notification emails.
All user-supplied values are HTML-escaped before interpolation.
"""
from html import escape
from typing import Optional, Tuple

_BASE_STYLE = """
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
    .container { max-width: 600px; margin: 0 auto; padding: 20px; }
    .header { background-color: %(color)s; color: white; padding: 20px; text-align: center; }
    .content { background-color: #f9f9f9; padding: 20px; border: 1px solid #ddd; }
    .field { margin-bottom: 15px; }
    .label { font-weight: bold; color: #555; }
    .value { margin-top: 5px; padding: 10px; background-color: white; border-left: 3px solid %(color)s; }
    .button { display: inline-block; padding: 12px 24px; background-color: %(color)s; color: white; text-decoration: none; border-radius: 5px; margin: 20px 0; }
    .warning { color: #ff9800; font-weight: bold; margin-top: 20px; }
    .footer { margin-top: 20px; text-align: center; color: #777; font-size: 12px; }
"""


def _layout(title: str, body: str, footer: str, color: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head><style>{_BASE_STYLE % {"color": color}}</style></head>
<body>
  <div class="container">
    <div class="header"><h2>{escape(title)}</h2></div>
    <div class="content">{body}</div>
    <div class="footer"><p>{escape(footer)}</p></div>
  </div>
</body>
</html>"""


def _field(label: str, value: str) -> str:
    return (
        f'<div class="field"><div class="label">{escape(label)}:</div>'
        f'<div class="value">{value}</div></div>'
    )


def render_password_reset(
    first_name: str,
    reset_url: str,
    app_name: str,
    expire_minutes: int
) -> Tuple[str, str, str]:
    """
    Returns:
        Tuple of (subject, html, text)
    """
    subject = "Password Reset Request"
    url = escape(reset_url, quote=True)
    body = (
        f"<p>Hello {escape(first_name)},</p>"
        f"<p>You requested to reset your password for the {escape(app_name)} admin panel.</p>"
        f"<p>Click the button below to reset your password:</p>"
        f'<a href="{url}" class="button">Reset Password</a>'
        f"<p>Or copy and paste this link into your browser:</p>"
        f'<p style="word-break: break-all;">{url}</p>'
        f'<p class="warning">This link will expire in {expire_minutes} minutes.</p>'
        f"<p>If you didn't request this password reset, please ignore this email.</p>"
    )
    html = _layout(subject, body, f"This is an automated email from {app_name}", "#4CAF50")
    text = (
        f"Password Reset Request\n\n"
        f"Hello {first_name},\n\n"
        f"You requested to reset your password for the {app_name} admin panel.\n\n"
        f"Click this link to reset your password:\n{reset_url}\n\n"
        f"This link will expire in {expire_minutes} minutes.\n\n"
        f"If you didn't request this password reset, please ignore this email.\n"
    )
    return subject, html, text


def render_contact_notification(
    name: str,
    email: str,
    subject: Optional[str],
    message: str,
    app_name: str
) -> Tuple[str, str, str]:
    """
    Returns:
        Tuple of (subject, html, text)
    """
    subject = subject or "No Subject"
    body = "".join([
        _field("Name", escape(name)),
        _field("Email", escape(email)),
        _field("Subject", escape(subject)),
        _field("Message", escape(message)),
    ])
    html = _layout(
        "New Contact Form Submission",
        body,
        f"This email was sent from the {app_name} contact form",
        "#4CAF50",
    )
    text = (
        f"New Contact Form Submission\n\n"
        f"Name: {name}\n"
        f"Email: {email}\n"
        f"Subject: {subject}\n"
        f"Message: {message}\n"
    )
    return f"New Contact: {subject}", html, text


def render_testimonial_notification(
    name: str,
    email: str,
    message: str,
    rating: Optional[int],
    app_name: str
) -> Tuple[str, str, str]:
    """
    Returns:
        Tuple of (subject, html, text)
    """
    rating = rating or 5
    stars = "★" * rating + "☆" * (5 - rating)
    body = "".join([
        _field("Name", escape(name)),
        _field("Email", escape(email)),
        _field("Rating", f'<span style="color: #FFD700; font-size: 20px;">{stars}</span> ({rating}/5)'),
        _field("Message", escape(message)),
    ])
    html = _layout(
        "New Testimonial Submission",
        body,
        f"This email was sent from {app_name} testimonials",
        "#FF9800",
    )
    text = (
        f"New Testimonial Submission\n\n"
        f"Name: {name}\n"
        f"Email: {email}\n"
        f"Rating: {rating}/5\n"
        f"Message: {message}\n"
    )
    return f"New Testimonial from {name}", html, text
