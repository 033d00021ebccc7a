"""Admin replies to contact messages."""

from django.utils.html import escape, linebreaks

from common.mail import build_email, send_with_retry


def reply_email(message, subject: str, body: str, cc=None, bcc=None):
    html = (
        f"<p>Estimado/a {escape(message.name)},</p>"
        f"{linebreaks(escape(body))}"
        "<hr>"
        "<p><strong>Su mensaje original:</strong></p>"
        f"{linebreaks(escape(message.message))}"
    )
    text = f"Estimado/a {message.name},\n\n{body}\n\n---\nSu mensaje original:\n{message.message}"
    return build_email(subject=subject, to=[message.email], text_body=text, html_body=html, cc=cc, bcc=bcc)


def send_reply(message, subject: str, body: str, cc=None, bcc=None, sleep=None):
    email = reply_email(message, subject, body, cc=cc, bcc=bcc)
    if sleep is None:
        return send_with_retry(email.send)
    return send_with_retry(email.send, sleep=sleep)
