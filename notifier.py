import smtplib
import ssl
from email.message import EmailMessage

from errors import NotificationError


def build_message(settings, subject: str, body: str) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = settings.mail_from
    msg["To"] = ", ".join(settings.mail_to)
    msg["Subject"] = subject
    msg.set_content(body)
    return msg


def send_email(settings, subject: str, body: str) -> None:
    """SMTP リレー経由で全宛先に送る。失敗は NotificationError にまとめる"""
    try:
        msg = build_message(settings, subject, body)

        # 587: STARTTLS / 465: SSL
        if settings.smtp_use_tls:
            with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout) as s:
                s.ehlo()
                s.starttls(context=ssl.create_default_context())
                s.login(settings.smtp_user, settings.smtp_pass)
                s.send_message(msg)
        else:
            with smtplib.SMTP_SSL(
                settings.smtp_host,
                settings.smtp_port,
                context=ssl.create_default_context(),
                timeout=settings.smtp_timeout,
            ) as s:
                s.login(settings.smtp_user, settings.smtp_pass)
                s.send_message(msg)
    except (smtplib.SMTPException, OSError, ValueError) as e:
        raise NotificationError(f"{type(e).__name__}: {e}") from e
