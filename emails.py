import socket

from models import now_local

SUBJECT = "Local IP Address Change Notification"


def _addr(ip):
    return ip or "(none recorded)"


def compose_ip_change_email(old_ip, new_ip, hostname=None, checked_at=None):
    """
    IP 変更通知の件名・本文を返す（checked_at は記録した ChangeDate）
    """
    hostname = hostname or socket.gethostname()
    body = (
        f"The local IP address has changed from {_addr(old_ip)} to {new_ip}.\n\n"
        f"- Host: {hostname}\n"
        f"- Checked at: {checked_at or now_local()}\n"
    )
    return SUBJECT, body
