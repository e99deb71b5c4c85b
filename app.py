import sys

import notifier
import notify
from emails import compose_ip_change_email
from errors import ConfigError, NotificationError, ResolutionError, StorageError
from models import close_db, init_db
from settings import load_settings
from utils import current_address, ensure_schema, last_recorded_address, record_change


def _sender_for(settings):
    return notify.send_email if settings.notify_dry_run else notifier.send_email


def notify_change(settings, old_ip, new_ip, send=None, checked_at=None) -> bool:
    """
    変更を通知（失敗しても記録はそのまま）。
    宛先なしのスキップは成功扱いで True、送信失敗のときだけ False。
    """
    if not settings.mail_to:
        print("[EMAIL SKIP] no recipients configured (MAIL_TO is empty)")
        return True

    send = send or _sender_for(settings)
    subject, body = compose_ip_change_email(old_ip, new_ip, checked_at=checked_at)
    to = ", ".join(settings.mail_to)
    try:
        send(settings, subject, body)
    except NotificationError as e:
        # 再送はしない（次回の変更時まで待つ）
        print(f"[EMAIL ERROR] to={to} err={e}")
        return False
    print(f"[EMAIL SENT] to={to}")
    return True


def check_for_change(settings, resolve=None, send=None) -> bool:
    """
    1回分のチェック。変更があれば記録して通知し True を返す。
    ResolutionError / StorageError はそのまま呼び出し元へ。
    """
    ensure_schema()

    current = (resolve or current_address)()
    previous = last_recorded_address()

    if current != previous:
        print(f"[IP CHANGED] {previous or '(none)'} -> {current}")
        change = record_change(previous, current)
        notify_change(settings, previous, current, send=send, checked_at=change.change_date)
        return True

    print(f"[NO CHANGE] local IP address is still {current}")
    return False


def main() -> int:
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"[FATAL] config: {e}")
        return e.exit_code
    print(f"[CONFIG] loaded (relay={settings.smtp_host}:{settings.smtp_port}, db={settings.database_url})")

    print("[CHECK] checking for local IP changes...")
    try:
        init_db(settings.database_url)
        check_for_change(settings)
    except (ResolutionError, StorageError) as e:
        print(f"[FATAL] {type(e).__name__}: {e}")
        return e.exit_code
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    sys.exit(main())
