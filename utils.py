import socket
from typing import Optional

from peewee import PeeweeException

from errors import ResolutionError, StorageError
from models import IPChange, db, now_local


# ---------- ローカル IP ----------
def current_address() -> str:
    """ホスト名を引いて最初の IPv4 アドレスを返す（見つからなければ ResolutionError）"""
    try:
        hostname = socket.gethostname()
        infos = socket.getaddrinfo(hostname, None)
    except OSError as e:
        raise ResolutionError(f"cannot resolve local host name: {e}") from e

    for family, _, _, _, sockaddr in infos:
        if family == socket.AF_INET:
            return sockaddr[0]
    raise ResolutionError(f"no IPv4 address found for host {hostname!r}")


# ---------- 変更履歴 ----------
def ensure_schema():
    """IPChanges テーブルがなければ作る（何度呼んでもよい）"""
    try:
        db.create_tables([IPChange], safe=True)
    except (PeeweeException, OSError) as e:
        raise StorageError(f"cannot create schema: {e}") from e


def last_recorded_address() -> Optional[str]:
    """最新（Id 最大）の NewIP。まだ記録がなければ None"""
    try:
        last = IPChange.select(IPChange.new_ip).order_by(IPChange.id.desc()).first()
    except (PeeweeException, OSError) as e:
        raise StorageError(f"cannot read last address: {e}") from e
    return last.new_ip if last else None


def record_change(old_ip: Optional[str], new_ip: str) -> IPChange:
    """変更を1件追記する（既存行には触らない）"""
    try:
        with db.atomic():
            return IPChange.create(old_ip=old_ip, new_ip=new_ip, change_date=now_local())
    except (PeeweeException, OSError) as e:
        raise StorageError(f"cannot save ip change: {e}") from e
