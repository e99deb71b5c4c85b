from models import IPChange, close_db, db, init_db
from settings import database_url

# 旧版は初回の OldIP に文字列 "None" を入れていた
LEGACY_SENTINEL = "None"


def normalize_legacy_old_ip() -> int:
    """OldIP = 'None' を NULL に直す（直した件数を返す）"""
    cols = [c.name for c in db.get_columns(IPChange._meta.table_name)]
    if "OldIP" not in cols:
        return 0
    with db.atomic():
        n = IPChange.update(old_ip=None).where(IPChange.old_ip == LEGACY_SENTINEL).execute()
    if n:
        print("fixed:", f"{IPChange._meta.table_name}.OldIP x{n}")
    return n


def main():
    # app と同じ設定ファイル（IPWATCH_CONFIG / .env）と環境変数から DB を決める
    url = database_url()
    print("database:", url)
    init_db(url)
    try:
        normalize_legacy_old_ip()
    finally:
        close_db()
    print("done.")


if __name__ == "__main__":
    main()
