import datetime

from peewee import DatabaseProxy, Model, PeeweeException, TextField
from playhouse.db_url import connect
from playhouse.sqlite_ext import AutoIncrementField

from errors import StorageError

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# 実体は init_db() で差し込む（Id が AUTOINCREMENT なので sqlite 前提）
db = DatabaseProxy()


def now_local() -> str:
    """ローカル時刻を ChangeDate 用の文字列で返す"""
    return datetime.datetime.now().strftime(TIMESTAMP_FORMAT)


class BaseModel(Model):
    class Meta:
        database = db


class IPChange(BaseModel):
    # 既存の ip_changes.db（IPChanges テーブル）とそのまま互換
    id = AutoIncrementField(column_name="Id")  # 削除があっても Id を再利用しない
    old_ip = TextField(column_name="OldIP", null=True)  # 初回は NULL
    new_ip = TextField(column_name="NewIP")
    change_date = TextField(column_name="ChangeDate", default=now_local)

    class Meta:
        table_name = "IPChanges"


def init_db(url: str):
    """DATABASE_URL で接続して db に束ねる"""
    try:
        database = connect(url)
        db.initialize(database)
        db.connect(reuse_if_open=True)
    except (PeeweeException, RuntimeError, OSError) as e:
        raise StorageError(f"cannot open database {url}: {e}") from e
    return database


def close_db():
    if db.obj is not None and not db.is_closed():
        db.close()
