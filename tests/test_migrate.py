import migrate_once
from migrate_once import normalize_legacy_old_ip
from models import IPChange, close_db, init_db
from utils import ensure_schema, last_recorded_address


def test_legacy_sentinel_becomes_null(database):
    ensure_schema()
    # 旧版が書いた行
    database.execute_sql(
        "INSERT INTO IPChanges (OldIP, NewIP, ChangeDate) VALUES ('None', '10.0.0.1', '2024-05-01 08:00:00')"
    )
    database.execute_sql(
        "INSERT INTO IPChanges (OldIP, NewIP, ChangeDate) VALUES ('10.0.0.1', '10.0.0.2', '2024-05-02 08:00:00')"
    )

    assert normalize_legacy_old_ip() == 1
    assert [r.old_ip for r in IPChange.select().order_by(IPChange.id)] == [None, "10.0.0.1"]
    assert last_recorded_address() == "10.0.0.2"
    assert normalize_legacy_old_ip() == 0


def test_missing_table_is_left_alone(database):
    assert normalize_legacy_old_ip() == 0
    assert "IPChanges" not in database.get_tables()


def test_main_uses_database_from_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("IPWATCH_CONFIG", raising=False)
    (tmp_path / ".env").write_text("DATABASE_URL=sqlite:///custom.db\n")

    db = init_db("sqlite:///custom.db")
    ensure_schema()
    db.execute_sql(
        "INSERT INTO IPChanges (OldIP, NewIP, ChangeDate) VALUES ('None', '10.0.0.1', '2024-05-01 08:00:00')"
    )
    close_db()

    migrate_once.main()

    assert not (tmp_path / "ip_changes.db").exists()
    init_db("sqlite:///custom.db")
    try:
        assert [r.old_ip for r in IPChange.select()] == [None]
    finally:
        close_db()
