import os
from dataclasses import dataclass
from typing import Optional

from dotenv import dotenv_values

from errors import ConfigError

DEFAULT_CONFIG_PATH = ".env"
DEFAULT_DATABASE_URL = "sqlite:///ip_changes.db"

REQUIRED_KEYS = ("SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASS", "MAIL_FROM", "MAIL_TO")
OPTIONAL_KEYS = ("SMTP_USE_TLS", "SMTP_TIMEOUT", "NOTIFY_DRY_RUN", "DATABASE_URL")


@dataclass(frozen=True)
class Settings:
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_pass: str
    mail_from: str
    mail_to: tuple = ()
    smtp_use_tls: bool = True  # True: STARTTLS / False: SSL
    smtp_timeout: float = 20.0
    notify_dry_run: bool = False
    database_url: str = DEFAULT_DATABASE_URL


def _parse_csv(raw: Optional[str]) -> tuple:
    """カンマ区切りをタプルに（空要素は捨てる）"""
    raw = (raw or "").strip()
    if not raw:
        return ()
    return tuple(x.strip() for x in raw.split(",") if x.strip())


def _flag(raw: Optional[str], default: bool) -> bool:
    if raw is None or raw.strip() == "":
        return default
    return raw.strip() == "1"


def _number(values: dict, key: str, cast, default=None):
    raw = values.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from None


def _read_values(path: Optional[str], environ) -> tuple:
    """設定ファイルを読み、環境変数で上書きした dict を返す"""
    environ = os.environ if environ is None else environ
    path = path or environ.get("IPWATCH_CONFIG") or DEFAULT_CONFIG_PATH

    try:
        raw = dotenv_values(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"cannot read {path}: {e}") from e

    values = {k: v for k, v in raw.items() if v is not None}
    for key in REQUIRED_KEYS + OPTIONAL_KEYS:
        if key in environ:
            values[key] = environ[key]
    return path, values


def load_settings(path: Optional[str] = None, environ=None) -> Settings:
    """
    設定ファイル（.env 形式）を読み込んで Settings を返す。
    同じキーが環境変数にあれば環境変数を優先（load_dotenv と同じ優先順位）。
    """
    path, values = _read_values(path, environ)

    # MAIL_TO は空でもよい（空なら通知しない）。それ以外は中身が必要
    missing = [k for k in REQUIRED_KEYS if k not in values]
    missing += [k for k in REQUIRED_KEYS if k != "MAIL_TO" and k in values and not values[k].strip()]
    if missing:
        raise ConfigError(f"missing required settings in {path}: {', '.join(missing)}")

    port = _number(values, "SMTP_PORT", int)
    if not 0 < port < 65536:
        raise ConfigError(f"SMTP_PORT out of range: {port}")
    timeout = _number(values, "SMTP_TIMEOUT", float, 20.0)
    if timeout <= 0:
        raise ConfigError(f"SMTP_TIMEOUT must be positive: {timeout}")

    return Settings(
        smtp_host=values["SMTP_HOST"].strip(),
        smtp_port=port,
        smtp_user=values["SMTP_USER"].strip(),
        smtp_pass=values["SMTP_PASS"],
        mail_from=values["MAIL_FROM"].strip(),
        mail_to=_parse_csv(values["MAIL_TO"]),
        smtp_use_tls=_flag(values.get("SMTP_USE_TLS"), True),
        smtp_timeout=timeout,
        notify_dry_run=_flag(values.get("NOTIFY_DRY_RUN"), False),
        database_url=_database_url(values),
    )


def _database_url(values: dict) -> str:
    return (values.get("DATABASE_URL") or "").strip() or DEFAULT_DATABASE_URL


def database_url(path: Optional[str] = None, environ=None) -> str:
    """DATABASE_URL だけを load_settings と同じ優先順位で解決（SMTP 設定は不要）"""
    _, values = _read_values(path, environ)
    return _database_url(values)
