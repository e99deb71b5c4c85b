class IPWatchError(Exception):
    """基底エラー（exit_code はプロセス終了コード）"""

    exit_code = 1


class ConfigError(IPWatchError):
    exit_code = 2


class ResolutionError(IPWatchError):
    exit_code = 3


class StorageError(IPWatchError):
    exit_code = 4


class NotificationError(IPWatchError):
    """通知失敗。致命的ではない（app.notify_change で握る）"""
