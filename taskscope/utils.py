from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def from_unix_nano(unix_nano: int) -> datetime:
    """UTC datetime truncated to millisecond precision."""
    return _EPOCH + timedelta(milliseconds=unix_nano // 1_000_000)
