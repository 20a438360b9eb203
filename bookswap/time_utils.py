from datetime import datetime, timezone


def utc_now() -> datetime:
    """Timezone-aware wall clock time in UTC."""
    return datetime.now(timezone.utc)


def epoch_millis() -> int:
    return int(utc_now().timestamp() * 1000)
