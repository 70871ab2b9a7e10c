from datetime import datetime, timezone


def utcnow() -> datetime:
    # backend grava datetime naive em UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)
