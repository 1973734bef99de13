from datetime import UTC, datetime


def now() -> datetime:
    return datetime.now(UTC)


def is_local_path(target: str) -> bool:
    """Whether target is a same-site absolute path, safe to redirect to."""
    return target.startswith("/") and not target.startswith("//") and "\\" not in target
