"""Field checks driven by runtime configuration.

Limits are looked up on ``config.limits`` when a value is validated, so a
``reload_config()`` applies to the next request without rebuilding models.
"""

from __future__ import annotations


def str_limit(*, max_attr: str):
    """AfterValidator rejecting strings longer than ``config.limits.<max_attr>``."""
    def _check(v: str | None) -> str | None:
        if v is None:
            return v
        from assethub.config import config
        limit = getattr(config.limits, max_attr)
        if len(v) > limit:
            raise ValueError(f"String should have at most {limit} character(s)")
        return v
    return _check


def check_mime(mime: str, allowlist: str) -> bool:
    """Whether *mime* matches an entry of the comma-separated *allowlist*.

    Parameters such as ``; charset=...`` are ignored. Entries may be exact
    (``image/png``), a major-type wildcard (``image/*``) or ``*/*``.
    """
    essence = mime.split(";", 1)[0].strip().lower()
    major = essence.split("/", 1)[0]
    for pattern in allowlist.split(","):
        pattern = pattern.strip().lower()
        if not pattern:
            continue
        if pattern in ("*/*", essence, f"{major}/*"):
            return True
    return False
