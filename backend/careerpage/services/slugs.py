"""Slug and color helpers shared by the entity schemas and the editor."""
import re
import time

SLUG_RE = re.compile(r"^[a-z0-9](?:[a-z0-9-]*[a-z0-9])?$")
HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to '-', trim hyphens."""
    return _NON_ALNUM_RE.sub("-", (value or "").lower()).strip("-")


def is_valid_slug(value: str) -> bool:
    return bool(value) and SLUG_RE.match(value) is not None


def is_hex_color(value: str) -> bool:
    return bool(value) and HEX_COLOR_RE.match(value) is not None


def is_uuid(value) -> bool:
    """True when the identifier is in the store's key format."""
    return UUID_RE.match(str(value)) is not None


def job_slug_for(title: str, slug: str | None = None) -> str:
    """Explicit slug, else one derived from the title, else a timestamped one."""
    if slug:
        return slug
    derived = slugify(title)
    if derived:
        return derived
    return f"job-{int(time.time() * 1000)}"
