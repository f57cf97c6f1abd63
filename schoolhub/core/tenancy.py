# schoolhub/core/tenancy.py
"""
Tenant key resolution and partition naming.

A tenant key is a school's id. ``None`` names the system-wide partition,
which holds the school registry and super admin accounts.
"""
import re
from pathlib import PurePosixPath
from typing import Optional, TYPE_CHECKING

from schoolhub.core.config import settings
from schoolhub.core.exceptions import InvalidTenantKeyError

if TYPE_CHECKING:
    from schoolhub.core.security import Principal

TENANT_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def normalize_tenant_key(tenant_key: Optional[str]) -> Optional[str]:
    """Empty keys mean the system partition; anything else must be URL and path safe"""
    if tenant_key is None:
        return None
    tenant_key = str(tenant_key).strip()
    if not tenant_key:
        return None
    if not TENANT_KEY_PATTERN.match(tenant_key):
        raise InvalidTenantKeyError(tenant_key)
    return tenant_key


def partition_name(tenant_key: Optional[str]) -> str:
    tenant_key = normalize_tenant_key(tenant_key)
    if tenant_key is None:
        return settings.SYSTEM_PARTITION
    return f"{settings.PARTITION_PREFIX}{tenant_key}"


def derive_partition_url(base_url: str, partition: str) -> str:
    """
    Swap the database segment of ``base_url`` for ``partition``.

    ``mongodb://host/defaultdb?retryWrites=true`` with ``partition-abc123``
    becomes ``mongodb://host/partition-abc123?retryWrites=true``. The scheme,
    authority and query string are kept verbatim. SQLite file URLs keep their
    file extension so partitions sit next to the base database file.
    """
    base, sep, query = base_url.partition("?")
    scheme, marker, rest = base.partition("://")
    if not marker:
        raise ValueError(f"Connection string has no scheme: {base_url!r}")

    authority, _, path = rest.partition("/")
    directory, _, last = path.rpartition("/")

    suffix = ""
    if scheme.startswith("sqlite"):
        suffix = PurePosixPath(last).suffix

    segment = f"{partition}{suffix}"
    new_path = f"{directory}/{segment}" if directory else segment
    return f"{scheme}://{authority}/{new_path}{sep}{query}"


def tenant_connection_url(base_url: str, tenant_key: Optional[str]) -> str:
    return derive_partition_url(base_url, partition_name(tenant_key))


def resolve_tenant_key(
    principal: Optional["Principal"],
    explicit: Optional[str] = None
) -> Optional[str]:
    """
    Pick the tenant a request targets.

    An explicit route value wins, otherwise the principal's home school.
    No authorization happens here.
    """
    candidate = normalize_tenant_key(explicit)
    if candidate is not None:
        return candidate
    if principal is None:
        return None
    return normalize_tenant_key(principal.school_id)
