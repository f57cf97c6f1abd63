import asyncio

import pytest

from schoolhub.core.database import TenantConnectionRegistry
from schoolhub.core.exceptions import InvalidTenantKeyError, StorageError


async def test_same_handle_returned_for_same_tenant(registry):
    first = await registry.get_connection("abc123")
    second = await registry.get_connection("abc123")
    assert first is second


async def test_concurrent_first_requests_share_one_connection(registry):
    handles = await asyncio.gather(*(registry.get_connection("abc123") for _ in range(10)))
    assert all(handle is handles[0] for handle in handles)
    assert registry.tenant_keys() == ["abc123"]


async def test_tenants_get_distinct_partitions(registry):
    a = await registry.get_connection("abc123")
    b = await registry.get_connection("xyz999")
    assert a is not b
    assert a.partition == "partition-abc123"
    assert b.partition == "partition-xyz999"
    assert a.url.endswith("/partition-abc123.db")


async def test_missing_key_selects_system_partition(registry):
    system = await registry.get_connection()
    assert system.is_system
    assert system.partition == "system-db"
    assert await registry.get_connection("") is system
    assert await registry.get_connection(None) is system


async def test_invalid_key_never_opens_a_connection(registry):
    with pytest.raises(InvalidTenantKeyError):
        await registry.get_connection("../system-db")
    assert registry.tenant_keys() == []


async def test_failed_open_is_not_registered(tmp_path):
    registry = TenantConnectionRegistry(
        base_url=f"sqlite+aiosqlite:///{tmp_path}/missing-dir/defaultdb.db",
        engine_options={}
    )
    with pytest.raises(StorageError):
        await registry.get_connection("abc123")

    assert not registry.is_open("abc123")
    assert registry.tenant_keys() == []
    await registry.close_all()


async def test_close_all_closes_and_forgets(registry):
    handle = await registry.get_connection("abc123")
    await registry.close_all()

    assert handle.closed
    assert not registry.is_open("abc123")

    reopened = await registry.get_connection("abc123")
    assert reopened is not handle
    assert not reopened.closed


async def test_init_partition_is_idempotent(registry):
    handle = await registry.get_connection("abc123")
    await registry.init_partition(handle)
    await registry.init_partition(handle)


async def test_unknown_driver_raises_storage_error(tmp_path):
    registry = TenantConnectionRegistry(
        base_url=f"sqlite+nosuchdriver:///{tmp_path}/defaultdb.db",
        engine_options={}
    )
    with pytest.raises(StorageError):
        await registry.get_connection("abc123")

    assert registry.tenant_keys() == []


async def test_discard_closes_and_forgets_one_tenant(registry):
    abc = await registry.get_connection("abc123")
    xyz = await registry.get_connection("xyz999")

    await registry.discard("abc123")

    assert abc.closed
    assert not registry.is_open("abc123")
    assert registry.tenant_keys() == ["xyz999"]
    assert not xyz.closed

    await registry.discard("abc123")
    assert (await registry.get_connection("abc123")) is not abc
