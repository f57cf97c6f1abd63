import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from schoolhub.core.config import settings, get_engine_options
from schoolhub.core.exceptions import StorageError
from schoolhub.core.logging import logger
from schoolhub.core.tenancy import normalize_tenant_key, partition_name, tenant_connection_url
from schoolhub.models.base import SystemBase, TenantBase


@dataclass
class TenantConnection:
    """
    An open, reusable link to one partition.

    Owned by TenantConnectionRegistry and handed out by reference.
    """
    tenant_key: Optional[str]
    partition: str
    url: str
    engine: AsyncEngine
    session_factory: async_sessionmaker
    closed: bool = field(default=False)

    @property
    def is_system(self) -> bool:
        return self.tenant_key is None

    @property
    def metadata(self):
        return SystemBase.metadata if self.is_system else TenantBase.metadata

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def close(self) -> None:
        if not self.closed:
            self.closed = True
            await self.engine.dispose()

    def __repr__(self):
        return f"<TenantConnection(partition={self.partition}, closed={self.closed})>"


class TenantConnectionRegistry:
    """
    Maps tenant keys to live connections.

    Created once per process by the app factory and reached through
    ``request.app.state.tenants``. Connections are opened on first use,
    reused afterwards and closed by ``discard`` or ``close_all``.
    """

    def __init__(self, base_url: Optional[str] = None, engine_options: Optional[Dict[str, Any]] = None):
        self.base_url = base_url or settings.DATABASE_URL
        self.engine_options = engine_options if engine_options is not None else get_engine_options()
        self._connections: Dict[Optional[str], TenantConnection] = {}
        self._locks: Dict[Optional[str], asyncio.Lock] = {}

    def connection_url(self, tenant_key: Optional[str]) -> str:
        return tenant_connection_url(self.base_url, tenant_key)

    def tenant_keys(self) -> List[str]:
        return [key for key in self._connections if key is not None]

    def is_open(self, tenant_key: Optional[str]) -> bool:
        handle = self._connections.get(normalize_tenant_key(tenant_key))
        return handle is not None and not handle.closed

    async def get_connection(self, tenant_key: Optional[str] = None) -> TenantConnection:
        """
        Return the connection for ``tenant_key``, opening it on first use.

        A missing or empty key selects the system partition. Creation is
        serialized per key so concurrent first requests share one engine.
        """
        key = normalize_tenant_key(tenant_key)

        handle = self._connections.get(key)
        if handle is not None and not handle.closed:
            return handle

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            handle = self._connections.get(key)
            if handle is not None and not handle.closed:
                return handle

            handle = await self._open(key)
            self._connections[key] = handle
            return handle

    async def _open(self, key: Optional[str]) -> TenantConnection:
        partition = partition_name(key)
        url = self.connection_url(key)
        engine = None

        try:
            engine = create_async_engine(url, **self.engine_options)
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            if engine is not None:
                await engine.dispose()
            logger.error(f"Could not open partition {partition}: {str(e)}")
            raise StorageError(f"Could not connect to partition {partition}") from e

        logger.info(f"Opened connection to partition {partition}")
        return TenantConnection(
            tenant_key=key,
            partition=partition,
            url=url,
            engine=engine,
            session_factory=async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,    # Don't expire objects after commit
                autoflush=False            # Explicit flush management
            ),
        )

    async def init_partition(self, handle: TenantConnection) -> None:
        """Create the partition's tables; safe to call more than once"""
        try:
            async with handle.engine.begin() as conn:
                await conn.run_sync(handle.metadata.create_all)
        except SQLAlchemyError as e:
            logger.error(f"Failed to initialize partition {handle.partition}: {str(e)}")
            raise StorageError(f"Failed to initialize partition {handle.partition}") from e
        logger.info(f"Initialized partition {handle.partition}")

    async def discard(self, tenant_key: Optional[str]) -> None:
        """Close and forget one tenant's connection"""
        key = normalize_tenant_key(tenant_key)
        handle = self._connections.pop(key, None)
        self._locks.pop(key, None)
        if handle is None:
            return
        await handle.close()
        logger.info(f"Discarded connection to partition {handle.partition}")

    async def close_all(self) -> None:
        """Close every connection and forget them; used at shutdown"""
        handles = list(self._connections.values())
        self._connections.clear()
        self._locks.clear()
        for handle in handles:
            try:
                await handle.close()
            except Exception as e:
                logger.error(f"Error closing partition {handle.partition}: {str(e)}")
        logger.info(f"Closed {len(handles)} partition connection(s)")
