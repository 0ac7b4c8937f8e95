"""SQL-backed job listing sink."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from job_scout_core.exceptions import PersistenceError
from job_scout_infra.db.models import JobListingModel


class SqlJobListingSink:
    """Stores each listing in its own transaction.

    Duplicate (url, source) pairs violate the table's unique constraint and
    surface as PersistenceError, like any other database failure.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize with an async session factory."""
        self._session_factory = session_factory

    async def insert_job_listing(
        self,
        title: str,
        company: str | None,
        location: str | None,
        description: str | None,
        url: str,
        source: str,
    ) -> None:
        """Insert one listing row."""
        model = JobListingModel(
            title=title,
            company=company,
            location=location,
            description=description,
            url=url,
            source=source,
        )
        try:
            async with self._session_factory() as session:
                session.add(model)
                await session.commit()
        except SQLAlchemyError as e:
            msg = f"failed to insert listing {url!r} from {source!r}: {e}"
            raise PersistenceError(msg) from e

    async def count(self, source: str | None = None) -> int:
        """Number of stored listings, optionally for one source."""
        stmt = select(func.count()).select_from(JobListingModel)
        if source is not None:
            stmt = stmt.where(JobListingModel.source == source)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return int(result.scalar_one())

    async def list_by_source(self, source: str, limit: int = 100) -> list[JobListingModel]:
        """Stored listings for one source, newest first."""
        stmt = (
            select(JobListingModel)
            .where(JobListingModel.source == source)
            .order_by(JobListingModel.created_at.desc())
            .limit(limit)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())
