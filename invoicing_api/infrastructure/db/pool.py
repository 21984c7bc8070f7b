"""
Adapter: Database connection pool.

Owns a bounded SQLAlchemy QueuePool and hands out one connection per
repository operation. The connection is always returned to the pool
when the ``with`` block exits, whether it exits normally or by raising.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from invoicing_api.core.config import Settings
from invoicing_api.domain.invoicing.context import RequestContext
from invoicing_api.domain.invoicing.errors import (
    PoolAcquireError,
    Severity,
    StorageError,
    describe_cause,
)

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    """Build a pooled SQLAlchemy engine from application settings."""
    return create_engine(
        settings.get_database_dsn(),
        pool_size=settings.pool_size,
        max_overflow=settings.pool_max_overflow,
        pool_timeout=settings.pool_timeout_seconds,
        pool_pre_ping=True,
    )


class ConnectionPool:
    """Bounded pool of PostgreSQL connections.

    The concurrency limit is enforced by the engine's QueuePool. This class
    adds deadline handling and maps acquisition failures to PoolAcquireError.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @contextmanager
    def acquire(
        self,
        ctx: RequestContext,
        failure: str = "failed to commit transaction",
        severity: Optional[Severity] = None,
    ) -> Iterator[Connection]:
        """Yield a pooled connection inside a transaction.

        The transaction commits when the block exits normally and rolls
        back otherwise. The remaining request deadline is applied as a
        transaction-local ``statement_timeout``.

        The checkout wait itself is capped by the engine's ``pool_timeout``;
        QueuePool has no per-checkout timeout. A checkout that completes
        after the request deadline is returned to the pool unused.

        Args:
            ctx: Request context (logger, deadline).
            failure: Message of the StorageError raised when the commit fails.
            severity: Severity of that StorageError, ERROR when omitted.

        Raises:
            PoolAcquireError: Deadline expired before or during checkout,
                pool checkout timed out, or a new connection could not be
                opened.
            StorageError: The commit failed.
        """
        if ctx.expired():
            raise PoolAcquireError(
                fields={"error": "deadline exceeded before acquire"}
            )

        try:
            conn = self._engine.connect()
        except PoolTimeoutError as exc:
            raise PoolAcquireError(
                "timed out waiting for a pooled connection",
                fields=describe_cause(exc),
            ) from exc
        except DBAPIError as exc:
            raise PoolAcquireError(fields=describe_cause(exc)) from exc

        with conn:
            if ctx.expired():
                raise PoolAcquireError(
                    fields={"error": "deadline exceeded during acquire"}
                )

            transaction = conn.begin()
            try:
                self._apply_deadline(ctx, conn)
                yield conn
            except BaseException:
                self._rollback(ctx, transaction)
                raise

            try:
                transaction.commit()
            except SQLAlchemyError as exc:
                raise StorageError(
                    failure, severity=severity, fields=describe_cause(exc)
                ) from exc

    def verify(self) -> None:
        """Check storage reachability at startup.

        Acquires one connection and runs ``SELECT 1``. A pool that cannot
        reach storage is a fatal configuration error: the failure is logged
        and the process exits.
        """
        try:
            self.ping(RequestContext(logger=logger))
        except (PoolAcquireError, StorageError) as exc:
            logger.critical(
                "failed to reach database: %s (%s)",
                exc.message,
                exc.fields.get("error", ""),
            )
            raise SystemExit(1) from exc
        logger.info("Database connection verified.")

    def ping(self, ctx: RequestContext) -> None:
        """Run a liveness query on one pooled connection."""
        with self.acquire(ctx) as conn:
            try:
                conn.execute(text("SELECT 1"))
            except SQLAlchemyError as exc:
                raise StorageError("failed to ping database", fields=describe_cause(exc)) from exc

    def dispose(self) -> None:
        """Close every pooled connection."""
        self._engine.dispose()
        logger.info("Connection pool disposed.")

    @staticmethod
    def _rollback(ctx: RequestContext, transaction) -> None:
        # The error that aborted the block is re-raised by the caller.
        try:
            transaction.rollback()
        except SQLAlchemyError as exc:
            ctx.logger.warning("rollback failed: %s", describe_cause(exc)["error"])

    @staticmethod
    def _apply_deadline(ctx: RequestContext, conn: Connection) -> None:
        remaining = ctx.remaining()
        if remaining is None:
            return
        # statement_timeout = 0 disables the timeout, so never go below 1 ms.
        timeout_ms = max(1, int(remaining * 1000))
        try:
            conn.execute(
                text("SELECT set_config('statement_timeout', :timeout, true)"),
                {"timeout": f"{timeout_ms}ms"},
            )
        except SQLAlchemyError as exc:
            raise StorageError(
                "failed to apply statement timeout", fields=describe_cause(exc)
            ) from exc
