"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from content_admin.application.context import AppContext
from content_admin.application.services import (
    AuditInterceptor,
    AuditLogStore,
    FieldNameTranslator,
    LifecycleManager,
    QueryBuilder,
    ResourceRegistry,
    ResourceService,
)
from content_admin.domain.entities import AuditLogEntry
from content_admin.infrastructure.database.repositories import (
    SQLAlchemyAuditLogRepository,
    SQLAlchemyEntityRepository,
)
from content_admin.infrastructure.database.session import async_session_factory, get_db_session


def get_app_context(request: Request) -> AppContext:
    """The process-wide context built by the application lifespan."""
    return request.app.state.context


def get_operation_user(request: Request) -> str:
    """Identify who performs a mutating request.

    Prefers the user id set by the authentication layer, then the
    ``X-User-Id`` header, and falls back to the client address.
    """
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        return str(user_id)
    header = request.headers.get("x-user-id", "").strip()
    if header:
        return header
    host = request.client.host if request.client else "unknown"
    return f"IP:{host}"


def build_query_builder(context: AppContext, session: AsyncSession) -> QueryBuilder:
    return QueryBuilder(
        context.registry,
        SQLAlchemyEntityRepository(session),
        context.translator,
        default_page_size=context.settings.default_page_size,
        max_page_size=context.settings.max_page_size,
    )


async def get_resource_service(
    session: AsyncSession = Depends(get_db_session),
    context: AppContext = Depends(get_app_context),
) -> AsyncGenerator[ResourceService, None]:
    """Provides a ResourceService bound to the request's session."""
    repository = SQLAlchemyEntityRepository(session)
    query_builder = build_query_builder(context, session)
    yield ResourceService(
        registry=context.registry,
        repository=repository,
        translator=context.translator,
        query_builder=query_builder,
        lifecycle=LifecycleManager(context.registry, repository),
        interceptor=AuditInterceptor(context.registry, query_builder, context.audit_writer),
    )


async def get_audit_log_store(
    session: AsyncSession = Depends(get_db_session),
    context: AppContext = Depends(get_app_context),
) -> AsyncGenerator[AuditLogStore, None]:
    """Provides an AuditLogStore for the audit query endpoints."""
    yield AuditLogStore(
        context.registry,
        SQLAlchemyAuditLogRepository(session),
        build_query_builder(context, session),
    )


def make_audit_sink(
    registry: ResourceRegistry,
    translator: FieldNameTranslator,
    session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
):
    """Build the AuditWriter sink: one session and one commit per entry."""

    async def persist(entry: AuditLogEntry) -> None:
        async with session_factory() as session:
            store = AuditLogStore(
                registry,
                SQLAlchemyAuditLogRepository(session),
                QueryBuilder(registry, SQLAlchemyEntityRepository(session), translator),
            )
            await store.append(entry)
            await session.commit()

    return persist
