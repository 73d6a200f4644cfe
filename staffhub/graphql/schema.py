import logging
import time
from functools import partial
from typing import Iterator, Optional

import strawberry
from graphql import GraphQLError
from strawberry.extensions import MaskErrors, QueryDepthLimiter, SchemaExtension
from strawberry.fastapi import GraphQLRouter
from strawberry.types import ExecutionContext

from staffhub.core.config import settings
from staffhub.core.errors import AppError
from staffhub.graphql.context import get_context
from staffhub.graphql.mutations import Mutation
from staffhub.graphql.queries import Query

logger = logging.getLogger(__name__)


class SlowOperationLogger(SchemaExtension):
    """Warn about operations slower than SLOW_QUERY_MS."""

    def on_operation(self) -> Iterator[None]:
        start = time.perf_counter()
        yield
        elapsed_ms = (time.perf_counter() - start) * 1000
        if elapsed_ms > settings.SLOW_QUERY_MS:
            logger.warning(
                "Slow GraphQL operation %s: %.0fms",
                self.execution_context.operation_name or "<anonymous>",
                elapsed_ms,
            )


def is_unexpected_error(error: GraphQLError) -> bool:
    original = error.original_error
    return original is not None and not isinstance(original, AppError)


class StaffHubSchema(strawberry.Schema):
    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: Optional[ExecutionContext] = None,
    ) -> None:
        # Runs before MaskErrors rewrites anything, so the full detail is logged
        for error in errors:
            if is_unexpected_error(error):
                logger.error(
                    "Unhandled error in %s: %s",
                    error.path,
                    error.message,
                    exc_info=error.original_error,
                )
            else:
                logger.info("GraphQL error at %s: %s", error.path, error.message)


def create_schema() -> StaffHubSchema:
    extensions = [
        partial(QueryDepthLimiter, max_depth=settings.GRAPHQL_MAX_DEPTH),
        SlowOperationLogger,
    ]
    if settings.is_production:
        extensions.append(
            partial(
                MaskErrors,
                should_mask_error=is_unexpected_error,
                error_message="Internal server error",
            )
        )
    return StaffHubSchema(query=Query, mutation=Mutation, extensions=extensions)


schema = create_schema()


def create_graphql_router() -> GraphQLRouter:
    return GraphQLRouter(schema, context_getter=get_context)
