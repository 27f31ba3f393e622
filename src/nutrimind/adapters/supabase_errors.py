"""Translation of Supabase query failures into application errors."""

from typing import Any

from postgrest.exceptions import APIError

from nutrimind.errors import PersistenceError


def execute(query: Any, action: str) -> Any:  # noqa: ANN401
    """Execute a Supabase query builder, raising ``PersistenceError`` on failure."""
    try:
        return query.execute()
    except APIError as exc:
        raise PersistenceError(f"Supabase {action} failed: {exc.message}") from exc
