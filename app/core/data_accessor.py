# app/core/data_accessor.py
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Iterable, Iterator, TypeVar

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from app.core.result import Result

T = TypeVar("T")


class EntityNotAllowedError(LookupError):
    """Raised by read operations when the entity type is not on the allow-list."""


@dataclass(frozen=True)
class DataAccessorConfig:
    allowed_entities: frozenset[type]
    # Save after every operation
    auto_save: bool = True
    # Hold saves while a deferred_save() scope is open
    deferred_save_scoped: bool = False
    # Save once when the accessor is closed
    deferred_save_on_close: bool = False


class DataAccessor:
    """Type-gated pass-through over a SQLAlchemy session.

    Write operations return a :class:`Result`; a disallowed entity type or a
    failed save comes back as a failure result instead of raising. Read
    operations raise :class:`EntityNotAllowedError` for disallowed types.
    """

    def __init__(
        self,
        session: Session,
        allowed_entities: Iterable[type],
        auto_save: bool = True,
        deferred_save_scoped: bool = False,
        deferred_save_on_close: bool = False,
    ) -> None:
        self._session = session
        self._config = DataAccessorConfig(
            allowed_entities=frozenset(allowed_entities),
            auto_save=auto_save,
            deferred_save_scoped=deferred_save_scoped,
            deferred_save_on_close=deferred_save_on_close,
        )
        self._deferred_scope_count = 0

    @property
    def session(self) -> Session:
        return self._session

    @property
    def config(self) -> DataAccessorConfig:
        return self._config

    # ---------- Fluent configuration ----------

    def enable_auto_save(self) -> "DataAccessor":
        self._config = replace(self._config, auto_save=True)
        return self

    def disable_auto_save(self) -> "DataAccessor":
        self._config = replace(self._config, auto_save=False)
        return self

    def enable_deferred_save_scoped(self) -> "DataAccessor":
        self._config = replace(self._config, deferred_save_scoped=True)
        return self

    def disable_deferred_save_scoped(self) -> "DataAccessor":
        self._config = replace(self._config, deferred_save_scoped=False)
        return self

    def enable_deferred_save_on_close(self) -> "DataAccessor":
        self._config = replace(self._config, deferred_save_on_close=True)
        return self

    def disable_deferred_save_on_close(self) -> "DataAccessor":
        self._config = replace(self._config, deferred_save_on_close=False)
        return self

    # ---------- Allow-list ----------

    def is_allowed(self, model: type) -> Result[None]:
        if model in self._config.allowed_entities:
            return Result.success()
        return Result.failure(f"Entity of type {model.__name__} is not allowed.")

    def _require_allowed(self, model: type) -> None:
        allowed = self.is_allowed(model)
        if not allowed:
            raise EntityNotAllowedError(allowed.message)

    # ---------- Single entity ----------

    def create(self, entity: T) -> Result[T]:
        allowed = self.is_allowed(type(entity))
        if not allowed:
            return Result.failure(allowed.message)

        self._session.add(entity)
        saved = self._try_save()
        if not saved:
            return Result.failure(saved.message, saved.exception)
        logger.debug("Created {entity}", entity=type(entity).__name__)
        return Result.success(entity)

    def get(self, model: type[T], ident: Any) -> T | None:
        self._require_allowed(model)
        return self._session.get(model, ident)

    def find(self, model: type[T], *criteria) -> T | None:
        self._require_allowed(model)
        return self._session.query(model).filter(*criteria).first()

    def query(self, model: type[T], *criteria) -> Query:
        self._require_allowed(model)
        query = self._session.query(model)
        if criteria:
            query = query.filter(*criteria)
        return query

    def get_all(self, model: type[T]) -> list[T]:
        self._require_allowed(model)
        return self._session.query(model).all()

    def update(self, entity: T) -> Result[T]:
        allowed = self.is_allowed(type(entity))
        if not allowed:
            return Result.failure(allowed.message)

        self._session.add(entity)
        saved = self._try_save()
        if not saved:
            return Result.failure(saved.message, saved.exception)
        return Result.success(entity)

    def remove(self, entity: T) -> Result[T]:
        allowed = self.is_allowed(type(entity))
        if not allowed:
            return Result.failure(allowed.message)

        self._session.delete(entity)
        saved = self._try_save()
        if not saved:
            return Result.failure(saved.message, saved.exception)
        return Result.success(entity)

    def delete(self, model: type[T], ident: Any) -> Result[T]:
        allowed = self.is_allowed(model)
        if not allowed:
            return Result.failure(allowed.message)

        entity = self._session.get(model, ident)
        if entity is None:
            return Result.failure(f"{model.__name__} {ident} not found")
        return self.remove(entity)

    # ---------- Batches ----------

    def batch_create(self, entities: Iterable[T]) -> Result[list[T]]:
        return self._batch(entities, self._session.add_all)

    def batch_update(self, entities: Iterable[T]) -> Result[list[T]]:
        return self._batch(entities, self._session.add_all)

    def batch_delete(self, entities: Iterable[T]) -> Result[list[T]]:
        def delete_all(items: list[T]) -> None:
            for item in items:
                self._session.delete(item)

        return self._batch(entities, delete_all)

    def _batch(self, entities: Iterable[T], apply) -> Result[list[T]]:
        items = list(entities)
        if not items:
            return Result.success([])

        for model in {type(item) for item in items}:
            allowed = self.is_allowed(model)
            if not allowed:
                return Result.failure(allowed.message)

        apply(items)
        saved = self._try_save()
        if not saved:
            return Result.failure(saved.message, saved.exception)
        return Result.success(items)

    # ---------- Deferred saves ----------

    @contextmanager
    def deferred_save(self) -> Iterator["DataAccessor"]:
        """Run several operations and commit them once at the end of the block."""
        original_auto_save = self._config.auto_save
        self._config = replace(self._config, auto_save=False)
        self._deferred_scope_count += 1
        try:
            yield self
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        finally:
            self._deferred_scope_count -= 1
            self._config = replace(self._config, auto_save=original_auto_save)

    # ---------- Save helpers ----------

    def _should_save(self) -> bool:
        if not self._config.auto_save:
            return False
        return not (self._config.deferred_save_scoped and self._deferred_scope_count > 0)

    def _try_save(self) -> Result[None]:
        if not self._should_save():
            return Result.success()
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.error("Failed to save changes: {error}", error=exc)
            return Result.failure("Failed to save changes", exc)
        return Result.success()

    def save_changes(self) -> None:
        self._session.commit()

    def flush(self) -> None:
        self._session.flush()

    def refresh(self, entity: T) -> T:
        self._session.refresh(entity)
        return entity

    # ---------- Lifetime ----------

    def close(self) -> Result[None]:
        result: Result[None] = Result.success()
        if self._config.deferred_save_on_close:
            # Bypasses auto_save: closing is the save point
            try:
                self._session.commit()
            except SQLAlchemyError as exc:
                self._session.rollback()
                logger.error("Failed to save changes on close: {error}", error=exc)
                result = Result.failure("Failed to save changes", exc)
        self._session.close()
        return result

    def __enter__(self) -> "DataAccessor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self._session.rollback()
            self._session.close()
            return
        self.close()
