"""
Base repository class providing common database operations.

This class is a reusable foundation for repositories that talk to the
database through SQLAlchemy's async sessions. Model-specific repositories
inherit the generic create/read/update/count helpers and add their own
queries on top.

Repositories only `flush()`. Deciding when a group of writes becomes durable
(`commit()`) belongs to the service layer.
"""
from chatprompt.exceptions.base import (
    RepositoryError,
    DuplicateError,
    NotFoundError,
    InvalidFieldError
)

from chatprompt.exceptions.mapper import db_error_handler
from chatprompt.validators.model_validators import (
    find_unknown_model_kwargs,
    get_required_columns,
    find_unique_conflicts,
)

import time
from typing import TypeVar, Generic, Type, Any
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func
from sqlalchemy.exc import IntegrityError
import logging

from chatprompt.database.base import Base

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: The SQLAlchemy model class (e.g. Prompt, not Prompt())
            db: The async database session, shared by every repository used
                within one service call
        """
        self.model = model
        self.db = db

    # =================================================================================================================
    # Create Operations
    # =================================================================================================================

    async def create(self, **kwargs) -> ModelType:
        """
        Create an entity with validation + DB write. Logging:
        - DEBUG: start event with model name and provided keys (not values).
        - INFO: expected domain errors (invalid fields, missing required, duplicate).
        - INFO: success event with created id and duration_ms.
        - EXCEPTION: unexpected errors with stack trace.
        """
        logger.debug(
            "repo.create.start",
            extra={
                "model": self.model.__name__,
                "operation": "create",
                # keys only: message content never goes to the logs
                "provided_keys": sorted(kwargs.keys()),
            },
        )

        # 1) unknown fields check
        unknown = find_unknown_model_kwargs(self.model, kwargs)
        if unknown:
            logger.info(
                "repo.create.invalid_fields",
                extra={"model": self.model.__name__, "operation": "create", "invalid_fields": sorted(unknown)},
            )
            raise InvalidFieldError(f"Unknown field(s) for {self.model.__name__}: {', '.join(unknown)}", fields=unknown)

        # 2) required fields check (detect all missing)
        required_cols = get_required_columns(self.model)
        missing = [c for c in required_cols if kwargs.get(c) is None]
        if missing:
            logger.info(
                "repo.create.missing_required",
                extra={"model": self.model.__name__, "operation": "create", "missing_fields": sorted(missing)},
            )
            raise RepositoryError(f"Missing required field(s): {', '.join(missing)} for {self.model.__name__}", fields=missing)

        # 3) pre-check unique conflicts (best-effort)
        conflicts = await find_unique_conflicts(self.db, self.model, kwargs)
        if conflicts:
            logger.info(
                "repo.create.duplicate_precheck",
                extra={"model": self.model.__name__, "operation": "create", "conflict_fields": sorted(conflicts)},
            )
            raise DuplicateError(
                f"{self.model.__name__} already exists for field(s): {', '.join(sorted(conflicts))}",
                fields=sorted(conflicts),
            )

        # 4) Actual DB write with fallback mapping on integrity errors
        start = time.perf_counter()

        async with db_error_handler(self.db, self.model.__name__):
            entity = self.model(**kwargs)
            self.db.add(entity)
            # flush() sends the INSERT so DB-generated values exist; refresh() loads them
            await self.db.flush()
            await self.db.refresh(entity)

            logger.info(
                "repo.create.success",
                extra={
                    "model": self.model.__name__,
                    "operation": "create",
                    "id": getattr(entity, "id", None),
                    "duration_ms": int((time.perf_counter() - start) * 1000),
                },
            )

            return entity

    # =================================================================================================================
    # Read Operations (Single Entity)
    # =================================================================================================================

    async def get_by_id(self, entity_id: Any) -> ModelType | None:
        """
        Get an entity by its ID.

        Returns:
            The entity if found, otherwise None

        Raises:
            RepositoryError: If an error occurs during retrieval.
        """
        try:
            result = await self.db.execute(
                select(self.model).where(self.model.id == entity_id)
            )
            entity = result.scalar_one_or_none()
            logger.debug(f"Retrieved {self.model.__name__} by ID: {entity_id}")
            return entity

        except Exception as e:
            logger.error(f"Error retrieving {self.model.__name__} by ID {entity_id}: {e}")
            raise RepositoryError(f"Failed to retrieve {self.model.__name__}") from e

    async def get_by_id_or_raise(self, entity_id: Any) -> ModelType:
        """
        Get an entity by its ID or raise NotFoundError.

        Lets service code fail fast instead of sprinkling `if x is None` checks.
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.model.__name__} with ID {entity_id} not found")
        return entity

    async def find_by_field(self, field: str, value: Any) -> ModelType | None:
        """
        Find a single entity by any mapped field.

        Raises:
            InvalidFieldError: If the field does not exist on the model
            RepositoryError: If the query fails
        """
        if not hasattr(self.model, field):
            raise InvalidFieldError(f"{self.model.__name__} has no field '{field}'", fields=[field])

        try:
            query = select(self.model).where(getattr(self.model, field) == value).limit(1)
            result = await self.db.execute(query)
            entity = result.scalars().first()
            logger.debug(f"Found {self.model.__name__} by {field}: {value}")
            return entity

        except Exception as e:
            logger.error(f"Error finding {self.model.__name__} by {field}={value}: {e}")
            raise RepositoryError(f"Failed to find {self.model.__name__}") from e

    # =================================================================================================================
    # Update Operations
    # =================================================================================================================

    async def update(self, entity_id: Any, **kwargs) -> ModelType | None:
        """
        Update an entity by its ID.

        `None` values are dropped so partial updates never null out columns;
        `False` and `0` are real values and are kept.

        Returns:
            The updated entity if found, None otherwise

        Raises:
            InvalidFieldError: If a key is not a mapped attribute
            DuplicateError: If update would violate unique constraints
            RepositoryError: For other database errors
        """
        unknown = find_unknown_model_kwargs(self.model, kwargs)
        if unknown:
            raise InvalidFieldError(f"Unknown field(s) for {self.model.__name__}: {', '.join(unknown)}", fields=unknown)

        update_data = {k: v for k, v in kwargs.items() if v is not None}
        if not update_data:
            logger.warning(f"No valid data provided for updating {self.model.__name__}")
            return await self.get_by_id(entity_id)

        if hasattr(self.model, "updated_at"):
            update_data["updated_at"] = func.now()

        try:
            stmt = (
                update(self.model)
                .where(self.model.id == entity_id)
                .values(**update_data)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)

            if result.rowcount == 0:
                logger.warning(f"{self.model.__name__} with ID {entity_id} not found for update")
                return None

            # populate_existing: overwrite any stale copy held in the identity map
            refreshed = await self.db.execute(
                select(self.model)
                .where(self.model.id == entity_id)
                .execution_options(populate_existing=True)
            )
            logger.debug(f"Updated {self.model.__name__} with ID: {entity_id}")
            return refreshed.scalar_one()

        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"Integrity error updating {self.model.__name__}: {e}")
            raise DuplicateError("Update would violate unique constraints") from e

        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error updating {self.model.__name__} {entity_id}: {e}")
            raise RepositoryError(f"Failed to update {self.model.__name__}") from e

    # =================================================================================================================
    # Validation / Existence Checks
    # =================================================================================================================

    async def exists(self, entity_id: Any) -> bool:
        """
        Check if an entity exists by its ID (selects the id column only).
        """
        try:
            result = await self.db.execute(select(self.model.id).where(self.model.id == entity_id))
            exists = result.scalar() is not None
            logger.debug(f"{self.model.__name__} with ID {entity_id} exists: {exists}")
            return exists

        except Exception as e:
            logger.error(f"Error checking existence of {self.model.__name__} {entity_id}: {e}")
            raise RepositoryError(f"Failed to check {self.model.__name__} existence") from e

    # =================================================================================================================
    # Aggregation / Count Operations
    # =================================================================================================================

    async def count(self, **filters: Any) -> int:
        """
        Count entities with optional equality filters, e.g. count(prompt_id=pid).

        Unknown fields raise InvalidFieldError rather than being skipped, so a
        typo cannot silently count the whole table.
        """
        unknown = [f for f in filters if not hasattr(self.model, f)]
        if unknown:
            raise InvalidFieldError(f"Unknown filter field(s) for {self.model.__name__}: {', '.join(unknown)}", fields=unknown)

        try:
            query = select(func.count(self.model.id))
            for field, value in filters.items():
                query = query.where(getattr(self.model, field) == value)

            result = await self.db.execute(query)
            count = result.scalar() or 0
            logger.debug(f"Counted {count} {self.model.__name__} entities")
            return count

        except Exception as e:
            logger.error(f"Error counting {self.model.__name__}: {e}")
            raise RepositoryError(f"Failed to count {self.model.__name__} entities") from e


# BaseRepository Method Summary
# | Method Name                   | Returns                    | Notes                                                   |
# | ----------------------------- | -------------------------- | ------------------------------------------------------- |
# | `create(**kwargs)`            | created model instance     | validates keys/required/unique, flush + refresh          |
# | `get_by_id(entity_id)`        | instance or `None`         |                                                          |
# | `get_by_id_or_raise(id)`      | instance                   | raises `NotFoundError`                                   |
# | `find_by_field(field, value)` | instance or `None`         | first match; unknown field -> `InvalidFieldError`        |
# | `update(id, **kwargs)`        | updated instance or `None` | drops `None` values, bumps `updated_at` when present     |
# | `exists(entity_id)`           | `bool`                     | selects the id column only                               |
# | `count(**filters)`            | `int`                      | equality filters                                         |
