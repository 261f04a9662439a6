"""
dao/entity_dao.py
-----------------
Generic data access object mapping one entity type onto one table.

EntityDAO owns the SQL orchestration (batching, transactions, error
translation). Everything entity-specific goes through an EntityMapper.
Every operation acquires its own connection from the pool and always
releases it; transactions are explicit and last one operation.
"""

import warnings
from typing import Generic, Iterable, Optional, Sequence

import psycopg2
from psycopg2.extras import execute_batch

from dao.exceptions import (
    EntityMappingError,
    InternalDAOError,
    InvalidEntityError,
    InvalidRequestError,
    entity_doesnt_contain_id_message,
    entity_rejected_for_insert_message,
    filter_doesnt_match_table_message,
)
from dao.mapper import EntityMapper, T
from dao.statements import (
    delete_by_id_statement,
    filter_parameters,
    insert_statement,
    select_by_filter_statement,
    update_by_id_statement,
)
from dao.table import Filter, TableAttr, check_identifier, validate_filter
from db.connection import ConnectionPool, get_pool
from utils.logger import get_logger

logger = get_logger(__name__)


class EntityDAO(Generic[T]):
    """Batch insert, filtered read, sparse update and delete over a single table."""

    def __init__(
        self,
        table_name: str,
        table_attributes: Sequence[TableAttr],
        id_attr: TableAttr,
        mapper: EntityMapper[T],
        pool: Optional[ConnectionPool] = None,
    ):
        """
        Args:
            table_name: Table holding the entities.
            table_attributes: Column descriptors in binding order.
            id_attr: The identity column; must be one of `table_attributes`.
            mapper: Entity-specific hooks.
            pool: Connection pool; the process-wide pool when omitted.

        Raises:
            ValueError: If the schema description is inconsistent.
            RuntimeError: If no pool is given and none was initialized.
        """
        check_identifier(table_name)
        attributes = tuple(table_attributes)
        names = [attr.name for attr in attributes]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate attribute names for table '{table_name}': {names}")
        if id_attr.name not in names:
            raise ValueError(f"Identity attribute '{id_attr.name}' is not a column of '{table_name}'")

        self._table_name = table_name
        self._table_attributes = attributes
        self._id_attr = id_attr
        self._mapper = mapper
        self._insert_sql = insert_statement(table_name, attributes, id_attr)
        self._delete_by_id_sql = delete_by_id_statement(table_name, id_attr)
        self._pool = pool if pool is not None else get_pool()

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def table_attributes(self) -> tuple[TableAttr, ...]:
        return self._table_attributes

    @property
    def id_attr(self) -> TableAttr:
        return self._id_attr

    # ── CREATE ────────────────────────────────────────────

    def add(self, entities: Iterable[T]) -> None:
        """
        Insert entities as one batch.

        Every entity is validated before anything is sent; ids are cleared so
        that the database assigns them.

        Raises:
            InvalidEntityError: If any entity fails insert validation.
            InternalDAOError: If the database rejects the batch.
        """
        entities = list(entities)
        if not entities:
            return
        for entity in entities:
            if not self._mapper.validate_for_insert(entity):
                message = entity_rejected_for_insert_message(self._table_name, entity)
                logger.warning(message)
                raise InvalidEntityError(entity, message)

        params_list = []
        for entity in entities:
            entity.id = None
            params_list.append(self._mapper.bind_attributes(entity, skip_identity=True))

        try:
            with self._pool.connection() as conn:
                self._execute_batches(conn, [(self._insert_sql, params_list)])
        except psycopg2.Error as e:
            logger.error(f"Failed to add {len(entities)} row(s) to {self._table_name}: {e}")
            raise InternalDAOError(e) from e
        logger.info(f"Added {len(entities)} row(s) to {self._table_name}")

    # ── READ ──────────────────────────────────────────────

    def get_by_filter(self, filter: Filter) -> list[T]:
        """
        Fetch every row matching all filter predicates.

        Returns:
            Entities in the order the database returned the rows.

        Raises:
            InvalidRequestError: If the filter names a column this table lacks.
            InternalDAOError: If the query fails.
            EntityMappingError: If a row cannot be turned into an entity.
        """
        if not self.validate_filter(filter):
            raise InvalidRequestError(filter_doesnt_match_table_message(self._table_name, filter))

        sql = select_by_filter_statement(self._table_name, self._table_attributes, filter)
        params = filter_parameters(filter)
        try:
            with self._pool.connection() as conn:
                with conn.cursor() as cur:
                    logger.debug(f"Executing: {sql} {params}")
                    cur.execute(sql, params)
                    rows = cur.fetchall()
            return [self._mapper.materialize(row) for row in rows]
        except psycopg2.Error as e:
            logger.error(f"Failed to read {self._table_name} by {filter!r}: {e}")
            raise InternalDAOError(e) from e

    def get_by_id(self, entity_id: int) -> Optional[T]:
        """Fetch a single entity by its identity, or None if absent."""
        found = self.get_by_filter(Filter().add(self._id_attr, entity_id))
        return found[0] if found else None

    # ── UPDATE ────────────────────────────────────────────

    def update(self, entities: Iterable[T]) -> None:
        """
        Write the present (non-None) attributes of each entity.

        Entities without any present data attribute are skipped. If nothing
        is left to write, no statement is sent and nothing is committed.

        Raises:
            InvalidEntityError: If an entity has no id; nothing is written.
            InternalDAOError: If the database rejects an update; the
                transaction is rolled back.
        """
        entities = list(entities)
        if not entities:
            return
        try:
            with self._pool.connection() as conn:
                self._require_ids(conn, entities)
                batches = []
                for entity in entities:
                    statement = self._sparse_update(entity)
                    if statement is None:
                        logger.debug(f"Nothing to update for {entity!r}")
                        continue
                    sql, params = statement
                    if batches and batches[-1][0] == sql:
                        batches[-1][1].append(params)
                    else:
                        batches.append((sql, [params]))
                if not batches:
                    return
                self._execute_batches(conn, batches)
        except psycopg2.Error as e:
            logger.error(f"Failed to update {self._table_name}: {e}")
            raise InternalDAOError(e) from e
        logger.info(f"Updated {sum(len(p) for _, p in batches)} row(s) in {self._table_name}")

    def _sparse_update(self, entity: T) -> Optional[tuple[str, list]]:
        """UPDATE text and parameters for the present attributes of `entity`, or None."""
        mask = self._mapper.null_attribute_mask(entity)
        if len(mask) != len(self._table_attributes):
            raise EntityMappingError(
                f"Null mask of {entity!r} has {len(mask)} entries, "
                f"table '{self._table_name}' has {len(self._table_attributes)} attributes"
            )
        data_mask = [
            is_null
            for attr, is_null in zip(self._table_attributes, mask)
            if attr.name != self._id_attr.name
        ]
        if all(data_mask):
            return None

        sql = update_by_id_statement(self._table_name, self._table_attributes, mask, self._id_attr)
        values = self._mapper.bind_attributes(entity, skip_identity=True)
        params = [value for value, is_null in zip(values, data_mask) if not is_null]
        params.append(entity.id)
        return sql, params

    # ── DELETE ────────────────────────────────────────────

    def delete_cascade(self, entities: Iterable[T]) -> None:
        """
        Delete entities by id.

        Dependent rows go away through the schema's ON DELETE actions; this
        method only touches its own table.

        .. deprecated::
            Kept for existing callers.

        Raises:
            InvalidEntityError: If an entity has no id; nothing is deleted.
            InternalDAOError: If the delete fails.
        """
        warnings.warn(
            "EntityDAO.delete_cascade relies on schema cascades and is kept for existing callers",
            DeprecationWarning,
            stacklevel=2,
        )
        entities = list(entities)
        if not entities:
            return
        try:
            with self._pool.connection() as conn:
                self._require_ids(conn, entities)
                params_list = [[entity.id] for entity in entities]
                self._execute_batches(conn, [(self._delete_by_id_sql, params_list)])
        except psycopg2.Error as e:
            logger.error(f"Failed to delete from {self._table_name}: {e}")
            raise InternalDAOError(e) from e
        logger.info(f"Deleted {len(entities)} row(s) from {self._table_name}")

    # ── HELPERS ───────────────────────────────────────────

    def validate_filter(self, filter: Filter, allowable_attributes: Optional[Sequence[TableAttr]] = None) -> bool:
        """True if every filter attribute is allowed (this table's columns by default)."""
        if allowable_attributes is None:
            allowable_attributes = self._table_attributes
        return validate_filter(filter, allowable_attributes)

    def _require_ids(self, conn, entities: list[T]) -> None:
        for entity in entities:
            if entity.id is None:
                self._rollback(conn)
                raise InvalidEntityError(entity, entity_doesnt_contain_id_message(entity))

    def _execute_batches(self, conn, batches: list[tuple[str, list]]) -> None:
        """Run each (sql, parameter sets) batch in order, then commit; roll back on failure."""
        try:
            with conn.cursor() as cur:
                for sql, params_list in batches:
                    logger.debug(f"Executing: {sql} x{len(params_list)}")
                    execute_batch(cur, sql, params_list)
            conn.commit()
        except psycopg2.Error:
            self._rollback(conn)
            raise

    @staticmethod
    def _rollback(conn) -> None:
        try:
            conn.rollback()
        except psycopg2.Error:
            logger.warning("Rollback failed", exc_info=True)
