"""
dao/statements.py
-----------------
Builds the parameterized SQL text used by EntityDAO.

Every function here is pure: it only formats table and column names
(validated identifiers) and ``%s`` placeholders for psycopg2.
"""

from typing import Any, Sequence

from dao.table import Filter, TableAttr, check_identifier


def _columns(attrs: Sequence[TableAttr]) -> str:
    return ", ".join(attr.name for attr in attrs)


def insert_statement(table_name: str, attrs: Sequence[TableAttr], id_attr: TableAttr) -> str:
    """INSERT naming every non-identity column, one placeholder each."""
    data_attrs = [attr for attr in attrs if attr.name != id_attr.name]
    placeholders = ", ".join(["%s"] * len(data_attrs))
    return (
        f"INSERT INTO {check_identifier(table_name)} ({_columns(data_attrs)}) "
        f"VALUES ({placeholders})"
    )


def delete_by_id_statement(table_name: str, id_attr: TableAttr) -> str:
    return f"DELETE FROM {check_identifier(table_name)} WHERE {id_attr.name} = %s"


def select_by_filter_statement(table_name: str, attrs: Sequence[TableAttr], filter: Filter) -> str:
    """
    SELECT every column in table order, restricted by the filter predicates.

    An empty filter selects the whole table.
    """
    sql = f"SELECT {_columns(attrs)} FROM {check_identifier(table_name)}"
    conditions = []
    for name, value in filter:
        check_identifier(name)
        conditions.append(f"{name} IS NULL" if value is None else f"{name} = %s")
    if conditions:
        sql += " WHERE " + " AND ".join(conditions)
    return sql


def filter_parameters(filter: Filter) -> list[Any]:
    """Values to bind for `select_by_filter_statement`, in filter order."""
    return [value for _, value in filter if value is not None]


def update_by_id_statement(
    table_name: str,
    attrs: Sequence[TableAttr],
    null_mask: Sequence[bool],
    id_attr: TableAttr,
) -> str:
    """
    UPDATE only the columns whose mask entry is False (value present).

    The identity column is never set; it is the last placeholder, in WHERE.

    Raises:
        ValueError: If the mask length differs from the attribute count or
            no column is left to update.
    """
    if len(null_mask) != len(attrs):
        raise ValueError(f"Null mask has {len(null_mask)} entries for {len(attrs)} attributes")
    assignments = [
        f"{attr.name} = %s"
        for attr, is_null in zip(attrs, null_mask)
        if not is_null and attr.name != id_attr.name
    ]
    if not assignments:
        raise ValueError(f"Nothing to update in table '{table_name}'")
    return (
        f"UPDATE {check_identifier(table_name)} SET {', '.join(assignments)} "
        f"WHERE {id_attr.name} = %s"
    )
