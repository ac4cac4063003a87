"""
SQL fragment builders shared by the repositories.

Placeholders are positional ($1, $2, ...) and are bound by
jobboard.core.database.run_query.
"""

from typing import Any, List, Mapping, NamedTuple, Optional

from jobboard.core.errors import ValidationError


class SqlFragment(NamedTuple):
    """A SQL clause plus the values for its $n placeholders, in order."""
    clause: str
    values: List[Any]


class SqlQueryParts(NamedTuple):
    """WHERE clause (possibly empty), its bound values and the fixed ORDER BY."""
    where: str
    values: List[Any]
    order_by: str


def column_for(key: str, js_to_sql: Optional[Mapping[str, str]] = None) -> str:
    """Return the column name for an API field name, defaulting to the name itself."""
    if js_to_sql and key in js_to_sql:
        return js_to_sql[key]
    return key


def sql_for_partial_update(data_to_update: Mapping[str, Any], js_to_sql: Optional[Mapping[str, str]] = None) -> SqlFragment:
    """
    Prepare the SET clause of a partial UPDATE.

    Only the supplied fields are assigned, in the mapping's iteration order:

        {"firstName": "Aliya", "age": 32}, {"firstName": "first_name"}
        -> SqlFragment(clause='"first_name"=$1, "age"=$2', values=["Aliya", 32])

    Args:
        data_to_update: API field name -> new value
        js_to_sql: API field name -> column name, for fields whose names differ

    Returns:
        SqlFragment with the comma-joined assignments and their values

    Raises:
        ValidationError: If data_to_update is empty
    """
    keys = list(data_to_update)
    if not keys:
        raise ValidationError("No data")

    cols = [
        f'"{column_for(key, js_to_sql)}"=${idx}'
        for idx, key in enumerate(keys, start=1)
    ]

    return SqlFragment(
        clause=", ".join(cols),
        values=[data_to_update[key] for key in keys],
    )


def _where(conditions: List[str]) -> str:
    if not conditions:
        return ""
    return "WHERE " + " AND ".join(conditions)


def sql_for_job_filters(filters: Optional[Mapping[str, Any]] = None) -> SqlQueryParts:
    """
    Build the WHERE clause for a job search.

    Filters are applied in a fixed order, title -> minSalary -> hasEquity:
    - title: case-insensitive substring match
    - minSalary: inclusive lower bound on salary
    - hasEquity: when true, only jobs with equity > 0 (null equity excluded)

    A filter whose value is None counts as absent. hasEquity=False adds nothing.

    Returns:
        SqlQueryParts; where is "" when no filter applies
    """
    filters = filters or {}
    conditions: List[str] = []
    values: List[Any] = []

    if filters.get("title") is not None:
        values.append(f"%{filters['title']}%")
        conditions.append(f"title ILIKE ${len(values)}")

    if filters.get("minSalary") is not None:
        values.append(filters["minSalary"])
        conditions.append(f"salary >= ${len(values)}")

    if filters.get("hasEquity"):
        conditions.append("equity > 0")

    return SqlQueryParts(where=_where(conditions), values=values, order_by="ORDER BY title")


def sql_for_company_filters(filters: Optional[Mapping[str, Any]] = None) -> SqlQueryParts:
    """
    Build the WHERE clause for a company search.

    Filters: nameLike (case-insensitive substring), minEmployees and
    maxEmployees (inclusive bounds on num_employees).

    Raises:
        ValidationError: If minEmployees > maxEmployees
    """
    filters = filters or {}
    conditions: List[str] = []
    values: List[Any] = []

    min_employees = filters.get("minEmployees")
    max_employees = filters.get("maxEmployees")
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise ValidationError("minEmployees cannot be greater than maxEmployees")

    if filters.get("nameLike") is not None:
        values.append(f"%{filters['nameLike']}%")
        conditions.append(f"name ILIKE ${len(values)}")

    if min_employees is not None:
        values.append(min_employees)
        conditions.append(f"num_employees >= ${len(values)}")

    if max_employees is not None:
        values.append(max_employees)
        conditions.append(f"num_employees <= ${len(values)}")

    return SqlQueryParts(where=_where(conditions), values=values, order_by="ORDER BY name")
