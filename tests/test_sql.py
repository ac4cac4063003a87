"""
Unit tests for the SQL fragment builders.

Tests cover:
- Partial update SET clauses
- Job search WHERE clauses for every filter combination
- Company search WHERE clauses
"""

import itertools

import pytest

from jobboard.core.errors import ValidationError
from jobboard.crud.sql import (
    column_for,
    sql_for_company_filters,
    sql_for_job_filters,
    sql_for_partial_update,
)


class TestColumnFor:
    """Tests for field name -> column name lookup"""

    def test_mapped_key(self):
        assert column_for("companyHandle", {"companyHandle": "company_handle"}) == "company_handle"

    def test_unmapped_key_falls_back_to_itself(self):
        assert column_for("title", {"companyHandle": "company_handle"}) == "title"

    def test_no_table(self):
        assert column_for("salary") == "salary"


class TestPartialUpdate:
    """Tests for sql_for_partial_update"""

    def test_single_field(self):
        result = sql_for_partial_update({"title": "new"}, {"title": "title"})

        assert result.clause == '"title"=$1'
        assert result.values == ["new"]

    def test_translates_and_falls_back(self):
        result = sql_for_partial_update(
            {"firstName": "Aliya", "age": 32},
            {"firstName": "first_name"},
        )

        assert result.clause == '"first_name"=$1, "age"=$2'
        assert result.values == ["Aliya", 32]

    def test_values_follow_iteration_order(self):
        data = {"companyHandle": "c2", "salary": None, "equity": "0.5", "title": "t"}
        set_cols, values = sql_for_partial_update(data, {"companyHandle": "company_handle"})

        assert set_cols == '"company_handle"=$1, "salary"=$2, "equity"=$3, "title"=$4'
        assert values == ["c2", None, "0.5", "t"]
        assert set_cols.count("$") == len(data)

    def test_is_deterministic(self):
        data = {"title": "t", "salary": 1}
        table = {"title": "title"}

        assert sql_for_partial_update(data, table) == sql_for_partial_update(data, table)

    def test_empty_data_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            sql_for_partial_update({}, {"title": "title"})

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "No data"


class TestJobFilters:
    """Tests for sql_for_job_filters"""

    def test_no_filters(self):
        result = sql_for_job_filters({})

        assert result.where == ""
        assert result.values == []
        assert result.order_by == "ORDER BY title"

    def test_none_filters(self):
        assert sql_for_job_filters(None).where == ""

    def test_all_filters(self):
        result = sql_for_job_filters({"title": "j", "minSalary": 1500, "hasEquity": True})

        assert result.where == "WHERE title ILIKE $1 AND salary >= $2 AND equity > 0"
        assert result.values == ["%j%", 1500]

    def test_title_and_equity_without_min_salary(self):
        result = sql_for_job_filters({"title": "eng", "hasEquity": True})

        assert result.where == "WHERE title ILIKE $1 AND equity > 0"
        assert result.values == ["%eng%"]

    def test_min_salary_alone_is_first_parameter(self):
        result = sql_for_job_filters({"minSalary": 10})

        assert result.where == "WHERE salary >= $1"
        assert result.values == [10]

    def test_has_equity_false_adds_nothing(self):
        assert sql_for_job_filters({"hasEquity": False}) == sql_for_job_filters({})

    def test_none_values_count_as_absent(self):
        result = sql_for_job_filters({"title": None, "minSalary": None, "hasEquity": None})

        assert result.where == ""
        assert result.values == []

    def test_filters_are_passed_through_unmodified(self):
        result = sql_for_job_filters({"minSalary": 0})

        assert result.where == "WHERE salary >= $1"
        assert result.values == [0]

    @pytest.mark.parametrize(
        "present",
        [
            subset
            for size in range(4)
            for subset in itertools.combinations(["title", "minSalary", "hasEquity"], size)
        ],
    )
    def test_every_combination_keeps_fixed_order(self, present):
        sample = {"title": "j", "minSalary": 100, "hasEquity": True}
        clauses = {
            "title": "title ILIKE $",
            "minSalary": "salary >= $",
            "hasEquity": "equity > 0",
        }

        result = sql_for_job_filters({key: sample[key] for key in present})

        if not present:
            assert result.where == ""
            return

        parts = result.where[len("WHERE "):].split(" AND ")
        assert len(parts) == len(present)
        for part, key in zip(parts, present):
            assert part.startswith(clauses[key])
        assert len(result.values) == len([key for key in present if key != "hasEquity"])


class TestCompanyFilters:
    """Tests for sql_for_company_filters"""

    def test_all_filters(self):
        result = sql_for_company_filters({"nameLike": "net", "minEmployees": 2, "maxEmployees": 10})

        assert result.where == "WHERE name ILIKE $1 AND num_employees >= $2 AND num_employees <= $3"
        assert result.values == ["%net%", 2, 10]
        assert result.order_by == "ORDER BY name"

    def test_max_only(self):
        result = sql_for_company_filters({"maxEmployees": 5})

        assert result.where == "WHERE num_employees <= $1"
        assert result.values == [5]

    def test_min_greater_than_max_raises(self):
        with pytest.raises(ValidationError):
            sql_for_company_filters({"minEmployees": 10, "maxEmployees": 2})
