"""Test cases for chart validator"""

import pytest
from chartdesk.core.charts.chart_validator import ChartValidator


def snapshot(**overrides):
    """a valid bar chart configuration"""
    values = {
        "table_name": "orders",
        "metric_query": {
            "dimensions": ["orders_created_date"],
            "metrics": ["orders_total_revenue"],
            "filters": {},
            "sorts": [{"fieldId": "orders_created_date", "descending": False}],
            "limit": 500,
            "tableCalculations": [],
        },
        "chart_config": {"type": "cartesian", "config": {"series": [{"type": "bar"}]}},
        "table_config": {"columnOrder": ["orders_created_date", "orders_total_revenue"]},
        "pivot_config": None,
    }
    values.update(overrides)
    return values


def metric_query(**overrides):
    query = snapshot()["metric_query"]
    query.update(overrides)
    return query


class TestChartValidator:
    """Test configuration snapshot validation"""

    def test_valid_cartesian_chart(self):
        is_valid, error = ChartValidator.validate_chart_version(**snapshot())
        assert is_valid is True
        assert error is None

    @pytest.mark.parametrize("chart_type", ChartValidator.VALID_CHART_TYPES)
    def test_every_chart_type_is_accepted(self, chart_type):
        is_valid, _ = ChartValidator.validate_chart_version(
            **snapshot(chart_config={"type": chart_type})
        )
        assert is_valid is True

    def test_missing_table_name(self):
        is_valid, error = ChartValidator.validate_chart_version(**snapshot(table_name=""))
        assert is_valid is False
        assert error == "Table name is required"

    def test_no_fields_selected(self):
        is_valid, error = ChartValidator.validate_chart_version(
            **snapshot(metric_query=metric_query(dimensions=[], metrics=[], sorts=[]))
        )
        assert is_valid is False
        assert "at least one dimension or metric" in error

    def test_dimensions_not_a_list(self):
        is_valid, error = ChartValidator.validate_chart_version(
            **snapshot(metric_query=metric_query(dimensions="orders_created_date"))
        )
        assert is_valid is False
        assert error == "Dimensions must be a list"

    def test_table_calculation_requires_sql(self):
        is_valid, error = ChartValidator.validate_chart_version(
            **snapshot(metric_query=metric_query(tableCalculations=[{"name": "growth"}]))
        )
        assert is_valid is False
        assert "requires sql" in error

    def test_table_calculation_can_be_sorted_on(self):
        is_valid, _ = ChartValidator.validate_chart_version(
            **snapshot(
                metric_query=metric_query(
                    tableCalculations=[{"name": "growth", "sql": "${orders_total_revenue} * 2"}],
                    sorts=[{"fieldId": "growth"}],
                )
            )
        )
        assert is_valid is True

    def test_filters_must_be_object(self):
        is_valid, error = ChartValidator.validate_chart_version(
            **snapshot(metric_query=metric_query(filters=[]))
        )
        assert is_valid is False
        assert error == "Filters must be an object"

    def test_sort_on_unselected_field(self):
        is_valid, error = ChartValidator.validate_chart_version(
            **snapshot(metric_query=metric_query(sorts=[{"fieldId": "customers_name"}]))
        )
        assert is_valid is False
        assert "not part of the query" in error

    @pytest.mark.parametrize("limit", [None, 0, -5, "500", True, 5001])
    def test_bad_limits(self, limit):
        is_valid, _ = ChartValidator.validate_chart_version(
            **snapshot(metric_query=metric_query(limit=limit))
        )
        assert is_valid is False

    def test_max_limit_is_accepted(self):
        is_valid, _ = ChartValidator.validate_chart_version(
            **snapshot(metric_query=metric_query(limit=ChartValidator.MAX_QUERY_LIMIT))
        )
        assert is_valid is True

    def test_unknown_chart_type(self):
        is_valid, error = ChartValidator.validate_chart_version(
            **snapshot(chart_config={"type": "radar"})
        )
        assert is_valid is False
        assert "Invalid chart type 'radar'" in error

    def test_missing_chart_type(self):
        is_valid, error = ChartValidator.validate_chart_version(**snapshot(chart_config={}))
        assert is_valid is False
        assert error == "Chart type is required"

    def test_unknown_series_type(self):
        is_valid, error = ChartValidator.validate_chart_version(
            **snapshot(chart_config={"type": "cartesian", "config": {"series": [{"type": "pie"}]}})
        )
        assert is_valid is False
        assert "Series 1 has invalid type 'pie'" in error

    def test_column_order_must_be_list(self):
        is_valid, error = ChartValidator.validate_chart_version(
            **snapshot(table_config={"columnOrder": "orders_created_date"})
        )
        assert is_valid is False
        assert error == "Column order must be a list"

    def test_pivot_on_selected_dimension(self):
        is_valid, _ = ChartValidator.validate_chart_version(
            **snapshot(pivot_config={"columns": ["orders_created_date"]})
        )
        assert is_valid is True

    def test_pivot_on_unselected_field(self):
        is_valid, error = ChartValidator.validate_chart_version(
            **snapshot(pivot_config={"columns": ["customers_name"]})
        )
        assert is_valid is False
        assert error == "Pivot column 'customers_name' is not part of the query"
