"""Chart validation module for validating chart configuration snapshots"""

from typing import Dict, List, Optional, Tuple
from chartdesk.utils.custom_logger import CustomLogger

logger = CustomLogger("chartdesk.charts.validator")


class ChartConfigValidationError(Exception):
    """Custom exception for chart configuration errors"""

    pass


class ChartValidator:
    """Validates the configuration snapshot saved with every chart version"""

    # Valid visualization types
    VALID_CHART_TYPES = ["cartesian", "table", "big_number", "pie", "funnel", "custom"]

    # Cartesian sub-types
    VALID_CARTESIAN_SERIES_TYPES = ["bar", "line", "area", "scatter"]

    # Upper bound on rows a saved query may request
    MAX_QUERY_LIMIT = 5000

    @staticmethod
    def validate_chart_version(
        table_name: str,
        metric_query: Dict,
        chart_config: Dict,
        table_config: Optional[Dict] = None,
        pivot_config: Optional[Dict] = None,
    ) -> Tuple[bool, Optional[str]]:
        """
        Validate a configuration snapshot before it is written

        Returns:
            Tuple of (is_valid, error_message)
        """
        try:
            if not table_name or not isinstance(table_name, str):
                raise ChartConfigValidationError("Table name is required")

            selected_fields = ChartValidator._validate_metric_query(metric_query)
            ChartValidator._validate_chart_config(chart_config)
            ChartValidator._validate_table_config(table_config)
            ChartValidator._validate_pivot_config(pivot_config, selected_fields)

            return True, None

        except ChartConfigValidationError as e:
            logger.warning(f"Chart validation failed: {str(e)}")
            return False, str(e)

    @staticmethod
    def _validate_field_list(value, name: str) -> List[str]:
        """a list of non-empty field ids"""
        if value is None:
            return []
        if not isinstance(value, list):
            raise ChartConfigValidationError(f"{name} must be a list")
        for i, field_id in enumerate(value):
            if not isinstance(field_id, str) or not field_id:
                raise ChartConfigValidationError(f"{name} entry {i+1} must be a field id")
        return value

    @staticmethod
    def _validate_metric_query(metric_query: Dict) -> List[str]:
        """Validate the query definition; returns every field id it selects"""
        if not isinstance(metric_query, dict):
            raise ChartConfigValidationError("Metric query is required")

        dimensions = ChartValidator._validate_field_list(
            metric_query.get("dimensions"), "Dimensions"
        )
        metrics = ChartValidator._validate_field_list(metric_query.get("metrics"), "Metrics")

        table_calculations = metric_query.get("tableCalculations") or []
        if not isinstance(table_calculations, list):
            raise ChartConfigValidationError("Table calculations must be a list")
        calculation_names = []
        for i, calculation in enumerate(table_calculations):
            if not isinstance(calculation, dict) or not calculation.get("name"):
                raise ChartConfigValidationError(f"Table calculation {i+1} requires a name")
            if not calculation.get("sql"):
                raise ChartConfigValidationError(
                    f"Table calculation '{calculation['name']}' requires sql"
                )
            calculation_names.append(calculation["name"])

        selected_fields = dimensions + metrics + calculation_names
        if not dimensions and not metrics:
            raise ChartConfigValidationError(
                "Metric query requires at least one dimension or metric"
            )

        filters = metric_query.get("filters", {})
        if filters is not None and not isinstance(filters, dict):
            raise ChartConfigValidationError("Filters must be an object")

        sorts = metric_query.get("sorts") or []
        if not isinstance(sorts, list):
            raise ChartConfigValidationError("Sorts must be a list")
        for i, sort in enumerate(sorts):
            if not isinstance(sort, dict) or not sort.get("fieldId"):
                raise ChartConfigValidationError(f"Sort {i+1} requires a fieldId")
            if sort["fieldId"] not in selected_fields:
                raise ChartConfigValidationError(
                    f"Sort field '{sort['fieldId']}' is not part of the query"
                )

        limit = metric_query.get("limit")
        if limit is None:
            raise ChartConfigValidationError("Metric query requires a limit")
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ChartConfigValidationError("Limit must be a positive integer")
        if limit > ChartValidator.MAX_QUERY_LIMIT:
            raise ChartConfigValidationError(
                f"Limit cannot exceed {ChartValidator.MAX_QUERY_LIMIT} rows"
            )

        return selected_fields

    @staticmethod
    def _validate_chart_config(chart_config: Dict) -> None:
        """Validate visualization settings"""
        if not isinstance(chart_config, dict):
            raise ChartConfigValidationError("Chart config is required")

        chart_type = chart_config.get("type")
        if not chart_type:
            raise ChartConfigValidationError("Chart type is required")

        if chart_type not in ChartValidator.VALID_CHART_TYPES:
            raise ChartConfigValidationError(
                f"Invalid chart type '{chart_type}'. Must be one of: {', '.join(ChartValidator.VALID_CHART_TYPES)}"
            )

        config = chart_config.get("config")
        if config is not None and not isinstance(config, dict):
            raise ChartConfigValidationError("Chart config settings must be an object")

        if chart_type == "cartesian" and config:
            for i, series in enumerate(config.get("series") or []):
                series_type = series.get("type") if isinstance(series, dict) else None
                if series_type not in ChartValidator.VALID_CARTESIAN_SERIES_TYPES:
                    raise ChartConfigValidationError(
                        f"Series {i+1} has invalid type '{series_type}'. Must be one of: {', '.join(ChartValidator.VALID_CARTESIAN_SERIES_TYPES)}"
                    )

    @staticmethod
    def _validate_table_config(table_config: Optional[Dict]) -> None:
        """Validate results-table settings"""
        if table_config is None:
            return
        if not isinstance(table_config, dict):
            raise ChartConfigValidationError("Table config must be an object")
        ChartValidator._validate_field_list(table_config.get("columnOrder"), "Column order")

    @staticmethod
    def _validate_pivot_config(pivot_config: Optional[Dict], selected_fields: List[str]) -> None:
        """Pivot columns must be fields the query selects"""
        if pivot_config is None:
            return
        if not isinstance(pivot_config, dict):
            raise ChartConfigValidationError("Pivot config must be an object")
        columns = ChartValidator._validate_field_list(pivot_config.get("columns"), "Pivot columns")
        for column in columns:
            if column not in selected_fields:
                raise ChartConfigValidationError(f"Pivot column '{column}' is not part of the query")
