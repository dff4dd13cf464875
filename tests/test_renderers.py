"""
Tests for the component renderers.
"""

from dashboard_builder.components import (
    Aggregation,
    ChangeType,
    ChartConfig,
    ChartType,
    Metric,
    MetricConfig,
    TableConfig,
    TextConfig,
)
from dashboard_builder.data_sources import DataSourceDefinition, StaticDataSourceProvider
from dashboard_builder.renderers import (
    ChartRenderer,
    MetricRenderer,
    TableRenderer,
    TextRenderer,
    aggregate_rows,
)
from dashboard_builder.renderers.metric import format_change, format_value


def test_aggregate_rows_keeps_first_appearance_order():
    rows = [
        {"status": "paid", "amount": 10},
        {"status": "sent", "amount": 5},
        {"status": "paid", "amount": 20},
        {"status": None, "amount": 1},
    ]
    assert aggregate_rows(rows, "status", "amount", Aggregation.COUNT) == (["paid", "sent", "Unknown"], [2, 1, 1])
    assert aggregate_rows(rows, "status", "amount", Aggregation.SUM) == (["paid", "sent", "Unknown"], [30, 5, 1])
    assert aggregate_rows(rows, "status", "amount", Aggregation.AVG)[1] == [15.0, 5.0, 1.0]
    assert aggregate_rows(rows, "status", "amount", Aggregation.MAX)[1] == [20, 5, 1]


def test_bar_chart_counts_organizations_by_status(data_sources):
    body = ChartRenderer().render(ChartConfig(), data_sources)

    assert body["kind"] == "chart"
    assert body["aggregation"] == "count"
    chart = body["chart"]
    assert chart["type"] == "bar"
    assert chart["data"]["labels"] == ["active", "pending", "inactive", "cancelled"]
    assert chart["data"]["datasets"][0]["data"] == [4, 2, 1, 1]


def test_pie_chart_has_slice_colors_and_legend(data_sources):
    body = ChartRenderer().render(ChartConfig(chart_type=ChartType.PIE), data_sources)
    chart = body["chart"]

    assert chart["type"] == "pie"
    dataset = chart["data"]["datasets"][0]
    assert len(dataset["backgroundColor"]) == len(chart["data"]["labels"])
    assert chart["options"]["plugins"]["legend"]["display"] is True
    assert "scales" not in chart["options"]


def test_area_chart_is_filled_line(data_sources):
    chart = ChartRenderer().render(ChartConfig(chart_type=ChartType.AREA), data_sources)["chart"]
    assert chart["type"] == "line"
    assert chart["data"]["datasets"][0]["fill"] is True


def test_chart_sum_uses_value_field(data_sources):
    body = ChartRenderer().render(
        ChartConfig(data_source="invoices", aggregation=Aggregation.SUM), data_sources
    )
    assert body["chart"]["data"]["labels"] == ["paid", "sent", "overdue", "draft"]
    assert body["chart"]["data"]["datasets"][0]["data"] == [12500, 1500, 3500, 1250]


def test_chart_without_value_field_falls_back_to_count(data_sources):
    body = ChartRenderer().render(
        ChartConfig(data_source="profiles", aggregation=Aggregation.SUM), data_sources
    )
    assert body["aggregation"] == "count"
    assert body["chart"]["data"]["labels"] == ["admin", "member", "primary_contact"]
    assert body["chart"]["data"]["datasets"][0]["data"] == [1, 3, 1]


def test_chart_unknown_source_is_empty(data_sources):
    body = ChartRenderer().render(ChartConfig(data_source="nowhere"), data_sources)
    assert body == {"kind": "empty", "message": "No data for 'nowhere'"}


def test_table_projects_columns(data_sources):
    body = TableRenderer().render(TableConfig(columns=["name", "state"]), data_sources)

    assert body["kind"] == "table"
    assert body["columns"] == ["name", "state"]
    assert body["rows"][0] == ["Riverside Community College", "IL"]
    assert body["totalRows"] == 8
    assert body["truncated"] is False


def test_table_missing_column_is_none(data_sources):
    body = TableRenderer().render(TableConfig(columns=["name", "phone"]), data_sources)
    assert body["rows"][0] == ["Riverside Community College", None]


def test_table_row_limit(data_sources):
    body = TableRenderer(row_limit=3).render(TableConfig(), data_sources)
    assert len(body["rows"]) == 3
    assert body["totalRows"] == 8
    assert body["truncated"] is True


def test_table_unknown_source_shows_empty_state(data_sources):
    body = TableRenderer().render(TableConfig(data_source="nowhere"), data_sources)
    assert body == {"kind": "empty", "message": "No data available"}


def test_table_without_columns():
    provider = StaticDataSourceProvider({
        "things": DataSourceDefinition(name="things", label="Things", rows=[{"a": 1}]),
    })
    body = TableRenderer().render(TableConfig(data_source="things", columns=[]), provider)
    assert body == {"kind": "empty", "message": "No columns selected"}


def test_format_value():
    assert format_value(1250) == "1,250"
    assert format_value(1250.0) == "1,250"
    assert format_value(1234.5) == "1,234.50"
    assert format_value("N/A") == "N/A"
    assert format_value("") == "0"


def test_format_change():
    assert format_change(0) is None
    assert format_change(12.5) == "+12.5%"
    assert format_change(-3) == "-3%"


def test_metric_renderer(data_sources):
    config = MetricConfig(metric=Metric(label="Members", value=1250, change=12.5, change_type=ChangeType.POSITIVE))
    assert MetricRenderer().render(config, data_sources) == {
        "kind": "metric",
        "value": "1,250",
        "label": "Members",
        "change": "+12.5%",
        "tone": "positive",
    }


def test_metric_renderer_defaults_label(data_sources):
    body = MetricRenderer().render(MetricConfig(metric=Metric(label="")), data_sources)
    assert body["label"] == "Metric Label"
    assert body["change"] is None


def test_text_renderer_falls_back_to_default_content(data_sources):
    assert TextRenderer().render(TextConfig(content="Hello"), data_sources) == {"kind": "text", "content": "Hello"}
    assert TextRenderer().render(TextConfig(content=""), data_sources)["content"] == "Add your text content here..."
