"""
Tests for the YAML-backed data sources.
"""

import pytest

from dashboard_builder.data_sources import (
    DataSourceParser,
    StaticDataSourceProvider,
    get_data_source_provider,
    reset_data_source_provider,
)


def test_bundled_sources(data_sources):
    assert data_sources.source_names() == ["organizations", "invoices", "profiles", "system_settings"]
    organizations = data_sources.get_source("organizations")
    assert organizations.category_field == "membership_status"
    assert organizations.value_field == "annual_fee"
    assert organizations.to_dict()["rowCount"] == 8


def test_unknown_source_has_no_rows(data_sources):
    assert data_sources.get_rows("nowhere") == []
    assert data_sources.get_source("nowhere") is None


def test_rows_are_copies(data_sources):
    rows = data_sources.get_rows("profiles")
    rows[0]["role"] = "changed"
    assert data_sources.get_rows("profiles")[0]["role"] == "admin"


def test_parse_file_with_sources_list(tmp_path):
    path = tmp_path / "sources.yaml"
    path.write_text(
        "sources:\n"
        "  - name: tickets\n"
        "    category_field: priority\n"
        "    rows:\n"
        "      - {priority: high}\n"
        "      - {priority: low}\n"
        "  - label: Missing name\n"
        "    rows: []\n"
    )

    provider = StaticDataSourceProvider.from_yaml(path)
    assert provider.source_names() == ["tickets"]
    assert provider.get_source("tickets").label == "Tickets"
    assert len(provider.get_rows("tickets")) == 2


def test_parse_file_single_mapping(tmp_path):
    path = tmp_path / "one.yaml"
    path.write_text("name: deals\nrows:\n  - {stage: won}\n")
    assert list(DataSourceParser.parse_file(path)) == ["deals"]


def test_parse_file_missing(tmp_path):
    assert DataSourceParser.parse_file(tmp_path / "missing.yaml") == {}


def test_parse_dict_rejects_bad_rows():
    with pytest.raises(ValueError):
        DataSourceParser.parse_dict({"name": "x", "rows": ["a", "b"]})


def test_provider_follows_settings(tmp_path, settings_override):
    path = tmp_path / "custom.yaml"
    path.write_text("name: custom\nrows:\n  - {a: 1}\n")

    settings_override(DATA_SOURCES_FILE=str(path))
    provider = get_data_source_provider()
    assert provider.source_names() == ["custom"]
    assert get_data_source_provider() is provider


@pytest.fixture
def settings_override():
    from django.conf import settings

    original = settings.DASHBOARD_BUILDER

    def apply(**values):
        settings.DASHBOARD_BUILDER = {**original, **values}
        reset_data_source_provider()

    yield apply
    settings.DASHBOARD_BUILDER = original
    reset_data_source_provider()
