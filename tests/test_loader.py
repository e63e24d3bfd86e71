import pytest

from brand_traffic_analysis.exceptions import DatasetRejectedError
from brand_traffic_analysis.loader import DatasetLoader


@pytest.fixture
def loader():
    return DatasetLoader()


def test_load_csv(loader, write_csv):
    path = write_csv(
        [
            ["brandx shoes", "https://site.com/blog/a", 10, 100, "10%", 2.5],
            ["running shoes", "https://site.com/de/product", 5, "1,000", "0.5%", 8],
            ["", "https://site.com/help", "", 30, "1%", 4],
        ]
    )
    rows = loader.load(filepath=path)

    assert len(rows) == 3
    assert set(rows[0]) == {"query", "page", "clicks", "impressions", "ctr", "position"}
    assert rows[0]["query"] == "brandx shoes"
    assert rows[0]["position"] == 2.5
    assert rows[1]["impressions"] == "1,000"
    assert rows[2]["query"] is None
    assert rows[2]["clicks"] is None


def test_rejects_non_csv(loader, tmp_path):
    path = tmp_path / "export.xlsx"
    path.write_text("query,page")
    with pytest.raises(DatasetRejectedError, match="CSV file"):
        loader.load(filepath=path)


def test_rejects_missing_file(loader, tmp_path):
    with pytest.raises(DatasetRejectedError, match="not found"):
        loader.load(filepath=tmp_path / "missing.csv")


def test_rejects_oversized_file(write_csv):
    path = write_csv([["brandx", "https://site.com", 1, 1, "1%", 1]])
    with pytest.raises(DatasetRejectedError, match="size"):
        DatasetLoader(max_bytes=10).load(filepath=path)


def test_rejects_empty_file(loader, tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    with pytest.raises(DatasetRejectedError, match="empty"):
        loader.load(filepath=path)


def test_rejects_header_only_file(loader, write_csv):
    with pytest.raises(DatasetRejectedError, match="empty"):
        loader.load(filepath=write_csv([]))


def test_rejects_missing_columns(loader, write_csv):
    path = write_csv([["brandx", "https://site.com", 1]], header=["Query", "Page", "Clicks"])
    with pytest.raises(DatasetRejectedError) as exc:
        loader.load(filepath=path)
    assert exc.value.reason == "CSV is missing required columns: impressions, ctr, position"


def test_rejects_completely_empty_column(loader, write_csv):
    path = write_csv(
        [
            ["brandx", "https://site.com", 1, 10, "", 1],
            ["other", "https://site.com/a", 2, 20, "", 3],
        ]
    )
    with pytest.raises(DatasetRejectedError, match="completely empty: ctr"):
        loader.load(filepath=path)


def test_rejects_suspicious_content(loader, write_csv):
    path = write_csv([["<script>alert(1)</script>", "https://site.com", 1, 10, "1%", 1]])
    with pytest.raises(DatasetRejectedError, match="Suspicious content"):
        loader.load(filepath=path)


def test_load_records_uses_row_keys_without_header(loader):
    records = [{"Query": "a", "Page": "b", "Clicks": 1, "Impressions": 2, "CTR": 0.5, "Position": 1}]
    assert loader.load_records(records=records)[0]["ctr"] == 0.5


def test_load_records_rejects_empty_input(loader):
    with pytest.raises(DatasetRejectedError):
        loader.load_records(records=[])
