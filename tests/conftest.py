"""Shared fixtures for brand traffic analysis tests."""

import csv
from pathlib import Path

import pytest

from brand_traffic_analysis.models import ClassificationConfig

HEADER = ["Query", "Page", "Clicks", "Impressions", "CTR", "Position"]


def make_row(
    query="brandx shoes",
    page="https://site.com/blog/a",
    clicks=10,
    impressions=100,
    ctr="10%",
    position=2,
    **extra,
):
    row = {
        "query": query,
        "page": page,
        "clicks": clicks,
        "impressions": impressions,
        "ctr": ctr,
        "position": position,
    }
    row.update(extra)
    return row


@pytest.fixture
def config():
    return ClassificationConfig(brand_terms="brandx, brand x")


@pytest.fixture
def rows():
    return [
        make_row("BrandX shoes", "https://site.com/blog/a", 10, 100, "10%", 2),
        make_row("running shoes", "https://site.com/de/product/1", 5, "1,000", "0.5%", 8),
        make_row("brandx pricing", "site.com/pricing", 20, 400, 0.05, 1),
        make_row("best sneakers", "https://site.com/fr/blog/b", 1, 50, "2%", 12),
        make_row("", "https://site.com/help", 3, 30, "10%", 4),
        make_row("running shoes", "https://site.com/de/product/1", 2, 20, "10%", 6),
    ]


@pytest.fixture
def write_csv(tmp_path):
    """Write rows (lists of cells) to a CSV file and return its path."""

    def _write(rows, header=HEADER, name="export.csv") -> Path:
        path = tmp_path / name
        with path.open("w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(header)
            writer.writerows(rows)
        return path

    return _write
