# tests/test_export.py
import csv
import json
import os

import pytest

from commands.export import collect, dedupe, run, write_csv, write_json
from models import LawyerRecord


def test_dedupe_keeps_first_by_id():
    lawyers = [
        LawyerRecord(id=1, name="First"),
        LawyerRecord(id="1", name="Again"),
        LawyerRecord(id=2, name="Other"),
    ]
    assert [l.name for l in dedupe(lawyers)] == ["First", "Other"]


def test_write_csv_quotes_and_joins(tmp_path):
    path = tmp_path / "out.csv"
    write_csv([LawyerRecord(id=1, name="Doe, Jane", languages=["English", "French"])], str(path))
    with open(path, encoding="utf-8-sig") as f:
        raw = f.read()
    assert '"Doe, Jane"' in raw
    with open(path, encoding="utf-8-sig") as f:
        rows = list(csv.reader(f))
    assert rows[0] == LawyerRecord.csv_headers()
    assert "English ; French" in rows[1]


def test_write_json(tmp_path):
    path = tmp_path / "out.json"
    write_json([LawyerRecord(id=1, name="Jane Doe", categories=["Family Law"])], str(path))
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    assert data[0]["name"] == "Jane Doe"
    assert data[0]["categories"] == ["Family Law"]


@pytest.mark.asyncio
async def test_collect_walks_every_page():
    lawyers = await collect(page_size=3, offline=True)
    assert len(lawyers) == 10
    assert len({l.id for l in lawyers}) == 10


@pytest.mark.asyncio
async def test_export_produces_csv(tmp_path):
    csv_path = await run(str(tmp_path / "output"), offline=True)

    assert os.path.exists(csv_path)
    assert os.path.basename(csv_path).startswith("lawyers_")
    with open(csv_path, encoding="utf-8-sig") as f:
        reader = csv.reader(f)
        headers = next(reader)
        assert len(headers) == 19
        rows = list(reader)
    assert len(rows) == 10
    # verified lawyers come first
    verified_col = headers.index("verified")
    assert rows[0][verified_col] == "True"


@pytest.mark.asyncio
async def test_export_json_with_category_slug(tmp_path):
    path = await run(str(tmp_path), fmt="json", categories=["family-law"], offline=True)
    assert path.endswith(".json")
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    assert {d["id"] for d in data} == {1, 5}


@pytest.mark.asyncio
async def test_export_rejects_unknown_format(tmp_path):
    with pytest.raises(ValueError):
        await run(str(tmp_path), fmt="xlsx", offline=True)
