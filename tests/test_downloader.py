import datetime
import gzip
import json
import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from truth_redacted.processors import downloader  # noqa: E402


class FakeHTTPClient:
    def __init__(self, body):
        self.body = body

    def fetch_bytes(self, url):
        return self.body


@pytest.mark.parametrize(
    "moment,expected",
    [
        (datetime.datetime(2024, 3, 5, 9, 44, 59, tzinfo=datetime.timezone.utc), "20240305093000"),
        (datetime.datetime(2024, 3, 5, 9, 0, 1, tzinfo=datetime.timezone.utc), "20240305090000"),
        (datetime.datetime(2024, 12, 31, 23, 59, tzinfo=datetime.timezone.utc), "20241231234500"),
    ],
)
def test_snapshot_timestamp_floors_to_quarter_hour(moment, expected):
    assert downloader.snapshot_timestamp(moment) == expected


def test_snapshot_timestamp_converts_to_utc():
    plus_two = datetime.timezone(datetime.timedelta(hours=2))
    moment = datetime.datetime(2024, 3, 5, 11, 20, tzinfo=plus_two)
    assert downloader.snapshot_timestamp(moment) == "20240305091500"


def test_snapshot_url():
    moment = datetime.datetime(2024, 3, 5, 9, 44, tzinfo=datetime.timezone.utc)
    assert downloader.snapshot_url(moment) == (
        "https://data.gdeltproject.org/gdeltv3/gdg/20240305093000.gdg.v3.json.gz"
    )


def test_fetch_gzipped_json_document():
    body = gzip.compress(json.dumps({"entries": []}).encode("utf-8"))
    assert downloader.fetch_gzipped_json("https://x", FakeHTTPClient(body)) == {"entries": []}


def test_fetch_gzipped_json_lines():
    lines = "\n".join(json.dumps({"n": i}) for i in range(3)) + "\n"
    body = gzip.compress(lines.encode("utf-8"))
    assert downloader.fetch_gzipped_json("https://x", FakeHTTPClient(body)) == [{"n": 0}, {"n": 1}, {"n": 2}]


def test_download_snapshot_writes_pretty_json(tmp_path):
    body = gzip.compress(json.dumps({"title": "Snapshot"}).encode("utf-8"))
    output = tmp_path / "nested" / "gdelt_data.json"

    data = downloader.download_snapshot("https://x", str(output), http_client=FakeHTTPClient(body))

    assert data == {"title": "Snapshot"}
    assert output.read_text(encoding="utf-8") == '{\n  "title": "Snapshot"\n}'


def test_download_snapshot_reraises_bad_payload(tmp_path):
    with pytest.raises(OSError):
        downloader.download_snapshot("https://x", str(tmp_path / "out.json"), http_client=FakeHTTPClient(b"not gzip"))
    assert not (tmp_path / "out.json").exists()
