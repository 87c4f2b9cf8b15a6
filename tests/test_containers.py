import csv
import json

import pytest

from stringsim import containers
from stringsim.errors import MalformedContainer, UnsupportedFormat
from stringsim.records import Record

A = Record("Jaro", "adam", "adan", 0.8833333333333333)
B = Record("Jaro", "adam", "aden", 0.7333333333333334)
C = Record("Jaro", "adam", "adam", 1.0)
X = Record("Levenshtein", "x", "y", 1.0)


def _append_all(path, records):
    with open(path, "r+b") as fh:
        is_empty = containers.is_empty_container(fh, "json")
        for record in records:
            containers.append_json(fh, record, is_empty)
            is_empty = False


def test_output_format():
    assert containers.output_format("out.json") == "json"
    assert containers.output_format("OUT.CSV") == "csv"
    with pytest.raises(UnsupportedFormat):
        containers.output_format("out.txt")


def test_initialize_empty(tmp_path):
    j = tmp_path / "out.json"
    c = tmp_path / "out.csv"
    containers.initialize_empty(str(j))
    containers.initialize_empty(str(c))
    assert j.read_bytes() == b"[]\n"
    assert c.read_bytes() == b"metric,s1,s2,score\n"


def test_initialize_rejects_unknown_extension(tmp_path):
    path = tmp_path / "out.xml"
    with pytest.raises(UnsupportedFormat):
        containers.initialize_empty(str(path))
    assert not path.exists()


@pytest.mark.parametrize(
    "content, expected",
    [(b"[]\n", True), (b"[ ]\n", True), (b"[]", True), (b'[{"a":1}]\n', False)],
)
def test_is_empty_json(tmp_path, content, expected):
    path = tmp_path / "out.json"
    path.write_bytes(content)
    with open(path, "rb") as fh:
        assert containers.is_empty_container(fh, "json") is expected


def test_is_empty_csv(tmp_path):
    path = tmp_path / "out.csv"
    containers.initialize_empty(str(path))
    with open(path, "r+b") as fh:
        assert containers.is_empty_container(fh, "csv")
        containers.append_csv(fh, A)
        assert not containers.is_empty_container(fh, "csv")


def test_append_sequence_to_empty_array(tmp_path):
    path = tmp_path / "out.json"
    containers.initialize_empty(str(path))
    _append_all(path, [A, B, C])

    text = path.read_text(encoding="utf-8")
    assert text.endswith("]\n")
    assert text.count("]") == 1
    assert ",]" not in text
    assert json.loads(text) == [A.to_dict(), B.to_dict(), C.to_dict()]


def test_append_to_non_empty_array(tmp_path):
    path = tmp_path / "out.json"
    path.write_text(json.dumps([X.to_dict()]) + "\n", encoding="utf-8")
    _append_all(path, [A])

    text = path.read_text(encoding="utf-8")
    assert text.count("]") == 1
    assert json.loads(text) == [X.to_dict(), A.to_dict()]


def test_append_to_spaced_empty_array(tmp_path):
    path = tmp_path / "out.json"
    path.write_bytes(b"[ ]\n")
    _append_all(path, [A, B])
    assert json.loads(path.read_text()) == [A.to_dict(), B.to_dict()]


@pytest.mark.parametrize("tail", [b"]", b"]\n", b"] \n", b"]\r\n"])
def test_close_within_lookback(tmp_path, tail):
    path = tmp_path / "out.json"
    path.write_bytes(b"[" + tail)
    _append_all(path, [A])
    assert path.read_bytes().endswith(b"]\n")
    assert json.loads(path.read_text()) == [A.to_dict()]


@pytest.mark.parametrize(
    "content",
    [b"", b"[", b'[{"a":1}', b"[]   \n", b"{}\n"],
)
def test_malformed_container_is_left_untouched(tmp_path, content):
    path = tmp_path / "out.json"
    path.write_bytes(content)
    with open(path, "r+b") as fh:
        with pytest.raises(MalformedContainer):
            containers.append_json(fh, A, is_empty=False)
    assert path.read_bytes() == content


def test_append_csv_rows(tmp_path):
    path = tmp_path / "out.csv"
    containers.initialize_empty(str(path))
    odd = Record("Jaro", "smith, john", 'say "hi"', 0.5)
    with open(path, "r+b") as fh:
        containers.append_csv(fh, A)
        containers.append_csv(fh, odd)

    with open(path, newline="", encoding="utf-8") as fh:
        rows = list(csv.reader(fh))
    assert rows == [
        ["metric", "s1", "s2", "score"],
        ["Jaro", "adam", "adan", "0.883333"],
        ["Jaro", "smith, john", 'say "hi"', "0.500000"],
    ]


def test_serialize_all_json(tmp_path):
    path = tmp_path / "out.json"
    containers.serialize_all(str(path), [A, B])
    text = path.read_text(encoding="utf-8")
    assert text.endswith("\n")
    data = json.loads(text)
    assert [d["s2"] for d in data] == ["adan", "aden"]
    assert data[0]["score"] == pytest.approx(A.score)


def test_serialize_all_csv(tmp_path):
    path = tmp_path / "out.csv"
    containers.serialize_all(str(path), [A])
    with open(path, newline="", encoding="utf-8") as fh:
        rows = list(csv.reader(fh))
    assert rows == [["metric", "s1", "s2", "score"], ["Jaro", "adam", "adan", "0.883333"]]


def test_serialize_all_empty(tmp_path):
    j = tmp_path / "out.json"
    c = tmp_path / "out.csv"
    containers.serialize_all(str(j), [])
    containers.serialize_all(str(c), [])
    assert json.loads(j.read_text()) == []
    assert c.read_text().strip() == "metric,s1,s2,score"


def test_serialize_all_json_matches_streamed_records(tmp_path):
    slash = Record("TokenSetRatio", "manguera 1/2", "1/2 manguera", 0.8833333333333334)
    batch = tmp_path / "batch.json"
    stream = tmp_path / "stream.json"
    containers.serialize_all(str(batch), [A, slash])
    containers.initialize_empty(str(stream))
    _append_all(stream, [A, slash])

    assert json.loads(batch.read_text()) == json.loads(stream.read_text())
    assert json.loads(batch.read_text())[0]["score"] == A.score
    assert "\\/" not in batch.read_text()
