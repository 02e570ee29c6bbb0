"""
Unit tests for ReviewStorage.
"""

import json
import os
import tempfile

import pytest
from src.exceptions import PersistenceError
from src.models.review import Review
from src.utils.storage import ReviewStorage


def make_review(n, product="bloxone-ddi"):
    return Review(
        id=n,
        review_id=100 + n,
        author=f"Author {n}",
        platform="G2",
        title=f"Title {n}",
        post_content="Body with ünïcode",
        timestamp="2024-06-01T00:00:00Z",
        tags=[product],
        rating=4,
    )


def test_save_writes_two_space_indented_array():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "out.json")
        ReviewStorage().save_reviews([make_review(1), make_review(2)], path)

        with open(path, encoding="utf-8") as f:
            text = f.read()

        assert text.startswith("[\n  {\n    \"id\": 1,")
        assert text.endswith("]\n")
        data = json.loads(text)
        assert [entry["reviewID"] for entry in data] == [101, 102]
        assert data[0]["Postcontent"] == "Body with ünïcode"


def test_save_overwrites_existing_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "out.json")
        storage = ReviewStorage()
        storage.save_reviews([make_review(1), make_review(2), make_review(3)], path)
        storage.save_reviews([make_review(9)], path)

        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        assert [entry["id"] for entry in data] == [9]


def test_save_empty_list_writes_empty_array():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "out.json")
        ReviewStorage().save_reviews([], path)

        with open(path, encoding="utf-8") as f:
            assert json.load(f) == []


def test_save_to_missing_directory_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "missing", "out.json")
        with pytest.raises(PersistenceError):
            ReviewStorage().save_reviews([make_review(1)], path)


def test_load_round_trips_saved_reviews():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "out.json")
        reviews = [make_review(1), make_review(2, product="infoblox-nios")]
        storage = ReviewStorage()
        storage.save_reviews(reviews, path)

        assert storage.load_reviews(path) == reviews


def test_load_missing_file_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(PersistenceError):
            ReviewStorage().load_reviews(os.path.join(tmpdir, "nope.json"))


@pytest.mark.parametrize("content", ["{not json", "{\"id\": 1}", "[{\"author\": \"no id\"}]"])
def test_load_malformed_file_raises(content):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "bad.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        with pytest.raises(PersistenceError):
            ReviewStorage().load_reviews(path)


def test_raw_response_disabled_without_debug_dir():
    assert ReviewStorage().save_raw_response("bloxone-ddi", b"{}") is None


def test_raw_response_written():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = ReviewStorage(debug_dir=tmpdir).save_raw_response("bloxone-ddi", b"{\"a\": 1}")

        assert path == os.path.join(tmpdir, "bloxone-ddi_raw_response.json")
        with open(path, "rb") as f:
            assert f.read() == b"{\"a\": 1}"


def test_raw_response_failure_swallowed():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = ReviewStorage(debug_dir=os.path.join(tmpdir, "missing"))
        assert storage.save_raw_response("bloxone-ddi", b"{}") is None
