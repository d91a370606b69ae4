import pytest

from enneagram_bot.models import ResultSummary
from enneagram_bot.result_store import PersistenceError, ResultStore


def test_empty_store_lists_nothing(result_store):
    assert result_store.list_results() == []


def test_insert_then_list_in_insertion_order(result_store):
    assert result_store.insert_result("u1", "Alice", "5", "5w4")
    assert result_store.insert_result("u2", "Bob", "8", "8w9")

    assert result_store.list_results() == [
        ResultSummary(display_name="Alice", personality_type="5", wing_label="5w4"),
        ResultSummary(display_name="Bob", personality_type="8", wing_label="8w9"),
    ]


def test_records_carry_owner_and_timestamp(result_store):
    result_store.insert_result("u1", "Alice", "5", "5w4")
    result_store.insert_result("u2", "Bob", "8", "8w9")
    result_store.insert_result("u1", "Alice", "5", "5w6")

    records = result_store.list_records("u1")
    assert [record.wing_label for record in records] == ["5w4", "5w6"]
    assert all(record.user_id == "u1" for record in records)
    assert all(record.created_at is not None for record in records)


def test_missing_schema_reports_failures(tmp_path):
    # No init_schema: the results table does not exist.
    store = ResultStore(f"sqlite:///{tmp_path / 'empty.db'}")
    assert store.insert_result("u1", "Alice", "5", "5w4") is False
    with pytest.raises(PersistenceError):
        store.list_results()
    store.dispose()
