import pytest

from enneagram_bot.classification_table import (
    ClassificationRow,
    ClassificationTable,
    TableLoader,
    TableNotReadyError,
    row_from_record,
)

from conftest import SAMPLE_ROWS, records, write_table


def test_load_rows_keeps_valid_rows_in_source_order(table):
    assert table.is_ready
    assert len(table) == 4
    assert table.discarded == 3
    assert [row.personality_type for row in table.rows] == ["5", "8", "9", "7"]


def test_lookup_first_loaded_row_wins(table):
    first = table.lookup("1", "2", "1", "1-2-3")
    assert first == ClassificationRow("1", "2", "1", "1-2-3", "5")
    # Deterministic across repeated calls.
    assert table.lookup("1", "2", "1", "1-2-3") is first


def test_lookup_normalized_triple_formats(table):
    assert table.lookup("3", "3", "1", "2-8-3").personality_type == "8"
    assert table.lookup("2", "2", "2", "9-2-7").personality_type == "9"
    assert table.has_key("3-3-1-2-8-3")


def test_lookup_miss_returns_none(table):
    assert table.lookup("1", "2", "1", "3-2-1") is None
    assert table.lookup("", "2", "1", "1-2-3") is None


def test_lookup_before_ready_is_rejected():
    pending = ClassificationTable()
    assert not pending.is_ready
    with pytest.raises(TableNotReadyError):
        pending.lookup("1", "2", "1", "1-2-3")


def test_row_from_record_cleans_headers_and_values():
    record = {"\ufeff Q1-1 ": " １ ", "Q1-2": "2번", " Q2-1": "3", "Q3_order": "[4, 5, 6]", "Basic_Type": " 4 "}
    row = row_from_record(record)
    assert row == ClassificationRow("1", "2", "3", "4-5-6", "4")


def test_row_from_record_uses_result_column_when_type_column_is_absent():
    record = {"Q1-1": "1", "Q1-2": "1", "Q2-1": "1", "Q3_order": "1 2 3", "Result": "6"}
    assert row_from_record(record).personality_type == "6"


def test_row_from_record_does_not_fall_back_for_empty_type_column():
    record = {"Q1-1": "1", "Q1-2": "1", "Q2-1": "1", "Q3_order": "1 2 3", "Basic_Type": "", "Result": "6"}
    assert row_from_record(record) is None


def test_row_from_record_rejects_missing_columns():
    assert row_from_record({"Q1-1": "1"}) is None


def test_load_file_reads_tab_separated_source(table_path):
    loaded = ClassificationTable()
    meta = loaded.load_file(table_path)
    assert loaded.is_ready
    assert meta.row_count == 4
    assert meta.discarded == 3
    assert meta.file_name == "combinations.tsv"
    assert len(meta.sha256) == 64
    assert loaded.lookup("1", "2", "1", "1-2-3").personality_type == "5"


def test_load_rows_twice_is_refused(table):
    with pytest.raises(RuntimeError):
        table.load_rows(records(SAMPLE_ROWS))


def test_loader_fills_table_in_background(table_path):
    loaded = ClassificationTable()
    loader = TableLoader(loaded, table_path)
    future = loader.start()
    assert loader.start() is future
    assert loader.wait(timeout=5)
    assert len(loaded) == 4
    loader.shutdown()


def test_loader_failure_leaves_table_not_ready(tmp_path):
    loaded = ClassificationTable()
    loader = TableLoader(loaded, tmp_path / "missing.tsv")
    loader.start()
    assert loader.wait(timeout=5) is False
    assert not loaded.is_ready
    loader.shutdown()


def test_loader_honours_custom_delimiter(tmp_path):
    path = tmp_path / "combinations.csv"
    path.write_text("Q1-1,Q1-2,Q2-1,Q3_order,Basic_Type\n1,2,1,1 2 3,5\n", encoding="utf-8")
    loaded = ClassificationTable()
    loader = TableLoader(loaded, path, delimiter=",")
    loader.start()
    assert loader.wait(timeout=5)
    assert loaded.lookup("1", "2", "1", "1-2-3").personality_type == "5"
    loader.shutdown()


def test_bom_prefixed_file_header(tmp_path):
    path = write_table(tmp_path / "bom.tsv", [("2", "1", "3", "3 2 1", "2")])
    path.write_bytes(b"\xef\xbb\xbf" + path.read_bytes())
    loaded = ClassificationTable()
    loaded.load_file(path)
    assert loaded.lookup("2", "1", "3", "3-2-1").personality_type == "2"


def test_deeply_nested_triple_does_not_block_loading(tmp_path):
    nested = "[" * 5000 + "4, 5, 6" + "]" * 5000
    path = write_table(tmp_path / "nested.tsv", SAMPLE_ROWS + [("2", "1", "3", nested, "4")])
    loaded = ClassificationTable()
    meta = loaded.load_file(path)
    assert loaded.is_ready
    assert meta.row_count == 5
    assert loaded.lookup("2", "1", "3", "4-5-6").personality_type == "4"


def test_load_file_splits_rows_on_line_endings_only(tmp_path):
    path = tmp_path / "separators.tsv"
    body = "\t".join(["\ufeffQ1-1", "Q1-2", "Q2-1", "Q3_order", "Basic_Type"]) + "\r\n"
    body += "\t".join(["1", "2", "1", "1  2\x0b 3", "5"]) + "\r\n"
    path.write_bytes(body.encode("utf-8"))
    loaded = ClassificationTable()
    meta = loaded.load_file(path)
    assert (meta.row_count, meta.discarded) == (1, 0)
    assert loaded.lookup("1", "2", "1", "1-2-3").personality_type == "5"
