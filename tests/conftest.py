import pytest

from enneagram_bot.classification_table import ClassificationTable
from enneagram_bot.quiz_machine import QuizStateMachine
from enneagram_bot.result_store import ResultStore
from enneagram_bot.session_store import SessionStore

HEADER = ["\ufeffQ1-1", "Q1-2", "Q2-1", "Q3_order", "Basic_Type"]

# (Q1-1, Q1-2, Q2-1, Q3_order, Basic_Type)
SAMPLE_ROWS = [
    ("1", "2", "1", "1 2 3", "5"),
    ("3", "3", "1", "[2, 8, 3]", "8"),
    ("2", "2", "2", "['9','2','7']", "9"),
    # Same key as the first row; first loaded wins.
    ("1", "2", "1", "1-2-3", "7"),
    # Rejected: missing type / too few ranking digits / no 1-3 digit.
    ("1", "1", "1", "4 5 6", ""),
    ("1", "1", "1", "4 5", "3"),
    ("4", "1", "1", "4 5 6", "3"),
]


def write_table(path, rows, header=HEADER):
    lines = ["\t".join(header)]
    lines.extend("\t".join(row) for row in rows)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def records(rows, header=HEADER):
    return [dict(zip(header, row)) for row in rows]


@pytest.fixture
def table_path(tmp_path):
    return write_table(tmp_path / "combinations.tsv", SAMPLE_ROWS)


@pytest.fixture
def table():
    loaded = ClassificationTable()
    loaded.load_rows(records(SAMPLE_ROWS))
    return loaded


@pytest.fixture
def result_store(tmp_path):
    store = ResultStore(f"sqlite:///{tmp_path / 'results.db'}")
    store.init_schema()
    yield store
    store.dispose()


@pytest.fixture
def sessions():
    return SessionStore()


@pytest.fixture
def machine(sessions, table, result_store):
    return QuizStateMachine(sessions=sessions, table=table, results=result_store)
