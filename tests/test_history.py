import json

from hvac_diag.db.history import (
    LocalHistoryStore,
    SupabaseHistoryStore,
    append_capped,
    make_entry,
    newest_first,
)


def _entry(n):
    return make_entry("central-ac", {}, f"symptom {n}", {"possibleIssues": []}, entry_id=f"id-{n}")


def test_make_entry_generates_id_and_timestamp():
    entry = make_entry("furnace", None, "no heat", {})
    assert entry["id"]
    assert entry["timestamp"].endswith("+00:00")
    assert entry["systemInfo"] == {}


def test_append_capped_evicts_oldest():
    entries = []
    for n in range(55):
        entries = append_capped(entries, _entry(n), 50)

    assert len(entries) == 50
    assert entries[0]["id"] == "id-5"
    assert entries[-1]["id"] == "id-54"


def test_local_store_never_exceeds_cap(tmp_path):
    store = LocalHistoryStore(tmp_path / "history.json", limit=50)
    for n in range(60):
        assert store.save(_entry(n))

    saved = store.load()
    assert len(saved) == 50
    assert [e["id"] for e in saved[:2]] == ["id-10", "id-11"]


def test_local_store_missing_or_corrupt_file(tmp_path):
    path = tmp_path / "history.json"
    store = LocalHistoryStore(path)
    assert store.load() == []

    path.write_text("{not json", encoding="utf-8")
    assert store.load() == []

    path.write_text(json.dumps({"oops": True}), encoding="utf-8")
    assert store.load() == []


def test_local_store_delete(tmp_path):
    store = LocalHistoryStore(tmp_path / "history.json")
    store.save(_entry(1))
    store.save(_entry(2))

    assert store.delete("id-1") is True
    assert store.delete("id-1") is False
    assert [e["id"] for e in store.load()] == ["id-2"]


def test_newest_first():
    older = make_entry("furnace", {}, "a", {}, timestamp="2024-01-01T00:00:00+00:00")
    newer = make_entry("furnace", {}, "b", {}, timestamp="2024-02-01T00:00:00+00:00")
    assert newest_first([older, newer]) == [newer, older]


# --------------------------------------------------
# Supabase backend with a fake query builder
# --------------------------------------------------

class FakeResult:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, table):
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []

    def select(self, _columns):
        self.op = "select"
        return self

    def order(self, _column, desc=False):
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row[column] == value)
        return self

    def in_(self, column, values):
        self.filters.append(lambda row: row[column] in values)
        return self

    def execute(self):
        rows = self.table.rows
        if self.op == "insert":
            rows.append(dict(self.payload))
            return FakeResult([self.payload])

        matched = [r for r in rows if all(f(r) for f in self.filters)]
        if self.op == "delete":
            self.table.rows = [r for r in rows if r not in matched]
        return FakeResult(sorted(matched, key=lambda r: r["timestamp"]))


class FakeTable:
    def __init__(self):
        self.rows = []


class FakeSupabase:
    def __init__(self):
        self.tables = {}

    def table(self, name):
        return FakeQuery(self.tables.setdefault(name, FakeTable()))


def _timed_entry(n):
    return make_entry(
        "heat-pump", {"age": "5"}, f"symptom {n}", {"possibleIssues": []},
        entry_id=f"id-{n}", timestamp=f"2024-01-01T00:00:{n:02d}+00:00",
    )


def test_supabase_store_round_trip_and_cap():
    client = FakeSupabase()
    store = SupabaseHistoryStore(client=client, limit=3)

    for n in range(5):
        assert store.save(_timed_entry(n))

    loaded = store.load()
    assert [e["id"] for e in loaded] == ["id-2", "id-3", "id-4"]
    assert loaded[0]["systemType"] == "heat-pump"
    assert loaded[0]["systemInfo"] == {"age": "5"}


def test_supabase_store_delete():
    store = SupabaseHistoryStore(client=FakeSupabase())
    store.save(_timed_entry(1))

    assert store.delete("id-1") is True
    assert store.delete("id-1") is False


def test_supabase_errors_degrade():
    class Broken:
        def table(self, _name):
            raise ConnectionError("down")

    store = SupabaseHistoryStore(client=Broken())
    assert store.load() == []
    assert store.save(_timed_entry(1)) is False
    assert store.delete("id-1") is False
