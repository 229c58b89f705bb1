"""
Unit Tests: Review scope
=========================
"""
import pytest

from scope import (
    FileDiff,
    ScopeEntry,
    filter_files,
    load_scope,
    parse_diff,
    plan_batches,
    scope_entries,
    should_review_file,
)

SAMPLE_DIFF = """\
diff --git a/app/db.py b/app/db.py
index 1111111..2222222 100644
--- a/app/db.py
+++ b/app/db.py
@@ -1,3 +1,5 @@
 import sqlite3
+
+QUERY = "SELECT * FROM users WHERE id = "
 def get(conn, uid):
-    return None
+    return conn.execute(QUERY + uid)
diff --git a/README.md b/README.md
index 3333333..4444444 100644
--- a/README.md
+++ b/README.md
@@ -1 +1,2 @@
 # Project
+More docs.
diff --git a/old.py b/old.py
deleted file mode 100644
index 5555555..0000000
--- a/old.py
+++ /dev/null
@@ -1,2 +0,0 @@
-x = 1
-y = 2
"""


class TestParseDiff:

    def test_files_and_status(self):
        files = parse_diff(SAMPLE_DIFF)
        assert [(f.filename, f.status) for f in files] == [
            ("app/db.py", "modified"),
            ("README.md", "modified"),
            ("old.py", "deleted"),
        ]

    def test_added_line_numbers(self):
        db = parse_diff(SAMPLE_DIFF)[0]
        assert db.added_lines == [2, 3, 5]
        assert db.additions == 3
        assert db.deletions == 1

    def test_invalid_diff(self):
        with pytest.raises(ValueError, match="Invalid unified diff"):
            parse_diff("--- a/x\n+++ b/x\n@@ -1,3 +1,3 @@\n-only one line\n")


class TestFiltering:

    @pytest.mark.parametrize("name,expected", [
        ("app/db.py", True),
        ("README.md", False),
        ("poetry.lock", False),
        ("web/node_modules/x.js", False),
        ("static/app.min.js", False),
    ])
    def test_should_review_file(self, name, expected):
        assert should_review_file(name) is expected

    def test_filter_drops_docs_and_deletions(self):
        assert [f.filename for f in filter_files(parse_diff(SAMPLE_DIFF))] == ["app/db.py"]

    def test_load_scope(self):
        assert load_scope(SAMPLE_DIFF) == [ScopeEntry("app/db.py", "modified", 2, 5, 3)]


class TestScopeEntries:

    def test_range_spans_added_lines(self):
        files = [FileDiff("a.py", "added", 3, 0, [10, 11, 40])]
        assert scope_entries(files) == [ScopeEntry("a.py", "added", 10, 40, 3)]

    def test_str(self):
        assert str(ScopeEntry("a.py", "added", 10, 40, 3)) == "`a.py` (lines 10-40)"
        assert str(ScopeEntry("a.py", "added", 7, 7, 1)) == "`a.py` (line 7)"


class TestPlanBatches:

    @staticmethod
    def _entry(name, lines):
        return ScopeEntry(name, "modified", 1, lines, lines)

    def test_small_change_is_one_batch(self):
        entries = [self._entry("a", 100), self._entry("b", 200)]
        assert plan_batches(entries) == [entries]

    def test_split_keeps_order_and_limit(self):
        entries = [self._entry(n, 200) for n in "abcde"]
        batches = plan_batches(entries, max_lines=500)
        assert [[e.path for e in b] for b in batches] == [["a", "b"], ["c", "d"], ["e"]]
        assert all(sum(e.changed_lines for e in b) <= 500 for b in batches)

    def test_oversize_file_alone(self):
        entries = [self._entry("a", 10), self._entry("big", 900), self._entry("c", 10)]
        assert [[e.path for e in b] for b in plan_batches(entries)] == [["a"], ["big"], ["c"]]

    def test_empty(self):
        assert plan_batches([]) == []

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            plan_batches([], max_lines=0)
