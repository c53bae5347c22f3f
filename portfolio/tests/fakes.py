import itertools

from portfolio.errors import StoreError
from portfolio.storage import ObjectStorage
from portfolio.store import RecordStore


class MemoryStore(RecordStore):
    """Dict-backed record store that records every call and can be told to fail."""

    def __init__(self, projects=None, settings_row=None, concurrent_reads=False):
        self.tables = {
            "projects": [dict(p) for p in projects or []],
            "settings": [dict(settings_row)] if settings_row else [],
        }
        self.calls = []
        self.fail = {}  # method name -> message
        self.concurrent_reads = concurrent_reads
        self._ids = itertools.count(1000)

    def _check(self, method, *args):
        self.calls.append((method,) + args)
        if method in self.fail:
            raise StoreError(self.fail[method])

    def select_all(self, table, order_by=None):
        self._check("select_all", table)
        rows = [dict(r) for r in self.tables[table]]
        return sorted(rows, key=lambda r: r[order_by]) if order_by else rows

    def select_one(self, table):
        self._check("select_one", table)
        if not self.tables[table]:
            raise StoreError("JSON object requested, multiple (or no) rows returned")
        return dict(self.tables[table][0])

    def insert(self, table, row):
        self._check("insert", table, row)
        stored = dict(row, id=next(self._ids))
        self.tables[table].append(stored)
        return dict(stored)

    def update(self, table, record_id, patch):
        self._check("update", table, record_id, patch)
        for row in self.tables[table]:
            if str(row["id"]) == str(record_id):
                row.update(patch)
                return True
        return False

    def delete(self, table, record_id):
        self._check("delete", table, record_id)
        before = len(self.tables[table])
        self.tables[table] = [r for r in self.tables[table] if str(r["id"]) != str(record_id)]
        return len(self.tables[table]) < before

    @property
    def writes(self):
        return [c for c in self.calls if c[0] in ("insert", "update", "delete")]


class MemoryStorage(ObjectStorage):
    def __init__(self, fail=None):
        self.objects = {}
        self.received = []
        self.fail = fail

    def upload(self, bucket, filename, content, content_type=None):
        if self.fail:
            raise StoreError(self.fail)
        self.received.append(content)
        self.objects[(bucket, filename)] = content.read() if hasattr(content, "read") else content
        return filename

    def public_url(self, bucket, filename):
        return f"https://cdn.test/{bucket}/{filename}"
