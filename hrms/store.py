"""JSON snapshot store.

Collections live in memory; ``persist()`` rewrites the whole file. Ids come
from per-collection counters kept in the snapshot under ``_id`` and are never
reused. Several processes writing the same file is last-write-wins.
"""

import json
import os
import stat
import tempfile

from flask import current_app

from .errors import NotFound
from .models import MODEL_COLLECTIONS

DEFAULT_COLLECTIONS = (
    "users",
    "jobPostings",
    "candidates",
    "interviews",
    "backgroundVerifications",
)

_LABELS = {
    "users": "User",
    "jobPostings": "Job posting",
    "candidates": "Candidate",
    "interviews": "Interview",
    "backgroundVerifications": "Background verification",
}


def _default_schema():
    data = {name: [] for name in DEFAULT_COLLECTIONS}
    data["_id"] = {name: 0 for name in DEFAULT_COLLECTIONS}
    return data


class EntityStore:
    def __init__(self, path=None):
        self.path = path
        self._collections = {}
        self._counters = {}
        self._mtime = None
        if path:
            self.load()

    def init_app(self, app):
        self.path = app.config["DATA_FILE"]
        with app.app_context():
            self.load()
        app.extensions["entity_store"] = self

    # -- loading / persistence -------------------------------------------

    def _read_file(self):
        if not os.path.exists(self.path):
            return _default_schema()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError):
            _log_warning("Could not read %s, starting from an empty store", self.path)
            return _default_schema()
        if not isinstance(raw, dict) or not isinstance(raw.get("_id"), dict):
            _log_warning("%s is not a recruitment snapshot, starting from an empty store", self.path)
            return _default_schema()
        data = _default_schema()
        data.update(raw)
        return data

    def load(self):
        data = self._read_file()
        counters = {k: int(v or 0) for k, v in data.pop("_id").items()}
        collections = {}
        for name, rows in data.items():
            if not isinstance(rows, list):
                continue
            model = MODEL_COLLECTIONS.get(name)
            collections[name] = [model.from_dict(r) for r in rows] if model else [dict(r) for r in rows]
            # counters missing from hand-edited files resume after the highest id
            highest = max((_id_of(e) or 0 for e in collections[name]), default=0)
            counters[name] = max(counters.get(name, 0), highest)
        self._collections = collections
        self._counters = counters
        self._mtime = self._file_mtime()

    def refresh(self):
        """Reload when another process rewrote the file since we last touched it."""
        mtime = self._file_mtime()
        if mtime is not None and mtime != self._mtime:
            self.load()
            return True
        return False

    def snapshot(self):
        data = {}
        for name, rows in self._collections.items():
            data[name] = [r.to_dict() if hasattr(r, "to_dict") else dict(r) for r in rows]
        data["_id"] = dict(self._counters)
        return data

    def persist(self):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".db-", suffix=".json", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self.snapshot(), f, indent=2, ensure_ascii=False)
            # mkstemp creates 0600; keep the mode of the file being replaced
            if os.path.exists(self.path):
                os.chmod(tmp, stat.S_IMODE(os.stat(self.path).st_mode))
            os.replace(tmp, self.path)
        except Exception:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
        self._mtime = self._file_mtime()

    def _file_mtime(self):
        # size as well: coarse filesystem clocks can repeat an mtime
        try:
            st = os.stat(self.path)
        except (OSError, TypeError):
            return None
        return st.st_mtime_ns, st.st_size

    # -- collection access -----------------------------------------------

    def _rows(self, collection):
        return self._collections.setdefault(collection, [])

    def next_id(self, collection):
        self._counters[collection] = self._counters.get(collection, 0) + 1
        return self._counters[collection]

    def insert(self, collection, entity):
        new_id = self.next_id(collection)
        if isinstance(entity, dict):
            entity["id"] = new_id
        else:
            entity.id = new_id
        self._rows(collection).append(entity)
        return new_id

    def get(self, collection, entity_id):
        for row in self._rows(collection):
            if _id_of(row) == entity_id:
                return row
        return None

    def get_by_id(self, collection, entity_id):
        row = self.get(collection, entity_id)
        if row is None:
            label = _LABELS.get(collection, collection)
            raise NotFound(f"{label} with ID {entity_id} not found")
        return row

    def exists(self, collection, entity_id):
        return self.get(collection, entity_id) is not None

    def find_all(self, collection, predicate=None):
        rows = self._rows(collection)
        if predicate is None:
            return list(rows)
        return [r for r in rows if predicate(r)]

    def replace(self, collection, entity_id, entity):
        rows = self._rows(collection)
        for index, row in enumerate(rows):
            if _id_of(row) == entity_id:
                rows[index] = entity
                return entity
        label = _LABELS.get(collection, collection)
        raise NotFound(f"{label} with ID {entity_id} not found")

    def counts(self):
        return {name: len(rows) for name, rows in self._collections.items()}


def _id_of(row):
    return row.get("id") if isinstance(row, dict) else getattr(row, "id", None)


def _log_warning(msg, *args):
    try:
        current_app.logger.warning(msg, *args)
    except RuntimeError:
        # no app context (scripts constructing a store directly)
        pass
