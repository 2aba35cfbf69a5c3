from dataclasses import fields
from datetime import datetime, timezone


def utcnow():
    return datetime.now(timezone.utc)


def to_iso(dt):
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def from_iso(value):
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    # snapshots written by other tools end in "Z"
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def camel(name):
    head, *rest = name.split("_")
    return head + "".join(p.title() for p in rest)


class SnapshotMixin:
    """camelCase dict <-> dataclass conversion for stored entities.

    ``_timestamps`` names datetime fields, ``_enums`` maps a field name to the
    Enum class its raw string is parsed into.
    """
    _timestamps = ()
    _enums = {}

    def to_dict(self):
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in self._timestamps:
                value = to_iso(value)
            elif f.name in self._enums and value is not None:
                value = value.value
            elif isinstance(value, list):
                value = [dict(v) if isinstance(v, dict) else v for v in value]
            out[camel(f.name)] = value
        return out

    @classmethod
    def from_dict(cls, data):
        kwargs = {}
        for f in fields(cls):
            key = camel(f.name)
            if key not in data:
                continue
            value = data[key]
            if f.name in cls._timestamps:
                value = from_iso(value)
            elif f.name in cls._enums and value is not None:
                value = cls._enums[f.name](value)
            kwargs[f.name] = value
        return cls(**kwargs)
