"""
# DataValue: the doson object model

Every doson document is one tagged value:

 - `none`, only ever produced by a failed parse
 - `"strings"`, kept as the raw text between the quotes
 - numbers, always 64 bit floats
 - `true`, `false`
 - lists `[1,2]`, dicts `{"a":1}`, pairs `(1,2)`
 - blobs `binary!(aGk=)`

Values are immutable once built. Composites own copies of their children,
so a value is always a finite tree.

## Canonical text

The printer emits no whitespace. Dict keys are written in sorted order, so
two values are equal exactly when their canonical text is equal.

## Weight

`weight()` is the sort key. A number weighs itself, composites weigh the
sum of their children, and every other leaf weighs `NO_WEIGHT`. Inside a
composite a child weighing `NO_WEIGHT` counts as 0.
"""

import io
import json
import math
import sys
from collections.abc import Mapping
from types import MappingProxyType

from .blob import Blob, b64encode

NO_WEIGHT = sys.float_info.max


def format_number(n):
    if n != n:
        return 'NaN'
    elif n == math.inf:
        return 'inf'
    elif n == -math.inf:
        return '-inf'
    out = repr(n)
    if out.endswith('.0'):
        out = out[:-2]
    return out


def _contribution(item):
    w = item.weight()
    if w == NO_WEIGHT:
        return 0.0
    return w


class DataValue:
    kind = None
    __slots__ = ()

    @classmethod
    def from_text(cls, text):
        from .codec import default_codec
        return default_codec.parse(text)

    def datatype(self):
        return self.kind

    def weight(self):
        return NO_WEIGHT

    def size(self):
        return 0

    def children(self):
        return ()

    # typed accessors, no coercion

    def as_string(self): return None
    def as_number(self): return None
    def as_bool(self): return None
    def as_tuple(self): return None
    def as_list(self): return None
    def as_dict(self): return None
    def as_binary(self): return None

    def to_text(self):
        buf = io.StringIO()
        dump_text(self, buf)
        return buf.getvalue()

    def to_json(self):
        return json.dumps(self.structure(), separators=(',', ':'), ensure_ascii=False, allow_nan=False)

    def structure(self):
        """
            The self describing form: `{"Kind": payload}`, as plain python objects
        """
        return {self.kind: self._payload_structure()}

    def _payload_structure(self):
        return None

    def _key(self):
        return ()

    def compare(self, other):
        """
            -1, 0, or 1 by weight. Ties, and anything involving NaN, are 0.
        """
        a, b = self.weight(), other.weight()
        if a < b:
            return -1
        elif a > b:
            return 1
        return 0

    def __lt__(self, other):
        if not isinstance(other, DataValue):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other):
        if not isinstance(other, DataValue):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other):
        if not isinstance(other, DataValue):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other):
        if not isinstance(other, DataValue):
            return NotImplemented
        return self.compare(other) >= 0

    def __eq__(self, other):
        if not isinstance(other, DataValue):
            return NotImplemented
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return hash(self.to_text())

    def __str__(self):
        return self.to_text()


class NoneValue(DataValue):
    kind = "None"
    __slots__ = ()

    def __repr__(self):
        return "NoneValue()"


NONE = NoneValue()


class String(DataValue):
    kind = "String"
    __slots__ = ('value',)

    def __init__(self, value):
        if not isinstance(value, str):
            raise TypeError('String needs a str, not {}'.format(type(value).__name__))
        object.__setattr__(self, 'value', value)

    def size(self):
        return len(self.value.encode('utf-8', 'surrogatepass'))

    def as_string(self):
        return self.value

    def _payload_structure(self):
        return self.value

    def _key(self):
        return self.value

    def __setattr__(self, name, value):
        raise AttributeError('DataValue is immutable')

    def __repr__(self):
        return "String({!r})".format(self.value)


class Number(DataValue):
    kind = "Number"
    __slots__ = ('value',)

    def __init__(self, value):
        if isinstance(value, (str, bytes, bytearray)):
            raise TypeError('Number needs a number, not {}'.format(type(value).__name__))
        object.__setattr__(self, 'value', float(value))

    def weight(self):
        return self.value

    def size(self):
        return 8

    def as_number(self):
        return self.value

    def _payload_structure(self):
        if math.isfinite(self.value):
            return self.value
        return None

    def _key(self):
        return format_number(self.value)

    def __setattr__(self, name, value):
        raise AttributeError('DataValue is immutable')

    def __repr__(self):
        return "Number({!r})".format(self.value)


class Boolean(DataValue):
    kind = "Boolean"
    __slots__ = ('value',)

    def __init__(self, value):
        if not isinstance(value, bool):
            raise TypeError('Boolean needs a bool, not {}'.format(type(value).__name__))
        object.__setattr__(self, 'value', value)

    def size(self):
        return 1

    def as_bool(self):
        return self.value

    def _payload_structure(self):
        return self.value

    def _key(self):
        return self.value

    def __setattr__(self, name, value):
        raise AttributeError('DataValue is immutable')

    def __repr__(self):
        return "Boolean({!r})".format(self.value)


def _check_child(item):
    if not isinstance(item, DataValue):
        raise TypeError('expected a DataValue, got {}'.format(type(item).__name__))
    return item


class _Composite(DataValue):
    __slots__ = ()

    def weight(self):
        # one at a time, left to right: sum() compensates on newer pythons
        total = 0.0
        for x in self.children():
            total += _contribution(x)
        return total

    def size(self):
        return sum(x.size() for x in self.children())

    def __setattr__(self, name, value):
        raise AttributeError('DataValue is immutable')


class List(_Composite):
    kind = "List"
    __slots__ = ('items',)

    def __init__(self, items=()):
        object.__setattr__(self, 'items', tuple(_check_child(x) for x in items))

    def children(self):
        return self.items

    def as_list(self):
        return list(self.items)

    def _payload_structure(self):
        return [x.structure() for x in self.items]

    def _key(self):
        return self.items

    def __repr__(self):
        return "List({!r})".format(list(self.items))


class Dict(_Composite):
    kind = "Dict"
    __slots__ = ('entries',)

    def __init__(self, entries=()):
        out = {}
        if isinstance(entries, Mapping):
            entries = entries.items()
        for k, v in entries:
            if not isinstance(k, str):
                raise TypeError('Dict keys must be str, not {}'.format(type(k).__name__))
            out[k] = _check_child(v)  # later keys win
        object.__setattr__(self, 'entries', MappingProxyType(out))

    def children(self):
        return tuple(self.entries.values())

    def as_dict(self):
        return dict(self.entries)

    def _payload_structure(self):
        return {k: v.structure() for k, v in sorted(self.entries.items())}

    def _key(self):
        return dict(self.entries)

    def __repr__(self):
        return "Dict({!r})".format(dict(self.entries))


class Tuple(_Composite):
    kind = "Tuple"
    __slots__ = ('first', 'second')

    def __init__(self, first, second):
        object.__setattr__(self, 'first', _check_child(first))
        object.__setattr__(self, 'second', _check_child(second))

    def children(self):
        return (self.first, self.second)

    def as_tuple(self):
        return (self.first, self.second)

    def _payload_structure(self):
        return [self.first.structure(), self.second.structure()]

    def _key(self):
        return (self.first, self.second)

    def __repr__(self):
        return "Tuple({!r}, {!r})".format(self.first, self.second)


class Binary(DataValue):
    kind = "Binary"
    __slots__ = ('blob',)

    def __init__(self, blob=b""):
        if not isinstance(blob, Blob):
            blob = Blob(blob)
        object.__setattr__(self, 'blob', blob)

    def size(self):
        return self.blob.size()

    def as_binary(self):
        return self.blob

    def _payload_structure(self):
        return {"data": list(self.blob.data)}

    def _key(self):
        return self.blob

    def __setattr__(self, name, value):
        raise AttributeError('DataValue is immutable')

    def __repr__(self):
        return "Binary({!r})".format(self.blob)


def dump_text(obj, buf):
    if isinstance(obj, NoneValue):
        buf.write('none')
    elif isinstance(obj, String):
        # raw text, escapes were never decoded
        buf.write('"')
        buf.write(obj.value)
        buf.write('"')
    elif isinstance(obj, Number):
        buf.write(format_number(obj.value))
    elif isinstance(obj, Boolean):
        buf.write('true' if obj.value else 'false')
    elif isinstance(obj, List):
        buf.write('[')
        first = True
        for x in obj.items:
            if first:
                first = False
            else:
                buf.write(',')
            dump_text(x, buf)
        buf.write(']')
    elif isinstance(obj, Dict):
        buf.write('{')
        first = True
        for k in sorted(obj.entries):
            if first:
                first = False
            else:
                buf.write(',')
            buf.write('"')
            buf.write(k)
            buf.write('":')
            dump_text(obj.entries[k], buf)
        buf.write('}')
    elif isinstance(obj, Tuple):
        buf.write('(')
        dump_text(obj.first, buf)
        buf.write(',')
        dump_text(obj.second, buf)
        buf.write(')')
    elif isinstance(obj, Binary):
        buf.write('binary!(')
        buf.write(b64encode(obj.blob.data))
        buf.write(')')
    else:
        raise TypeError('bad obj {!r}'.format(obj))
