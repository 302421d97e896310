"""
    Blob: an immutable run of bytes, written as `binary!(<base64>)`
"""
import base64
import binascii

from .errors import DecodeError, IoError


def b64encode(data):
    return base64.standard_b64encode(data).decode('ascii')


def b64decode(text):
    # strict: no characters outside the alphabet, padding required
    return base64.b64decode(text, validate=True)


class Blob:
    __slots__ = ('_data',)

    def __init__(self, data=b""):
        self._data = bytes(data)

    @classmethod
    def from_bytes(cls, data):
        return cls(data)

    @classmethod
    def from_base64(cls, text):
        try:
            return cls(b64decode(text))
        except (binascii.Error, ValueError) as e:
            raise DecodeError('Invalid base64: {}'.format(repr(text)[:40])) from e

    @classmethod
    def from_file(cls, path):
        """
            Read the whole of `path` into a new Blob.
        """
        try:
            with open(path, 'rb') as fh:
                return cls(fh.read())
        except OSError as e:
            raise IoError('Cannot read blob from {}: {}'.format(path, e.strerror or e)) from e

    @property
    def data(self):
        return self._data

    def size(self):
        return len(self._data)

    def to_text(self):
        return "binary!({})".format(b64encode(self._data))

    def __len__(self):
        return len(self._data)

    def __bytes__(self):
        return self._data

    def __eq__(self, other):
        if not isinstance(other, Blob):
            return NotImplemented
        return self._data == other._data

    def __hash__(self):
        return hash(self._data)

    def __str__(self):
        return self.to_text()

    def __repr__(self):
        return "Blob({!r})".format(self._data)
