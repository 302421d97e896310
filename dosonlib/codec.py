"""
    Codec: text in, DataValue out, and back again.

    A whole document may be wrapped in an envelope, `b:<base64>:`, whose
    body is the base64 of the document's utf-8 text. `parse` unwraps it
    before parsing.

    `parse` is lossy: anything that goes wrong gives back `NONE`, and text
    left over after the first value is ignored. `parse_strict` reports the
    failure as a ParserErr, and rejects trailing content.
"""
import binascii
import logging

from .blob import b64encode, b64decode
from .errors import ParserErr
from .grammar import Grammar
from .value import NONE

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/doson"

ENVELOPE_PREFIX = "b:"
ENVELOPE_SUFFIX = ":"


def has_envelope(buf):
    return len(buf) >= 3 and buf.startswith(ENVELOPE_PREFIX) and buf.endswith(ENVELOPE_SUFFIX)


def open_envelope(buf):
    """
        Strip a `b:<base64>:` wrapper, if there is one. A body that is not
        base64, or not utf-8 once decoded, opens to the empty string.
    """
    if not has_envelope(buf):
        return buf

    body = buf[len(ENVELOPE_PREFIX):-len(ENVELOPE_SUFFIX)]
    try:
        data = b64decode(body)
    except (binascii.Error, ValueError):
        logger.debug("envelope body is not valid base64: %r", body[:40])
        data = b""

    try:
        return data.decode('utf-8')
    except UnicodeDecodeError:
        logger.debug("envelope body is not valid utf-8")
        return ""


def seal_envelope(text):
    return "{}{}{}".format(ENVELOPE_PREFIX, b64encode(text.encode('utf-8')), ENVELOPE_SUFFIX)


class Codec:
    content_type = CONTENT_TYPE

    def __init__(self, transform=None):
        self.grammar = Grammar(transform)

    def parse(self, buf):
        buf = open_envelope(buf)
        try:
            obj, pos = self.grammar.parse(buf)
        except ParserErr as e:
            logger.debug("parse failed, returning none: %s", e)
            return NONE
        return obj

    def parse_strict(self, buf):
        buf = open_envelope(buf)
        obj, pos = self.grammar.parse(buf)

        if pos != len(buf):
            raise ParserErr(buf, pos, "Trailing content: {}".format(
                repr(buf[pos:pos + 10])))

        return obj

    def dump(self, obj):
        return obj.to_text()

    def dump_json(self, obj):
        return obj.to_json()

    def envelope(self, obj):
        return seal_envelope(self.dump(obj))


default_codec = Codec()
