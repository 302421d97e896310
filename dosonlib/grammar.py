r"""
# doson grammar

```
value       := WS alternative WS
alternative := number | boolean | string | list | dict | tuple | binary
number      := [+-]? (digits ('.' digits?)? | '.' digits) ([eE] [+-]? digits)?
boolean     := true | false                 (any case)
string      := '"' (normal_char | '\' escapable)* '"'
escapable   := '"' | '\' | '/' | b | f | n | r | t | u hex hex hex hex
list        := '[' (value (',' value)*)? ']'
dict        := '{' (WS string WS ':' value (',' WS string WS ':' value)*)? '}'
tuple       := '(' value ',' value ')'
binary      := 'binary!(' base64 ')'
WS          := unicode whitespace
```

Alternatives are tried in order, and a failed alternative backtracks to
where it started. A number wins over everything else, so a bare `1` is
always a Number.

Strings are checked but not decoded: the payload is the raw text between the
quotes, backslashes and all. A `binary!(...)` body that is not valid padded
base64 becomes an empty blob rather than an error.

Nesting costs a few python stack frames per level, so documents nested more
than a few hundred levels deep (around 330 with the default recursion limit)
fail to parse.
"""

import binascii
import logging
import math
import re

from .blob import Blob, b64decode
from .errors import ParserErr
from .value import String, Number, Boolean, List, Dict, Tuple, Binary

logger = logging.getLogger(__name__)

whitespace = re.compile(r"\s+")

number = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")
exponent = re.compile(r"[eE][+-]?[0-9]+")
exponent_start = re.compile(r"[eE][+-]?")

boolean = re.compile(r"true|false", re.IGNORECASE | re.ASCII)

string_dq = re.compile(
    r'"((?:[^"\\\x00-\x1F\x7F]|\\(?:["\\/bfnrt]|u[0-9a-fA-F]{4}))*)"')

binary_open = "binary!("
binary_body = re.compile(r"[A-Za-z0-9+/]*={0,2}")


class Grammar:
    """
        Recursive descent over a str. Every `parse_*` method takes the buffer
        and a position, and returns `(obj, new_pos)` or raises ParserErr.
    """

    def __init__(self, transform=None):
        self.transform = transform
        self.alternatives = (
            self.parse_number,
            self.parse_boolean,
            self.parse_string,
            self.parse_list,
            self.parse_dict,
            self.parse_tuple,
            self.parse_binary,
        )

    def skip_whitespace(self, buf, pos):
        m = whitespace.match(buf, pos)
        if m:
            return m.end()
        return pos

    def expect(self, buf, pos, literal):
        if not buf.startswith(literal, pos):
            raise ParserErr(buf, pos, "Expected {} but found {}".format(
                repr(literal), repr(buf[pos:pos + 1]) if pos < len(buf) else 'end of input'))
        return pos + len(literal)

    def parse_value(self, buf, pos):
        pos = self.skip_whitespace(buf, pos)

        furthest = None
        for alternative in self.alternatives:
            try:
                out, end = alternative(buf, pos)
            except ParserErr as e:
                if furthest is None or e.pos > furthest.pos:
                    furthest = e
                continue

            if self.transform is not None:
                out = self.transform(out)
            return out, self.skip_whitespace(buf, end)

        if furthest is not None and furthest.pos > pos:
            raise furthest
        raise ParserErr(buf, pos, "Expected a value" if pos < len(buf) else None)

    def parse_number(self, buf, pos):
        m = number.match(buf, pos)
        if not m:
            raise ParserErr(buf, pos, "Invalid number")
        end = m.end()

        e = exponent.match(buf, end)
        if e:
            end = e.end()
        elif exponent_start.match(buf, end):
            raise ParserErr(buf, end, "Exponent without digits")

        out = float(buf[pos:end])
        if math.isinf(out):
            raise ParserErr(buf, pos, "Number out of range")
        return Number(out), end

    def parse_boolean(self, buf, pos):
        m = boolean.match(buf, pos)
        if not m:
            raise ParserErr(buf, pos, "Expected true or false")
        return Boolean(m.group().lower() == 'true'), m.end()

    def parse_raw_string(self, buf, pos):
        if not buf.startswith('"', pos):
            raise ParserErr(buf, pos, "Expected a string")
        m = string_dq.match(buf, pos)
        if not m:
            raise ParserErr(buf, pos, "Invalid double quoted string")
        return m.group(1), m.end()

    def parse_string(self, buf, pos):
        text, end = self.parse_raw_string(buf, pos)
        return String(text), end

    def parse_separated(self, buf, pos, element, close):
        """
            `(element (',' element)*)? close`, where a ',' that is not followed
            by an element is left in place (and so fails at `close`).
        """
        out = []
        try:
            item, pos = element(buf, pos)
        except ParserErr:
            pass
        else:
            out.append(item)
            while buf.startswith(',', pos):
                try:
                    item, end = element(buf, pos + 1)
                except ParserErr:
                    break
                out.append(item)
                pos = end

        if not buf.startswith(close, pos):
            raise ParserErr(buf, pos, "Expecting a ',', or a '{}' but found {}".format(
                close, repr(buf[pos:pos + 1]) if pos < len(buf) else 'end of input'))
        return out, pos + 1

    def parse_list(self, buf, pos):
        pos = self.expect(buf, pos, '[')
        items, end = self.parse_separated(buf, pos, self.parse_value, ']')
        return List(items), end

    def parse_entry(self, buf, pos):
        pos = self.skip_whitespace(buf, pos)
        key, pos = self.parse_raw_string(buf, pos)
        pos = self.skip_whitespace(buf, pos)
        pos = self.expect(buf, pos, ':')
        item, pos = self.parse_value(buf, pos)
        return (key, item), pos

    def parse_dict(self, buf, pos):
        pos = self.expect(buf, pos, '{')
        entries, end = self.parse_separated(buf, pos, self.parse_entry, '}')
        return Dict(entries), end

    def parse_tuple(self, buf, pos):
        pos = self.expect(buf, pos, '(')
        first, pos = self.parse_value(buf, pos)
        pos = self.expect(buf, pos, ',')
        second, pos = self.parse_value(buf, pos)
        pos = self.expect(buf, pos, ')')
        return Tuple(first, second), pos

    def parse_binary(self, buf, pos):
        pos = self.expect(buf, pos, binary_open)
        m = binary_body.match(buf, pos)
        body = m.group()
        end = self.expect(buf, m.end(), ')')

        try:
            blob = Blob(b64decode(body))
        except (binascii.Error, ValueError):
            logger.debug("binary!(...) body is not valid base64, using an empty blob: %r", body[:40])
            blob = Blob()
        return Binary(blob), end

    def parse(self, buf, pos=0):
        """
            Parse one value from `buf[pos:]`, returning it with the position
            of the first unconsumed character.
        """
        try:
            return self.parse_value(buf, pos)
        except RecursionError as e:
            raise ParserErr(buf, pos, "Nesting too deep") from e

    def parse_prefix(self, buf):
        obj, pos = self.parse(buf)
        return obj, buf[pos:]
