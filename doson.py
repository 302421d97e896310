#!/usr/bin/env python3
"""
    doson: a small tagged value format

    >>> import doson
    >>> v = doson.parse('[1, 2, (true, "x")]')
    >>> v.weight(), v.size()
    (3.0, 18)
    >>> doson.dump(v)
    '[1,2,(true,"x")]'
"""
from dosonlib.blob import Blob
from dosonlib.codec import Codec, CONTENT_TYPE, default_codec, open_envelope, seal_envelope
from dosonlib.errors import DosonError, DecodeError, IoError, ParserErr
from dosonlib.value import (
    DataValue, NoneValue, NONE, NO_WEIGHT,
    String, Number, Boolean, List, Dict, Tuple, Binary,
)

parse = default_codec.parse
parse_strict = default_codec.parse_strict
dump = default_codec.dump
dump_json = default_codec.dump_json
envelope = default_codec.envelope

from_text = parse
to_text = dump
