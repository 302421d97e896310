"""
    hooray for exceptions
"""
class DosonError(Exception): pass

# Can happen: bad input handed to an explicit constructor
class DecodeError(DosonError): pass
class IoError(DosonError): pass


class ParserErr(DosonError):
    def __init__(self, buf, pos, reason=None):
        self.buf = buf
        self.pos = pos
        if reason is None:
            if pos < len(buf):
                reason = "Unknown Character {} (context: {})".format(
                    repr(buf[pos]), repr(buf[max(0, pos - 10):pos + 5]))
            else:
                reason = "Unexpected end of input"
        self.reason = reason
        DosonError.__init__(self, "{} (at pos={})".format(reason, pos))
