class LrcError(ValueError):
    pass


class FormatError(LrcError):
    pass


class IDTagError(LrcError):
    pass


class InvalidKey(IDTagError):
    pass


class InvalidValue(IDTagError):
    pass


class InvalidLineText(LrcError):
    pass


class IndexOutOfRange(LrcError, IndexError):
    pass


class ParseError(LrcError):
    """Whole-document parse failure at a given (1-based) line."""

    def __init__(self, line_no: int, reason: str):
        super().__init__(f"line {line_no}: {reason}")
        self.line_no = line_no
        self.reason = reason
