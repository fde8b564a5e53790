class HuffpackError(ValueError):
    pass


class EmptyInputError(HuffpackError):
    pass


class FieldOverflowError(HuffpackError):
    pass


class TruncatedHeaderError(HuffpackError):
    pass


class TruncatedTreeError(HuffpackError):
    pass


class CorruptStreamError(HuffpackError):
    pass
