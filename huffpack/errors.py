class HuffmanError(Exception):
    """Base class for every failure raised by the codec."""


class EmptyInputError(HuffmanError):
    pass


class MalformedTreeError(HuffmanError):
    pass


class TruncatedPayloadError(HuffmanError):
    pass


class MissingLengthError(HuffmanError):
    pass


class CorruptPayloadError(HuffmanError):
    pass
