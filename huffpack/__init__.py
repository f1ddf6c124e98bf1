from huffpack.container import decode, encode
from huffpack.errors import (
    CorruptPayloadError,
    EmptyInputError,
    HuffmanError,
    MalformedTreeError,
    MissingLengthError,
    TruncatedPayloadError,
)

__all__ = [
    "encode",
    "decode",
    "HuffmanError",
    "EmptyInputError",
    "MalformedTreeError",
    "TruncatedPayloadError",
    "MissingLengthError",
    "CorruptPayloadError",
]
