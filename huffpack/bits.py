from __future__ import annotations
from typing import Iterator, List, Tuple

from huffpack.errors import TruncatedPayloadError

NUMBER_OF_BITS = 8


class BitPacker:
    """Collects logical bits and packs them MSB-first into bytes."""

    def __init__(self) -> None:
        self._chunks: List[str] = []
        self._bit_count = 0

    def push(self, bit: int) -> None:
        if bit not in (0, 1):
            raise ValueError(f"bit must be 0 or 1, got {bit!r}")
        self._chunks.append("1" if bit else "0")
        self._bit_count += 1

    def push_code(self, code: str) -> None:
        self._chunks.append(code)
        self._bit_count += len(code)

    def __len__(self) -> int:
        return self._bit_count

    def finish(self) -> Tuple[bytes, int]:
        binary_string = "".join(self._chunks)
        return bytes(convert_string_to_bytearray(binary_string)), len(binary_string)


class BitReader:
    """Yields the first ``valid_bit_count`` bits of ``data``, MSB-first."""

    def __init__(self, data: bytes, valid_bit_count: int) -> None:
        needed = (valid_bit_count + NUMBER_OF_BITS - 1) // NUMBER_OF_BITS
        if len(data) < needed:
            raise TruncatedPayloadError(
                f"payload holds {len(data)} bytes, {needed} needed for {valid_bit_count} bits"
            )
        self._binary_string = convert_bytearray_to_string(
            byte_array=data[:needed], original_length=valid_bit_count
        )
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._binary_string) - self._pos

    def next(self) -> int:
        """Return the next bit; raises ``StopIteration`` once all valid bits are read."""
        if self._pos >= len(self._binary_string):
            raise StopIteration
        bit = self._binary_string[self._pos]
        self._pos += 1
        return 1 if bit == "1" else 0

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        return self.next()


def convert_string_to_bytearray(binary_string: str) -> bytearray:
    if len(binary_string) % NUMBER_OF_BITS != 0:
        padding_length = NUMBER_OF_BITS - (len(binary_string) % NUMBER_OF_BITS)
        binary_string += "0" * padding_length

    byte_array = bytearray()
    for i in range(0, len(binary_string), NUMBER_OF_BITS):
        byte = binary_string[i : i + NUMBER_OF_BITS]
        byte_array.append(int(byte, 2))
    return byte_array


def convert_bytearray_to_string(byte_array: bytes, original_length: int) -> str:
    binary_string = "".join(format(byte, "08b") for byte in byte_array)
    return binary_string[:original_length]
