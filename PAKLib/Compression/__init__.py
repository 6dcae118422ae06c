import struct
from typing import Tuple

from ..Exceptions import MalformedStreamException

LZSS_MIN_MATCH = 3
# 4-bit count field plus one extension byte
LZSS_MAX_MATCH = LZSS_MIN_MATCH + 0xF + 0xFF
LZSS_MAX_POSITION = 0xFFF


class DictionaryWindow:
    """Circular history buffer of one decompression call."""

    def __init__(self, capacity: int):
        if not 0 < capacity <= LZSS_MAX_POSITION + 1:
            raise ValueError(f"Invalid dictionary capacity: 0x{capacity:X}")
        self.capacity = capacity
        self.buffer = bytearray(capacity)
        self.cursor = 0
        self.fill = 0

    def append(self, byte: int):
        self.buffer[self.cursor] = byte
        self.cursor = (self.cursor + 1) % self.capacity
        if self.fill < self.capacity:
            self.fill += 1

    def get(self, position: int) -> int:
        if not 0 <= position < self.capacity:
            raise MalformedStreamException(f"Dictionary position 0x{position:X} is outside of the window (0x{self.capacity:X})")
        return self.buffer[position]


def decompress_lzss(data: bytes, output_size: int, dict_capacity: int) -> bytes:
    """Leaf flavoured LZSS.

    Differences from the textbook variant: the dictionary starts empty at
    position 0 instead of 0xFEE, a count nibble of 0xF is extended by one more
    byte, and back-reference positions wrap against the number of bytes
    written so far rather than the window size.
    """
    window = DictionaryWindow(dict_capacity)
    output = bytearray(output_size)
    output_pos = 0
    input_pos = 0
    input_size = len(data)

    def next_byte() -> int:
        nonlocal input_pos
        if input_pos >= input_size:
            raise MalformedStreamException(f"Compressed stream ended after {output_pos} of {output_size} bytes")
        byte = data[input_pos]
        input_pos += 1
        return byte

    control = 0
    while output_pos < output_size:
        control >>= 1
        if not control & 0x100:
            control = next_byte() | 0xFF00

        if control & 1:
            byte = next_byte()
            output[output_pos] = byte
            output_pos += 1
            window.append(byte)
            continue

        token = next_byte() | (next_byte() << 8)
        position = token >> 4
        repetitions = token & 0xF
        if repetitions == 0xF:
            repetitions += next_byte()
        repetitions += LZSS_MIN_MATCH

        if window.fill == 0:
            raise MalformedStreamException("Back-reference into an empty dictionary")

        while repetitions and output_pos < output_size:
            byte = window.get(position)
            output[output_pos] = byte
            output_pos += 1
            window.append(byte)
            position = (position + 1) % window.fill
            repetitions -= 1

    return bytes(output)


def find_longest_match(data: bytes, position: int, window_size: int) -> Tuple[int, int]:
    """Return (distance, length) of the longest earlier match, overlapping allowed."""
    max_match_length = min(LZSS_MAX_MATCH, len(data) - position)

    best_distance = -1
    best_length = -1

    for distance in range(1, min(position, window_size) + 1):
        search_pos = position - distance
        if data[search_pos] != data[position]:
            continue

        match_length = 1
        while match_length < max_match_length and data[search_pos + match_length] == data[position + match_length]:
            match_length += 1

        if match_length > best_length:
            best_length = match_length
            best_distance = distance

            if best_length == max_match_length:
                break

    return best_distance, best_length


def compress_lzss(data: bytes, dict_capacity: int) -> bytes:
    """Greedy encoder producing streams accepted by decompress_lzss."""
    if not 0 < dict_capacity <= LZSS_MAX_POSITION + 1:
        raise ValueError(f"Invalid dictionary capacity: 0x{dict_capacity:X}")

    output = bytearray()
    tokens = bytearray()
    flags = 0
    flag_position = 0
    data_pointer = 0

    while data_pointer < len(data):
        distance, length = find_longest_match(data, data_pointer, dict_capacity)

        if length < LZSS_MIN_MATCH:
            flags |= 1 << flag_position
            tokens.append(data[data_pointer])
            data_pointer += 1
        else:
            # the window cursor always sits at data_pointer % capacity
            position = (data_pointer - distance) % dict_capacity
            count = length - LZSS_MIN_MATCH
            if count < 0xF:
                tokens += struct.pack("<H", (position << 4) | count)
            else:
                tokens += struct.pack("<HB", (position << 4) | 0xF, count - 0xF)
            data_pointer += length

        flag_position += 1
        if flag_position == 8:
            output.append(flags)
            output += tokens
            tokens.clear()
            flags = 0
            flag_position = 0

    if flag_position:
        output.append(flags)
        output += tokens

    return bytes(output)


__all__ = [
    "DictionaryWindow",
    "decompress_lzss",
    "compress_lzss",
    "find_longest_match",
    "LZSS_MIN_MATCH",
    "LZSS_MAX_MATCH",
]
