from typing import Union

import numpy as np


class Mt19937:
    """32-bit Mersenne Twister with the init_genrand seeding (multiplier 1812433253).

    The pak2 table key depends on this exact seeding and on the tempered word order.
    """

    N = 624
    M = 397
    MATRIX_A = 0x9908B0DF
    UPPER_MASK = 0x80000000
    LOWER_MASK = 0x7FFFFFFF

    def __init__(self, seed: int):
        self.state = [0] * self.N
        self.idx = self.N
        self.reseed(seed & 0xFFFFFFFF)

    def reseed(self, seed: int):
        self.idx = self.N
        self.state[0] = seed & 0xFFFFFFFF
        for i in range(1, self.N):
            self.state[i] = (1812433253 * (self.state[i - 1] ^ (self.state[i - 1] >> 30)) + i) & 0xFFFFFFFF

    def _twist(self, i: int, j: int, k: int):
        x = (self.state[i] & self.UPPER_MASK) | (self.state[j] & self.LOWER_MASK)
        self.state[i] = self.state[k] ^ (x >> 1) ^ (self.MATRIX_A if (x & 1) else 0)

    def _fill_next_state(self):
        for i in range(0, self.N - self.M):
            self._twist(i, i + 1, i + self.M)
        for i in range(self.N - self.M, self.N - 1):
            self._twist(i, i + 1, i + self.M - self.N)
        self._twist(self.N - 1, 0, self.M - 1)
        self.idx = 0

    def next_u32(self) -> int:
        if self.idx >= self.N:
            self._fill_next_state()
        x = self.state[self.idx]
        self.idx += 1
        x ^= x >> 11
        x ^= (x << 7) & 0x9D2C5680
        x ^= (x << 15) & 0xEFC60000
        x ^= x >> 18
        return x & 0xFFFFFFFF


def decrypt(buffer: bytearray, seed: int, a: int, b: int, delta: int) -> bytearray:
    """XOR `buffer` in place with the MT keystream and a rolling additive byte.

    After each byte `a += b` and `b += delta`, both wrapping at 8 bits. The
    transform is its own inverse.
    """
    mt = Mt19937(seed)
    a &= 0xFF
    b &= 0xFF
    delta &= 0xFF
    for i in range(len(buffer)):
        buffer[i] ^= (mt.next_u32() & 0xFF) ^ a
        a = (a + b) & 0xFF
        b = (b + delta) & 0xFF
    return buffer


def unxor(data: Union[bytes, bytearray, memoryview], key: int) -> bytes:
    return (np.frombuffer(data, dtype=np.uint8) ^ np.uint8(key & 0xFF)).tobytes()


__all__ = ["Mt19937", "decrypt", "unxor"]
