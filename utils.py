from typing import List

def int_32_lsb(x: int) -> int:
    # keep only the low 32 bits, python ints never overflow
    return x & 0xffffffff

def to_unsigned(x: int, bits: int = 64) -> int:
    # two's complement reinterpretation, like casting to an unsigned type
    return x & ((1 << bits) - 1)

def signed_max(bits: int) -> int:
    return (1 << (bits - 1)) - 1

def text_to_key(s: str) -> List[int]:
    '''
    Render text as its ASCII byte values.

    Non-ASCII characters become b'?' so every value stays in 0..255.
    '''
    return list(s.encode('ascii', errors='replace'))
