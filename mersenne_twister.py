# reimplementation of MT19937 following the reference mt19937ar.c
from numbers import Integral
from typing import Callable, Iterable, List, Optional, Sequence, Union
from errors import InvalidRangeError, RangeOverflowError, EmptySeedKeyError
from utils import int_32_lsb, to_unsigned, signed_max
from entropy import SystemEntropySource
from logger import get_logger

w, n, m, r = 32, 624, 397, 31
a = 0x9908B0DF
u = 11
s, b = 7, 0x9D2C5680
t, c = 15, 0xEFC60000
l = 18
f = 1812433253

lower_mask = 0x7fffffff
upper_mask = 0x80000000

# library default used when drawing from a never seeded generator
DEFAULT_SEED = 5489
# scalar seed that array seeding starts from
ARRAY_SEED = 19650218
# cursor sentinel: state vector has never been initialized
UNSEEDED = n + 1

logger = get_logger(__name__)

Seed = Union[int, Sequence[int]]


def init_genrand(seed: int) -> List[int]:
    # Initialize the generator from a seed
    states = [0] * n
    states[0] = int_32_lsb(seed)
    for i in range(1, n): # loop over each element
        states[i] = int_32_lsb(f * (states[i - 1] ^ (states[i - 1] >> (w - 2))) + i)
    return states


def init_by_array(key: Sequence[int]) -> List[int]:
    '''
    Initialize the state vector from a key of 32-bit words.

    Parameters:
        @key    non-empty sequence of ints, each reduced mod 2^32

    Scalar seeding makes nearby seeds produce related states; folding the
    whole key through two non-linear passes breaks that correlation.
    '''
    key = [int_32_lsb(k) for k in key]
    if len(key) == 0:
        raise EmptySeedKeyError()

    states = init_genrand(ARRAY_SEED)
    i, j = 1, 0
    for _ in range(max(n, len(key))):
        prev = states[i - 1]
        states[i] = int_32_lsb((states[i] ^ ((prev ^ (prev >> 30)) * 1664525)) + key[j] + j)
        i += 1
        j += 1
        if i >= n:
            states[0] = states[n - 1]
            i = 1
        if j >= len(key):
            j = 0

    for _ in range(n - 1):
        prev = states[i - 1]
        states[i] = int_32_lsb((states[i] ^ ((prev ^ (prev >> 30)) * 1566083941)) - i)
        i += 1
        if i >= n:
            states[0] = states[n - 1]
            i = 1

    # MSB is 1, assuring a non-zero initial array
    states[0] = upper_mask
    return states


def twist(states: List[int]):
    # Generate the next n values from the series x_i
    for i in range(n):
        x = (states[i] & upper_mask) | (states[(i + 1) % n] & lower_mask)
        xA = x >> 1
        if x & 1:
            # lowest bit of x is 1
            xA ^= a
        states[i] = states[(i + m) % n] ^ xA


def temper(y: int) -> int:
    y ^= (y >> u)
    y ^= ((y << s) & b)
    y ^= ((y << t) & c)
    y ^= (y >> l)
    return int_32_lsb(y)


class MT19937:
    '''
    MT19937 generator owning its state vector and cursor.

    Parameters:
        @seed           int for scalar seeding, a sequence of ints for
                        array seeding, None to build a key from entropy
        @entropy_source zero-argument callable returning values in 0..255,
                        defaults to `entropy.SystemEntropySource()`

    Instances are not synchronized. Share one across threads only behind
    a lock, or give each worker its own instance.
    '''

    def __init__(self,
                 seed: Optional[Seed] = None,
                 entropy_source: Optional[Callable[[], Iterable[int]]] = None
                ):
        if entropy_source is None:
            entropy_source = SystemEntropySource()
        self.entropy_source = entropy_source
        self.mt = [0] * n
        self.index = UNSEEDED
        if seed is None:
            self.reseed()
        else:
            self.seed(seed)

    @classmethod
    def unseeded(cls, entropy_source=None) -> 'MT19937':
        # first draw falls back to DEFAULT_SEED, like mt19937ar.c
        gen = cls.__new__(cls)
        gen.entropy_source = entropy_source
        gen.mt = [0] * n
        gen.index = UNSEEDED
        return gen

    def __repr__(self):
        state = 'unseeded' if self.index == UNSEEDED else f'index={self.index}'
        return f'{self.__class__.__name__}({state})'

    def seed(self, seed: Seed):
        if isinstance(seed, Integral):
            self.mt = init_genrand(int(seed))
            logger.debug('scalar seed %d', int_32_lsb(int(seed)))
        else:
            key = [int(k) for k in seed]
            self.mt = init_by_array(key)
            logger.debug('array seed with %d-word key', len(key))
        self.index = n

    def reseed(self):
        '''Discard the current state and seed from a fresh entropy key.'''
        if self.entropy_source is None:
            self.entropy_source = SystemEntropySource()
        key = list(self.entropy_source())
        logger.debug('reseeding from %d entropy values', len(key))
        self.mt = init_by_array(key)
        self.index = n

    def next(self) -> int:
        # Extract a tempered value based on MT[index]
        # calling twist() every n numbers
        if self.index >= n:
            if self.index == UNSEEDED:
                self.mt = init_genrand(DEFAULT_SEED)
            twist(self.mt)
            self.index = 0

        y = self.mt[self.index]
        self.index += 1
        return temper(y)

    __next__ = next

    def __iter__(self):
        return self

    def next_in_range(self, min_value: int, max_value: int) -> int:
        '''
        Returns next() reduced into [min_value, max_value] by modulo.

        The reduction favours the low end of the range whenever the span
        does not divide 2^32; see `bias_report.modulo_bias`. Use
        `next_in_range_unbiased` when that matters.
        '''
        span = self._span(min_value, max_value)
        return self.next() % span + min_value

    def next_in_range_unbiased(self, min_value: int, max_value: int) -> int:
        # rejection sampling: redraw inside the short final bucket
        span = self._span(min_value, max_value)
        if span > 1 << w:
            # wider than one output, same as the modulo reduction
            return self.next() + min_value
        limit = (1 << w) - (1 << w) % span
        while True:
            y = self.next()
            if y < limit:
                return y % span + min_value

    def next_in_range_signed(self, min_value: int, max_value: int, bits: int = 32) -> int:
        '''
        Signed overload of `next_in_range`.

        Parameters:
            @min_value  lower bound, inclusive
            @max_value  upper bound, inclusive
            @bits       width of the signed result type

        The bounds are reinterpreted as unsigned before drawing, so a
        negative bound raises RangeOverflowError.
        '''
        if min_value >= max_value:
            raise InvalidRangeError(min_value, max_value)
        top = signed_max(bits)
        for bound in (min_value, max_value):
            if not 0 <= bound <= top:
                raise RangeOverflowError(bound, bits)
        value = self.next_in_range(to_unsigned(min_value), to_unsigned(max_value))
        # narrowing check
        if value > top:
            raise RangeOverflowError(value, bits)
        return value

    def _span(self, min_value: int, max_value: int) -> int:
        if min_value >= max_value:
            raise InvalidRangeError(min_value, max_value)
        for bound in (min_value, max_value):
            if bound != to_unsigned(bound):
                raise RangeOverflowError(bound, 64, signed=False)
        return max_value - min_value + 1


if __name__ == '__main__':
    import sys
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_SEED
    count = int(sys.argv[2]) if len(sys.argv) > 2 else 10
    gen = MT19937(seed)
    for _ in range(count):
        print(gen.next())
