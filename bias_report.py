from tqdm.auto import trange
import numpy as np
import sys
from mersenne_twister import MT19937, DEFAULT_SEED, w

OUTPUTS = 1 << w

def modulo_bias(span: int) -> (int, int, int):
    '''
    Exact skew of `next() % span` over one full cycle of 2^32 raw outputs.

    Output:
        @heavy          times each of the first `heavy_count` offsets occurs
        @light          times each remaining offset occurs
        @heavy_count    how many offsets are favoured
    When span divides 2^32, heavy_count is 0 and there is no bias.
    '''
    assert span > 0, 'span must be positive.'
    if span > OUTPUTS:
        # only the first 2^32 offsets are reachable
        return 1, 0, OUTPUTS
    light, heavy_count = divmod(OUTPUTS, span)
    return light + 1, light, heavy_count

def expected_frequencies(span: int) -> np.ndarray:
    heavy, light, heavy_count = modulo_bias(span)
    freq = np.full(span, light, dtype=np.float64)
    freq[:heavy_count] = heavy
    return freq / OUTPUTS

def sample_histogram(generator: MT19937,
                     min_value: int,
                     max_value: int,
                     draws: int,
                     unbiased: bool = False,
                     progress: bool = False
                    ) -> np.ndarray:
    '''
    Parameters:
        @generator  source of the draws, advanced `draws` times or more
        @min_value  lower bound, inclusive
        @max_value  upper bound, inclusive
        @draws      number of bounded draws
        @unbiased   use rejection sampling instead of the modulo reduction
        @progress   show a tqdm progress bar
    Output:
        counts per offset from min_value
    '''
    draw = generator.next_in_range_unbiased if unbiased else generator.next_in_range
    samples = np.empty(draws, dtype=np.int64)
    for i in trange(draws, desc='Drawing', leave=False, disable=not progress):
        samples[i] = draw(min_value, max_value) - min_value
    return np.bincount(samples, minlength=max_value - min_value + 1)

def chi_square(counts: np.ndarray, expected: np.ndarray) -> float:
    # expected holds probabilities, scaled to the sample size here
    expected = expected * counts.sum()
    return float(((counts - expected) ** 2 / expected).sum())

def report(span: int, draws: int, seed: int = DEFAULT_SEED):
    heavy, light, heavy_count = modulo_bias(span)
    print(f'range [0, {span - 1}], {draws} draws, seed {seed}')
    if heavy_count == 0:
        print('span divides 2^32: modulo reduction is unbiased.')
    else:
        print(f'offsets 0..{heavy_count - 1} occur {heavy} times per 2^32 outputs, '
              f'the other {span - heavy_count} occur {light} times')
        print(f'relative excess of favoured offsets: {(heavy - light) / light:.3e}')

    uniform = np.full(span, 1 / span)
    for unbiased in (False, True):
        counts = sample_histogram(MT19937(seed), 0, span - 1, draws, unbiased, progress=True)
        name = 'rejection' if unbiased else 'modulo'
        print(f'{name:>9}: min {counts.min()}, max {counts.max()}, '
              f'chi2 vs uniform {chi_square(counts, uniform):.2f} ({span - 1} dof)')

if __name__ == "__main__":
    span = int(sys.argv[1]) if len(sys.argv) > 1 else 3
    draws = int(sys.argv[2]) if len(sys.argv) > 2 else 100000
    seed = int(sys.argv[3]) if len(sys.argv) > 3 else DEFAULT_SEED
    report(span, draws, seed)
