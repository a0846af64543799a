import pytest

from entropy import FixedEntropySource


@pytest.fixture
def fixed_source():
    return FixedEntropySource(b'host-01Saturday, 17 October 202614:03:59')


@pytest.fixture
def missing_volume(tmp_path):
    return str(tmp_path / 'no' / 'such' / 'volume')
