import socket
from types import SimpleNamespace

import pytest

import entropy
from entropy import (VOLUME_ENV, EntropySource, FixedEntropySource,
                     SystemEntropySource, default_volume)
from errors import EntropyUnavailableError, MersenneTwisterError
from mersenne_twister import MT19937
from utils import text_to_key


def test_fixed_source_seeds_like_key(fixed_source):
    gen = MT19937(entropy_source=fixed_source)
    ref = MT19937(list(fixed_source.values))
    assert [gen.next() for _ in range(700)] == [ref.next() for _ in range(700)]
    assert fixed_source.calls == 1


def test_reseed_uses_injected_source(fixed_source):
    gen = MT19937(entropy_source=fixed_source)
    first = [gen.next() for _ in range(10)]
    gen.reseed()
    assert [gen.next() for _ in range(10)] == first
    assert fixed_source.calls == 2


def test_plain_callable_source():
    gen = MT19937(entropy_source=lambda: [1, 2, 3])
    assert gen.next() == MT19937([1, 2, 3]).next()


def test_empty_entropy_key_rejected():
    with pytest.raises(MersenneTwisterError):
        MT19937(entropy_source=FixedEntropySource([]))


def test_entropy_source_is_abstract():
    with pytest.raises(TypeError):
        EntropySource()


def test_system_source_key_layout(tmp_path):
    source = SystemEntropySource(volume=str(tmp_path))
    key = source()
    assert key[:len(socket.gethostname())] == text_to_key(socket.gethostname())
    assert all(0 <= v <= 255 for v in key)
    assert len(key) > 40


def test_system_source_varies(tmp_path):
    source = SystemEntropySource(volume=str(tmp_path))
    keys = [tuple(source()) for _ in range(50)]
    assert len(set(keys)) == len(keys)


def test_auto_seeded_generators_differ():
    for _ in range(200):
        assert MT19937().next() != MT19937().next()


def test_reseed_changes_output():
    for _ in range(200):
        gen = MT19937()
        first = gen.next()
        gen.reseed()
        assert gen.next() != first


def test_missing_volume(missing_volume):
    source = SystemEntropySource(volume=missing_volume)
    with pytest.raises(EntropyUnavailableError) as excinfo:
        source.collect()
    assert isinstance(excinfo.value.__cause__, OSError)
    with pytest.raises(EntropyUnavailableError):
        MT19937(entropy_source=source)


def test_reseed_failure_propagates(missing_volume):
    gen = MT19937(1)
    gen.entropy_source = SystemEntropySource(volume=missing_volume)
    with pytest.raises(RuntimeError):
        gen.reseed()


def test_missing_timer(monkeypatch, tmp_path):
    monkeypatch.setattr(entropy.time, 'get_clock_info',
                        lambda name: SimpleNamespace(resolution=0))
    with pytest.raises(EntropyUnavailableError, match='timer frequency'):
        SystemEntropySource(volume=str(tmp_path)).collect()


def test_host_name_failure(monkeypatch, tmp_path):
    def fail():
        raise OSError('no host')
    monkeypatch.setattr(entropy.socket, 'gethostname', fail)
    with pytest.raises(EntropyUnavailableError, match='host name'):
        SystemEntropySource(volume=str(tmp_path)).collect()


def test_volume_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv(VOLUME_ENV, str(tmp_path))
    assert default_volume() == str(tmp_path)
    assert SystemEntropySource().volume == str(tmp_path)
    monkeypatch.delenv(VOLUME_ENV)
    assert SystemEntropySource().volume == default_volume()


def test_text_to_key_stays_in_byte_range():
    assert text_to_key('ab') == [97, 98]
    assert text_to_key('é') == [ord('?')]
