from abc import abstractmethod, ABC
from datetime import datetime
from itertools import count
from typing import Iterable, List, Optional
import os
import shutil
import socket
import time
from errors import EntropyUnavailableError
from utils import text_to_key
from logger import get_logger

# reference volume for the storage figures
VOLUME_ENV = "MT19937_ENTROPY_VOLUME"

logger = get_logger(__name__)

# distinguishes keys collected within the same timer tick
_collect_counter = count()


def default_volume() -> str:
    return os.getenv(VOLUME_ENV) or os.path.abspath(os.sep)


class EntropySource(ABC):
    '''
    Supplies the seed key for auto-seeded generators.
    Calling an instance returns `collect()`.
    '''

    @abstractmethod
    def collect(self) -> List[int]: pass

    def __call__(self) -> List[int]:
        return self.collect()


class SystemEntropySource(EntropySource):
    '''
    Host and time derived key, rendered as ASCII bytes in this order:
        host name, local date and time, high resolution timer reading,
        timer tick frequency, free/used/total bytes of the reference
        volume, process id, call counter.

    Parameters:
        @volume     path on the reference volume, default from
                    MT19937_ENTROPY_VOLUME or the filesystem root
    '''

    def __init__(self, volume: Optional[str] = None):
        self.volume = volume or default_volume()

    def collect(self) -> List[int]:
        key = []
        for reading in (self.host_name(),
                        self.local_time(),
                        self.timer_reading(),
                        self.timer_frequency(),
                        self.storage_figures(),
                        str(os.getpid()),
                        str(next(_collect_counter))):
            key += text_to_key(reading)
        return key

    def host_name(self) -> str:
        try:
            return socket.gethostname()
        except OSError as e:
            raise self._unavailable('host name', e) from e

    def local_time(self) -> str:
        # long date followed by long time, e.g. 'Saturday, 17 October 202614:03:59'
        now = datetime.now()
        return now.strftime('%A, %d %B %Y') + now.strftime('%H:%M:%S')

    def timer_reading(self) -> str:
        return str(time.perf_counter_ns())

    def timer_frequency(self) -> str:
        resolution = time.get_clock_info('perf_counter').resolution
        if resolution <= 0:
            raise self._unavailable('timer frequency', f'clock resolution is {resolution}')
        return str(round(1 / resolution))

    def storage_figures(self) -> str:
        try:
            usage = shutil.disk_usage(self.volume)
        except OSError as e:
            raise self._unavailable(f'storage figures of {self.volume!r}', e) from e
        return f'{usage.free}{usage.used}{usage.total}'

    @staticmethod
    def _unavailable(reading, reason):
        logger.warning('entropy reading failed: %s (%s)', reading, reason)
        return EntropyUnavailableError(reading, reason)


class FixedEntropySource(EntropySource):
    '''Deterministic source returning the same key on every call.'''

    def __init__(self, values: Iterable[int]):
        self.values = list(values)
        self.calls = 0

    def collect(self) -> List[int]:
        self.calls += 1
        return list(self.values)
