class FakeDiskInfo:
    def __init__(self, total_size_bytes: int, free_space_size_bytes: int):
        self._total = total_size_bytes
        self._free = free_space_size_bytes

    def free_space_size_bytes(self) -> int:
        return self._free

    def total_size_bytes(self) -> int:
        return self._total


class FakeAppCacheInfo:
    def __init__(self, size_bytes: int = 0):
        self._size = size_bytes

    def app_cache_size_bytes(self) -> int:
        return self._size


class RecordingNotifier:
    def __init__(self):
        self.fired = 0

    def fire(self) -> None:
        self.fired += 1


# 64 MiB global limit used by the API client fixture
GLOBAL_LIMIT_OVERRIDE = 64 * 1024 * 1024
