import pytest

from solbirth.chain.rpc import RecordSummary


def rec(handle: str, slot: int = 0, timestamp=1_600_000_000) -> RecordSummary:
    return RecordSummary(handle=handle, slot=slot, timestamp=timestamp)


class FakeClient:
    """
    Stand-in for RpcClient. `pages` and `records` hold either values or
    exceptions; each call pops the next one.
    """

    def __init__(self, pages=None, records=None):
        self.pages = list(pages or [])
        self.records = list(records or [])
        self.list_calls = []
        self.get_calls = []
        self.closed = False

    async def list_records(self, program_id, limit, before=None):
        self.list_calls.append({"program_id": program_id, "limit": limit, "before": before})
        item = self.pages.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def get_record(self, handle):
        self.get_calls.append(handle)
        item = self.records.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def close(self):
        self.closed = True


class SleepRecorder:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest.fixture
def sleeps():
    return SleepRecorder()
