from collections.abc import Callable

import pytest

from bankscraper.bankscraper import EXTRACT_ROWS_JS, SET_OFFSET_JS, PageDriver


class FakeDriver(PageDriver):
    """
    Recording stand-in for a browser page.

    ``pages`` is consumed one entry per row-extraction call; once exhausted
    every render is empty. ``alert_error`` is raised from alert dismissal
    when set.
    """

    def __init__(self, pages, alert_error: Exception | None = None) -> None:
        self.pages = list(pages)
        self.alert_error = alert_error
        self.calls: list[tuple] = []
        self.alert_calls = 0

    async def dismiss_alert_if_present(self) -> bool:
        self.alert_calls += 1
        self.calls.append(("alert",))
        if self.alert_error is not None:
            raise self.alert_error
        return True

    async def run_script(self, source, *args):
        self.calls.append(("script", source, args))
        if source == EXTRACT_ROWS_JS:
            return self.pages.pop(0) if self.pages else []
        return None

    @property
    def offsets(self) -> list[int]:
        return [c[2][0] for c in self.calls if c[0] == "script" and c[1] == SET_OFFSET_JS]

    @property
    def extract_calls(self) -> int:
        return sum(1 for c in self.calls if c[0] == "script" and c[1] == EXTRACT_ROWS_JS)


@pytest.fixture
def make_driver() -> Callable[..., FakeDriver]:
    return FakeDriver
