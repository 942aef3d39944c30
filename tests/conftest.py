from typing import List

import pytest

from fakes import FakeBackend, FakePager
from mansearch.search.base_search import ManPageDocument


@pytest.fixture
def sample_docs() -> List[ManPageDocument]:
    return [
        ManPageDocument("ls", "list directory contents", "LS(1) ls - list directory contents"),
        ManPageDocument("dir", "list directory contents", "DIR(1) dir - list directory contents"),
        ManPageDocument("lsblk", "list block devices", "LSBLK(8) lsblk - list block devices"),
        ManPageDocument("grep", "print lines that match patterns", "GREP(1) grep - print lines"),
    ]


@pytest.fixture
def backend(sample_docs: List[ManPageDocument]) -> FakeBackend:
    return FakeBackend(sample_docs)


@pytest.fixture
def pager() -> FakePager:
    return FakePager()
