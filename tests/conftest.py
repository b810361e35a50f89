import pytest
from fakes import FakeProvider

from humanly.errors import UpstreamError


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider(
        rewrite="So the thing works, mostly. It is fast. You just set it up, and go."
    )


@pytest.fixture
def failing_provider() -> FakeProvider:
    return FakeProvider(
        rewrite=UpstreamError("boom"), default_score=UpstreamError("boom")
    )
