import pytest

from fakes import FakeAPIs, SleepRecorder
from image_providers import PexelsProvider, UnsplashProvider


@pytest.fixture
def fake_apis():
    return FakeAPIs()


@pytest.fixture
def sleeps():
    return SleepRecorder()


@pytest.fixture
def unsplash():
    return UnsplashProvider("unsplash-key")


@pytest.fixture
def pexels():
    return PexelsProvider("pexels-key")
