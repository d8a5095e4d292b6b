import pytest

from hololearn.services.catalog import MODEL_ASSETS
from hololearn.services.dispatch import TutorSession
from hololearn.services.registry import load_registry
from hololearn.services.scene import HeadlessScene


class FakeLoader:
    """Asset fetcher that returns canned bytes and fails for chosen URLs."""

    def __init__(self, failing: tuple[str, ...] = ()):
        self.failing = set(failing)
        self.calls: list[str] = []

    async def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        if url in self.failing:
            raise ConnectionError(f"cannot reach {url}")
        return b"glTF-binary"


class RecordingVoice:
    """Voice stand-in that records what it was asked to say."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.spoken: list[str] = []
        self.enabled = True

    def speak(self, text: str) -> None:
        if self.fail:
            raise RuntimeError("speech synthesis unavailable")
        self.spoken.append(text)

    def toggle_enabled(self) -> bool:
        self.enabled = not self.enabled
        return self.enabled

    def start_listening(self, on_result) -> bool:
        return False

    def stop_listening(self) -> None:
        pass


@pytest.fixture
def registry():
    return load_registry()


@pytest.fixture
def loader() -> FakeLoader:
    return FakeLoader()


@pytest.fixture
def scene(loader: FakeLoader) -> HeadlessScene:
    return HeadlessScene(MODEL_ASSETS, loader)


@pytest.fixture
def voice() -> RecordingVoice:
    return RecordingVoice()


@pytest.fixture
def session(registry, scene, voice) -> TutorSession:
    return TutorSession(registry, scene, voice)
