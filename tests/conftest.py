import pytest

from curiosity_service.config import settings

SAMPLE_REPLY = """Here are your vectors.

### ⟁ VECTOR 1: Mycelial Networks as Market Makers
**Escape Velocity:** HIGH
**Collision Point:** Fungal nutrient exchange meets order-book microstructure.
**The Hook:** Forests run a bid/ask spread in sugar and phosphorus.
**First Step:** Read Suzanne Simard on the wood-wide web.
**Serendipity Score:** 9

### ⟁ VECTOR 2: Bell Ringing Mathematics
**Escape Velocity:** medium
**Collision Point:** Change ringing and group theory.
**The Hook:** English bell towers enumerated permutations centuries before Cayley.
**First Step:** Watch a plain hunt on six bells.
**Serendipity Score:** 8

### ⟁ VECTOR 3: Desert Lichen Timekeeping
**Escape Velocity:** LOW
**Collision Point:** Lichenometry and archaeology.
**The Hook:** Some lichens grow a millimetre a century.
**First Step:** Look up Rhizocarpon geographicum growth curves.
**Serendipity Score:** 6
"""


@pytest.fixture
def sample_reply() -> str:
    return SAMPLE_REPLY


@pytest.fixture(autouse=True)
def no_default_key(monkeypatch):
    # Tests never pick up a developer's real key from .env
    monkeypatch.setattr(settings, "GEMINI_API_KEY", None)


class FakeProvider:
    model_id = "fake-model"

    def __init__(self, reply: str = SAMPLE_REPLY, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def generate(self, payload, *, api_key):
        self.calls.append({"payload": payload, "api_key": api_key})
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()
