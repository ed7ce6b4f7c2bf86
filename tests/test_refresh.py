import asyncio
from unittest.mock import MagicMock

from predictive_notes.core.ngram_model import build_from_text
from predictive_notes.core.protocols import ComputeHost
from predictive_notes.session.refresh import LocalComputeHost, ModelRefreshDriver


class GatedHost:
    """Compute host whose responses are released by the test, in any order."""

    def __init__(self):
        self.gates = []

    async def request(self, message):
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return build_from_text(message["text"])


class BrokenHost:
    async def request(self, message):
        raise ConnectionError("worker gone")


def test_local_host_answers_predict_requests():
    host = LocalComputeHost()
    assert isinstance(host, ComputeHost)
    model = host.handle({"op": "predict", "text": "the cat sat"})
    assert model["the"][0].word == "cat"
    assert host.handle({"op": "predict", "text": "one"}) is None
    assert host.handle({"op": "train", "text": "the cat"}) is None


def test_refresh_publishes_model():
    published = MagicMock()
    driver = ModelRefreshDriver(on_published=published)
    assert driver.model is None
    assert asyncio.run(driver.refresh("the cat sat on the mat")) is True
    assert driver.model["the"][0].word == "cat"
    published.assert_called_once_with(driver.model)


def test_stale_response_is_discarded():
    async def scenario():
        host = GatedHost()
        driver = ModelRefreshDriver(host)
        older = asyncio.create_task(driver.refresh("old words here"))
        await asyncio.sleep(0)
        newer = asyncio.create_task(driver.refresh("new words there"))
        await asyncio.sleep(0)
        host.gates[1].set()
        assert await newer is True
        host.gates[0].set()
        assert await older is False
        return driver

    driver = asyncio.run(scenario())
    assert "new" in driver.model
    assert "old" not in driver.model
    assert driver.generation == 2


def test_failed_request_keeps_previous_model():
    driver = ModelRefreshDriver(LocalComputeHost())
    asyncio.run(driver.refresh("keep this model"))
    previous = driver.model
    driver.host = BrokenHost()
    assert asyncio.run(driver.refresh("anything else")) is False
    assert driver.model is previous


def test_published_model_is_replaced_not_mutated():
    driver = ModelRefreshDriver()
    asyncio.run(driver.refresh("a b"))
    first = driver.model
    snapshot = dict(first)
    asyncio.run(driver.refresh("c d"))
    assert first == snapshot
    assert driver.model is not first
