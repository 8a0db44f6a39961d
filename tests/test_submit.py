from genmap.config import GenmapConfig
from genmap.submit import ClientError, submit_generation


class RecordingClient:
    def __init__(self, request_id="req-1"):
        self.request_id = request_id
        self.calls = []

    def submit(self, endpoint, request):
        self.calls.append((endpoint, request))
        return self.request_id


class FailingClient:
    def __init__(self, exc):
        self.exc = exc

    def submit(self, endpoint, request):
        raise self.exc


FORM = {
    "model_id": "flux-schnell",
    "prompt": "a lighthouse",
    "width": "768",
    "height": 512,
    "output_format": "jpg",
    "num_outputs": "2",
}


def test_happy_path_builds_payload_and_submits():
    client = RecordingClient()
    res = submit_generation(FORM, client, config=GenmapConfig(webhook_url="https://hook"))

    assert res.success is True
    assert res.data == "req-1"
    assert res.endpoint == "fal-ai/flux/schnell"

    endpoint, request = client.calls[0]
    assert endpoint == "fal-ai/flux/schnell"
    assert request["webhookUrl"] == "https://hook?model_id=flux-schnell"
    assert request["input"] == {
        "prompt": "a lighthouse",
        "image_size": {"width": 768, "height": 512},
        "output_format": "jpeg",
        "num_images": 2,
    }


def test_unknown_model():
    client = RecordingClient()
    res = submit_generation({"model_id": "nope", "prompt": "x"}, client)
    assert res.success is False
    assert res.error == "Unsupported model, no endpoint"
    assert client.calls == []


def test_validation_failure_is_reported():
    client = RecordingClient()
    res = submit_generation({"model_id": "flux-schnell", "prompt": ""}, client)
    assert res.success is False
    assert "Prompt is required" in res.error
    assert client.calls == []


def test_validation_can_be_disabled():
    client = RecordingClient()
    res = submit_generation(
        {"model_id": "flux-schnell", "prompt": ""}, client, config=GenmapConfig(validate_requests=False)
    )
    assert res.success is True
    assert "prompt" not in client.calls[0][1]["input"]


def test_in_flight_cap():
    client = RecordingClient()
    res = submit_generation(FORM, client, config=GenmapConfig(max_in_flight=2), in_flight=2)
    assert res.success is False
    assert "Too many generations" in res.error
    assert client.calls == []


def test_client_api_error():
    res = submit_generation(FORM, FailingClient(ClientError("bad", status=422, detail="width too big")))
    assert res.success is False
    assert res.error == "api error: 422 width too big"
    assert res.payload["num_images"] == 2


def test_client_unexpected_error():
    res = submit_generation(FORM, FailingClient(RuntimeError("connection reset")))
    assert res.success is False
    assert res.error == "connection reset"
