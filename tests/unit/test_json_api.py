from mcp_vision import InvalidImageError, handle_json_request


class StubService:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def analyze(self, images, instruction):
        self.calls.append((images, instruction))
        if self.error:
            raise self.error
        return self.result


def test_ok_response():
    svc = StubService(result="two cats")
    resp = handle_json_request({"action": "analyze", "images": ["/a.png"], "instruction": "count"}, service=svc)
    assert resp == {"ok": True, "text": "two cats"}
    assert svc.calls == [(["/a.png"], "count")]


def test_pipeline_error_becomes_message():
    svc = StubService(error=InvalidImageError("Not a valid image file: cannot identify image file"))
    resp = handle_json_request({"images": "/a.png", "instruction": "x"}, service=svc)
    assert resp["ok"] is False
    assert resp["errors"] == ["Not a valid image file: cannot identify image file"]


def test_unexpected_error_is_reported_without_traceback():
    svc = StubService(error=KeyError("boom"))
    resp = handle_json_request({"images": "/a.png", "instruction": "x"}, service=svc)
    assert resp["ok"] is False
    assert resp["errors"][0].startswith("unexpected error")
    assert "Traceback" not in resp["errors"][0]


def test_unsupported_action():
    resp = handle_json_request({"action": "balance"}, service=StubService())
    assert resp == {"ok": False, "errors": ["unsupported action"]}


def test_too_many_images_with_real_service(settings):
    req = {"images": ["https://example.com/x.png"] * 12, "instruction": "x"}
    resp = handle_json_request(req, settings=settings)
    assert resp["ok"] is False
    assert "Too many images" in resp["errors"][0]
