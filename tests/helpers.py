"""Shared fakes for tests: in-memory images and a stand-in for requests."""
import io

from PIL import Image


def make_image_bytes(w=200, h=150, fmt="PNG", color=(100, 150, 200), mode="RGB"):
    img = Image.new(mode, (w, h), color=color)
    b = io.BytesIO()
    img.save(b, format=fmt)
    return b.getvalue()


class FakeResponse:
    """Just enough of `requests.Response` for the fetcher and the model client."""

    def __init__(self, status_code=200, body=b"", headers=None, chunks=None):
        self.status_code = status_code
        self.headers = headers or {}
        self._body = body if isinstance(body, bytes) else body.encode("utf-8")
        self._chunks = chunks
        self.closed = False

    @property
    def text(self):
        return self._body.decode("utf-8")

    def iter_content(self, chunk_size=1):
        if self._chunks is not None:
            yield from self._chunks
            return
        for i in range(0, len(self._body), chunk_size):
            yield self._body[i:i + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def _call(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self._call("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._call("POST", url, **kwargs)


class FakeClock:
    """Stands in for the `time` module; `monotonic` walks `ticks`, then stays on the last one."""

    def __init__(self, *ticks):
        self._ticks = list(ticks)

    def monotonic(self):
        if len(self._ticks) > 1:
            return self._ticks.pop(0)
        return self._ticks[0]
