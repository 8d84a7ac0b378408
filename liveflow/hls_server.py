"""Request handling for HLS playlists and segments."""

import threading
from dataclasses import dataclass, field

from liveflow.hls_playlist import NoKeyError

NO_PUBLISHER = "no publisher"

CROSSDOMAIN_XML = b"""<?xml version="1.0" ?>
<cross-domain-policy>
\t<allow-access-from domain="*" />
\t<allow-http-request-headers-from domain="*" headers="*"/>
</cross-domain-policy>"""

_ERROR_HEADERS = {
    "Content-Type": "text/plain; charset=utf-8",
    "X-Content-Type-Options": "nosniff",
}


@dataclass
class HLSResponse:
    """An HTTP status, headers and body."""

    status: int
    headers: dict = field(default_factory=dict)
    body: bytes = b""


def _error(status, message):
    return HLSResponse(status, dict(_ERROR_HEADERS), (message + "\n").encode("utf-8"))


def _base(path):
    stripped = path.rstrip("/")
    if not stripped:
        return "/" if path else "."
    return stripped.rsplit("/", 1)[-1]


def _ext(path):
    name = path.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def parse_m3u8_key(path):
    """Return the stream key of a playlist path, e.g. ``live/movie``."""
    path = path.lstrip("/")
    ext = _ext(path)
    if not ext:
        return path
    return path.split(ext)[0]


def parse_ts_key(path):
    """Return the stream key of a segment path ``/app/name/segment.ts``."""
    path = path.lstrip("/")
    parts = path.split("/", 2)
    if len(parts) != 3:
        raise ValueError(f"invalid path={path}")
    return parts[0] + "/" + parts[1]


class HLSServer:
    """Serves playlists and segments from per-stream segment caches."""

    def __init__(self):
        self._conns = {}
        self._lock = threading.Lock()

    def add_cache(self, key, cache):
        """Register the segment cache of stream ``key``."""
        with self._lock:
            self._conns[key] = cache

    def remove(self, key):
        """Forget stream ``key``; returns whether it was registered."""
        with self._lock:
            return self._conns.pop(key, None) is not None

    def _get(self, key):
        with self._lock:
            return self._conns.get(key)

    def handle(self, path):
        """Answer a request for ``path``."""
        if _base(path) == "crossdomain.xml":
            return HLSResponse(200, {"Content-Type": "application/xml"}, CROSSDOMAIN_XML)

        ext = _ext(path)
        if ext == ".m3u8":
            cache = self._get(parse_m3u8_key(path))
            if cache is None:
                return _error(403, NO_PUBLISHER)
            body = cache.gen_m3u8_playlist()
            return HLSResponse(200, {
                "Access-Control-Allow-Origin": "*",
                "Cache-Control": "no-cache",
                "Content-Type": "application/x-mpegURL",
                "Content-Length": str(len(body)),
            }, body)

        if ext == ".ts":
            try:
                key = parse_ts_key(path)
            except ValueError:
                return _error(403, NO_PUBLISHER)
            cache = self._get(key)
            if cache is None:
                return _error(403, NO_PUBLISHER)
            try:
                item = cache.get_item(path)
            except NoKeyError as exc:
                return _error(400, str(exc))
            return HLSResponse(200, {
                "Access-Control-Allow-Origin": "*",
                "Content-Type": "video/mp2ts",
                "Content-Length": str(len(item.data)),
            }, item.data)

        return HLSResponse(200)