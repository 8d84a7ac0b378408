import pytest

from liveflow.hls_playlist import NoKeyError, TSCache, TSItem


def test_item_copies_data():
    raw = bytearray(b"abc")
    item = TSItem("/live/a/1.ts", 3000, 1, raw)
    raw[0] = ord("z")
    assert item.data == b"abc"


def test_get_item_round_trip():
    cache = TSCache("live/a")
    item = TSItem("/live/a/1.ts", 3000, 1, b"\x47")
    cache.set_item(item.name, item)
    assert cache.get_item("/live/a/1.ts") == item
    assert cache.id == "live/a"


def test_missing_key_raises():
    cache = TSCache("live/a")
    with pytest.raises(NoKeyError) as excinfo:
        cache.get_item("/nope.ts")
    assert str(excinfo.value) == "No key for cache"


def test_eviction_keeps_three_newest():
    cache = TSCache("live/a")
    for seq in range(1, 5):
        name = f"/live/a/{seq}.ts"
        cache.set_item(name, TSItem(name, 3000, seq))
    assert len(cache) == 3
    with pytest.raises(NoKeyError):
        cache.get_item("/live/a/1.ts")
    assert cache.get_item("/live/a/4.ts").seq_num == 4
    assert b"#EXT-X-MEDIA-SEQUENCE:2\n" in cache.gen_m3u8_playlist()


def test_playlist_worked_example():
    cache = TSCache("live/a")
    cache.set_item("/live/a/1.ts", TSItem("/live/a/1.ts", 3000, 1))
    cache.set_item("/live/a/2.ts", TSItem("/live/a/2.ts", 3500, 2))
    assert cache.gen_m3u8_playlist() == (
        b"#EXTM3U\n#EXT-X-VERSION:3\n#EXT-X-ALLOW-CACHE:NO\n"
        b"#EXT-X-TARGETDURATION:4\n#EXT-X-MEDIA-SEQUENCE:1\n\n"
        b"#EXTINF:3.000,\n/live/a/1.ts\n#EXTINF:3.500,\n/live/a/2.ts\n"
    )


def test_empty_playlist():
    playlist = TSCache("live/a").gen_m3u8_playlist()
    assert playlist.endswith(b"#EXT-X-TARGETDURATION:1\n#EXT-X-MEDIA-SEQUENCE:0\n\n")
    assert b"#EXTINF" not in playlist


def test_playlist_order_follows_insertion():
    cache = TSCache("live/a", num=5)
    names = ["/live/a/9.ts", "/live/a/3.ts", "/live/a/5.ts"]
    for seq, name in enumerate(names):
        cache.set_item(name, TSItem(name, 1000, seq))
    text = cache.gen_m3u8_playlist().decode()
    positions = [text.index(name) for name in names]
    assert positions == sorted(positions)