"""RTMP handshake: plain and digest-based (HMAC-SHA256) variants."""

import hashlib
import hmac
import os

from liveflow.pio import put_u32be, u32be

HANDSHAKE_TIMEOUT = 5.0
RTMP_VERSION = 3
PACKET_SIZE = 1536
SERVER_VERSION = 0x0D0E0A0D

_KEY_TAIL = bytes([
    0xF0, 0xEE, 0xC2, 0x4A, 0x80, 0x68, 0xBE, 0xE8, 0x2E, 0x00, 0xD0, 0xD1,
    0x02, 0x9E, 0x7E, 0x57, 0x6E, 0xEC, 0x5D, 0x2D, 0x29, 0x80, 0x6F, 0xAB,
    0x93, 0xB8, 0xE6, 0x36, 0xCF, 0xEB, 0x31, 0xAE,
])

CLIENT_FULL_KEY = b"Genuine Adobe Flash Player 001" + _KEY_TAIL
SERVER_FULL_KEY = b"Genuine Adobe Flash Media Server 001" + _KEY_TAIL
CLIENT_PARTIAL_KEY = CLIENT_FULL_KEY[:30]
SERVER_PARTIAL_KEY = SERVER_FULL_KEY[:36]

_DIGEST_LEN = 32


class HandshakeError(Exception):
    """Raised when the peer's handshake packets are invalid."""


def make_digest(key, src, gap):
    """HMAC-SHA256 of ``src``, skipping the 32 bytes at ``gap`` when ``gap`` > 0."""
    mac = hmac.new(bytes(key), digestmod=hashlib.sha256)
    src = bytes(src)
    if gap <= 0:
        mac.update(src)
    else:
        mac.update(src[:gap])
        mac.update(src[gap + _DIGEST_LEN:])
    return mac.digest()


def calc_digest_pos(data, base):
    """Return the offset of the digest given the 4 offset bytes at ``base``."""
    return sum(data[base:base + 4]) % 728 + base + 4


def find_digest(data, key, base):
    """Return the digest offset if the digest at ``base`` verifies, else None."""
    gap = calc_digest_pos(data, base)
    digest = make_digest(key, data, gap)
    if bytes(data[gap:gap + _DIGEST_LEN]) != digest:
        return None
    return gap


def parse_c1(data, peer_key, key):
    """Verify a digest-bearing C1 packet and return the key for S2's digest."""
    pos = find_digest(data, peer_key, 772)
    if pos is None:
        pos = find_digest(data, peer_key, 8)
    if pos is None:
        raise HandshakeError("rtmp: handshake server: C1 invalid")
    return make_digest(key, bytes(data[pos:pos + _DIGEST_LEN]), -1)


def create_s0s1(timestamp, version, key):
    """Build a version byte followed by a digest-signed 1536-byte packet."""
    packet = bytearray(1 + PACKET_SIZE)
    packet[0] = RTMP_VERSION
    body = bytearray(os.urandom(PACKET_SIZE))
    put_u32be(body, timestamp, 0)
    put_u32be(body, version, 4)
    gap = calc_digest_pos(body, 8)
    body[gap:gap + _DIGEST_LEN] = make_digest(key, body, gap)
    packet[1:] = body
    return bytes(packet)


def create_s2(key):
    """Build a random 1536-byte packet ending with its digest."""
    packet = bytearray(os.urandom(PACKET_SIZE))
    gap = PACKET_SIZE - _DIGEST_LEN
    packet[gap:] = make_digest(key, packet, gap)
    return bytes(packet)


def _set_timeout(conn, seconds):
    settimeout = getattr(conn.stream, "settimeout", None)
    if settimeout is not None:
        settimeout(seconds)


def handshake_client(conn):
    """Perform the simple client handshake on ``conn``."""
    c0c1 = bytes([RTMP_VERSION]) + bytes(PACKET_SIZE)
    _set_timeout(conn, HANDSHAKE_TIMEOUT)
    conn.rw.write(c0c1)
    conn.rw.flush()

    s0s1s2 = conn.rw.read(1 + 2 * PACKET_SIZE)
    s1 = s0s1s2[1:1 + PACKET_SIZE]

    conn.rw.write(s1)
    conn.rw.flush()
    _set_timeout(conn, None)


def handshake_server(conn):
    """Perform the server side of the handshake on ``conn``."""
    _set_timeout(conn, HANDSHAKE_TIMEOUT)
    c0c1 = conn.rw.read(1 + PACKET_SIZE)
    if c0c1[0] != RTMP_VERSION:
        raise HandshakeError(f"rtmp: handshake version={c0c1[0]} invalid")
    c1 = c0c1[1:]

    client_time = u32be(c1[0:4])
    client_version = u32be(c1[4:8])

    if client_version != 0:
        digest = parse_c1(c1, CLIENT_PARTIAL_KEY, SERVER_FULL_KEY)
        s0s1 = create_s0s1(client_time, SERVER_VERSION, SERVER_PARTIAL_KEY)
        s2 = create_s2(digest)
    else:
        s0s1 = bytes([RTMP_VERSION]) + bytes(PACKET_SIZE)
        s2 = c1

    conn.rw.write(s0s1 + s2)
    conn.rw.flush()

    conn.rw.read(PACKET_SIZE)
    _set_timeout(conn, None)