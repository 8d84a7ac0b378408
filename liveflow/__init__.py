"""RTMP chunking, connections and handshake, media packets, and HLS playlist serving."""

__version__ = "0.1.0"