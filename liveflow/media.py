"""Media packets, their codec headers and stream descriptions."""

from dataclasses import dataclass
from typing import Optional, Union

from liveflow.chunk import TAG_AUDIO, TAG_SCRIPTDATAAMF0, TAG_VIDEO

SOUND_AAC = 10
AAC_SEQHDR = 0
AAC_RAW = 1
VIDEO_H264 = 7


@dataclass
class Info:
    """Identifies a reader or writer: stream key, URL, unique id and kind."""

    key: str = ""
    url: str = ""
    uid: str = ""
    inter: bool = False

    def is_interval(self):
        """True for writers owned by the server itself (HLS, HTTP-FLV, players)."""
        return self.inter


@dataclass(frozen=True)
class VideoHeader:
    """The parsed FLV video tag header of a packet."""

    codec_id: int = VIDEO_H264
    is_key_frame: bool = False
    is_seq: bool = False
    composition_time: int = 0


@dataclass(frozen=True)
class AudioHeader:
    """The parsed FLV audio tag header of a packet."""

    sound_format: int = SOUND_AAC
    aac_packet_type: int = AAC_RAW


@dataclass
class Packet:
    """One audio, video or metadata message flowing from a publisher to players."""

    is_audio: bool = False
    is_video: bool = False
    is_metadata: bool = False
    timestamp: int = 0
    stream_id: int = 0
    header: Optional[Union[VideoHeader, AudioHeader]] = None
    data: bytes = b""

    def type_id(self):
        """The FLV/RTMP message type used when sending this packet."""
        if self.is_video:
            return TAG_VIDEO
        if self.is_metadata:
            return TAG_SCRIPTDATAAMF0
        return TAG_AUDIO