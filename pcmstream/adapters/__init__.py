"""
Adapters Module - pcmstream

Boundary stages between a pull pipeline and raw PCM byte streams.

Main Components:
- InputAdapter: Pipeline source reading headerless PCM from a byte stream
- OutputAdapter: Pipeline sink writing upstream samples verbatim to a byte stream
- State: IDLE / BUSY lifecycle shared by both

Example Usage:
    from pcmstream.adapters import InputAdapter, OutputAdapter
    from pcmstream.core.format import SampleFormat, PlaybackRange
    from pcmstream.streams.file import FileStream, MemoryStream

    with open("voice.raw", "rb") as fh:
        source = InputAdapter(FileStream(fh),
                              fmt=SampleFormat(16, 1, 16000),
                              playback=PlaybackRange(start_sample=16000))
        sink = MemoryStream()
        output = OutputAdapter(sink, input=source)

        output.prepare()
        while output.step():
            pass
        output.done()
"""

from pcmstream.adapters.state import State
from pcmstream.adapters.stream_in import InputAdapter
from pcmstream.adapters.stream_out import OutputAdapter

__all__ = [
    "InputAdapter",
    "OutputAdapter",
    "State",
]
