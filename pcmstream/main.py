import argparse
import logging
import sys
from dataclasses import replace

from pcmstream.core.logging import setup_logging
from pcmstream.core.config import Config, LoggingConfig
from pcmstream.core.exceptions import ConfigurationError, IoError
from pcmstream.core.format import SampleFormat, PlaybackRange
from pcmstream.streams.file import FileStream
from pcmstream.adapters.stream_in import InputAdapter
from pcmstream.adapters.stream_out import OutputAdapter
from pcmstream.pipeline.driver import PipelineDriver

logger = logging.getLogger("main")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pcmstream", description="Raw PCM stream tools")
    parser.add_argument("--log-level", type=str, default=None, help="Override PCMSTREAM_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    copy = subparsers.add_parser("copy", help="Copy a range of raw PCM samples between files")
    copy.add_argument("src", type=str, help="Source raw PCM file")
    copy.add_argument("dst", type=str, help="Destination file (overwritten)")
    copy.add_argument("--bits", type=int, default=16, help="Bits per sample (8, 16, 24, 32)")
    copy.add_argument("--channels", type=int, default=1, help="Number of interleaved channels")
    copy.add_argument("--rate", type=int, default=16000, help="Sample rate in Hz")
    copy.add_argument("--start", type=int, default=0, help="First sample frame to copy")
    copy.add_argument("--end", type=int, default=-1, help="Last sample frame to copy (-1: end of stream)")
    copy.add_argument("--chunk-size", type=int, default=None, help="Bytes moved per step")
    return parser

def copy_range(args, config: Config) -> int:
    stream_config = config.stream
    if args.chunk_size is not None:
        stream_config = replace(stream_config, output_chunk_size=args.chunk_size)

    fmt = SampleFormat(bits_per_sample=args.bits, channels=args.channels, sample_rate=args.rate)
    playback = PlaybackRange(start_sample=args.start, end_sample=args.end)

    with open(args.src, "rb") as src, open(args.dst, "wb") as dst:
        source = InputAdapter(FileStream(src), fmt=fmt, playback=playback,
                              seekable=True, config=stream_config)
        output = OutputAdapter(FileStream(dst), input=source, config=stream_config)
        written = PipelineDriver(output, source).run()

    logger.info(f"Copied {fmt.frames(written)} samples ({written} bytes) from {args.src} to {args.dst}")
    return written

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.load()
        if args.log_level:
            config.logging = LoggingConfig(level=args.log_level.upper(), format=config.logging.format)
    except ConfigurationError as e:
        print(f"pcmstream: {e}", file=sys.stderr)
        return 2
    setup_logging(level=config.logging.level, fmt=config.logging.format)

    try:
        if args.command == "copy":
            copy_range(args, config)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 2
    except (IoError, OSError) as e:
        logger.error(f"I/O error: {e}")
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
