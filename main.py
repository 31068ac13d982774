import argparse
import sys

from spectroedit.core import (
    CLIP_CONFIG,
    Clip,
    PlaybackController,
    UnsupportedAudioFileError,
    get_window_function,
    write_wav
)
from spectroedit.utils.logger import logger


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Split audio into spectral frames and resynthesize it.")
    parser.add_argument("input", help="Audio file to load")
    parser.add_argument("--frame-size", type=int, default=CLIP_CONFIG.default_frame_size)
    parser.add_argument("--overlap", type=int, default=CLIP_CONFIG.default_overlap)
    parser.add_argument("--window", default=CLIP_CONFIG.default_window)
    parser.add_argument(
        "--sub-clip", nargs=4, type=int, metavar=("START", "COUNT", "NEW_SIZE", "NEW_OVERLAP"),
        help="Re-frame a range of frames with new settings"
    )
    parser.add_argument("--output", help="Write the resynthesized audio to this WAV file")
    parser.add_argument("--play", action="store_true", help="Play the resynthesized audio")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        clip = Clip.from_file(
            args.input,
            frame_size=args.frame_size,
            overlap=args.overlap,
            window_factory=get_window_function(args.window)
        )
    except (UnsupportedAudioFileError, OSError, ValueError) as e:
        logger.error(f"Could not load {args.input}: {e}")
        return 1

    if args.sub_clip:
        clip = clip.sub_clip(*args.sub_clip)
    logger.info(f"{clip!r}")

    if args.output:
        with clip.get_audio() as stream:
            write_wav(stream, args.output)

    if args.play:
        controller = PlaybackController(clip.get_audio())
        if controller.play():
            controller.wait()
        controller.cleanup()
    return 0

if __name__ == "__main__":
    sys.exit(main())
