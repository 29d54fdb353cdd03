"""Entry point for courtplay package."""

import argparse
import json
import logging
import sys
from typing import Optional

from courtplay.core.models import Play


def main() -> None:
    """Main entry point for the courtplay application."""
    parser = argparse.ArgumentParser(
        description="Courtplay - basketball play playback engine",
        prog="courtplay",
    )
    parser.add_argument(
        "--play",
        type=str,
        default=None,
        help="Path to a play JSON document (default: built-in sample play)",
    )
    parser.add_argument(
        "--fps",
        type=float,
        default=None,
        help="Export sampling rate (default: COURTPLAY_EXPORT_FPS or 30)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the sampled frames to this JSON file",
    )
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Drive a playback session with fixed ticks and print its log",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP API",
    )
    parser.add_argument("--host", type=str, default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args()

    from courtplay.config import get_config

    config = get_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Config error: {error}", file=sys.stderr)
        sys.exit(2)

    if args.serve:
        from courtplay.api.main import run_api

        run_api(host=args.host, port=args.port)
        return

    from courtplay.core.errors import InvalidPlayError
    from courtplay.editor.samples import pick_and_roll

    if args.play:
        try:
            with open(args.play) as f:
                play = Play.from_dict(json.load(f))
        except (OSError, json.JSONDecodeError, InvalidPlayError) as e:
            print(f"Could not load play: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        play = pick_and_roll()

    print(f"Courtplay - {play.title}")
    print("=" * 50)

    if args.realtime:
        run_realtime(play)
    else:
        run_export(play, args.fps or config.export_fps, args.output)


def run_export(play: Play, fps: float, output: Optional[str] = None) -> None:
    """Sample the play in batch mode and print a frame summary."""
    from courtplay.animation import export_play, get_easing
    from courtplay.config import get_config

    config = get_config()
    result = export_play(
        play,
        fps=fps,
        transition_ms=config.transition_ms,
        easing=get_easing(config.easing),
        output_path=output,
    )
    print(f"Timeline: {len(result.timeline)} frames, {result.timeline.total_ms:.0f}ms")
    for frame in result.timeline.frames:
        target = f" -> scene {frame.to_scene_index + 1}" if frame.to_scene_index is not None else ""
        step = f" step {frame.timing_step}" if frame.timing_step is not None else ""
        print(
            f"  {frame.start_ms:>7.0f}ms  {frame.kind.value:<16} "
            f"scene {frame.scene_index + 1}{step}{target} ({frame.duration_ms:.0f}ms)"
        )
    print(f"Sampled {len(result.frames)} frames at {fps:g} fps")
    if output:
        print(f"Wrote {output}")


def run_realtime(play: Play, delta_ms: float = 1000 / 60) -> None:
    """Drive a session at 60 Hz until playback completes."""
    from courtplay.animation import PlaybackSession
    from courtplay.events import EventBus
    from courtplay.logging import PlaybackLog

    bus = EventBus()
    log = PlaybackLog()
    log.connect_to_event_bus(bus)

    session = PlaybackSession.from_config(play, event_bus=bus)
    session.controller.play()
    ticks = 0
    while session.controller.is_playing:
        session.tick(delta_ms)
        ticks += 1

    for line in log.format_lines():
        print(line)
    print(f"Finished after {ticks} ticks ({ticks * delta_ms:.0f}ms)")


if __name__ == "__main__":
    main()
