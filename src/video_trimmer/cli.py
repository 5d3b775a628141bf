"""CLI entry point for the video trimmer toolchain."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from playback_control import StorageDir, Trimmer, TrimmerEvent, TrimRange, create_output_folder
from thumbnail_strip import DEFAULT_MAX_HEIGHT
from . import __version__
from .pipeline import preview_loop, run_session, save_passthrough, write_thumbnail_strip
from .settings import load_env_file, log_level


STORAGE_CHOICES = {
    "temporary": StorageDir.TEMPORARY,
    "documents": StorageDir.APPLICATION_DOCUMENTS,
    "external": StorageDir.EXTERNAL_STORAGE,
}


def _add_range_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--start", type=int, required=True, help="Trim start in milliseconds")
    parser.add_argument("--end", type=int, required=True, help="Trim end in milliseconds")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Video trimmer helper")
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command")

    thumbs = sub.add_parser("thumbnails", help="Write an evenly sampled thumbnail strip")
    thumbs.add_argument("--video", type=Path, required=True, help="Path to local video file")
    thumbs.add_argument("--count", type=int, default=10, help="Number of thumbnails")
    thumbs.add_argument("--quality", type=int, default=50, help="JPEG quality (0-100)")
    thumbs.add_argument(
        "--max-height", type=int, default=None, help=f"Thumbnail height cap (default: {DEFAULT_MAX_HEIGHT})"
    )
    thumbs.add_argument("--folder", default="Trimmer", help="Output folder name")
    thumbs.add_argument(
        "--storage", choices=sorted(STORAGE_CHOICES), default="documents", help="Where the folder lives"
    )
    thumbs.add_argument("--outdir", type=Path, default=None, help="Explicit output directory")

    preview = sub.add_parser("preview", help="Loop playback inside a trim range (headless)")
    preview.add_argument("--video", type=Path, required=True, help="Path to local video file")
    _add_range_args(preview)
    preview.add_argument("--seconds", type=float, default=5.0, help="How long to run the preview")
    preview.add_argument("--poll", type=float, default=0.05, help="Position poll interval in seconds")

    save = sub.add_parser("save", help="Save the trimmed video (passthrough) and print its path")
    save.add_argument("--video", type=Path, required=True, help="Path to local video file")
    _add_range_args(save)

    run = sub.add_parser("run", help="Load, sample thumbnails, preview and save")
    run.add_argument("--video", type=Path, required=True, help="Path to local video file")
    _add_range_args(run)
    run.add_argument("--count", type=int, default=10, help="Number of thumbnails")
    run.add_argument("--quality", type=int, default=50, help="JPEG quality (0-100)")
    run.add_argument("--folder", default="Trimmer", help="Output folder name")
    run.add_argument("--outdir", type=Path, default=None, help="Base directory for the folder")
    run.add_argument("--preview-polls", type=int, default=0, help="Position polls during preview")

    return parser


def _load(parser: argparse.ArgumentParser, video: Path) -> Trimmer:
    trimmer = Trimmer()
    ready: list[TrimmerEvent] = []
    trimmer.event_stream.subscribe(ready.append)
    trimmer.load_video(video)
    if not ready:
        trimmer.dispose()
        parser.error(f"Could not load video: {video}")
    return trimmer


def _range(parser: argparse.ArgumentParser, args: argparse.Namespace) -> TrimRange:
    try:
        return TrimRange(args.start, args.end)
    except ValueError as exc:
        parser.error(str(exc))
        raise


def main() -> None:
    # Load .env if present (ignored if values already in env)
    load_env_file()

    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.version:
        print(__version__)
        return

    if args.command == "thumbnails":
        if args.count <= 0:
            parser.error("--count must be > 0")
        out_dir = args.outdir or create_output_folder(args.folder, STORAGE_CHOICES[args.storage])
        paths = write_thumbnail_strip(
            args.video,
            count=args.count,
            quality=args.quality,
            out_dir=out_dir,
            max_height=args.max_height,
            on_progress=lambda done, total: print(f"[thumbnails] {done}/{total}"),
        )
        for path in paths:
            print(path)
        return

    if args.command == "preview":
        trim_range = _range(parser, args)
        trimmer = _load(parser, args.video)
        try:
            polls = max(1, int(args.seconds / args.poll)) if args.poll > 0 else 1
            wraps = preview_loop(trimmer, trim_range, iterations=polls, poll_interval=args.poll)
            print(f"[preview] wrapped {wraps} time(s)")
        finally:
            trimmer.dispose()
        return

    if args.command == "save":
        trim_range = _range(parser, args)
        trimmer = Trimmer()
        try:
            trimmer.load_video(args.video)
            print(save_passthrough(trimmer, trim_range))
        finally:
            trimmer.dispose()
        return

    if args.command == "run":
        _range(parser, args)
        summary = run_session(
            video_path=args.video,
            start_ms=args.start,
            end_ms=args.end,
            count=args.count,
            quality=args.quality,
            folder_name=args.folder,
            base_dir=args.outdir,
            preview_iterations=args.preview_polls,
        )
        print(json.dumps(summary, indent=2))
        return

    parser.print_help()


if __name__ == "__main__":
    main()
