"""
Command-line interface for fetching transcripts and serving the HTTP API.

Runs interactively when invoked without arguments.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

import questionary
from yaspin import yaspin

from .config import config
from .errors import TranscriptError
from .models import TranscriptResult
from .transcript import extract_video_id, fetch_transcript, fetch_video_metadata
from .utils import OUTPUT_FORMATS, format_transcript, read_video_list, save_transcript, slugify

_EXTENSIONS = {"text": "txt", "timestamps": "txt", "json": "json"}


def expand_inputs(inputs: List[str]) -> List[str]:
    """Expand arguments that name video list files into their entries."""
    videos = []
    for item in inputs:
        path = Path(item)
        if path.suffix in (".txt", ".list", ".urls") and path.is_file():
            videos.extend(read_video_list(path))
        else:
            videos.append(item)
    return videos


def describe_failure(result: TranscriptResult) -> str:
    hint = "retrying may help" if result.retryable else "retrying will not help"
    return f"{result.error} [{result.error_code}] ({hint})"


def process_video(
    url_or_id: str,
    output_format: str = "text",
    out_dir: Path | None = None,
    max_attempts: int | None = None,
    service_url: str | None = None,
) -> bool:
    """
    Fetch one transcript and print or save it.

    Returns:
        True unless the fetch failed.
    """
    try:
        video_id = extract_video_id(url_or_id)
    except TranscriptError as e:
        print(f"❌ {e} [{e.kind}]", file=sys.stderr)
        return False

    with yaspin(text=f"Fetching transcript for {video_id}...", color="cyan") as spinner:
        result = fetch_transcript(video_id, max_attempts=max_attempts, service_url=service_url)
        if result.ok:
            spinner.ok("✓")
        else:
            spinner.fail("✗")

    if not result.ok:
        print(f"❌ {video_id}: {describe_failure(result)}", file=sys.stderr)
        return False

    if result.no_captions:
        print(f"⚠️  {video_id}: video has no captions", file=sys.stderr)
        return True

    if out_dir is None:
        print(format_transcript(result, output_format))
        return True

    metadata = fetch_video_metadata(video_id)
    file_name = f"{slugify(metadata.title)}_{video_id}.{_EXTENSIONS[output_format]}"
    path = save_transcript(result, out_dir / file_name, output_format)
    print(f"✅ {video_id}: {len(result.segments)} segments → {path}", file=sys.stderr)
    return True


def interactive_main() -> None:
    """Prompt for a single video and output format."""
    url = questionary.text("Enter YouTube URL or video ID:").ask()
    if not url:
        sys.exit(0)

    output_format = questionary.select("Output format:", choices=list(OUTPUT_FORMATS)).ask()
    if not output_format:
        sys.exit(0)

    save = questionary.confirm("Save to a file instead of printing?", default=False).ask()
    out_dir = None
    if save:
        directory = questionary.path("Output directory:", default=".", only_directories=True).ask()
        if not directory:
            sys.exit(0)
        out_dir = Path(directory)

    sys.exit(0 if process_video(url.strip(), output_format, out_dir) else 1)


def serve(host: str, port: int) -> None:
    import uvicorn

    uvicorn.run("transcript_resolver.server:app", host=host, port=port, log_level=config.LOG_LEVEL.lower())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transcript-resolver",
        description="YouTube video → timestamped transcript",
        epilog="For interactive mode, run without arguments",
    )
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    fetch = sub.add_parser("fetch", help="Fetch transcripts")
    fetch.add_argument("videos", nargs="+", help="Video URL/ID or txt file w/ one per line")
    fetch.add_argument("-f", "--format", choices=OUTPUT_FORMATS, default="text")
    fetch.add_argument("-d", "--dir", help="Save into this directory instead of printing")
    fetch.add_argument("--attempts", type=int, default=config.MAX_ATTEMPTS, help="Max attempts per video")
    fetch.add_argument(
        "--service",
        default=config.TRANSCRIPT_SERVICE_URL,
        help="Base URL of a running transcript-resolver service to query instead of YouTube",
    )

    srv = sub.add_parser("serve", help="Run the HTTP API")
    srv.add_argument("--host", default=config.SERVER_HOST)
    srv.add_argument("--port", type=int, default=config.SERVER_PORT)

    return parser


def main(argv: List[str] | None = None) -> None:
    """Main CLI entry point."""
    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        logging.basicConfig(level=config.LOG_LEVEL.upper(), format="%(levelname)s %(name)s: %(message)s")
        try:
            interactive_main()
        except KeyboardInterrupt:
            print("\n\n👋 Interrupted by user")
            sys.exit(0)
        return

    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "serve":
        serve(args.host, args.port)
        return

    try:
        videos = expand_inputs(args.videos)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)

    out_dir = Path(args.dir) if args.dir else None
    failed = 0
    for video in videos:
        if not process_video(video, args.format, out_dir, args.attempts, args.service):
            failed += 1

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
