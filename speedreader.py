#!/usr/bin/env python3
"""
speedreader — Read EPUB, Markdown or plain-text books one word at a time (RSVP).

Each unit is shown with its optimal reading position highlighted and held on
screen for a time derived from the WPM setting, trailing punctuation and word
length. Playback is a dead-man switch: it runs while held and stops on release.

Quick start:
  1. Optionally set SPEEDREADER_WPM=400 in .env
  2. python speedreader.py book.epub --dry-run
  3. python speedreader.py book.epub --chapters 2-3
  4. Press Ctrl-C to let go; playback pauses, reports your position and
     waits for a command (Enter resumes, q quits).
"""

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

from config import WPM_STEP, Configuration, load_configuration
from models import StopReason


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Speed-read EPUB, Markdown or text files word by word in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List chapters and estimated reading time:
  python speedreader.py book.epub --dry-run

  # Read chapters 2 to 4 at 500 words per minute:
  python speedreader.py book.epub --chapters 2-4 --wpm 500

  # Plain timing, one word at a time:
  python speedreader.py notes.md --no-smart-pauses --no-pair
        """,
    )
    parser.add_argument("input_path", type=Path, help="Path to EPUB (packed or unpacked), Markdown or .txt file")
    parser.add_argument(
        "--wpm", type=int, default=None, metavar="N",
        help="Words per minute, 100-900 (default: $SPEEDREADER_WPM or 350)",
    )
    parser.add_argument(
        "--no-smart-pauses", action="store_true", default=False,
        help="Disable extra time for punctuation and long words",
    )
    parser.add_argument(
        "--no-pair", action="store_true", default=False,
        help="Never show two short words together",
    )
    parser.add_argument(
        "--chapters", type=str, default=None, metavar="RANGE",
        help="Read only these chapters, e.g. '1-3' or '5'",
    )
    parser.add_argument(
        "--no-color", action="store_true", default=False,
        help="Do not highlight the anchor letter with ANSI colour",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Parse input and list chapters without starting playback",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log playback transitions")
    return parser.parse_args(argv)


def parse_chapter_range(range_str: str) -> range:
    """Parse '3-7' or '5' into a range (1-indexed, inclusive)."""
    if "-" in range_str:
        start, end = range_str.split("-", 1)
        return range(int(start), int(end) + 1)
    n = int(range_str)
    return range(n, n + 1)


def format_duration(total_ms: float) -> str:
    """Format milliseconds as H:MM:SS."""
    total_s = int(total_ms) // 1000
    h, rem = divmod(total_s, 3600)
    m, s = divmod(rem, 60)
    return f"{h}:{m:02d}:{s:02d}"


def print_chapter_list(book, chapters, config) -> None:
    from rsvp import estimate_reading_ms, tokenize

    print(f"Title:  {book.title}")
    print(f"Author: {book.author}")
    print(f"Format: {book.source_format}")
    print(f"Pace:   {config.words_per_minute} wpm"
          f" | smart pauses {'on' if config.smart_pauses else 'off'}"
          f" | short-word pairs {'on' if config.pair_short_words else 'off'}")
    print(f"\nFound {len(chapters)} chapters:")
    print("-" * 70)
    total_ms = 0.0
    for ch in chapters:
        tokens = tokenize(ch.text)
        chapter_ms = estimate_reading_ms(tokens, config)
        total_ms += chapter_ms
        print(f"  {ch.index:2d}. {ch.title[:44]:<44} {len(tokens):>7} words  {format_duration(chapter_ms):>8}")
    print("-" * 70)
    print(f"  Total reading time: {format_duration(total_ms)}")
    print()


async def play_chapter(session, hold) -> StopReason:
    """Hold the switch until the chapter ends or SIGINT lets go. Returns why playback stopped."""
    loop = asyncio.get_running_loop()
    stopped = loop.create_future()
    forward_status = session.on_status

    def on_status(held, reason):
        if forward_status:
            forward_status(held, reason)
        if not held and not stopped.done():
            stopped.set_result(reason)

    session.on_status = on_status
    try:
        loop.add_signal_handler(signal.SIGINT, hold.release)
    except NotImplementedError:
        pass  # Windows: Ctrl-C surfaces as KeyboardInterrupt in main()

    try:
        if not hold.press():
            return StopReason.END
        return await stopped
    finally:
        hold.release()
        session.on_status = forward_status
        try:
            loop.remove_signal_handler(signal.SIGINT)
        except NotImplementedError:
            pass


PAUSED_PROMPT = "[Enter] resume  b/f word  r rewind  +/- speed  n/p chapter  q quit > "


def apply_command(session, command: str) -> bool:
    """Apply one command typed while paused. Returns False when the reader quits."""
    command = command.strip().lower()
    if command == "q":
        return False
    if command == "b":
        session.step_back()
    elif command == "f":
        session.step_forward()
    elif command == "r":
        session.rewind()
    elif command == "+":
        session.nudge_speed(WPM_STEP)
    elif command == "-":
        session.nudge_speed(-WPM_STEP)
    elif command == "n":
        session.next_chapter()
    elif command == "p":
        session.prev_chapter()
    return True


async def play(book, chapters, config, view, read_command=input) -> None:
    from input_signal import HoldSignal
    from rsvp import AsyncioTimers
    from session import ReadingSession

    session = ReadingSession(
        config=config,
        timers=AsyncioTimers(asyncio.get_running_loop()),
        on_render=view.show,
        on_status=view.status,
    )
    session.load_book(book)
    hold = HoldSignal(session)
    selected = [ch.index - 1 for ch in chapters]
    session.load_chapter(selected[0])

    while True:
        chapter = session.chapters.current
        view.open(f"{session.chapter_label}  {chapter.title}", session.token_count)
        view.show(session.render())

        reason = await play_chapter(session, hold)
        view.close()

        if reason is StopReason.RELEASE:
            print(f"Paused in chapter {chapter.index} at word {session.index + 1}/{session.token_count}"
                  f" (text offset {session.cursor}, {session.config.words_per_minute} wpm).")
            # Nothing is scheduled while paused, so the prompt may block the loop.
            try:
                command = read_command(PAUSED_PROMPT)
            except EOFError:
                command = "q"
            if not apply_command(session, command):
                return
            continue

        later = [i for i in selected if i > session.chapters.index]
        if not later:
            break
        session.load_chapter(later[0])

    print("\nFinished.")


def main(argv: list[str] | None = None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    env_config = load_configuration()
    config = Configuration(
        words_per_minute=args.wpm if args.wpm is not None else env_config.words_per_minute,
        smart_pauses=env_config.smart_pauses and not args.no_smart_pauses,
        pair_short_words=env_config.pair_short_words and not args.no_pair,
    )

    # Import parsers and views lazily to keep --help fast
    from display import TerminalView
    from parsers import parse_file

    print(f"Parsing: {args.input_path}")
    try:
        book = parse_file(args.input_path)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    if args.chapters:
        try:
            chapter_range = parse_chapter_range(args.chapters)
        except ValueError:
            print(f"ERROR: Invalid chapter range '{args.chapters}'")
            sys.exit(1)
        chapters = [ch for ch in book.chapters if ch.index in chapter_range]
        if not chapters:
            print(f"ERROR: No chapters matched range '{args.chapters}' (book has {len(book.chapters)} chapters)")
            sys.exit(1)
    else:
        chapters = book.chapters

    print_chapter_list(book, chapters, config)

    if args.dry_run:
        print("Dry run complete. Playback not started.")
        return

    view = TerminalView(color=not args.no_color and sys.stdout.isatty())
    try:
        asyncio.run(play(book, chapters, config, view))
    except KeyboardInterrupt:
        view.close()
        print("\nInterrupted.")


if __name__ == "__main__":
    main()
