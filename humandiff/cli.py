from argparse import ArgumentParser
import json
import sys

from humandiff import __version__, compare
from humandiff.config import Settings, configure_logging
from humandiff.data.history import HistoryStore
from humandiff.rewrite.provider import HttpTransformationProvider, TransformationError
from humandiff.rewrite.settings import (
    AUDIENCE_INFO,
    MODE_INFO,
    TargetAudience,
    TransformationMode,
    TransformationRequest,
    Verbosity,
)
from humandiff.service import HumanizeService
from humandiff.text.diff import compute_diff, summarize
from humandiff.text.render import RENDER_FORMATS, render

OUTPUT_FORMATS = RENDER_FORMATS + ("json",)


def main(argv=None):
    parser = ArgumentParser(
        prog="humandiff",
        description="Compare an original text with its rewritten version and highlight the changes.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: HUMANDIFF_LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # diff command
    diff_parser = subparsers.add_parser(
        "diff",
        help="Compare two texts",
    )
    diff_parser.add_argument("original", nargs="?", help="Original text")
    diff_parser.add_argument("transformed", nargs="?", help="Transformed text")
    diff_parser.add_argument("--original-file", type=str, help="Path to the original text file")
    diff_parser.add_argument("--transformed-file", type=str, help="Path to the transformed text file")
    _add_format_arguments(diff_parser)
    diff_parser.add_argument(
        "--window",
        type=int,
        default=None,
        help="Lookahead window for alignment (default: HUMANDIFF_LOOKAHEAD_WINDOW or 3)",
    )
    diff_parser.add_argument(
        "--stats",
        action="store_true",
        help="Print change statistics to stderr",
    )

    # transform command
    transform_parser = subparsers.add_parser(
        "transform",
        help="Send text to the transformation service and show the highlighted result",
    )
    transform_parser.add_argument(
        "text",
        nargs="?",
        help="Text to transform (reads from stdin if not provided)",
    )
    transform_parser.add_argument("-f", "--file", type=str, help="Path to input text file")
    transform_parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output file path (writes to stdout if not provided)",
    )
    transform_parser.add_argument(
        "--mode",
        choices=[mode.value for mode in TransformationMode],
        default=TransformationMode.PARAPHRASE.value,
        help="; ".join(f"{mode.value}: {info['description']}" for mode, info in MODE_INFO.items()),
    )
    transform_parser.add_argument("--formality", type=int, default=50, help="Formality from 0 to 100")
    transform_parser.add_argument(
        "--audience",
        choices=[audience.value for audience in TargetAudience],
        default=TargetAudience.GENERAL.value,
        help=", ".join(f"{audience.value} ({label})" for audience, label in AUDIENCE_INFO.items()),
    )
    transform_parser.add_argument(
        "--verbosity",
        choices=[verbosity.value for verbosity in Verbosity],
        default=Verbosity.BALANCED.value,
    )
    transform_parser.add_argument("--api-url", type=str, help="Transformation service URL")
    transform_parser.add_argument(
        "--no-history",
        action="store_true",
        help="Do not record the transformation in history",
    )
    _add_format_arguments(transform_parser)

    # history command
    history_parser = subparsers.add_parser("history", help="Inspect stored transformations")
    history_parser.add_argument("--path", type=str, help="History parquet file")
    history_subparsers = history_parser.add_subparsers(dest="history_command")
    list_parser = history_subparsers.add_parser("list", help="List transformations, newest first")
    list_parser.add_argument("--limit", type=int, default=None)
    show_parser = history_subparsers.add_parser("show", help="Show a transformation with its changes")
    show_parser.add_argument("id")
    _add_format_arguments(show_parser)
    delete_parser = history_subparsers.add_parser("delete", help="Delete a transformation")
    delete_parser.add_argument("id")

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information",
    )

    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    configure_logging(args.log_level or settings.log_level)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    if args.command == "diff":
        handle_diff(args, settings)
    elif args.command == "transform":
        handle_transform(args, settings)
    elif args.command == "history":
        if not args.history_command:
            history_parser.print_help()
            sys.exit(0)
        handle_history(args, settings)
    elif args.command == "version":
        handle_version()


def _add_format_arguments(parser):
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="markdown",
        help="Output format (default: markdown)",
    )


def _read_file(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(1)


def _format_segments(segments, fmt):
    if fmt == "json":
        return json.dumps(
            {
                "segments": [segment.to_dict() for segment in segments],
                "stats": summarize(segments).to_dict(),
            },
            indent=2,
        ) + "\n"
    return render(segments, fmt)


def handle_version():
    """Display version information."""
    print(f"humandiff version {__version__}")


def handle_diff(args, settings):
    """Compare two texts given inline or as files."""
    original = _read_file(args.original_file) if args.original_file else args.original
    transformed = _read_file(args.transformed_file) if args.transformed_file else args.transformed
    if original is None or transformed is None:
        print("Error: both an original and a transformed text are required", file=sys.stderr)
        sys.exit(1)

    window = args.window if args.window is not None else settings.lookahead_window
    if window < 0:
        print(f"Error: --window must be non-negative, got {window}", file=sys.stderr)
        sys.exit(1)

    # The CLI shows every token, so empty inputs go straight to the engine.
    segments = compute_diff(original, transformed, window=window)
    print(_format_segments(segments, args.format), end="")

    if args.stats:
        stats = summarize(segments)
        print(
            f"same: {stats.same_words} words, added: {stats.added_words} words, "
            f"removed: {stats.removed_words} words, changed: {stats.change_ratio:.1%}",
            file=sys.stderr,
        )


def handle_transform(args, settings):
    """Transform text through the remote service and print the highlighted result."""
    if args.file:
        text = _read_file(args.file)
    elif args.text:
        text = args.text
    else:
        text = sys.stdin.read()

    try:
        request = TransformationRequest(
            original_text=text,
            mode=args.mode,
            formality=args.formality,
            target_audience=args.audience,
            verbosity=args.verbosity,
        )
    except ValueError as e:
        print(f"Error: Invalid request: {e}", file=sys.stderr)
        sys.exit(1)

    provider = HttpTransformationProvider(
        args.api_url or settings.api_url,
        timeout=settings.timeout,
        api_key=settings.api_key,
    )
    history = None if args.no_history else HistoryStore(settings.history_path)
    service = HumanizeService(provider, history=history, window=settings.lookahead_window)

    try:
        result = service.transform(request)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except TransformationError as e:
        print(f"Error: Transformation failed: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        provider.close()

    output = _format_segments(result.segments, args.format)
    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(output)
        except OSError as e:
            print(f"Error writing to file: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(output, end="")


def handle_history(args, settings):
    """List, show or delete stored transformations."""
    store = HistoryStore(args.path or settings.history_path)

    if args.history_command == "list":
        records = store.list(limit=args.limit)
        if not records:
            print("No transformations yet.")
            return
        for record in records:
            preview = " ".join(record.original_text.split())
            if len(preview) > 60:
                preview = preview[:57] + "..."
            created = record.created_at.strftime("%Y-%m-%d %H:%M")
            label = MODE_INFO[record.mode]["label"]
            print(f"{record.id}  {created}  {label:<10}  {preview}")

    elif args.history_command == "show":
        try:
            record = store.get(args.id)
        except KeyError:
            print(f"Error: No transformation with ID {args.id}", file=sys.stderr)
            sys.exit(1)
        segments = compare(record.original_text, record.humanized_text, window=settings.lookahead_window)
        print(_format_segments(segments, args.format), end="")

    elif args.history_command == "delete":
        if not store.delete(args.id):
            print(f"Error: No transformation with ID {args.id}", file=sys.stderr)
            sys.exit(1)
        print(f"Deleted {args.id}")


if __name__ == "__main__":
    main()
