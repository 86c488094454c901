"""Command line entry point for hl7wire.

Reads an HL7 message, parses it and writes it back re-serialized with the
chosen segment separator, or prints a per-segment summary.

Run directly:
    python -m hl7wire.cli message.hl7 [--summary] [--segment-separator crlf]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from hl7wire.common.config import HL7WireConfig
from hl7wire.common.constants import SEGMENT_SEPARATORS
from hl7wire.common.errors import HL7Error
from hl7wire.model.control import ControlSegment
from hl7wire.model.fields import compose
from hl7wire.model.message import Message, parse_message

logger = logging.getLogger(__name__)


def summarize(message: Message) -> str:
    """One line per segment (index, name, field count) plus header metadata."""
    config = message.config
    lines = []
    header = message.get_segment_by_index(0)
    if isinstance(header, ControlSegment):
        control_id = compose(header.get_message_control_id(), config.component_separator, config.subcomponent_separator)
        message_type = compose(header.get_message_type(), config.component_separator, config.subcomponent_separator)
        trigger = compose(header.get_trigger_event(), config.component_separator, config.subcomponent_separator)
        lines.append(f"type={message_type}^{trigger} control_id={control_id} version={config.hl7_version}")
    for index, segment in enumerate(message):
        lines.append(f"{index:>4}  {segment.name}  {segment.size()} fields")
    return "\n".join(lines) + "\n"


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    settings = HL7WireConfig()
    parser = argparse.ArgumentParser(
        description="hl7wire: parse and re-serialize HL7 v2.x messages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Normalize line endings to LF
  python -m hl7wire.cli message.hl7

  # Emit CRLF-separated segments without trailing field separators
  python -m hl7wire.cli message.hl7 --segment-separator crlf --no-ending-bar

  # List the segments of a message read from stdin
  cat message.hl7 | python -m hl7wire.cli - --summary
        """,
    )
    parser.add_argument("path", help="Path to the HL7 message file, or - for stdin")
    parser.add_argument(
        "--segment-separator", choices=sorted(SEGMENT_SEPARATORS), default=None,
        help="Segment separator for output (default: HL7WIRE_SEGMENT_SEPARATOR or LF)",
    )
    parser.add_argument(
        "--no-ending-bar", action="store_true",
        help="Strip the trailing field separator from every segment",
    )
    parser.add_argument(
        "--keep-empty", action="store_true",
        help="Keep empty components when splitting fields",
    )
    parser.add_argument(
        "--summary", action="store_true",
        help="Print one line per segment instead of the message",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default=settings.log_level,
        help="Logging level (default: HL7WIRE_LOG_LEVEL or WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    update: dict[str, object] = {}
    if args.segment_separator is not None:
        update["segment_separator"] = SEGMENT_SEPARATORS[args.segment_separator]
    if args.no_ending_bar:
        update["segment_ending_bar"] = False
    config = settings.to_delimiter_config().model_copy(update=update)

    try:
        text = _read_input(args.path)
    except OSError as e:
        print(f"Error reading {args.path}: {e}", file=sys.stderr)
        return 1

    try:
        # Input always treats a trailing field separator as the ending bar
        parsed = parse_message(
            text,
            config.model_copy(update={"segment_ending_bar": True}),
            keep_empty_subfields=args.keep_empty or settings.keep_empty_subfields,
        )
        message = Message(config=config)
        for segment in parsed:
            message.add_segment(segment)
        output = summarize(message) if args.summary else message.serialize()
    except HL7Error as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info("Processed %d segments from %s", len(message), args.path)
    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
