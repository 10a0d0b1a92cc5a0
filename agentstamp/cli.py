"""agentstamp: attribute stack dumps to AI agents and record git-ai checkpoints."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from instrukt_ai_logging import get_logger
from pydantic import ValidationError

from agentstamp.attribution import (
    AttributionResult,
    analyze,
    format_relevant_frames,
    format_stack_trace,
    parse_stack_text,
)
from agentstamp.checkpoint import AiAgentInput, CheckpointDispatcher, CheckpointInput, HumanInput
from agentstamp.config import AgentstampSettings, ConfigError, load_settings
from agentstamp.handler import ChangeAttributionHandler
from agentstamp.logging_config import setup_logging

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def _read_dump(source: Optional[str]) -> str:
    if source and source != "-":
        return Path(source).expanduser().read_text(encoding="utf-8", errors="replace")
    if sys.stdin.isatty():
        return ""
    return sys.stdin.read()


def _result_payload(result: AttributionResult) -> dict[str, object]:
    return {
        "agent_name": result.agent_name,
        "confidence": result.confidence.label,
        "relevant_frames": [str(frame) for frame in result.relevant_frames],
    }


def _cmd_analyze(args: argparse.Namespace, settings: AgentstampSettings) -> int:
    frames = parse_stack_text(_read_dump(args.file))
    result = analyze(frames)
    if args.json:
        print(json.dumps(_result_payload(result), indent=2))
        return EXIT_OK

    print(f"Agent:      {result.agent_name or '(none)'}")
    print(f"Confidence: {result.confidence.label}")
    print("Relevant frames:")
    print(format_relevant_frames(result.relevant_frames))
    if args.verbose and frames:
        print("Stack:")
        print(format_stack_trace(frames, max_frames=settings.max_stack_frames))
    return EXIT_OK


def _cmd_probe(_args: argparse.Namespace, settings: AgentstampSettings) -> int:
    dispatcher = CheckpointDispatcher.from_settings(settings)
    available = dispatcher.check_available()
    version = dispatcher.version
    version_text = str(version) if version else "unknown"
    if available:
        print(f"{settings.tool_binary} {version_text} (minimum {settings.min_version})")
        return EXIT_OK
    print(f"{settings.tool_binary} unavailable (version {version_text}, minimum {settings.min_version})")
    return EXIT_FAILED


def _cmd_checkpoint(args: argparse.Namespace, settings: AgentstampSettings) -> int:
    checkpoint_input: CheckpointInput = HumanInput() if args.human else AiAgentInput(agent_name=args.agent)
    dispatcher = CheckpointDispatcher.from_settings(settings)
    ok = dispatcher.checkpoint(checkpoint_input, args.cwd)
    return EXIT_OK if ok else EXIT_FAILED


def _cmd_record(args: argparse.Namespace, settings: AgentstampSettings) -> int:
    frames = parse_stack_text(_read_dump(args.file))
    handler = ChangeAttributionHandler(CheckpointDispatcher.from_settings(settings))
    ok = handler.on_document_change(frames, args.cwd)
    return EXIT_OK if ok else EXIT_FAILED


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="agentstamp", description=__doc__)
    parser.add_argument("--config", type=Path, default=None, help="Path to agentstamp.yml")
    parser.add_argument("--log-level", default=None, help="Override AGENTSTAMP_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze_parser = sub.add_parser("analyze", help="Attribute a textual stack dump to an agent")
    analyze_parser.add_argument("file", nargs="?", default=None, help="Stack dump file (default: stdin)")
    analyze_parser.add_argument("--json", action="store_true", help="Emit JSON")
    analyze_parser.add_argument("-v", "--verbose", action="store_true", help="Also print the parsed stack")
    analyze_parser.set_defaults(func=_cmd_analyze)

    probe_parser = sub.add_parser("probe", help="Check checkpoint tool availability and version")
    probe_parser.set_defaults(func=_cmd_probe)

    checkpoint_parser = sub.add_parser("checkpoint", help="Record a checkpoint")
    author = checkpoint_parser.add_mutually_exclusive_group(required=True)
    author.add_argument("--human", action="store_true", help="Change authored by a human")
    author.add_argument("--agent", default=None, help="Display name of the AI agent")
    checkpoint_parser.add_argument("--cwd", default=os.getcwd(), help="Repository root")
    checkpoint_parser.set_defaults(func=_cmd_checkpoint)

    record_parser = sub.add_parser("record", help="Attribute a stack dump and record the checkpoint")
    record_parser.add_argument("file", nargs="?", default=None, help="Stack dump file (default: stdin)")
    record_parser.add_argument("--cwd", default=os.getcwd(), help="Repository root")
    record_parser.set_defaults(func=_cmd_record)

    return parser


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG

    setup_logging(args.log_level or settings.log_level)
    logger.debug("agentstamp start", command=args.command, cwd=os.getcwd())
    try:
        return int(args.func(args, settings))
    except (OSError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILED


def main() -> None:
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
