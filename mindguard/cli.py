#!/usr/bin/env python3
"""Command-line interface for the chat core.

Usage:
    python -m mindguard.cli --help
    python -m mindguard.cli score "I feel great today"
    python -m mindguard.cli classify "I want to end it all tonight"
    python -m mindguard.cli classify "rough day" --sentiment -0.8
    python -m mindguard.cli respond "I've been so anxious" --name Sam --mood anxious
"""
import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from typing import List, Optional

logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """Set up argument parser."""
    parser = argparse.ArgumentParser(
        description="MindGuard chat core CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (logs go to stderr)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Score command
    score_parser = subparsers.add_parser("score", help="Score message sentiment")
    score_parser.add_argument("text", help="Message text")

    # Classify command
    classify_parser = subparsers.add_parser("classify", help="Classify message risk")
    classify_parser.add_argument("text", help="Message text")
    classify_parser.add_argument(
        "--sentiment", type=float,
        help="Precomputed sentiment score in [-1, 1]"
    )

    # Respond command
    respond_parser = subparsers.add_parser("respond", help="Generate a response")
    respond_parser.add_argument("text", help="Message text")
    respond_parser.add_argument("--user-id", help="User identifier")
    respond_parser.add_argument("--name", help="User display name")
    respond_parser.add_argument("--personality", help="Preferred personality")
    respond_parser.add_argument("--mood", help="Current mood label")
    respond_parser.add_argument(
        "--strategy", action="append", dest="strategies",
        help="Previously effective coping strategy (repeatable)"
    )
    respond_parser.add_argument(
        "--trigger", action="append", dest="triggers",
        help="Known trigger (repeatable)"
    )
    respond_parser.add_argument(
        "--sentiment", type=float,
        help="Precomputed sentiment score (scored locally when omitted)"
    )
    respond_parser.add_argument(
        "--local", action="store_true",
        help="Never call the remote generator"
    )

    return parser


def _print_json(payload: dict) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def cmd_score(args) -> int:
    """Score sentiment command."""
    from mindguard.services.sentiment_service import score, sentiment_emoji, sentiment_label

    value = score(args.text)
    _print_json({
        "score": value,
        "label": sentiment_label(value),
        "emoji": sentiment_emoji(value),
    })
    return 0


def cmd_classify(args) -> int:
    """Classify risk command."""
    from mindguard.services.safety_service import RiskClassifier

    assessment = RiskClassifier().assess(args.text, args.sentiment)
    _print_json(assessment.to_dict())
    return 0


def cmd_respond(args) -> int:
    """Generate response command."""
    from mindguard.services.chat_service import ChatService, ChatServiceConfig
    from mindguard.shared.models import UserContext

    config = ChatServiceConfig.from_env()
    if args.local:
        config = dataclasses.replace(config, enable_llm=False)

    context = UserContext(
        name=args.name,
        preferred_personality=args.personality,
        current_mood=args.mood,
        effective_strategies=tuple(args.strategies) if args.strategies else None,
        triggers=tuple(args.triggers) if args.triggers else None,
    )

    service = ChatService(config=config)
    result = asyncio.run(
        service.chat(args.text, user_id=args.user_id, user_context=context, sentiment=args.sentiment)
    )
    _print_json(result.to_dict())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = setup_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.command == "score":
            return cmd_score(args)
        elif args.command == "classify":
            return cmd_classify(args)
        elif args.command == "respond":
            return cmd_respond(args)
        else:
            parser.print_help()
            return 0
    except ValueError as e:
        logger.error("CLI_COMMAND_FAILED", extra={"command": args.command, "error": str(e)})
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
