"""
Command-line entry point.

Loads configuration, configures logging, opens a workspace, and runs one
command against it.
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys

import structlog

from .config import TopicTreeConfig, load_config
from .workspace import Workspace


def configure_logging(level: str = "info", fmt: str = "text") -> None:
    """Configure structlog with the specified level and format."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level.lower()),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="topictree", description="Manage a topic/content tree")
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to configuration file (default: built-in defaults)",
    )
    parser.add_argument(
        "--actor",
        default=os.environ.get("TOPICTREE_ACTOR"),
        help="Acting user id for create commands (default: $TOPICTREE_ACTOR)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("tree", help="Print the topic hierarchy")

    p = sub.add_parser("add-topic", help="Create a topic")
    p.add_argument("title")
    p.add_argument("--parent", default=None, help="Parent topic id")

    p = sub.add_parser("rename-topic", help="Rename a topic")
    p.add_argument("topic_id")
    p.add_argument("title")

    p = sub.add_parser("delete-topic", help="Delete a topic, its subtopics and their content")
    p.add_argument("topic_id")

    p = sub.add_parser("add-content", help="Attach content to a topic")
    p.add_argument("topic_id")
    p.add_argument("title")
    p.add_argument("body")

    p = sub.add_parser("update-content", help="Replace a content item's title and body")
    p.add_argument("content_id")
    p.add_argument("title")
    p.add_argument("body")

    p = sub.add_parser("delete-content", help="Delete a content item")
    p.add_argument("content_id")

    p = sub.add_parser("list-content", help="List content attached to a topic")
    p.add_argument("topic_id")

    sub.add_parser("check", help="Report referential-integrity problems")
    sub.add_parser("stats", help="Print collection sizes and write metrics")
    return parser


def execute(args: argparse.Namespace, ws: Workspace) -> int:
    """Run one parsed command against an open workspace. Returns the exit code."""
    cmd = args.command

    if cmd == "tree":
        for topic, depth in ws.tree.walk():
            count = len(ws.contents.by_topic_id(topic.id))
            print(f"{'  ' * depth}{topic.title}  [{topic.id}] /{topic.slug} ({count})")

    elif cmd == "add-topic":
        topic = ws.topics.create(args.title, args.parent, args.actor)
        if topic is None:
            print("Nothing created: no actor", file=sys.stderr)
            return 1
        print(topic.id)

    elif cmd == "rename-topic":
        if ws.topics.rename(args.topic_id, args.title) is None:
            print(f"No such topic: {args.topic_id}", file=sys.stderr)
            return 1

    elif cmd == "delete-topic":
        removed = ws.topics.delete(args.topic_id)
        if not removed:
            print(f"No such topic: {args.topic_id}", file=sys.stderr)
            return 1
        print(f"Deleted {len(removed)} topic(s)")

    elif cmd == "add-content":
        content = ws.contents.create(args.topic_id, args.title, args.body, args.actor)
        if content is None:
            print("Nothing created: no actor", file=sys.stderr)
            return 1
        print(content.id)

    elif cmd == "update-content":
        if ws.contents.update(args.content_id, args.title, args.body) is None:
            print(f"No such content: {args.content_id}", file=sys.stderr)
            return 1

    elif cmd == "delete-content":
        if not ws.contents.delete(args.content_id):
            print(f"No such content: {args.content_id}", file=sys.stderr)
            return 1

    elif cmd == "list-content":
        for content in ws.contents.by_topic_id(args.topic_id):
            print(f"{content.id}\t{content.title}")

    elif cmd == "check":
        issues = ws.check()
        for issue in issues:
            print(f"{issue.kind.value}\t{issue.record_id}\t{issue.detail}")
        return 1 if issues else 0

    elif cmd == "stats":
        ws.stats()
        print(ws.metrics.to_prometheus(), end="")

    return 0


async def _run_command(config: TopicTreeConfig, args: argparse.Namespace) -> int:
    async with Workspace.from_config(config) as ws:
        return execute(args, ws)


def run(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else TopicTreeConfig()
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config.logging.level, config.logging.format)
    log = structlog.get_logger()
    log.debug("cli.config_loaded", config_path=args.config, command=args.command)

    sys.exit(asyncio.run(_run_command(config, args)))


if __name__ == "__main__":
    run()
