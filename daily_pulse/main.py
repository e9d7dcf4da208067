"""Command-line entrypoint for Daily Pulse.

Subcommands cover the whole user flow:
1) register / login / logout
2) edit topics and preferred sources
3) generate a feed for a date and archive chosen items
4) review or prune the repository
"""

from __future__ import annotations

import argparse
import getpass
import sys
from functools import partial
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from .app import FeedSession, default_date
from .errors import PulseError
from .models import Article, Session
from .processors import fetch_news
from .services import ArticleRepository, IdentityService, SettingsStore
from .storage import JsonFileStore
from .utils.app_config import AppConfig
from .utils.logging import configure_logging, get_logger


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="daily-pulse",
        description="Daily Pulse – AI-curated daily news with a personal repository",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory for users, settings and repositories (env PULSE_DATA_DIR)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (env LOG_LEVEL)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for name in ("register", "login"):
        p = sub.add_parser(name, help=f"{name.capitalize()} a user")
        p.add_argument("username")
        p.add_argument("--password", help="Password (prompted when omitted)")

    sub.add_parser("logout", help="End the current session")
    sub.add_parser("whoami", help="Show the signed-in user")

    settings = sub.add_parser("settings", help="Show or edit topics and sources")
    settings_sub = settings.add_subparsers(dest="action")
    settings_sub.add_parser("show", help="Print current topics and sources")
    for action, arg in (
        ("toggle-topic", "topic"),
        ("add-topic", "topic"),
        ("add-source", "source"),
        ("remove-source", "source"),
    ):
        p = settings_sub.add_parser(action)
        p.add_argument("value", metavar=arg)

    fetch = sub.add_parser("fetch", help="Generate the news feed for a date")
    fetch.add_argument("--date", default=None, help="ISO date (default: yesterday, UTC)")
    fetch.add_argument(
        "--archive",
        default="",
        help="Comma-separated feed positions (1-based) to archive after fetching",
    )

    repo = sub.add_parser("repo", help="List or prune archived articles")
    repo_sub = repo.add_subparsers(dest="action")
    repo_sub.add_parser("list", help="Print archived articles")
    remove = repo_sub.add_parser("remove", help="Remove an article by id")
    remove.add_argument("article_id")

    return parser.parse_args(argv)


def _password(args: argparse.Namespace) -> str:
    return args.password if args.password is not None else getpass.getpass("Password: ")


def _parse_positions(raw: str, size: int) -> List[int]:
    """Parse 1-based feed positions; repeats are collapsed, order kept."""
    positions: List[int] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        pos = int(part)
        if not 1 <= pos <= size:
            raise ValueError(f"Feed position {pos} out of range 1..{size}")
        positions.append(pos)
    return list(dict.fromkeys(positions))


def _print_article(article: Article, *, position: Optional[int] = None) -> None:
    prefix = f"{position:>2}. " if position is not None else ""
    print(f"{prefix}[{article.score:>3}] {article.title}  ({article.id}, {article.date})")
    print(f"      {article.summary}")
    if article.reason:
        print(f"      Why: {article.reason}")
    if article.tags:
        print(f"      Tags: {', '.join(article.tags)}")
    for src in article.sources:
        print(f"      - {src.title}: {src.uri}")


def _require_session(identity: IdentityService) -> Session:
    session = identity.current_session()
    if session is None:
        raise PulseError("Not logged in. Run 'daily-pulse login <username>' first.")
    return session


def run(args: argparse.Namespace, config: AppConfig) -> int:
    store = JsonFileStore(args.data_dir or config.data_dir)
    identity = IdentityService(store)
    settings = SettingsStore(store)
    repository = ArticleRepository(store)

    if args.command == "register":
        user = identity.register(args.username, _password(args))
        print(f"Registered {user.username}")
        return 0

    if args.command == "login":
        session = identity.login(args.username, _password(args))
        print(f"Logged in as {session.user.username}")
        return 0

    if args.command == "logout":
        identity.logout(identity.current_session())
        print("Logged out")
        return 0

    session = _require_session(identity)
    user_id = session.user_id

    if args.command == "whoami":
        print(f"{session.user.username} (since {session.user.created_at})")
        return 0

    if args.command == "settings":
        if args.action == "toggle-topic":
            current = settings.toggle_topic(user_id, args.value)
        elif args.action == "add-topic":
            current = settings.add_topic(user_id, args.value)
        elif args.action == "add-source":
            current = settings.add_source(user_id, args.value)
        elif args.action == "remove-source":
            current = settings.remove_source(user_id, args.value)
        else:
            current = settings.get(user_id)
        print("Topics:")
        for topic in current.active_topics:
            print(f"  - {topic}")
        print("Sources:")
        for source in current.custom_sources:
            print(f"  - {source}")
        return 0

    if args.command == "fetch":
        feed = FeedSession(
            session,
            settings=settings,
            repository=repository,
            fetcher=partial(fetch_news, exclude_limit=config.exclude_limit, language=config.output_language),
            selected_date=args.date or default_date(),
        )
        articles = feed.generate()
        if not articles:
            print(f"No news found for {feed.selected_date}")
            return 0
        for idx, article in enumerate(articles, start=1):
            _print_article(article, position=idx)
        chosen = [articles[pos - 1] for pos in _parse_positions(args.archive, len(articles))]
        for article in chosen:
            feed.archive(article.id)
        if chosen:
            print(f"Archived {len(chosen)} article(s)")
        return 0

    if args.command == "repo":
        if args.action == "remove":
            before = len(repository.list(user_id))
            remaining = repository.remove(user_id, args.article_id)
            if len(remaining) == before:
                raise PulseError(f"No archived article with id {args.article_id}")
            print(f"Removed {args.article_id}; {len(remaining)} article(s) left")
            return 0
        articles = repository.list(user_id)
        if not articles:
            print("Repository is empty. Archive items from a fetched feed.")
        for article in articles:
            _print_article(article)
        return 0

    raise PulseError(f"Unknown command: {args.command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv(override=False)
    args = parse_args(argv)
    configure_logging(level=args.log_level)
    logger = get_logger("pulse.cli")

    try:
        return run(args, AppConfig())
    except (PulseError, ValueError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(str(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
