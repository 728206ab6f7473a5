#!/usr/bin/env python3
"""
PR Review Dashboard - Main CLI entrypoint

Runs the web API, or uses a personal access token (GITHUB_TOKEN) to list
your pull requests and request AI reviews straight from the terminal.

Usage:
    python main.py serve                                   # Start the API server
    python main.py pulls                                   # All PRs, most recently updated first
    python main.py pulls --status open --assignee self     # Open PRs assigned to you
    python main.py pulls --sort comments --date-range week
    python main.py review facebook/react#12345             # AI review of one PR
"""

import argparse
import asyncio
import re
import sys
from functools import partial
from typing import Tuple

from aggregator.aggregator import PullRequestAggregator
from fetchers.github import GitHubClient
from models.data_models import FilterConfig
from reviewer.llm_client import LLMClient
from reviewer.reviewer import PullRequestReviewer
from utils.config_loader import load_config
from utils.logger import setup_logger

logger = setup_logger()

PR_REFERENCE_PATTERN = re.compile(r"^([\w.-]+)/([\w.-]+)#(\d+)$")


def parse_pr_reference(reference: str) -> Tuple[str, str, int]:
    """
    Parse a pull request reference.

    Args:
        reference: Either:
            - "owner/repo#123"
            - "https://github.com/owner/repo/pull/123"

    Returns:
        Tuple of (owner, repo, number)

    Examples:
        "facebook/react#123" -> ("facebook", "react", 123)
        "https://github.com/facebook/react/pull/123" -> ("facebook", "react", 123)
    """
    if reference.startswith("http"):
        parts = reference.rstrip("/").split("/")
        if len(parts) < 7 or "github.com" not in parts[2] or parts[5] != "pull":
            raise ValueError(f"Invalid pull request URL: {reference}")
        owner, repo, number = parts[3], parts[4], parts[6]
        if not number.isdigit():
            raise ValueError(f"Invalid pull request number in URL: {reference}")
        return owner, repo, int(number)

    match = PR_REFERENCE_PATTERN.match(reference)
    if not match:
        raise ValueError("Invalid pull request format. Use 'owner/repo#number' or a full URL")
    owner, repo, number = match.groups()
    return owner, repo, int(number)


def require_token(config) -> str:
    if not config.credentials.github_token:
        raise ValueError(
            "GitHub token not set in .env file. "
            "Add GITHUB_TOKEN to use the command line."
        )
    return config.credentials.github_token


def list_pulls(config, filter_config: FilterConfig) -> bool:
    """
    Print the token owner's pull requests.

    Returns:
        bool: True if successful, False otherwise
    """
    try:
        token = require_token(config)
        aggregator = PullRequestAggregator(
            client_factory=partial(GitHubClient, timeout=config.server.github_timeout)
        )
        prs = asyncio.run(aggregator.fetch_and_filter(token, filter_config))
    except Exception as e:
        logger.error(f"Failed to list pull requests: {e}")
        return False

    if not prs:
        print("No pull requests found.")
        return True

    for pr in prs:
        updated = pr.updated_at.strftime("%Y-%m-%d")
        print(
            f"{pr.repository.full_name}#{pr.number:<6} [{pr.state:6}] "
            f"{updated}  {pr.comments:>3} comments  {pr.title}"
        )
    print(f"\n{len(prs)} pull request(s)")
    return True


def review_pull(config, reference: str) -> bool:
    """
    Print an AI review of one pull request.

    Returns:
        bool: True if successful, False otherwise
    """
    try:
        token = require_token(config)
        owner, repo, number = parse_pr_reference(reference)
        provider = config.credentials.llm_provider
        reviewer = PullRequestReviewer(
            LLMClient(
                provider=provider,
                model=config.credentials.llm_model,
                api_key=config.credentials.api_key_for(provider),
            ),
            client_factory=partial(GitHubClient, timeout=config.server.github_timeout),
        )
        result = asyncio.run(reviewer.review_pull_request(token, owner, repo, number))
    except Exception as e:
        logger.error(f"Failed to review {reference}: {e}")
        return False

    print("=" * 80)
    print(f"{result.title} (#{result.number})")
    print(result.html_url)
    print("=" * 80)
    print(result.analysis)
    return True


def main():
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="PR Review Dashboard - list your GitHub pull requests and get AI reviews",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Start the web API server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=3000, help="Port (default: 3000)")
    serve_parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload")

    pulls_parser = subparsers.add_parser("pulls", help="List your pull requests")
    pulls_parser.add_argument(
        "--sort",
        default="updated",
        choices=["updated", "created", "comments"],
        help=(
            "Sort order (default: updated). GitHub's pull request list has no "
            "comment counts, so 'comments' keeps the listing order"
        )
    )
    pulls_parser.add_argument(
        "--status",
        default="all",
        choices=["all", "open", "closed"],
        help="PR state (default: all)"
    )
    pulls_parser.add_argument(
        "--assignee",
        default="all",
        choices=["all", "self"],
        help="'self' keeps only PRs assigned to you (default: all)"
    )
    pulls_parser.add_argument(
        "--date-range",
        default="all",
        choices=["all", "today", "week", "month", "year"],
        help="Only PRs created within this window (default: all)"
    )

    review_parser = subparsers.add_parser("review", help="AI review of one pull request")
    review_parser.add_argument(
        "pull_request",
        help="Pull request as 'owner/repo#number' or GitHub URL"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "serve":
        from backend.server import run_server
        run_server(args.host, args.port, reload=not args.no_reload)
        sys.exit(0)

    config = load_config()
    setup_logger(config.log_level)

    if args.command == "pulls":
        filter_config = FilterConfig(
            sort=args.sort,
            status=args.status,
            assignee=args.assignee,
            date_range=args.date_range,
        )
        success = list_pulls(config, filter_config)
    else:
        success = review_pull(config, args.pull_request)

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
