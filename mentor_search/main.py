"""
Main entry point and CLI for the mentor search client.

Runs a mentor search against the configured backend, optionally paging
through further results, and prints the mentors found.
"""

import asyncio
import argparse
import logging
import sys
from typing import Iterable, Optional
from datetime import datetime

from dotenv import load_dotenv
load_dotenv()

from mentor_search.api.client import MentorApiClient
from mentor_search.config import ClientSettings, get_client_settings
from mentor_search.controller.search_controller import MentorSearchController
from mentor_search.error_handling import InvalidFiltersError
from mentor_search.models import MentorProfile, MentorSearchFilters
from mentor_search.session.preferences_store import FilterPreferencesStore


logger = logging.getLogger(__name__)


def format_mentor(mentor: MentorProfile) -> str:
    """
    Format a mentor for console output.

    Args:
        mentor: Mentor to format

    Returns:
        Multi-line string describing the mentor
    """
    lines = []

    name = mentor.name or "[No name]"
    verified = " ✔" if mentor.is_verified else ""
    lines.append(f"👤 {name}{verified}")
    lines.append(f"   ID: {mentor.id}")

    if mentor.title:
        lines.append(f"   Title: {mentor.title}")

    lines.append(f"   Rating: {mentor.rating:.1f} ({mentor.review_count} reviews, {mentor.session_count} sessions)")

    if mentor.expertise:
        lines.append(f"   Expertise: {', '.join(mentor.expertise)}")

    if mentor.hourly_rate is not None:
        lines.append(f"   Rate: ${mentor.hourly_rate:g}/hr")

    if mentor.is_free_intro_available:
        lines.append("   🎁 Free intro session")

    if mentor.is_available_now:
        lines.append("   🟢 Available now")

    if mentor.match_score is not None:
        lines.append(f"   Match: {mentor.match_score:g}%")

    lines.append("")

    return "\n".join(lines)


def format_results(mentors: Iterable[MentorProfile]) -> str:
    mentors = list(mentors)
    if not mentors:
        return "No mentors found matching your filters.\n"

    output = []
    output.append(f"\n{'='*60}")
    output.append(f"Found {len(mentors)} mentor(s)")
    output.append(f"{'='*60}\n")
    for mentor in mentors:
        output.append(format_mentor(mentor))
    output.append(f"{'='*60}\n")

    return "\n".join(output)


def build_filters(args: argparse.Namespace, base: MentorSearchFilters) -> MentorSearchFilters:
    """Overlay the filter flags given on the command line onto `base`."""
    updates = {}

    if args.query is not None:
        updates["query"] = args.query
    for name in ("expertise", "industries", "languages"):
        value = getattr(args, name)
        if value:
            updates[name] = value
    for name in ("price_min", "price_max", "rating"):
        value = getattr(args, name)
        if value is not None:
            updates[name] = value
    for name in ("available_now", "free_intro", "indigenous_background"):
        if getattr(args, name):
            updates[name] = True

    return base.merge(**updates)


async def run_mentor_search(
    args: argparse.Namespace,
    settings: Optional[ClientSettings] = None,
    api_client=None
) -> int:
    """
    Execute a mentor search from parsed CLI arguments.

    Args:
        args: Parsed command-line arguments
        settings: Client settings (read from the environment if omitted)
        api_client: API client to use (a MentorApiClient is created if omitted)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    settings = settings or get_client_settings()
    store = FilterPreferencesStore(
        store_name=settings.preferences.store_name,
        base_dir=settings.preferences.base_dir
    )
    owns_client = api_client is None
    api_client = api_client or MentorApiClient(settings.api)

    controller = MentorSearchController(api_client, settings=settings)
    controller.init()

    try:
        if args.use_saved_filters:
            controller.restore_filters(store.load_filters())

        try:
            filters = build_filters(args, controller.active_filters)
            filters.validate()
        except InvalidFiltersError as e:
            logger.error(f"Invalid filters: {e}")
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print(f"\n🔍 Searching mentors at {settings.api.base_url}...")
        start_time = datetime.now()

        await controller.refresh(filters)
        for _ in range(max(args.pages - 1, 0)):
            if controller.error or not controller.has_more:
                break
            await controller.load_more()

        elapsed_time = (datetime.now() - start_time).total_seconds()

        mentors = controller.ranked_results() if args.ranked else controller.results
        print(format_results(mentors))

        if controller.error:
            print(f"❌ Error: {controller.error}", file=sys.stderr)
            if not controller.results:
                return 1

        if args.save_filters:
            if store.save_filters(controller.export_filters()):
                print("💾 Filters saved")
            else:
                print("⚠️  Could not save filters", file=sys.stderr)

        logger.info(f"Search completed in {elapsed_time:.2f} seconds")
        print(f"✅ Loaded {len(controller.results)} mentor(s) in {elapsed_time:.2f} seconds")
        if controller.has_more:
            print("   More mentors are available (use --pages to load more)")
        print()

        return 0

    finally:
        controller.dispose()
        if owns_client:
            await api_client.close()


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="mentor-search",
        description="Search the mentorship directory for mentors matching your filters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Browse all mentors
  mentor-search

  # Free-text search with expertise filter
  mentor-search "product design" --expertise UX,Research

  # Affordable mentors available right now, three pages deep
  mentor-search --price-max 80 --available-now --pages 3

  # Remember these filters for next time
  mentor-search --industries Mining --free-intro --save-filters
        """
    )

    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Free-text search keywords"
    )

    def comma_list(value: str):
        return [part.strip() for part in value.split(",") if part.strip()]

    parser.add_argument("--expertise", type=comma_list, default=None,
                        help="Comma-separated expertise areas")
    parser.add_argument("--industries", type=comma_list, default=None,
                        help="Comma-separated industries")
    parser.add_argument("--languages", type=comma_list, default=None,
                        help="Comma-separated languages")
    parser.add_argument("--price-min", type=float, default=None,
                        help="Minimum hourly rate")
    parser.add_argument("--price-max", type=float, default=None,
                        help="Maximum hourly rate")
    parser.add_argument("--rating", type=float, default=None,
                        help="Minimum average rating (0-5)")
    parser.add_argument("--available-now", action="store_true",
                        help="Only mentors available right now")
    parser.add_argument("--free-intro", action="store_true",
                        help="Only mentors offering a free intro session")
    parser.add_argument("--indigenous-background", action="store_true",
                        help="Only mentors with an Indigenous background")

    parser.add_argument("--pages", type=int, default=1,
                        help="Number of result pages to load (default: 1)")
    parser.add_argument("--ranked", action="store_true",
                        help="Order results by match score")
    parser.add_argument("--save-filters", action="store_true",
                        help="Save the filters used for the next run")
    parser.add_argument("--use-saved-filters", action="store_true",
                        help="Start from previously saved filters")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose logging output")

    return parser


def main() -> int:
    """
    Main entry point for the CLI application.

    Returns:
        Exit code (0 for success, 1 for error, 130 if interrupted)
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    parser = create_argument_parser()
    args = parser.parse_args()

    try:
        return asyncio.run(run_mentor_search(args))
    except KeyboardInterrupt:
        logger.info("Search interrupted by user")
        print("\n\n⚠️  Search interrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        logger.exception(f"Unexpected error in main: {str(e)}")
        print(f"❌ Unexpected error: {str(e)}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
