#!/usr/bin/env python3
"""
Polar API Client CLI

Quick checks against a Polar organization from the terminal.

Usage:
    polar-client test                  # Test your access token
    polar-client stats                 # Show client configuration
    polar-client list products         # Print one page as JSON
    polar-client list orders --page 2 --limit 50
"""

import argparse
import json
import logging
import sys

import structlog
from colorama import Fore, Style, init

from polar_client import __version__
from polar_client.client import PolarClient
from polar_client.config import PolarClientOptions
from polar_client.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

init()
GREEN = Fore.GREEN
RED = Fore.RED
YELLOW = Fore.YELLOW
BLUE = Fore.CYAN
RESET = Style.RESET_ALL
BOLD = Style.BRIGHT

# CLI name -> (client attribute, list method)
LISTABLE_RESOURCES = {
    "benefits": ("benefits", "list"),
    "checkout-links": ("checkout_links", "list"),
    "checkouts": ("checkouts", "list"),
    "custom-fields": ("custom_fields", "list"),
    "customer-meters": ("customer_meters", "list"),
    "customer-seats": ("customer_seats", "list"),
    "customers": ("customers", "list"),
    "discounts": ("discounts", "list"),
    "events": ("events", "list"),
    "files": ("files", "list"),
    "license-keys": ("license_keys", "list"),
    "meters": ("meters", "list"),
    "orders": ("orders", "list"),
    "organizations": ("organizations", "list"),
    "payments": ("payments", "list"),
    "products": ("products", "list"),
    "refunds": ("refunds", "list"),
    "subscriptions": ("subscriptions", "list"),
    "webhook-endpoints": ("webhooks", "list_endpoints"),
    "webhook-deliveries": ("webhooks", "list_deliveries"),
}


def print_banner():
    """Print the banner."""
    print(f"""
{BLUE}╔══════════════════════════════════════════════════════════════╗
║     {BOLD}Polar API Client{RESET}{BLUE} v{__version__:<40}║
║     Checkouts, customers, subscriptions and usage billing      ║
╚══════════════════════════════════════════════════════════════╝{RESET}
""")


def print_success(msg: str):
    print(f"{GREEN}✓ {msg}{RESET}")


def print_error(msg: str):
    print(f"{RED}✗ {msg}{RESET}")


def print_warning(msg: str):
    print(f"{YELLOW}⚠ {msg}{RESET}")


def print_info(msg: str, file=None):
    print(f"{BLUE}ℹ {msg}{RESET}", file=file)


def print_not_configured():
    print_error("Not configured.")
    print_info("Set environment variables:")
    print("    export POLAR_ACCESS_TOKEN=polar_oat_...")
    print("    export POLAR_ENVIRONMENT=sandbox   # optional, defaults to production")


def load_options() -> PolarClientOptions | None:
    """Options from POLAR_* environment variables, or None with a message."""
    try:
        return PolarClientOptions.from_env()
    except ValueError as e:
        if "POLAR_ACCESS_TOKEN" in str(e):
            print_not_configured()
        else:
            print_error(f"Invalid configuration: {e}")
        return None


def cmd_test(args, options: PolarClientOptions | None = None):
    """Test the access token against the API."""
    if options is None:
        options = load_options()
        if options is None:
            return 1

    print_info(f"Connecting to {options.resolved_base_url}...")

    with PolarClient(options=options) as client:
        result = client.health_check()

    if result["status"] == "healthy":
        print_success("Connected successfully!")
        print_success(f"Organization: {result.get('organization', 'unknown')}")
        return 0

    if result["status"] == "auth_error":
        print_error(f"Authentication failed: {result.get('message')}")
        print_info("Check POLAR_ACCESS_TOKEN and POLAR_ENVIRONMENT (sandbox tokens only work on sandbox)")
        return 1

    print_error(f"Connection failed: {result.get('message', 'Unknown error')}")
    return 1


def cmd_stats(args, options: PolarClientOptions | None = None):
    """Show client configuration and counters."""
    if options is None:
        options = load_options()
        if options is None:
            return 1

    print_banner()

    with PolarClient(options=options) as client:
        stats = client.get_stats()

    print(f"{BOLD}Client Configuration{RESET}\n")
    print(f"  Environment: {stats['environment']}")
    print(f"  Base URL: {stats['base_url']}")
    print(f"  Timeout: {options.timeout:.0f}s")
    print(f"  Max retries: {options.max_retries}")

    rl = stats["rate_limiter"]
    print(f"\n{BOLD}Rate Limiter:{RESET}")
    print(f"  Rate: {rl['rate_per_minute']:.0f} requests/minute (burst {rl['capacity']})")
    print(f"  Requests: {rl['requests_made']}, "
          f"{rl['requests_throttled']} throttled, "
          f"{rl['total_wait_time_seconds']:.1f}s wait time")

    print(f"\n{BOLD}API Client:{RESET}")
    print(f"  Requests: {stats['request_count']}")
    print(f"  Errors: {stats['error_count']} ({stats['error_rate']:.2%})")
    print(f"  Retries: {stats['retry_count']}")
    return 0


def cmd_list(args, options: PolarClientOptions | None = None):
    """Print one page of a resource as JSON."""
    if options is None:
        options = load_options()
        if options is None:
            return 1

    attribute, method = LISTABLE_RESOURCES[args.resource]

    with PolarClient(options=options) as client:
        result = getattr(getattr(client, attribute), method)(page=args.page, limit=args.limit)

    if result.is_failure:
        print_error(f"Failed to list {args.resource}: {result.error}")
        return 1

    page = result.value
    # stdout carries only the JSON document
    print(json.dumps([item.to_dict() for item in page.items], indent=2))
    print_info(
        f"Page {args.page} of {page.max_page or 1}, "
        f"{len(page)} of {page.total_count} {args.resource}",
        file=sys.stderr,
    )
    if page.has_next(args.page):
        print_info(
            f"Next: polar-client list {args.resource} --page {args.page + 1} --limit {args.limit}",
            file=sys.stderr,
        )
    return 0


def configure_logging(verbose: bool = False) -> None:
    """Route structlog output to stderr so stdout stays machine-readable."""
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polar-client",
        description="Polar API Client CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  polar-client test                 Test your access token
  polar-client stats                Show client configuration
  polar-client list customers       Print the first page of customers

Configuration comes from POLAR_ACCESS_TOKEN, POLAR_ENVIRONMENT and the
other POLAR_* environment variables.
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log requests and retries to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("test", help="Test your access token")
    subparsers.add_parser("stats", help="Show client configuration and counters")

    list_parser = subparsers.add_parser("list", help="Print one page of a resource as JSON")
    list_parser.add_argument("resource", choices=sorted(LISTABLE_RESOURCES))
    list_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    list_parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_PAGE_SIZE,
        help=f"Items per page, max {MAX_PAGE_SIZE} (default: {DEFAULT_PAGE_SIZE})",
    )

    return parser


def main(argv: list[str] | None = None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command is None:
        print_banner()
        print(f"{BOLD}Quick Start:{RESET}")
        print()
        print("  1. Set your access token:")
        print(f"     {BLUE}export POLAR_ACCESS_TOKEN=polar_oat_...{RESET}")
        print(f"     {BLUE}export POLAR_ENVIRONMENT=sandbox{RESET}")
        print()
        print("  2. Test the connection:")
        print(f"     {BLUE}polar-client test{RESET}")
        print()
        print("Commands:")
        print("  test    - Test your access token")
        print("  stats   - Show client configuration")
        print("  list    - Print one page of a resource as JSON")
        return 0

    commands = {
        "test": cmd_test,
        "stats": cmd_stats,
        "list": cmd_list,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
