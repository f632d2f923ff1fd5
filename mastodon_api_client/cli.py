"""CLI commands for the Mastodon API client."""

import argparse
import json
import sys

import httpx
from pydantic import BaseModel

TIMELINES = ("home", "local", "federated", "tag", "list")


def _fail(message):
    print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def _to_json(value):
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_to_json(v) for v in value]
    return value


def _timeline_endpoint(args):
    from . import endpoints

    if args.timeline == "home":
        return endpoints.home_timeline()
    if args.timeline == "local":
        return endpoints.public_timeline(local=True)
    if args.timeline == "federated":
        return endpoints.public_timeline()
    if args.timeline == "tag":
        if not args.tag:
            raise SystemExit("--tag is required for the tag timeline")
        return endpoints.tag_timeline(args.tag)
    if not args.list_id:
        raise SystemExit("--list-id is required for the list timeline")
    return endpoints.list_timeline(args.list_id)


def main():
    parser = argparse.ArgumentParser(
        description="Talk to a Mastodon instance",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--instance-url",
        default=None,
        help="Instance URL (default: MASTODON_INSTANCE_URL)",
    )
    parser.add_argument(
        "--access-token",
        default=None,
        help="OAuth access token (default: MASTODON_ACCESS_TOKEN)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # api subcommand
    api_parser = subparsers.add_parser(
        "api",
        help="Make a generic API call",
    )
    api_parser.add_argument(
        "path",
        help="API path (e.g., /api/v1/timelines/public)",
    )
    api_parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Query parameter (repeatable, e.g., --param limit=20)",
    )
    api_parser.add_argument(
        "--method",
        default="GET",
        help="HTTP method (default: GET)",
    )

    # timeline subcommand
    timeline_parser = subparsers.add_parser(
        "timeline",
        help="Fetch one page of a timeline",
    )
    timeline_parser.add_argument("timeline", choices=TIMELINES)
    timeline_parser.add_argument("--tag", default=None, help="Hashtag (for the tag timeline)")
    timeline_parser.add_argument("--list-id", default=None, help="List id (for the list timeline)")
    timeline_parser.add_argument("--max-id", default=None, help="Return statuses older than this id")
    timeline_parser.add_argument("--min-id", default=None, help="Return statuses immediately newer than this id")
    timeline_parser.add_argument("--since-id", default=None, help="Return statuses newer than this id")
    timeline_parser.add_argument("--limit", type=int, default=None, help="Page size")

    subparsers.add_parser("verify-credentials", help="Show the authenticated account")
    subparsers.add_parser("instance", help="Show instance information")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return

    from . import endpoints
    from .client import get_client
    from .errors import APIError, InvalidInstanceURL

    try:
        client = get_client(args.instance_url, args.access_token)
        if args.command == "api":
            params = {}
            for p in args.param:
                k, _, v = p.partition("=")
                params[k] = v
            endpoint = endpoints.Endpoint(args.method.upper(), "/" + args.path.lstrip("/"), dict | list, params=params)
            output = client.request(endpoint)
        elif args.command == "timeline":
            page = client.paged_request(
                _timeline_endpoint(args),
                max_id=args.max_id,
                min_id=args.min_id,
                since_id=args.since_id,
                limit=args.limit,
            )
            output = {
                "result": _to_json(page.result),
                "info": {
                    "max_id": page.info.max_id,
                    "min_id": page.info.min_id,
                    "since_id": page.info.since_id,
                },
            }
        elif args.command == "verify-credentials":
            output = _to_json(client.request(endpoints.verify_credentials()))
        else:
            output = _to_json(client.request(endpoints.instance()))
    except APIError as e:
        _fail(e.error_description or e.error)
    except (RuntimeError, InvalidInstanceURL, httpx.HTTPError) as e:
        _fail(str(e))

    json.dump(output, sys.stdout, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
