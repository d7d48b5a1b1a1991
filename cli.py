"""
Command-line interface for the Redemption Optimizer.
Programs are kept in a local CSV file; searches run the engine directly.
"""

import argparse
import csv
import sys
from datetime import datetime
from pathlib import Path
from typing import List

import requests

from engine.formatting import (
    format_cents_per_point,
    format_currency,
    format_date,
    format_points,
)
from engine.models import PROGRAM_TYPES, SEARCH_TYPES, Program, TripRequest
from engine.recommender import recommend


# Default CSV file path
CSV_PATH = Path("data/programs.csv")
CSV_HEADERS = ["name", "type", "balance", "expiry"]

DEFAULT_AI_URL = "http://localhost:8000/api/get-ai-reasoning"


def ensure_csv_exists():
    """Create the CSV file with headers if it doesn't exist."""
    if not CSV_PATH.exists():
        CSV_PATH.parent.mkdir(parents=True, exist_ok=True)
        with open(CSV_PATH, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADERS)


def load_programs() -> List[Program]:
    """
    Load all programs from the CSV file.

    Returns:
        List of Program objects
    """
    programs = []

    if not CSV_PATH.exists():
        return programs

    with open(CSV_PATH, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            programs.append(Program(
                name=row["name"],
                type=row["type"],
                balance=int(row["balance"] or 0),
                expiry=row.get("expiry") or None,
            ))

    return programs


def save_programs(programs: List[Program]):
    """Rewrite the CSV file with the given programs."""
    CSV_PATH.parent.mkdir(parents=True, exist_ok=True)
    with open(CSV_PATH, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADERS)
        for program in programs:
            writer.writerow([
                program.name,
                program.type,
                program.balance,
                program.expiry.isoformat() if program.expiry else "",
            ])


def _validate_date(value: str, label: str):
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        print(f"Error: Invalid {label} '{value}'. Expected YYYY-MM-DD.")
        sys.exit(1)


def cmd_add_program(args):
    """
    Add a program, or update its balance if the name is already stored.

    Args:
        args: Parsed command-line arguments with fields:
            - name: program name
            - type: 'airline' | 'hotel' | 'card'
            - balance: int
            - expiry: optional YYYY-MM-DD
    """
    ensure_csv_exists()

    if args.type not in PROGRAM_TYPES:
        print(f"Error: Invalid type '{args.type}'. Must be one of: {', '.join(PROGRAM_TYPES)}")
        sys.exit(1)

    if args.balance < 0:
        print(f"Error: Balance must be 0 or more. Got: {args.balance}")
        sys.exit(1)

    if args.expiry:
        _validate_date(args.expiry, "expiry date")

    program = Program(name=args.name.strip(), type=args.type, balance=args.balance, expiry=args.expiry)
    existing = load_programs()
    programs = [p for p in existing if p.name != program.name]
    updated = len(programs) < len(existing)
    programs.append(program)
    save_programs(programs)

    print(f"Program {'updated' if updated else 'added'}: {program.name}")
    print(f"  Type: {program.type}")
    print(f"  Balance: {format_points(program.balance)}")
    if program.expiry:
        print(f"  Expires: {format_date(program.expiry)}")


def cmd_remove_program(args):
    """Remove a stored program by name."""
    programs = load_programs()
    remaining = [p for p in programs if p.name != args.name]
    if len(remaining) == len(programs):
        print(f"Error: Program '{args.name}' not found.")
        sys.exit(1)

    save_programs(remaining)
    print(f"Program removed: {args.name}")


def cmd_programs(args):
    """List stored programs."""
    programs = load_programs()

    if not programs:
        print("No programs stored. Add one with: cli.py add-program --name ... --type ... --balance ...")
        return

    print("\n=== Loyalty Programs ===\n")
    for program in programs:
        expiry = f" (expires {format_date(program.expiry)})" if program.expiry else ""
        print(f"  {program.name} [{program.type}]: {format_points(program.balance)} pts{expiry}")
    print()


def _trip_from_args(args) -> TripRequest:
    if args.depart:
        _validate_date(args.depart, "depart date")
    if args.return_date:
        _validate_date(args.return_date, "return date")

    if args.type not in SEARCH_TYPES:
        print(f"Error: Invalid search type '{args.type}'. Must be one of: {', '.join(SEARCH_TYPES)}")
        sys.exit(1)

    if args.passengers < 1:
        print(f"Error: Passengers must be at least 1. Got: {args.passengers}")
        sys.exit(1)

    return TripRequest(
        origin=args.origin or "",
        destination=args.destination,
        depart_date=args.depart,
        return_date=args.return_date,
        cabin=args.cabin,
        passengers=args.passengers,
        search_type=args.type,
    )


def cmd_search(args):
    """
    Rank redemption options for a trip using the stored programs.

    Args:
        args: Parsed command-line arguments with fields:
            - origin / destination: airport codes
            - depart / return_date: YYYY-MM-DD
            - cabin, passengers, type
    """
    trip = _trip_from_args(args)
    result = recommend(trip, load_programs())

    print(f"\n=== Redemption Options: {trip.origin or '-'} to {trip.destination} ({trip.cabin}) ===\n")

    if result.best is None:
        print(result.message)
        return

    for i, option in enumerate(result.ranked, 1):
        via = f" via {option.transfer_from}" if option.transfer_from else ""
        flag = " [SWEET SPOT]" if option.is_sweet_spot else ""
        enough = "" if option.has_enough_points else " (not enough points)"
        print(f"{i}. {option.program}{via}{flag}")
        print(f"   {format_points(option.points_required)} pts + {format_currency(option.fees)} fees"
              f" for {format_currency(option.cash_value)} retail{enough}")
        print(f"   {format_cents_per_point(option.cents_per_point)} ({option.value_rating})")
        for pro in option.pros:
            print(f"   + {pro}")
        for con in option.cons:
            print(f"   - {con}")
        print()

    if result.best.booking_steps:
        print("--- How to book ---")
        for n, step in enumerate(result.best.booking_steps, 1):
            print(f"{n}. {step.title}")
            for instruction in step.instructions:
                print(f"   • {instruction}")
        print()


def cmd_insight(args):
    """Ask a running API for an AI summary of the search."""
    trip = _trip_from_args(args)
    payload = {
        "query": {
            "origin": trip.origin,
            "destination": trip.destination,
            "depart_date": trip.depart_date.isoformat() if trip.depart_date else None,
            "return_date": trip.return_date.isoformat() if trip.return_date else None,
            "cabin": trip.cabin,
            "passengers": trip.passengers,
            "search_type": trip.search_type,
        },
        "programs": [
            {
                "name": p.name,
                "type": p.type,
                "balance": p.balance,
                "expiry": p.expiry.isoformat() if p.expiry else None,
            }
            for p in load_programs()
        ],
    }

    try:
        response = requests.post(args.url, json=payload, timeout=args.timeout)
    except requests.RequestException as e:
        print(f"Error: Could not reach {args.url}: {e}")
        sys.exit(1)

    if response.status_code != 200:
        try:
            error = response.json().get("error", {})
        except ValueError:
            error = {}
        print(f"Error: {response.status_code} {error.get('code', '')} {error.get('message', response.text)}")
        sys.exit(1)

    data = response.json()
    print(f"\n{data['summary']}")
    if data.get("is_fallback"):
        print("(template summary)")


def _add_trip_arguments(parser, origin_required=True):
    parser.add_argument("--origin", required=origin_required, help="Origin airport code (e.g. JFK)")
    parser.add_argument("--destination", required=True, help="Destination airport or city code")
    parser.add_argument("--depart", required=True, help="Departure / check-in date (YYYY-MM-DD)")
    parser.add_argument("--return", dest="return_date", default=None, help="Return / check-out date (optional)")
    parser.add_argument("--cabin", default="economy", help="Cabin or hotel category (default: economy)")
    parser.add_argument("--passengers", type=int, default=1, help="Travelers or rooms (default: 1)")
    parser.add_argument("--type", default="flight", help="Search type (flight | hotel)")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Redemption Optimizer CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_add = subparsers.add_parser("add-program", help="Add or update a loyalty program")
    parser_add.add_argument("--name", required=True, help="Program name (e.g. 'Chase Ultimate Rewards')")
    parser_add.add_argument("--type", required=True, help="Program type (airline | hotel | card)")
    parser_add.add_argument("--balance", type=int, required=True, help="Points balance")
    parser_add.add_argument("--expiry", default=None, help="Points expiry date (YYYY-MM-DD, optional)")

    parser_remove = subparsers.add_parser("remove-program", help="Remove a loyalty program")
    parser_remove.add_argument("--name", required=True, help="Program name")

    subparsers.add_parser("programs", help="List stored programs")

    parser_search = subparsers.add_parser("search", help="Rank redemption options for a trip")
    _add_trip_arguments(parser_search, origin_required=False)

    parser_insight = subparsers.add_parser("insight", help="Get an AI summary from a running API")
    _add_trip_arguments(parser_insight)
    parser_insight.add_argument("--url", default=DEFAULT_AI_URL, help=f"AI reasoning endpoint (default: {DEFAULT_AI_URL})")
    parser_insight.add_argument("--timeout", type=float, default=10.0, help="Request timeout in seconds")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "add-program":
        cmd_add_program(args)
    elif args.command == "remove-program":
        cmd_remove_program(args)
    elif args.command == "programs":
        cmd_programs(args)
    elif args.command == "search":
        cmd_search(args)
    elif args.command == "insight":
        cmd_insight(args)


if __name__ == "__main__":
    main()
