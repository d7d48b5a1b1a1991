"""
Step-by-step booking instructions for a redemption option.
"""

from typing import List

from engine.formatting import format_currency, format_date, format_points
from engine.models import BookingStep, RedemptionOption, TripRequest


def booking_steps(option: RedemptionOption, trip: TripRequest) -> List[BookingStep]:
    """
    Ordered steps to book an option: transfer (when needed), search, book.

    Sweet spot options get the spot's phone booking instructions and link
    added to the final step.
    """
    if option is None:
        return []

    steps = []
    is_hotel = trip.search_type == "hotel"

    if option.transfer_from:
        steps.append(BookingStep(
            title=f"Transfer points from {option.transfer_from} to {option.program}",
            instructions=[
                f"Sign in to your {option.transfer_from} account",
                'Navigate to the "Transfer Points" section',
                f"Select {option.program} as the transfer partner",
                f"Transfer {format_points(option.points_required)} points",
                f"Note: Transfers may take up to {option.transfer_time or 'a few days'} to complete",
            ],
        ))

    search = [
        f"Sign in to your {option.program} account",
        'Navigate to "Book Award Travel" or similar section',
    ]
    if is_hotel:
        search += [
            f"Search for hotels in {trip.destination or 'your destination'}",
            f"Check-in date: {format_date(trip.depart_date)}",
            f"Check-out date: {format_date(trip.return_date)}",
            f"Rooms: {trip.passengers}",
            "Look for standard award rooms for best value",
        ]
    else:
        search += [
            f"Search for flights from {trip.origin or 'origin'} to {trip.destination or 'destination'}",
            f"Select departure date: {format_date(trip.depart_date)}",
            f"Select return date: {format_date(trip.return_date)}" if trip.is_round_trip else "For one-way trip",
            f"Passenger count: {trip.passengers}",
            'Look for "Saver" or lowest level awards for best value',
        ]
    steps.append(BookingStep(title=f"Search for award availability on {option.program}", instructions=search))

    book = [
        "Select your preferred room" if is_hotel else "Select your preferred flight(s)",
        f"Confirm the points required matches approximately {format_points(option.points_required)}",
        "Complete guest details" if is_hotel else "Complete passenger details",
        f"Pay the fees of approximately {format_currency(option.fees or 0)}",
        "Save confirmation details and check for seat selection options" if not is_hotel
        else "Save confirmation details",
    ]
    spot = option.sweet_spot_details
    if spot is not None:
        if spot.call_instructions:
            book.insert(0, spot.call_instructions)
        if spot.booking_link:
            book.append(f"Partner award details: {spot.booking_link}")
    steps.append(BookingStep(title=f"Book the {option.program} award redemption", instructions=book))

    return steps
