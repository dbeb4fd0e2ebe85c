"""Per-owner money math over ledger rows.

Everything here is a pure function of its inputs. Seats are always deduplicated by
seat id before anything is summed, so an owner holding the same seat across several
seasons (or a duplicated ownership row) counts that seat and its license cost once.
"""
import logging
from dataclasses import dataclass, field
from collections import defaultdict
from seatledger.ledger.models.ledger_records import OwnershipRow, PricingRow, PaymentRow
from seatledger.balances.models.balance_records import OwnerBalance, OwnerSeasonLine

logger = logging.getLogger(__name__)

FROM_OWNER = "from_owner"
TO_OWNER = "to_owner"
TO_TEAM = "to_team"
FROM_TEAM = "from_team"

SEAT_LICENSE_CATEGORY = "seat_license"


@dataclass(frozen=True)
class PaymentExclusionPolicy:
    """Which from_owner payments stay out of recurring balance math.

    ``amounts`` exists for legacy rows that were entered without a category and
    can only be recognised by their value.
    """
    categories: frozenset = frozenset({SEAT_LICENSE_CATEGORY})
    amounts: frozenset = frozenset()

    def excludes(self, payment: PaymentRow) -> bool:
        if payment.category and payment.category in self.categories:
            return True
        return any(abs(payment.amount - amount) < 0.005 for amount in self.amounts)

    @classmethod
    def from_settings(cls, settings) -> "PaymentExclusionPolicy":
        return cls(
            categories=settings.excluded_payment_categories,
            amounts=settings.legacy_excluded_payment_amounts,
        )


NO_EXCLUSIONS = PaymentExclusionPolicy(categories=frozenset(), amounts=frozenset())


@dataclass
class OwnerSeats:
    ticket_holder_id: str
    name: str
    seats: dict = field(default_factory=dict)  # seat id -> license cost


def build_unique_seat_map(ownerships) -> dict[str, float]:
    """Seat id -> first-seen license cost."""
    unique_seats = {}
    for ownership in ownerships:
        if ownership.seat_id not in unique_seats:
            unique_seats[ownership.seat_id] = ownership.license_cost or 0.0
    return unique_seats


def group_seats_by_owner(ownerships) -> dict[str, OwnerSeats]:
    grouped = {}
    by_owner = defaultdict(list)
    for ownership in ownerships:
        if not ownership.seat_id or not ownership.ticket_holder_id:
            logger.warning("Skipping ownership %s with missing seat or owner", ownership.ownership_id)
            continue
        by_owner[ownership.ticket_holder_id].append(ownership)
        if ownership.ticket_holder_id not in grouped:
            grouped[ownership.ticket_holder_id] = OwnerSeats(ownership.ticket_holder_id, ownership.owner_name)

    for owner_id, rows in by_owner.items():
        grouped[owner_id].seats = build_unique_seat_map(rows)
    return grouped


def index_pricing_by_seat(pricing, season_id: str | None = None) -> dict[str, list[PricingRow]]:
    indexed = defaultdict(list)
    for row in pricing:
        if season_id and row.season_id != season_id:
            continue
        indexed[row.seat_id].append(row)
    return indexed


def seat_sales_and_costs(seat_ids, pricing_by_seat) -> tuple[float, float]:
    sales = 0.0
    costs = 0.0
    for seat_id in seat_ids:
        for row in pricing_by_seat.get(seat_id, []):
            sales += row.sold_amount
            costs += row.cost
    return sales, costs


def sum_owner_payments(payments, exclusion: PaymentExclusionPolicy = NO_EXCLUSIONS) -> dict[str, dict]:
    """Totals of from_owner / to_owner payments per owner.

    Team payments never land on an individual owner.
    """
    totals = defaultdict(lambda: {FROM_OWNER: 0.0, TO_OWNER: 0.0})
    for payment in payments:
        if payment.type not in (FROM_OWNER, TO_OWNER):
            continue
        if not payment.ticket_holder_id:
            logger.warning("Skipping %s payment %s without an owner", payment.type, payment.payment_id)
            continue
        if payment.type == FROM_OWNER and exclusion.excludes(payment):
            continue
        totals[payment.ticket_holder_id][payment.type] += payment.amount
    return totals


def aggregate_owner_balances(
    ownerships,
    pricing,
    payments,
    season_id: str | None = None,
    exclusion: PaymentExclusionPolicy = PaymentExclusionPolicy(),
    retain_seatless_owners: bool = False,
    holders: dict | None = None,
) -> list[OwnerBalance]:
    """
    Net position per owner.

    balance = (sales + payments from owner) - (game costs + license costs + payments to owner)

    With ``season_id`` set, ownerships, pricing and payments are restricted to that
    season and owners without seats are dropped. For lifetime balances, owners with
    payment history but no seats are kept when ``retain_seatless_owners`` is set;
    ``holders`` (id -> name) supplies their names.
    """
    if season_id:
        ownerships = [o for o in ownerships if o.season_id == season_id]
        payments = [p for p in payments if p.season_id == season_id]

    owners = group_seats_by_owner(ownerships)
    pricing_by_seat = index_pricing_by_seat(pricing, season_id)
    payment_totals = sum_owner_payments(payments, exclusion)

    if retain_seatless_owners and not season_id:
        for owner_id in payment_totals:
            if owner_id in owners:
                continue
            name = (holders or {}).get(owner_id)
            if name is None:
                logger.warning("Skipping payments for unknown owner %s", owner_id)
                continue
            owners[owner_id] = OwnerSeats(owner_id, name)

    balances = []
    for owner_id, owner in owners.items():
        sales, costs = seat_sales_and_costs(owner.seats.keys(), pricing_by_seat)
        license_costs = sum(owner.seats.values())
        paid_in = payment_totals[owner_id][FROM_OWNER] if owner_id in payment_totals else 0.0
        paid_out = payment_totals[owner_id][TO_OWNER] if owner_id in payment_totals else 0.0
        balance = (sales + paid_in) - (costs + license_costs + paid_out)

        balances.append(OwnerBalance(
            ticket_holder_id=owner_id,
            name=owner.name,
            seats_owned=len(owner.seats),
            sales_total=round(sales, 2),
            costs_total=round(costs, 2),
            license_costs_total=round(license_costs, 2),
            payments_from_owner=round(paid_in, 2),
            payments_to_owner=round(paid_out, 2),
            balance=round(balance, 2),
        ))

    return sorted(balances, key=lambda b: (b.name.lower(), b.ticket_holder_id))


def find_shared_seats(ownerships) -> dict[str, set]:
    """Seat id -> owner ids, for seats held by more than one owner in the given rows."""
    owners_by_seat = defaultdict(set)
    for ownership in ownerships:
        if ownership.seat_id and ownership.ticket_holder_id:
            owners_by_seat[ownership.seat_id].add(ownership.ticket_holder_id)
    return {seat_id: owners for seat_id, owners in owners_by_seat.items() if len(owners) > 1}


def owner_season_lines(ownerships, pricing, season_id: str) -> list[OwnerSeasonLine]:
    """Sales, game costs and profit per owner for one season's games.

    A seat assigned to several owners in the same season is credited to each of them,
    so it is logged: the season totals count its games once per owner.
    """
    season_ownerships = [o for o in ownerships if o.season_id == season_id]
    for seat_id, owner_ids in find_shared_seats(season_ownerships).items():
        logger.warning(
            "Seat %s has %s owners in season %s: %s", seat_id, len(owner_ids), season_id, ", ".join(sorted(owner_ids))
        )
    owners = group_seats_by_owner(season_ownerships)
    pricing_by_seat = index_pricing_by_seat(pricing, season_id)

    lines = []
    for owner_id, owner in owners.items():
        sales, costs = seat_sales_and_costs(owner.seats.keys(), pricing_by_seat)
        lines.append(OwnerSeasonLine(
            ticket_holder_id=owner_id,
            name=owner.name,
            seats_owned=len(owner.seats),
            sales=round(sales, 2),
            costs=round(costs, 2),
            profit=round(sales - costs, 2),
        ))
    return sorted(lines, key=lambda line: (line.name.lower(), line.ticket_holder_id))
