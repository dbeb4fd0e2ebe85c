"""Season and multi-season roll-ups built from per-owner season lines.

Two cost bases are in play and must not be mixed: season reports carry game costs
only, grand totals add one-time license costs on top.
"""
from collections import OrderedDict
from seatledger.balances.services.balance_calculator import (
    FROM_OWNER,
    TO_TEAM,
    FROM_TEAM,
    SEAT_LICENSE_CATEGORY,
    build_unique_seat_map,
    group_seats_by_owner,
    owner_season_lines,
)
from seatledger.reports.models.report_records import (
    SeasonReport,
    LicenseInvestment,
    PaymentTotals,
    GrandTotals,
    OwnerTotal,
)


def build_season_reports(seasons, ownerships, pricing) -> list[SeasonReport]:
    reports = []
    for season in seasons:
        details = owner_season_lines(ownerships, pricing, season.season_id)
        total_sales = sum(line.sales for line in details)
        total_costs = sum(line.costs for line in details)
        reports.append(SeasonReport(
            season_id=season.season_id,
            season_year=season.season_year,
            team_name=season.team_name,
            total_sales=round(total_sales, 2),
            total_costs=round(total_costs, 2),
            total_profit=round(total_sales - total_costs, 2),
            owner_details=details,
        ))
    return reports


def build_license_investments(ownerships) -> list[LicenseInvestment]:
    investments = [
        LicenseInvestment(
            ticket_holder_id=owner.ticket_holder_id,
            name=owner.name,
            total_license_costs=round(sum(owner.seats.values()), 2),
            seats_owned=len(owner.seats),
        )
        for owner in group_seats_by_owner(ownerships).values()
    ]
    return sorted(investments, key=lambda i: (i.name.lower(), i.ticket_holder_id))


def total_license_costs(ownerships) -> float:
    """License cost of every owned seat, once per seat regardless of owner or season."""
    return round(sum(build_unique_seat_map(ownerships).values()), 2)


def build_payment_totals(payments) -> PaymentTotals:
    to_teams = sum(p.amount for p in payments if p.type == TO_TEAM)
    from_teams = sum(p.amount for p in payments if p.type == FROM_TEAM)
    license_payments = sum(
        p.amount for p in payments
        if p.type == FROM_OWNER and p.category == SEAT_LICENSE_CATEGORY
    )
    total = sum(p.amount for p in payments if p.type in (TO_TEAM, FROM_OWNER))
    return PaymentTotals(
        payments_to_teams=round(to_teams, 2),
        payments_from_teams=round(from_teams, 2),
        seat_license_payments=round(license_payments, 2),
        total_payments=round(total, 2),
        net_team_payments=round(to_teams - from_teams, 2),
    )


def build_grand_totals(season_reports, ownerships, payments) -> GrandTotals:
    sales = sum(r.total_sales for r in season_reports)
    costs = sum(r.total_costs for r in season_reports)
    profit = sum(r.total_profit for r in season_reports)
    license_costs = total_license_costs(ownerships)
    total_costs = costs + license_costs
    return GrandTotals(
        sales=round(sales, 2),
        costs=round(costs, 2),
        profit=round(profit, 2),
        license_costs=license_costs,
        total_costs=round(total_costs, 2),
        total_profit=round(sales - total_costs, 2),
        payments=build_payment_totals(payments),
    )


def build_owner_totals(season_reports) -> list[OwnerTotal]:
    totals = OrderedDict()
    for report in season_reports:
        for line in report.owner_details:
            current = totals.get(line.ticket_holder_id) or OwnerTotal(line.ticket_holder_id, line.name)
            totals[line.ticket_holder_id] = OwnerTotal(
                ticket_holder_id=current.ticket_holder_id,
                name=current.name,
                sales=round(current.sales + line.sales, 2),
                costs=round(current.costs + line.costs, 2),
                profit=round(current.profit + line.profit, 2),
            )
    return sorted(totals.values(), key=lambda t: (t.name.lower(), t.ticket_holder_id))
