from datetime import date
from decimal import Decimal

from sqlalchemy import func

from turftrack.extensions import db
from turftrack.models import EQUIPMENT_STATUSES, Equipment, MaintenanceLog, MarketplaceListing

MONTHS_SHOWN = 6
CENTS = Decimal("0.01")


def _month_start(day, months_back):
    month_index = day.year * 12 + (day.month - 1) - months_back
    return date(month_index // 12, month_index % 12 + 1, 1)


class DashboardService:
    @staticmethod
    def monthly_costs(logs, today=None, months=MONTHS_SHOWN):
        """Sum log costs per calendar month for the last ``months`` months, oldest first."""
        today = today or date.today()
        buckets = []
        totals = {}
        for back in range(months - 1, -1, -1):
            start = _month_start(today, back)
            key = (start.year, start.month)
            totals[key] = Decimal("0")
            buckets.append((key, start))
        for log in logs:
            key = (log.service_date.year, log.service_date.month)
            if key in totals:
                totals[key] += Decimal(str(log.cost or 0))
        return [
            {"month": start.strftime("%b"), "year": start.year, "cost": str(totals[key].quantize(CENTS))}
            for key, start in buckets
        ]

    @staticmethod
    def summary(owner_id, today=None):
        status_rows = (
            db.session.query(Equipment.status, func.count(Equipment.id))
            .filter(Equipment.owner_id == owner_id)
            .group_by(Equipment.status)
            .all()
        )
        status_counts = {status: 0 for status in EQUIPMENT_STATUSES}
        for status, count in status_rows:
            status_counts[status] = int(count)

        logs = MaintenanceLog.query.filter_by(owner_id=owner_id).all()
        total_cost = sum((Decimal(str(log.cost or 0)) for log in logs), Decimal("0"))

        per_equipment = (
            db.session.query(Equipment.id, Equipment.name, func.coalesce(func.sum(MaintenanceLog.cost), 0))
            .outerjoin(
                MaintenanceLog,
                (MaintenanceLog.equipment_id == Equipment.id) & (MaintenanceLog.owner_id == owner_id),
            )
            .filter(Equipment.owner_id == owner_id)
            .group_by(Equipment.id, Equipment.name)
            .order_by(Equipment.name.asc())
            .all()
        )

        return {
            "equipment_count": sum(status_counts.values()),
            "status_counts": status_counts,
            "log_count": len(logs),
            "total_cost": str(total_cost.quantize(CENTS)),
            "monthly_costs": DashboardService.monthly_costs(logs, today=today),
            "cost_by_equipment": [
                {"equipment_id": equipment_id, "name": name, "cost": str(Decimal(str(cost)).quantize(CENTS))}
                for equipment_id, name, cost in per_equipment
            ],
        }

    @staticmethod
    def platform_stats():
        return {
            "equipment_tracked": int(db.session.query(func.count(Equipment.id)).scalar() or 0),
            "active_listings": int(
                db.session.query(func.count(MarketplaceListing.id))
                .filter(MarketplaceListing.status == "active")
                .scalar()
                or 0
            ),
            "services_logged": int(db.session.query(func.count(MaintenanceLog.id)).scalar() or 0),
        }
