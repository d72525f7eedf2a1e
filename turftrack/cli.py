from decimal import Decimal

import click
from flask import current_app
from flask.cli import with_appcontext

from turftrack.extensions import db
from turftrack.models import Equipment, User
from turftrack.services import AuthService, MaintenanceService

DEMO_FLEET = [
    {
        "name": "Fairway Master 5000",
        "make": "Toro",
        "model": "Reelmaster 5010-H",
        "year": 2022,
        "current_hours": "450.5",
        "serial_number": "TR-5010-22-001",
        "status": "active",
        "notes": "Primary fairway mower. Check reels weekly.",
        "logs": [
            ("2024-01-15", "Routine", "Oil change and filter replacement", "85.50", "430.0", "Mike T."),
            ("2024-02-01", "Inspection", "Reel sharpening and height adjustment", "150.00", "445.0", "External Service"),
        ],
    },
    {
        "name": "Beverage Cart #2",
        "make": "Club Car",
        "model": "Carryall 500",
        "year": 2020,
        "current_hours": "1200.0",
        "serial_number": "CC-500-20-882",
        "status": "active",
        "notes": "New tires installed Jan 2024",
        "logs": [],
    },
    {
        "name": "Utility Tractor",
        "make": "John Deere",
        "model": "4066R",
        "year": 2019,
        "current_hours": "2150.2",
        "serial_number": "JD-4066-19-445",
        "status": "maintenance",
        "notes": "Awaiting hydraulic pump part",
        "logs": [
            ("2024-02-10", "Repair", "Hydraulic leak diagnosis - ordered pump", "0.00", "2150.2", "Mike T."),
        ],
    },
]


@click.command("seed-demo")
@click.option("--email", default="demo@turftrack.local", show_default=True)
@click.option("--password", default="turftrack-demo", show_default=True)
@with_appcontext
def seed_demo_command(email, password):
    """Create a demo user with a small fleet and service history."""
    db.create_all()
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = AuthService.register_user(email=email, password=password, first_name="Demo", last_name="Superintendent")
    elif Equipment.query.filter_by(owner_id=user.id).count():
        click.echo("Demo fleet already present, nothing to do.")
        return

    for machine in DEMO_FLEET:
        equipment = Equipment(
            owner_id=user.id,
            name=machine["name"],
            make=machine["make"],
            model=machine["model"],
            year=machine["year"],
            current_hours=Decimal(machine["current_hours"]),
            serial_number=machine["serial_number"],
            status=machine["status"],
            notes=machine["notes"],
        )
        db.session.add(equipment)
        db.session.commit()
        for service_date, kind, description, cost, hours, performed_by in machine["logs"]:
            MaintenanceService.create_log(
                user.id,
                {
                    "equipment_id": equipment.id,
                    "service_date": service_date,
                    "type": kind,
                    "description": description,
                    "cost": cost,
                    "hours_at_service": hours,
                    "performed_by": performed_by,
                },
            )

    current_app.logger.info("Seeded demo fleet for %s", email)
    click.echo(f"Seeded {len(DEMO_FLEET)} machines for {email}.")


def register_commands(app):
    app.cli.add_command(seed_demo_command)
