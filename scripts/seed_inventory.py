# scripts/seed_inventory.py
from sqlalchemy import delete, func, select

from apps.api.car.models import DEFAULT_CITY, DEFAULT_STATE, Car
from apps.application import ensure_sqlite_directory
from apps.settings import AppConfig
from core.db.core import Database
from core.utils.commands.command import Command

SAMPLE_INVENTORY = [
    {"year": 2022, "make": "Toyota", "model": "Camry", "price": 24995, "mileage": 32000, "featured": True},
    {"year": 2021, "make": "Honda", "model": "Civic", "price": 22500, "mileage": 28000, "featured": True},
    {"year": 2020, "make": "Ford", "model": "F-150", "price": 35000, "mileage": 42000, "featured": False},
]


def placeholder_image(car: dict) -> str:
    text = "+".join(str(car[part]) for part in ("year", "make", "model"))
    return f"https://via.placeholder.com/400x300?text={text}"


class SeedInventoryCommand(Command):
    help = "Insert the sample inventory"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete every existing car (and its gallery) before seeding",
        )

    async def handle(self, **options):
        settings = AppConfig()
        ensure_sqlite_directory(settings.DATABASE_URL)
        database = Database(settings.DATABASE_URL)
        try:
            await database.create_all()
            async with database.session_factory() as session:
                if options.get("reset"):
                    await session.execute(delete(Car))
                    print("Cleared existing cars")
                else:
                    existing = await session.scalar(select(func.count()).select_from(Car))
                    if existing:
                        print(f"Cars table already has {existing} row(s), skipping (use --reset)")
                        return

                for data in SAMPLE_INVENTORY:
                    session.add(
                        Car(
                            **data,
                            city=DEFAULT_CITY,
                            state=DEFAULT_STATE,
                            image_url=placeholder_image(data),
                        )
                    )
                await session.commit()
                print(f"Seeded {len(SAMPLE_INVENTORY)} cars")
        finally:
            await database.dispose()
