"""
Seed the database with the standing Diriyah posts.

Run with: python -m scripts.seed_data
"""

import asyncio

from sqlalchemy import select

from guardmap.config import get_settings
from guardmap.database import Database
from guardmap.models import Location, LocationType
from guardmap.repositories.locations import LocationRepository
from guardmap.schema import run_migrations
from guardmap.schemas.location import LocationCreate
from guardmap.services.style_codec import StyleSchema

# Gates and traffic points around At-Turaif and Bujairi.
# Coordinates are approximate - adjust on the map after seeding.
DIRIYAH_POSTS = [
    {
        "name": "Gate 1",
        "description": "Main visitor gate, Bujairi Terrace side",
        "latitude": "24.7365",
        "longitude": "46.5762",
        "location_type": LocationType.SECURITY,
        "radius": 120,
    },
    {
        "name": "Gate 2",
        "description": "At-Turaif north entrance",
        "latitude": "24.7338",
        "longitude": "46.5724",
        "location_type": LocationType.SECURITY,
        "radius": 100,
    },
    {
        "name": "Wadi Hanifa crossing",
        "description": "Pedestrian crossing between Bujairi and At-Turaif",
        "latitude": "24.7352",
        "longitude": "46.5741",
        "location_type": LocationType.MIXED,
        "radius": 80,
    },
    {
        "name": "Parking P3 roundabout",
        "description": "Inbound traffic from King Khalid Road",
        "latitude": "24.7421",
        "longitude": "46.5808",
        "location_type": LocationType.TRAFFIC,
        "radius": 150,
        "style": StyleSchema(fill_color="#ff9900", stroke_color="#663d00"),
    },
]


async def seed_posts(database: Database) -> None:
    """Create each post unless a location with the same name exists."""
    async with database.session() as session:
        repo = LocationRepository(session, database.settings)

        for post in DIRIYAH_POSTS:
            result = await session.execute(
                select(Location.id).where(Location.name == post["name"])
            )
            if result.scalar_one_or_none() is not None:
                print(f"  ✓ {post['name']} exists")
                continue

            location = await repo.create(LocationCreate(**post))
            print(f"  + Created: {location.name} (id {location.id})")


async def main():
    """Main entry point."""
    print("=" * 50)
    print("Seeding GuardMap Database")
    print("=" * 50)

    database = Database(get_settings())
    try:
        print("\nApplying migrations...")
        await run_migrations(database)

        print("\nSeeding Diriyah posts...")
        await seed_posts(database)
        print("\n✓ Seed data complete!")
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
