# debug_orchestrator.py
import asyncio
import json

from app.config import load_settings
from app.orchestrator import TripPlanner
from app.schemas import TripFormData


async def main():
    form = TripFormData(
        departure_city="New York",
        destination_city="Paris",
        start_date="2025-03-01",
        end_date="2025-03-05",
        travelers=2,
        preferences=["museums", "food"],
        passport_country="US",
        group_type="couple",
        comfort_level=3,
    )

    settings = load_settings()
    print(f"Webhook: {settings.webhook_url or 'not configured (placeholder mode)'}")

    # Call the planner directly
    itinerary = await TripPlanner(settings).plan(form)
    print("Planner returned:\n")
    print(json.dumps(itinerary.to_payload(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    asyncio.run(main())
