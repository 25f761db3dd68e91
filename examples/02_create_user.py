"""
Create a user with a one-year validity period
"""
import asyncio
from datetime import datetime, timedelta, timezone

from biostarpy import BioStarClient, NewUserRequest, ServerError


async def main():
    start = datetime.now(timezone.utc)
    request = NewUserRequest(
        user_id="1001",
        group_id=1,
        start_time=start,
        expiry_time=start + timedelta(days=365),
        name="Jane Doe",
        email="jane@example.com",
        department="Facilities",
    )

    async with BioStarClient("https://127.0.0.1") as biostar:
        await biostar.start("admin", "password")
        try:
            created = await biostar.create_user(request)
            print(f"Created {created}")
        except ServerError as e:
            # Duplicate IDs and missing permissions both land here
            print(f"Server refused: {e.status} {e.server_message or e.body}")


if __name__ == "__main__":
    asyncio.run(main())
