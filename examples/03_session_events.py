"""
Caller-level re-login policy built on the session events

The client never retries by itself. Here a single re-login is attempted
when a call fails with SessionExpiredError.
"""
import asyncio

from biostarpy import BioStarClient, SessionExpiredError, setup_logging


async def list_with_relogin(biostar: BioStarClient, login_id: str, secret: str):
    try:
        return await biostar.list_users(limit=50)
    except SessionExpiredError:
        await biostar.start(login_id, secret)
        return await biostar.list_users(limit=50)


async def main():
    setup_logging()

    async with BioStarClient("https://127.0.0.1") as biostar:
        biostar.on('session_expired', lambda: print("Session expired"))
        biostar.on('login', lambda login_id: print(f"Logged in as {login_id}"))

        await biostar.start("admin", "password")
        page = await list_with_relogin(biostar, "admin", "password")
        print(f"{page.total} users")


if __name__ == "__main__":
    asyncio.run(main())
