"""
Basic usage - Login and list users
"""
import asyncio
import getpass

from biostarpy import BioStarClient, Credentials


def ask_credentials() -> Credentials:
    login_id = input("Login ID: ")
    return Credentials(login_id, getpass.getpass("Password: "))


async def main():
    config = BioStarClient.create_config("https://127.0.0.1", verify_ssl=False)

    async with BioStarClient(config=config, credential_source=ask_credentials) as biostar:
        await biostar.start()

        page = await biostar.list_users(group_id=1, limit=10)
        print(f"Retrieved {len(page.rows)} users (total in group: {page.total})")
        for user in page:
            print(f"  - ID: {user.user_id}, Name: {user.name}")


if __name__ == "__main__":
    asyncio.run(main())
