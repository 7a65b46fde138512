"""
User directory client entry point.
Prints every user in the directory, then the details of user 1.
"""

import asyncio
import sys

from loguru import logger

from userclient.directory import create_user_directory_client
from userclient.logging_setup import setup_logging
from userclient.settings import load_settings

DEMO_USER_ID = 1


async def main() -> int:
    """Main function"""
    settings = load_settings()
    setup_logging(settings.log_level)
    logger.info(f"Using user directory at {settings.base_url}")

    async with create_user_directory_client(settings) as client:
        try:
            print("Test 1: Getting all users (paginated)...")
            users = await client.get_all_users()
            print(f"Found {len(users)} users:")
            for user in users:
                print(f"- {user.full_name} ({user.email})")
                print(f"  Avatar: {user.avatar_url}")
                print()

            print("\nTest 2: Getting user by ID...")
            user = await client.get_user_by_id(DEMO_USER_ID)
            print(f"User {DEMO_USER_ID} details:")
            print(f"- Name: {user.full_name}")
            print(f"- Email: {user.email}")
            print(f"- Avatar: {user.avatar_url}")

        except Exception as e:
            print(f"Error: {e}")
            return 1

    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
