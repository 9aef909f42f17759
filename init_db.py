import argparse
import asyncio
import logging

from backend.app.core.logging import setup_logging
from backend.app.db import init_models
from backend.app.db.base import AsyncSessionLocal
from backend.app.models import Organization, User
from backend.app.security.jwt import create_session_token

logger = logging.getLogger("init_db")


async def seed_demo_session(username: str, organization_name: str) -> str:
    """Create a user and an organization and return a bearer token for them."""
    async with AsyncSessionLocal() as db:
        organization = Organization(name=organization_name)
        user = User(username=username)
        db.add_all([organization, user])
        await db.commit()
        return create_session_token(user.id, organization.id)


async def main(args: argparse.Namespace) -> None:
    # drop_all is DEV MODE ONLY
    await init_models(drop_existing=args.reset)
    if args.seed:
        token = await seed_demo_session(args.username, args.organization)
        print(f">>> Bearer token for {args.username}: {token}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the personal secrets tables")
    parser.add_argument("--reset", action="store_true", help="drop existing tables first")
    parser.add_argument("--seed", action="store_true", help="create a demo user and organization")
    parser.add_argument("--username", default="demo")
    parser.add_argument("--organization", default="Demo Org")
    setup_logging()
    asyncio.run(main(parser.parse_args()))
