# scripts/fix_missing_profiles.py
"""Create profiles for login accounts that don't have one yet.

Usage: python -m scripts.fix_missing_profiles [--dry-run]
"""
import asyncio
import argparse
from sqlalchemy.future import select

from app.db import async_session
from app.crud.profile import resolve_profile
from app.models.profile import Profile
from app.models.user import User


async def fix_profiles(dry_run: bool = False) -> int:
    created = 0
    async with async_session() as session:
        users = (await session.execute(select(User).order_by(User.email))).scalars().all()
        known = set((await session.execute(select(Profile.uid))).scalars().all())

        for user in users:
            if str(user.id) in known:
                print(f"✓ SKIP: {user.email} (profile already exists)")
                continue
            if dry_run:
                print(f"… WOULD CREATE: {user.email}")
                continue
            profile = await resolve_profile(session, user)
            created += 1
            print(f"✅ CREATED: {user.email} ({profile.role.value})")

    print(f"\nDone. {created} profile(s) created.")
    return created


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create missing user profiles")
    parser.add_argument("--dry-run", action="store_true", help="Only list what would be created")
    args = parser.parse_args()
    asyncio.run(fix_profiles(dry_run=args.dry_run))
