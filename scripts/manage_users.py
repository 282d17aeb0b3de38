# scripts/manage_users.py

import asyncio
import argparse
import sys
from sqlalchemy.future import select

from app.db import async_session
from app.crud.profile import is_bootstrap_admin
from app.models.profile import Profile, UserRole
from app.utils.timezones import utcnow


async def list_users():
    async with async_session() as session:
        result = await session.execute(select(Profile).order_by(Profile.display_name))
        for p in result.scalars().all():
            flag = "" if p.is_active else " (inactive)"
            print(f"{p.uid}  {p.role.value:<8}  {p.display_name} <{p.email}>{flag}")


async def _find(session, who: str):
    result = await session.execute(
        select(Profile).where((Profile.uid == who) | (Profile.email == who))
    )
    return result.scalar_one_or_none()


async def set_role(who: str, role: str):
    async with async_session() as session:
        profile = await _find(session, who)
        if not profile:
            print(f"⚠️  No profile found for: {who}")
            return
        if is_bootstrap_admin(profile.email) and role != UserRole.admin.value:
            print("⚠️  The bootstrap admin always stays admin.")
            return
        profile.role = UserRole(role)
        profile.updated_at = utcnow()
        await session.commit()
        print(f"✅ {profile.display_name} is now {role}")


async def set_active(who: str, active: bool):
    async with async_session() as session:
        profile = await _find(session, who)
        if not profile:
            print(f"⚠️  No profile found for: {who}")
            return
        profile.is_active = active
        profile.updated_at = utcnow()
        await session.commit()
        print(f"✅ {profile.display_name} active={active}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Manage staff profiles")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List all profiles")

    p_role = sub.add_parser("role", help="Change a user's role")
    p_role.add_argument("who", help="uid or email")
    p_role.add_argument("role", choices=[r.value for r in UserRole])

    p_off = sub.add_parser("deactivate", help="Mark a user inactive")
    p_off.add_argument("who", help="uid or email")

    p_on = sub.add_parser("activate", help="Mark a user active")
    p_on.add_argument("who", help="uid or email")

    args = parser.parse_args(argv)
    if args.command == "list":
        asyncio.run(list_users())
    elif args.command == "role":
        asyncio.run(set_role(args.who, args.role))
    elif args.command == "deactivate":
        asyncio.run(set_active(args.who, False))
    elif args.command == "activate":
        asyncio.run(set_active(args.who, True))


if __name__ == "__main__":
    if sys.platform.startswith('win') and sys.version_info < (3, 10):
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    main()
