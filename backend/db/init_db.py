"""
数据库初始化脚本

创建所有表，并写入预置用户（按用户名 upsert）

用法:
    python -m backend.db.init_db            # 只建表
    python -m backend.db.init_db --seed     # 建表并写入预置用户
    python -m backend.db.init_db --drop --seed
"""

import argparse
import asyncio

from loguru import logger

from backend.config.logging import setup_logging
from backend.db import base
from backend.db.dao import UserDAO
from backend.db.session import get_session

# 预置用户（固定 UUID，便于联调）
SEED_USERS = [
    {"id": "11111111-1111-1111-1111-111111111111", "username": "alice", "display_name": "Alice"},
    {"id": "22222222-2222-2222-2222-222222222222", "username": "bob", "display_name": "Bob"},
    {"id": "33333333-3333-3333-3333-333333333333", "username": "carol", "display_name": "Carol"},
    {"id": "44444444-4444-4444-4444-444444444444", "username": "diana", "display_name": "Diana"},
    {"id": "55555555-5555-5555-5555-555555555555", "username": "eve", "display_name": "Eve"},
]


async def drop_tables():
    """删除所有表"""
    from backend.db import models  # noqa: F401

    async with base.async_engine.begin() as conn:
        await conn.run_sync(base.Base.metadata.drop_all)
    logger.warning("🗑️  All tables dropped")


async def seed_users(users=None) -> int:
    """
    写入预置用户

    Returns:
        写入的用户数
    """
    users = users or SEED_USERS
    async with get_session() as session:
        for item in users:
            await UserDAO.upsert(
                session,
                username=item["username"],
                display_name=item.get("display_name"),
                user_id=item.get("id"),
            )
    logger.info(f"✅ Seeded {len(users)} users")
    return len(users)


async def main(seed: bool = False, drop: bool = False):
    """主函数"""
    logger.info("🚀 Starting database initialization...")

    await base.init_db()
    try:
        if drop:
            await drop_tables()

        await base.create_tables()

        if seed:
            await seed_users()

        logger.success("✅ Database initialization completed successfully!")
    finally:
        await base.close_db()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Create tables and seed users")
    parser.add_argument("--seed", action="store_true", help="insert predefined users")
    parser.add_argument("--drop", action="store_true", help="drop all tables first")
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    setup_logging()
    asyncio.run(main(seed=args.seed, drop=args.drop))
