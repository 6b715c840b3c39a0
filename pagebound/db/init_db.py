"""
数据库初始化脚本

创建所有表，可选地把一个纯文本文件导入为故事：

    python -m pagebound.db.init_db
    python -m pagebound.db.init_db --import story.txt --title "My Story"
"""

import argparse
import asyncio
from pathlib import Path
from typing import Optional

from pagebound.db import base
from pagebound.db.session import get_session
from pagebound.models import AuthoringCapability, ApiResponse
from pagebound.services.authoring_service import AuthoringService


async def import_text_file(path: str, title: str, description: Optional[str] = None) -> ApiResponse:
    """
    将纯文本文件导入为故事

    Args:
        path: 文本文件路径（UTF-8）
        title: 故事标题
        description: 故事简介

    Returns:
        导入结果
    """
    source_text = Path(path).read_text(encoding="utf-8")
    capability = AuthoringCapability(granted=True, subject="init_db")

    async with get_session() as session:
        return await AuthoringService.import_story(
            session, capability, title, source_text, description=description
        )


async def main(argv=None):
    """主函数"""
    parser = argparse.ArgumentParser(description="Create Pagebound tables and optionally import a story")
    parser.add_argument("--import", dest="source", help="plain text file to import as a story")
    parser.add_argument("--title", help="title of the imported story (defaults to the file name)")
    parser.add_argument("--description", help="description of the imported story")
    args = parser.parse_args(argv)

    print("🚀 Starting database initialization...")
    print(f"Database URL: {base.get_database_url(async_mode=True)}")

    await base.init_db()
    try:
        print("\n📦 Step 1: Creating tables...")
        await base.create_tables()
        print("✅ All tables created")

        if args.source:
            title = args.title or Path(args.source).stem
            print(f"\n📦 Step 2: Importing {args.source} as {title!r}...")
            result = await import_text_file(args.source, title, args.description)
            if not result.success:
                raise SystemExit(f"❌ Import failed: {result.message}")
            print(
                f"✅ Imported story {result.data['story_id']} "
                f"({len(result.data['chapters'])} chapters, {result.data['page_count']} pages)"
            )

        print("\n✅ Database initialization completed successfully!")
    finally:
        await base.close_db()


if __name__ == "__main__":
    asyncio.run(main())
