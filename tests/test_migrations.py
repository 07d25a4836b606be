"""
Alembicマイグレーションのテスト
"""

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

ROOT = Path(__file__).resolve().parent.parent


def test_upgrade_head_creates_tables(tmp_path):
    """空のDBに upgrade head でテーブルが作成される"""
    url = f"sqlite:///{tmp_path / 'migrate.db'}"
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    cfg.set_main_option("sqlalchemy.url", url)
    cfg.attributes["configure_logger"] = False

    command.upgrade(cfg, "head")

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        assert {"categories", "products"} <= set(inspector.get_table_names())
        columns = {c["name"] for c in inspector.get_columns("products")}
        assert columns == {"id", "name", "price", "category_id"}
    finally:
        engine.dispose()
