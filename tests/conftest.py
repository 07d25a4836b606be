"""
テスト用の共通設定・フィクスチャ
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event

from app.config import Settings
from app.database import Base, create_db_engine, create_session_factory
from app.main import create_app
from app.models import Category, Product


# テスト用のインメモリSQLiteデータベース
SQLALCHEMY_DATABASE_URL = "sqlite://"


@pytest.fixture(scope="function")
def engine():
    """各テスト用の空のインメモリDB"""
    engine = create_db_engine(SQLALCHEMY_DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    """各テスト用のDBセッション"""
    TestingSessionLocal = create_session_factory(engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client(engine):
    """初期データ投入済みのAPIクライアント"""
    app = create_app(Settings(SEED_ON_STARTUP=True), engine=engine)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def empty_client(engine):
    """初期データなしのAPIクライアント"""
    app = create_app(Settings(SEED_ON_STARTUP=False), engine=engine)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def query_counter(engine):
    """実行されたSQL文を記録する"""
    statements = []

    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", before_cursor_execute)
    yield statements
    event.remove(engine, "before_cursor_execute", before_cursor_execute)


@pytest.fixture
def two_categories(db_session):
    """カテゴリ {1: Electronics, 2: Books} と商品 Laptop, Novel"""
    db_session.add_all([Category(id=1, name="Electronics"), Category(id=2, name="Books")])
    db_session.flush()
    db_session.add_all(
        [
            Product(name="Laptop", price=Decimal("1200"), category_id=1),
            Product(name="Novel", price=Decimal("20"), category_id=2),
        ]
    )
    db_session.commit()
    return db_session
