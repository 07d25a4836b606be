"""
基本エンドポイント・カテゴリAPIのテスト
"""

from sqlalchemy import inspect, text

from app.database import create_db_engine


class TestBasicEndpoints:
    """基本エンドポイントテスト"""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["database"] == "ok"


class TestCategories:
    """カテゴリテスト"""

    def test_list_categories(self, client):
        response = client.get("/api/categories")
        assert response.status_code == 200
        assert response.json() == [
            {"id": 1, "name": "Electronics"},
            {"id": 2, "name": "Books"},
        ]


class TestEngine:
    """エンジン生成"""

    def test_memory_store_is_shared(self):
        """インメモリDBは別々の接続から同じストアを参照する"""
        engine = create_db_engine("sqlite://")
        try:
            with engine.connect() as first, engine.connect() as second:
                assert first.connection.dbapi_connection is not second.connection.dbapi_connection
                first.execute(text("CREATE TABLE shared (id INTEGER)"))
                first.execute(text("INSERT INTO shared (id) VALUES (1)"))
                first.commit()
                assert "shared" in inspect(second).get_table_names()
                assert second.execute(text("SELECT id FROM shared")).scalar_one() == 1
        finally:
            engine.dispose()

    def test_memory_engines_are_isolated(self):
        """エンジンごとに別のストアになる"""
        first = create_db_engine("sqlite://")
        second = create_db_engine("sqlite://")
        try:
            with first.connect() as conn:
                conn.execute(text("CREATE TABLE only_first (id INTEGER)"))
                conn.commit()
            with second.connect() as conn:
                assert "only_first" not in inspect(conn).get_table_names()
        finally:
            first.dispose()
            second.dispose()
