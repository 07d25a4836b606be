"""
FastAPI メインアプリケーション
Optimized Demo API - 商品・カテゴリのCRUD/クエリAPI
"""

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy import text
from contextlib import asynccontextmanager
from typing import Optional
import logging
from datetime import datetime

from app.config import Settings, settings as default_settings
from app.database import Base, create_db_engine, create_session_factory, get_db
from app.routers.products import router as products_router
from app.routers.categories import router as categories_router
from app.services.seed import seed_database

# ログ設定
logging.basicConfig(
    level=default_settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ============================================
# ライフサイクル管理
# ============================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """アプリケーションの起動・終了処理"""
    config: Settings = app.state.settings
    engine: Engine = app.state.engine

    logger.info(f"🚀 {config.PROJECT_NAME} starting...")
    logger.info(f"Database engine: {engine.url}")

    Base.metadata.create_all(bind=engine)

    if config.SEED_ON_STARTUP:
        with app.state.session_factory() as db:
            seed_database(db)

    yield

    logger.info(f"👋 {config.PROJECT_NAME} shutting down...")
    # 外部から渡されたエンジンは呼び出し側が破棄する
    if app.state.owns_engine:
        engine.dispose()


# ============================================
# FastAPI アプリケーション
# ============================================
def create_app(
    config: Optional[Settings] = None, engine: Optional[Engine] = None
) -> FastAPI:
    """
    アプリケーションを生成

    エンジン・セッションファクトリーはapp.stateに保持し、
    各リクエストにはget_db経由でセッションを渡す。

    Args:
        config: 設定（省略時は環境変数から読み込んだ設定）
        engine: 既存のエンジン（省略時はDATABASE_URLから作成）
    """
    config = config or default_settings
    owns_engine = engine is None
    if engine is None:
        engine = create_db_engine(config.DATABASE_URL, echo=config.SQL_ECHO)

    app = FastAPI(
        title=config.PROJECT_NAME,
        description="商品・カテゴリのCRUD/クエリAPI（インメモリDB）",
        version=config.VERSION,
        debug=config.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.engine = engine
    app.state.owns_engine = owns_engine
    app.state.session_factory = create_session_factory(engine)

    # CORS設定
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )

    # ルータ登録
    app.include_router(products_router)
    app.include_router(categories_router)

    # ============================================
    # 基本エンドポイント
    # ============================================
    @app.get("/")
    async def root():
        """ルートエンドポイント"""
        return {
            "message": config.PROJECT_NAME,
            "version": config.VERSION,
            "status": "running",
            "docs": "/docs",
        }

    @app.get("/api/health")
    def health_check(db: Session = Depends(get_db)):
        """ヘルスチェックエンドポイント（DB接続確認含む）"""
        try:
            db.execute(text("SELECT 1"))
            database = "ok"
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            database = "error"

        return {
            "status": "ok",
            "database": database,
            "timestamp": datetime.now().isoformat(),
        }

    return app


app = create_app()


# ============================================
# 開発サーバー起動
# ============================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info"
    )
