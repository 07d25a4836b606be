import sqlite3
import threading
import uuid
import weakref
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool

from app.models.base import Base

__all__ = ["Base", "create_db_engine", "create_session_factory", "get_db"]

# エンジンごとの書き込みロック（同じストアを使う全セッションファクトリーで共有）
_write_locks: "weakref.WeakKeyDictionary[Engine, threading.Lock]" = weakref.WeakKeyDictionary()


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or url.startswith(
        "sqlite:///:memory:?"
    )


def _casefold(value):
    return value.casefold() if value is not None else None


# SQLiteのlower()はASCIIのみ対応のため、Unicode対応の関数を登録する
@event.listens_for(Engine, "connect")
def _register_sqlite_functions(dbapi_connection, connection_record):
    if isinstance(dbapi_connection, sqlite3.Connection):
        dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)


def _create_memory_engine(echo: bool) -> Engine:
    """
    セッションごとに別接続を使う共有キャッシュのインメモリDB

    接続が全て閉じるとDBが消えるため、エンジン破棄まで1本保持する。
    """
    name = f"memdb_{uuid.uuid4().hex}"
    engine = create_engine(
        f"sqlite:///file:{name}?mode=memory&cache=shared&uri=true",
        connect_args={"check_same_thread": False},
        poolclass=QueuePool,
        echo=echo,
    )

    @event.listens_for(engine, "connect")
    def _read_uncommitted(dbapi_connection, connection_record):
        # 書き込み中のテーブルを読んでもロックエラーにしない
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA read_uncommitted = 1")
        cursor.close()

    keeper = engine.raw_connection()

    @event.listens_for(engine, "engine_disposed")
    def _close_keeper(disposed_engine):
        # 破棄済みプールに戻さず物理接続を閉じる
        keeper.invalidate()

    return engine


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    DATABASE_URLからエンジンを作成

    インメモリSQLiteの場合は名前付きの共有キャッシュDBにする。
    プロセス内で1つのストアを共有しつつ、セッション間のトランザクションは分離される。
    """
    if _is_memory_sqlite(database_url):
        return _create_memory_engine(echo)

    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}

    return create_engine(
        database_url,
        pool_pre_ping=True,
        echo=echo,
        connect_args=connect_args,
    )


# セッションファクトリー
def create_session_factory(engine: Engine) -> sessionmaker:
    """
    セッションファクトリーを作成

    書き込み（flush）からトランザクション終了までロックを保持し、
    書き込みトランザクションを1本ずつに直列化する。
    """
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    write_lock = _write_locks.setdefault(engine, threading.Lock())

    @event.listens_for(factory, "before_flush")
    def _acquire_write_lock(session, flush_context, instances):
        if not session.info.get("holds_write_lock"):
            write_lock.acquire()
            session.info["holds_write_lock"] = True

    @event.listens_for(factory, "after_transaction_end")
    def _release_write_lock(session, transaction):
        if transaction.parent is None and session.info.pop("holds_write_lock", False):
            write_lock.release()

    return factory


# 依存性注入用のジェネレータ
def get_db(request: Request) -> Iterator[Session]:
    """
    FastAPIの依存性注入で使用するDBセッション

    セッションファクトリーはcreate_app()がapp.stateに載せたものを使う。

    使用例:
        @router.get("/items")
        def list_items(db: Session = Depends(get_db)):
            return db.query(Item).all()
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
