"""
初期データ投入
カテゴリが1件も無い場合のみ、カテゴリ2件・商品3件を登録する（何度呼んでも重複しない）
"""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from app.models.category import Category
from app.models.product import Product

logger = logging.getLogger(__name__)

SEED_CATEGORIES = [
    (1, "Electronics"),
    (2, "Books"),
]

# (商品名, 価格, カテゴリID)
SEED_PRODUCTS = [
    ("Laptop", Decimal("1200"), 1),
    ("Smartphone", Decimal("800"), 1),
    ("Novel", Decimal("20"), 2),
]


def seed_database(db: Session) -> bool:
    """
    空のDBに初期データを投入

    Returns:
        投入した場合True、既にデータがあればFalse
    """
    if db.query(Category.id).first() is not None:
        logger.info("初期データ投入をスキップ: カテゴリ登録済み")
        return False

    db.add_all([Category(id=cid, name=name) for cid, name in SEED_CATEGORIES])
    db.flush()

    db.add_all(
        [
            Product(name=name, price=price, category_id=category_id)
            for name, price, category_id in SEED_PRODUCTS
        ]
    )
    db.commit()

    logger.info(
        f"初期データ投入完了: カテゴリ{len(SEED_CATEGORIES)}件, 商品{len(SEED_PRODUCTS)}件"
    )
    return True
