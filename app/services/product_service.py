"""
商品クエリ・更新サービス
Products APIの7操作（一覧・登録・ID取得・カテゴリ付き一覧・一括価格更新・ページング・検索）

全ての読み取りはDB側で絞り込みを行い、テーブル全件をメモリへ展開しない。
"""

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import String, func
from sqlalchemy.orm import Session

from app.models.category import Category
from app.models.product import Product
from app.schemas.product import ProductCreate, ProductDto

logger = logging.getLogger(__name__)

HUNDRED = Decimal(100)


# ============================================
# カスタム例外
# ============================================
class InvalidProductError(ValueError):
    """商品データの入力チェックエラー"""

    def __init__(self, message: str = "Invalid product data."):
        super().__init__(message)
        self.message = message


def list_products(db: Session) -> List[Product]:
    """全商品を取得（読み取りのみ、データは変更しない）"""
    return db.query(Product).order_by(Product.id).all()


def create_product(db: Session, payload: ProductCreate) -> Product:
    """
    商品を登録

    Raises:
        InvalidProductError: 商品名が空白のみ、または価格が負の場合
    """
    if not payload.name or not payload.name.strip() or payload.price < 0:
        raise InvalidProductError()

    product = Product(
        name=payload.name,
        price=payload.price,
        category_id=payload.category_id,
    )
    db.add(product)
    db.commit()
    db.refresh(product)

    logger.info(f"商品登録: id={product.id}, name={product.name}")
    return product


def get_product(db: Session, product_id: int) -> Optional[Product]:
    """主キーで1件取得（見つからなければNone）"""
    return db.query(Product).filter(Product.id == product_id).first()


def list_products_with_category(db: Session) -> List[ProductDto]:
    """
    商品とカテゴリ名を1回のクエリで取得

    LEFT OUTER JOINで結合するため、カテゴリが存在しない商品は
    category_name=None になる。商品ごとのカテゴリ取得（N+1）は行わない。
    """
    rows = (
        db.query(
            Product.id.label("product_id"),
            Product.name.label("product_name"),
            Category.name.label("category_name"),
        )
        .outerjoin(Category, Product.category_id == Category.id)
        .order_by(Product.id)
        .all()
    )
    return [
        ProductDto(
            product_id=row.product_id,
            product_name=row.product_name,
            category_name=row.category_name,
        )
        for row in rows
    ]


def bulk_update_prices(db: Session, percentage: Decimal) -> int:
    """
    全商品の価格を percentage % 変更し、1回のコミットで保存

    更新後の価格を基準に計算するため、同じ値で再実行すると複利的に変化する。

    Returns:
        更新件数
    """
    products = db.query(Product).all()
    for product in products:
        product.price += product.price * (percentage / HUNDRED)

    # まとめて1回だけ保存
    db.commit()

    logger.info(f"一括価格更新: {len(products)}件 ({percentage}%)")
    return len(products)


def list_products_paged(db: Session, page: int = 1, page_size: int = 20) -> List[Product]:
    """ページング取得（OFFSET/LIMITはSQL側で適用）"""
    offset = (page - 1) * page_size
    return (
        db.query(Product)
        .order_by(Product.id)
        .offset(offset)
        .limit(page_size)
        .all()
    )


def search_products(db: Session, keyword: str) -> List[Product]:
    """商品名の部分一致検索（大文字小文字を区別しない）"""
    keyword = keyword or ""
    if db.get_bind().dialect.name == "sqlite":
        # SQLiteではUnicode対応のcasefold()（app.databaseで登録）で比較する
        condition = func.casefold(Product.name, type_=String).contains(
            keyword.casefold(), autoescape=True
        )
    else:
        condition = Product.name.icontains(keyword, autoescape=True)

    # %, _ はワイルドカードではなく文字として扱う（autoescape）
    return (
        db.query(Product)
        .filter(condition)
        .order_by(Product.id)
        .all()
    )


def list_categories(db: Session) -> List[Category]:
    """カテゴリ一覧を取得"""
    return db.query(Category).order_by(Category.id).all()
