"""
Products API エンドポイント
"""

import logging
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.product import (
    BulkPriceUpdateResponse,
    ProductCreate,
    ProductDto,
    ProductResponse,
)
from app.services import product_service
from app.services.product_service import InvalidProductError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=List[ProductResponse])
def get_products(db: Session = Depends(get_db)):
    """商品一覧を取得"""
    return product_service.list_products(db)


@router.post(
    "", response_model=ProductResponse, status_code=status.HTTP_201_CREATED
)
def post_product(
    payload: ProductCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    """
    商品を登録

    商品名が空、または価格が負の場合は400を返す。
    成功時はLocationヘッダーに取得用URLを設定する。
    """
    try:
        product = product_service.create_product(db, payload)
    except InvalidProductError as e:
        logger.warning(f"商品登録の入力エラー: name={payload.name!r}, price={payload.price}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    response.headers["Location"] = str(
        request.url_for("get_product", product_id=product.id)
    )
    return product


# 固定パスは /{product_id} より先に登録する
@router.get("/with-category", response_model=List[ProductDto])
def get_products_with_category(db: Session = Depends(get_db)):
    """商品とカテゴリ名の一覧を取得"""
    return product_service.list_products_with_category(db)


@router.put("/bulk-update-price", response_model=BulkPriceUpdateResponse)
def bulk_update_product_prices(
    percentage: Decimal = Body(..., description="変更率（%）、負の値は値下げ"),
    db: Session = Depends(get_db),
):
    """全商品の価格を一括更新"""
    updated = product_service.bulk_update_prices(db, percentage)
    return BulkPriceUpdateResponse(updated=updated)


@router.get("/paged", response_model=List[ProductResponse])
def get_paged_products(
    page: int = Query(1, ge=1, description="ページ番号"),
    page_size: int = Query(
        20, ge=1, le=100, alias="pageSize", description="1ページあたりの取得件数"
    ),
    db: Session = Depends(get_db),
):
    """ページング付き商品一覧"""
    return product_service.list_products_paged(db, page=page, page_size=page_size)


@router.get("/search", response_model=List[ProductResponse])
def search_products(
    keyword: str = Query("", description="検索キーワード（商品名の部分一致）"),
    db: Session = Depends(get_db),
):
    """商品名で検索"""
    return product_service.search_products(db, keyword)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db)):
    """商品をIDで取得"""
    product = product_service.get_product(db, product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
        )
    return product
