"""
Declarative Base / 共通カラム型
"""
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import BigInteger
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

CENT = Decimal("0.01")


# Base Class for ORM models
class Base(DeclarativeBase):
    pass


class Money(TypeDecorator):
    """
    金額型: Decimalを整数（セント単位）で保存する

    SQLiteはDecimalを浮動小数点で保存するため、誤差が出ないよう整数で持つ。
    1セント未満は四捨五入。
    """
    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        cents = (Decimal(value) / CENT).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return int(cents)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return (Decimal(value) * CENT).quantize(CENT)
