from sqlalchemy import Column, Float, Integer, String

from app.core.database import Base


class ItemRecord(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(150), nullable=False)
    brand = Column(String(100), nullable=False)
    category = Column(String(50), nullable=False, index=True)
    stock = Column(Integer, nullable=False, default=0)
    raw_price = Column(Float, nullable=False)
    selling_price = Column(Float, nullable=False)
    min_stock_alert = Column(Integer, nullable=False, default=10)
