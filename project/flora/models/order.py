# flora/models/order.py

from sqlalchemy import Column, DateTime, Integer, JSON, String
from flora.utils.database import Base

class OrderRecord(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)  # автоинкремент

    order_number = Column(String, unique=True, nullable=False)    # SF-<ms>-<random>
    customer_id  = Column(String, nullable=True, index=True)      # None для гостевых заказов
    created_at   = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at   = Column(DateTime(timezone=True), nullable=False)
    document     = Column(JSON, nullable=False)                    # заказ целиком (camelCase)
