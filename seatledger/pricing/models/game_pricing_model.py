from sqlalchemy import Column, String, Float, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from seatledger.core.database import Base

class GamePricing(Base):
    __tablename__ = "game_pricing"
    __table_args__ = (UniqueConstraint("game_id", "seat_id", name="game_seat_pricing_unique"),)

    pricing_id = Column(String, primary_key=True, index=True)
    game_id = Column(String, ForeignKey("games.game_id"), nullable=False, index=True)
    seat_id = Column(String, ForeignKey("seats.seat_id"), nullable=False, index=True)
    cost = Column(Float, nullable=True)
    sold_price = Column(Float, nullable=True)  # null means not sold

    game = relationship("Game", back_populates="pricing")
    seat = relationship("Seat", back_populates="pricing")
