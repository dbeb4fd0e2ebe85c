from sqlalchemy import Column, String, Float, ForeignKey
from sqlalchemy.orm import relationship
from seatledger.core.database import Base

class Seat(Base):
    __tablename__ = "seats"

    seat_id = Column(String, primary_key=True, index=True)
    team_id = Column(String, ForeignKey("teams.team_id"), nullable=False, index=True)
    section = Column(String, nullable=False)
    row = Column(String, nullable=False)
    number = Column(String, nullable=False)
    license_cost = Column(Float, nullable=True)  # one-time, not per season

    team = relationship("Team", back_populates="seats")
    ownerships = relationship("SeatOwnership", back_populates="seat", cascade="all, delete-orphan")
    pricing = relationship("GamePricing", back_populates="seat", cascade="all, delete-orphan")
    predictions = relationship("SeatValuePrediction", back_populates="seat", cascade="all, delete-orphan")
