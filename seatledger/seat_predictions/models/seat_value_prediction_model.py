from sqlalchemy import Column, String, Float, DateTime, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from seatledger.core.database import Base

class SeatValuePrediction(Base):
    __tablename__ = "seat_value_predictions"
    __table_args__ = (UniqueConstraint("seat_id", "season_id", name="seat_season_prediction_unique"),)

    prediction_id = Column(String, primary_key=True, index=True)
    seat_id = Column(String, ForeignKey("seats.seat_id"), nullable=False, index=True)
    season_id = Column(String, ForeignKey("seasons.season_id"), nullable=False, index=True)

    predicted_value = Column(Float)
    confidence_score = Column(Float)  # additive scorecard, 0-100
    baseline_value = Column(Float)
    performance_multiplier = Column(Float)
    demand_multiplier = Column(Float)
    similar_seats_multiplier = Column(Float)
    factors_considered = Column(JSON, nullable=False, default=list)

    calculated_at = Column(DateTime, nullable=True)
    valid_until = Column(DateTime, nullable=True)

    seat = relationship("Seat", back_populates="predictions")
    season = relationship("Season", back_populates="predictions")
