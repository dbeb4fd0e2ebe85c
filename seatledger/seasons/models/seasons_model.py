from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship
from seatledger.core.database import Base

class Season(Base):
    __tablename__ = "seasons"

    season_id = Column(String, primary_key=True, index=True)
    team_id = Column(String, ForeignKey("teams.team_id"), nullable=False)
    season_year = Column(Integer, nullable=False)

    team = relationship("Team", back_populates="seasons")
    games = relationship("Game", back_populates="season", cascade="all, delete-orphan")
    ownerships = relationship("SeatOwnership", back_populates="season", cascade="all, delete-orphan")
    performances = relationship("TeamPerformance", back_populates="season", cascade="all, delete-orphan")
    predictions = relationship("SeatValuePrediction", back_populates="season", cascade="all, delete-orphan")
