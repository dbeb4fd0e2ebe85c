from sqlalchemy import Column, String, Integer, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from seatledger.core.database import Base

class TeamPerformance(Base):
    __tablename__ = "team_performance"
    __table_args__ = (UniqueConstraint("team_id", "season_id", name="team_season_performance_unique"),)

    team_performance_id = Column(String, primary_key=True, index=True)
    team_id = Column(String, ForeignKey("teams.team_id"), nullable=False)
    season_id = Column(String, ForeignKey("seasons.season_id"), nullable=False)

    wins = Column(Integer, default=0)
    losses = Column(Integer, default=0)
    win_percentage = Column(Float, default=0.0)
    average_attendance = Column(Integer, default=0)
    market_demand = Column(Float, default=0.0)  # 0-10 scale
    playoff_probability = Column(Float, default=0.0)  # 0-100
    last_updated = Column(DateTime, nullable=True)

    team = relationship("Team", back_populates="performances")
    season = relationship("Season", back_populates="performances")
