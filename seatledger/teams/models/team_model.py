from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from seatledger.core.database import Base

class Team(Base):
    __tablename__ = "teams"

    team_id = Column(String, primary_key=True, index=True)
    team_name = Column(String, nullable=False)

    seasons = relationship("Season", back_populates="team")
    seats = relationship("Seat", back_populates="team")
    performances = relationship("TeamPerformance", back_populates="team")
