from sqlalchemy import Column, String, Date, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from seatledger.core.database import Base

class Game(Base):
    __tablename__ = "games"

    game_id = Column(String, primary_key=True, index=True)
    season_id = Column(String, ForeignKey("seasons.season_id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    opponent = Column(String, nullable=False)
    season_type = Column(String, nullable=False, default="Regular Season")
    is_home = Column(Boolean, default=True)
    venue = Column(String, nullable=True)

    season = relationship("Season", back_populates="games")
    attendance = relationship("GameAttendance", back_populates="game", cascade="all, delete-orphan")
    pricing = relationship("GamePricing", back_populates="game", cascade="all, delete-orphan")
