from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from seatledger.core.database import Base

class GameAttendance(Base):
    __tablename__ = "game_attendance"

    attendance_id = Column(String, primary_key=True, index=True)
    game_id = Column(String, ForeignKey("games.game_id"), nullable=False, index=True)
    seat_id = Column(String, ForeignKey("seats.seat_id"), nullable=False)
    ticket_holder_id = Column(String, ForeignKey("ticket_holders.ticket_holder_id"), nullable=False)

    game = relationship("Game", back_populates="attendance")
