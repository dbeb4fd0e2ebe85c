from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from seatledger.core.database import Base

class SeatOwnership(Base):
    __tablename__ = "seat_ownership"

    ownership_id = Column(String, primary_key=True, index=True)
    seat_id = Column(String, ForeignKey("seats.seat_id"), nullable=False, index=True)
    season_id = Column(String, ForeignKey("seasons.season_id"), nullable=False, index=True)
    ticket_holder_id = Column(String, ForeignKey("ticket_holders.ticket_holder_id"), nullable=False)

    seat = relationship("Seat", back_populates="ownerships")
    season = relationship("Season", back_populates="ownerships")
    ticket_holder = relationship("TicketHolder", back_populates="ownerships")
