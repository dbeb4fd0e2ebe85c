from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from seatledger.core.database import Base

class TicketHolder(Base):
    __tablename__ = "ticket_holders"

    ticket_holder_id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)

    ownerships = relationship("SeatOwnership", back_populates="ticket_holder")
    payments = relationship("Payment", back_populates="ticket_holder")
