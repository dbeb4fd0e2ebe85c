from sqlalchemy import Column, String, Float, Date, ForeignKey
from sqlalchemy.orm import relationship
from seatledger.core.database import Base

PAYMENT_TYPES = ("from_owner", "to_owner", "to_team", "from_team")

class Payment(Base):
    __tablename__ = "payments"

    payment_id = Column(String, primary_key=True, index=True)
    season_id = Column(String, ForeignKey("seasons.season_id"), nullable=True)  # null for one-time payments
    ticket_holder_id = Column(String, ForeignKey("ticket_holders.ticket_holder_id"), nullable=True)
    team_id = Column(String, ForeignKey("teams.team_id"), nullable=True)
    amount = Column(Float, nullable=False)
    type = Column(String, nullable=False)  # one of PAYMENT_TYPES
    category = Column(String, nullable=True)  # 'seat_license', 'season_fee', 'parking', ...
    date = Column(Date, nullable=True)
    description = Column(String, nullable=True)

    ticket_holder = relationship("TicketHolder", back_populates="payments")
