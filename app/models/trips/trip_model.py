from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, JSON, UniqueConstraint, func
from sqlalchemy.orm import relationship
from app.core.database import Base


class TripRecord(Base):
    """
    A trip stored as one JSON document keyed by its id.

    ``version`` is bumped on every write and guards read-modify-write cycles.
    """
    __tablename__ = "trips"

    id = Column(String, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    version = Column(Integer, nullable=False, default=1)
    document = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="owned_trips")
    shares = relationship("TripShare", back_populates="trip", cascade="all, delete-orphan", passive_deletes=True)


class TripShare(Base):
    """Viewer index so trips shared with a user can be listed without scanning documents."""
    __tablename__ = "trip_shares"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(String, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    __table_args__ = (
        UniqueConstraint("trip_id", "user_id", name="uq_trip_share_user"),
    )

    trip = relationship("TripRecord", back_populates="shares")
    user = relationship("User", back_populates="shared_trips")
