import uuid

from sqlalchemy import Column, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from registrar.db.base import Base, TimestampMixin


class Building(TimestampMixin, Base):
    __tablename__ = "buildings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False, unique=True)

    rooms = relationship("Room", back_populates="building")


class Room(TimestampMixin, Base):
    __tablename__ = "rooms"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    room_number = Column(String(20), nullable=False)
    floor = Column(String(20), nullable=False)
    building_id = Column(Uuid, ForeignKey("buildings.id"), nullable=False)

    building = relationship("Building", back_populates="rooms")

    __table_args__ = (UniqueConstraint("building_id", "room_number", name="uq_rooms_building_number"),)
