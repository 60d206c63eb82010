"""SQLAlchemy ORM models for venue persistence (PostgreSQL or SQLite)."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class CityRecord(Base):
    __tablename__ = "cities"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    name: Mapped[str] = mapped_column(String(100), unique=True)
    state: Mapped[str] = mapped_column(String(2))

    neighborhoods: Mapped[list["NeighborhoodRecord"]] = relationship(back_populates="city")


class NeighborhoodRecord(Base):
    __tablename__ = "neighborhoods"
    __table_args__ = (UniqueConstraint("slug", "city_id", name="uq_neighborhood_slug_city"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    city_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("cities.id"))
    name: Mapped[str] = mapped_column(String(100), index=True)
    slug: Mapped[str] = mapped_column(String(100))
    description: Mapped[str] = mapped_column(Text, default="")
    active: Mapped[bool] = mapped_column(Boolean, default=True)

    city: Mapped["CityRecord"] = relationship(back_populates="neighborhoods")
    venues: Mapped[list["VenueRecord"]] = relationship(back_populates="neighborhood")


class VenueRecord(Base):
    __tablename__ = "venues"
    __table_args__ = (UniqueConstraint("external_id", "source", name="uq_venue_external_id_source"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    # Identity
    external_id: Mapped[str] = mapped_column(String(255))
    source: Mapped[str] = mapped_column(String(20))  # "yelp", "google", "manual"
    name: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), index=True)

    # Location
    address: Mapped[str] = mapped_column(String(500), default="")
    city_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("cities.id"))
    neighborhood_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("neighborhoods.id"), nullable=True)
    latitude: Mapped[Decimal | None] = mapped_column(Numeric(10, 7), nullable=True)
    longitude: Mapped[Decimal | None] = mapped_column(Numeric(10, 7), nullable=True)

    # Listing
    category: Mapped[str] = mapped_column(String(50), default="Other", index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    price_range: Mapped[int | None] = mapped_column(Integer, nullable=True)
    photos: Mapped[list | None] = mapped_column(JSON, nullable=True)

    # Ratings
    yelp_rating: Mapped[Decimal | None] = mapped_column(Numeric(2, 1), nullable=True)
    yelp_review_count: Mapped[int] = mapped_column(Integer, default=0)
    google_rating: Mapped[Decimal | None] = mapped_column(Numeric(2, 1), nullable=True)
    google_review_count: Mapped[int] = mapped_column(Integer, default=0)
    aggregate_rating: Mapped[Decimal | None] = mapped_column(Numeric(2, 1), nullable=True)
    total_reviews: Mapped[int] = mapped_column(Integer, default=0)
    rating_confidence: Mapped[Decimal | None] = mapped_column(Numeric(3, 2), nullable=True)
    popularity_score: Mapped[int] = mapped_column(Integer, default=0)

    # Neighborhood resolution provenance
    neighborhood_confidence: Mapped[str | None] = mapped_column(String(10), nullable=True)
    neighborhood_method: Mapped[str | None] = mapped_column(String(20), nullable=True)

    verified: Mapped[bool] = mapped_column(Boolean, default=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True)

    neighborhood: Mapped["NeighborhoodRecord | None"] = relationship(back_populates="venues")
