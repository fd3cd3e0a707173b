from sqlalchemy import Column, String, Integer, Text, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base

HERO_ROLES = ("tank", "damage", "support")


class Hero(BaseModel, Base):
    __tablename__ = "heroes"

    name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False)  # stored lower-case, validated in schema
    portrait = Column(String(500), nullable=True)  # image URL
    description = Column(Text, nullable=True)
    health = Column(Integer, nullable=False, default=0)
    armor = Column(Integer, nullable=False, default=0)
    shields = Column(Integer, nullable=False, default=0)

    abilities = relationship(
        "Ability",
        back_populates="hero",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Ability.name",
    )

    __table_args__ = (
        CheckConstraint("health >= 0", name="ck_heroes_health_nonnegative"),
        CheckConstraint("armor >= 0", name="ck_heroes_armor_nonnegative"),
        CheckConstraint("shields >= 0", name="ck_heroes_shields_nonnegative"),
        Index("ix_heroes_name", "name"),
        Index("ix_heroes_role", "role"),
    )


class Ability(BaseModel, Base):
    __tablename__ = "abilities"

    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    icon = Column(String(500), nullable=True)  # icon URL

    hero_id = Column(String(36), ForeignKey("heroes.id", ondelete="CASCADE"), nullable=False, index=True)
    hero = relationship("Hero", back_populates="abilities")
