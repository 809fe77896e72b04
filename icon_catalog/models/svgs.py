"""SQLAlchemy model for the 'svgs' table."""

from sqlalchemy import Column, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from icon_catalog.db import Base


class Svg(Base):
    """Código SVG de um ícone em um peso específico."""
    __tablename__ = "svgs"
    __table_args__ = (
        UniqueConstraint("icon_id", "weight", name="uq_svgs_icon_weight"),
        {"schema": "public"},
    )

    id = Column(Integer, primary_key=True)
    icon_id = Column(Integer, ForeignKey("public.icons.id", ondelete="CASCADE"), nullable=False)
    weight = Column(Text, nullable=False)
    src = Column(Text, nullable=False)

    icon = relationship("Icon", back_populates="svgs")

    def __repr__(self):
        return f"<Svg(icon_id={self.icon_id}, weight='{self.weight}')>"
