"""SQLAlchemy model for the 'icons' table."""

from sqlalchemy import Boolean, CheckConstraint, Column, Float, Integer, Text, text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import relationship

from icon_catalog.db import Base


# Faixas de uso privado do Unicode onde os codepoints são atribuídos (apenas pares)
CODEPOINT_CHECK = (
    "(code BETWEEN x'E000'::int AND x'F8FF'::int OR code BETWEEN x'F0000'::int AND x'FFFFD'::int) "
    "AND code % 2 = 0"
)


class Icon(Base):
    """
    Representa um ícone do catálogo.

    Criado e atualizado apenas pela sincronização com a tabela externa,
    sempre identificado pelo ``rid``.
    """
    __tablename__ = "icons"
    __table_args__ = (
        CheckConstraint(CODEPOINT_CHECK, name="ck_icons_code_private_use"),
        {"schema": "public"},
    )

    id = Column(Integer, primary_key=True)
    rid = Column(Text, nullable=False, unique=True)
    name = Column(Text, nullable=False, unique=True)
    alias = Column(Text, nullable=True)
    code = Column(Integer, nullable=True, unique=True)
    status = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    search_categories = Column(ARRAY(Text), nullable=False, server_default=text("'{}'"))
    tags = Column(ARRAY(Text), nullable=False, server_default=text("'{}'"))
    notes = Column(Text, nullable=True)
    released_at = Column(Float, nullable=True)
    last_updated_at = Column(Float, nullable=True)
    deprecated_at = Column(Float, nullable=True)
    published = Column(Boolean, nullable=False, server_default=text("FALSE"))

    # Relacionamentos
    svgs = relationship("Svg", back_populates="icon", cascade="all, delete-orphan", passive_deletes=True)

    # Colunas sobrescritas no upsert quando o rid já existe
    MUTABLE_COLUMNS = (
        "name", "alias", "code", "status", "category", "search_categories", "tags",
        "notes", "released_at", "last_updated_at", "deprecated_at", "published",
    )

    def __repr__(self):
        return f"<Icon(id={self.id}, rid='{self.rid}', name='{self.name}')>"
