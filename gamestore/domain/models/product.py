"""Catalog domain models — products, platforms and their association.

Column names follow the legacy schema (nombre_juego, precio, ...); the
Python attributes are what the rest of the code uses.
"""

from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from gamestore.infrastructure.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column("nombre_juego", String(255), nullable=False)
    description = Column("descripcion", Text, nullable=True)
    price = Column("precio", Numeric(10, 2), nullable=False)
    release_date = Column("fecha_lanzamiento", Date, nullable=True)
    image_url = Column("imageurl", String(500), nullable=True)
    video_url = Column("videourl", String(500), nullable=True)

    platforms = relationship(
        "ProductPlatform",
        back_populates="product",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Product {self.id} - {self.name}>"


class Platform(Base):
    __tablename__ = "plataformas"

    id = Column("id_plataforma", Integer, primary_key=True, autoincrement=True)
    name = Column("nombre_plataforma", String(100), unique=True, nullable=False)

    def __repr__(self):
        return f"<Platform {self.name}>"


class ProductPlatform(Base):
    """Which platform a product is sold for, and whether that copy is used."""

    __tablename__ = "juegos_plataformas"

    product_id = Column("id", Integer, ForeignKey("products.id"), primary_key=True)
    platform_id = Column(
        "id_plataforma", Integer, ForeignKey("plataformas.id_plataforma"), primary_key=True
    )
    used = Column("usado", Boolean, nullable=False, default=False)

    product = relationship("Product", back_populates="platforms")
    platform = relationship("Platform")
