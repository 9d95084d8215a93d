import uuid
from datetime import timezone
from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from .database import Base


def _isoformat(value):
    if value is None:
        return ""
    # SQLite hands back naive datetimes; stored values are always UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class Recipe(Base):
    """Recipe model - scalar recipe fields with dimensions flattened into columns"""
    __tablename__ = "recipes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=True)
    weight = Column(Float, nullable=True)
    length = Column(Float, nullable=True)
    width = Column(Float, nullable=True)
    height = Column(Float, nullable=True)
    dimension_unit = Column(String, nullable=True)
    yield_percentage = Column(Float, nullable=True)
    waste_factor = Column(Float, nullable=True)
    unit_of_measure = Column(String, nullable=True)
    inventory_location = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    # Loaded together with the recipe so the async session never lazy-loads
    parts = relationship(
        "RecipePart",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipePart.id",
        lazy="selectin",
    )
    labor = relationship(
        "RecipeLabor",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeLabor.id",
        lazy="selectin",
    )

    @property
    def to_schema(self):
        """Convert Recipe model to schema dictionary format, defaulting empty columns"""
        return {
            "id": self.id,
            "name": self.name or "",
            "weight": self.weight or 0,
            "dimensions": {
                "length": self.length or 0,
                "width": self.width or 0,
                "height": self.height or 0,
                "unit": self.dimension_unit or "",
            },
            "yield_percentage": self.yield_percentage or 0,
            "waste_factor": self.waste_factor or 0,
            "unit_of_measure": self.unit_of_measure or "",
            "inventory_location": self.inventory_location or "",
            "parts": [
                {"name": part.name, "quantity": part.quantity, "cost_per_unit": part.cost_per_unit}
                for part in self.parts
            ],
            "labor": [
                {"type": job.type, "cost_per_hour": job.cost_per_hour, "hours_needed": job.hours_needed}
                for job in self.labor
            ],
            "created_at": _isoformat(self.created_at),
            "updated_at": _isoformat(self.updated_at),
        }


class RecipePart(Base):
    __tablename__ = "recipe_parts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    quantity = Column(Float, nullable=False)
    cost_per_unit = Column(Float, nullable=False)

    recipe = relationship("Recipe", back_populates="parts")


class RecipeLabor(Base):
    __tablename__ = "recipe_labor"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String, nullable=False)
    cost_per_hour = Column(Float, nullable=False)
    hours_needed = Column(Float, nullable=False)

    recipe = relationship("Recipe", back_populates="labor")
