from typing import Any, Dict

from sqlalchemy.orm import declarative_base

# Create declarative base
Base = declarative_base()

class ProjectionMixin:
    """Gives a model its canonical external representation.

    Each model sets ``__projection__`` to the pydantic schema describing its
    wire shape; ``to_dict`` validates the row through it and dumps camelCase keys.
    """

    def to_dict(self) -> Dict[str, Any]:
        return self.__projection__.model_validate(self).model_dump(by_alias=True)
