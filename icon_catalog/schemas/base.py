from pydantic import BaseModel, ConfigDict

class BaseSchema(BaseModel):
    """Esquema base para todos os modelos Pydantic."""
    model_config = ConfigDict(from_attributes=True)
