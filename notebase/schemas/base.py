from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Champs snake_case côté Python, camelCase dans le JSON (parentId, isTemplate...)"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
