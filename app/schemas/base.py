from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Reads and writes camelCase JSON keys; snake_case input is accepted too."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
