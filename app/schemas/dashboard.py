"""Dashboard stats schema. Serialized with camelCase keys for the frontend."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DashboardStats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_listings: int
    active_listings: int
    sold_listings: int
    total_value: str  # two decimals, e.g. "1249.50"
