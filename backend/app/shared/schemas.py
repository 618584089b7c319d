# app/shared/schemas.py
"""
Bases pydantic communes.

Barques et gérants circulent en camelCase (portAttache, createdAt) ;
la facturation (périodes, tarifs, paiements) en snake_case, comme le
frontend historique les consomme.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)
