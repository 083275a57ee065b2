from collections.abc import Mapping
from pydantic import BaseModel, ConfigDict, Field  # noqa: F401


class DataModel(BaseModel):
    """
    Frozen pydantic model used for events and rule outputs.

    Host events arrive as plain mappings; `create` coerces them (or another
    model) into the model type. Dumps are by alias, so the camelCase names of
    the entity API survive a round trip.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def create(cls, data):
        if isinstance(data, cls):
            return data

        if isinstance(data, BaseModel):
            data = data.model_dump(by_alias=True, exclude_none=False)

        if not isinstance(data, Mapping):
            raise ValueError(f'Unable to extract [{cls.__name__}] from object: {data!r}')

        return cls.model_validate(dict(data))

    def serialize(self, **kwargs):
        return self.model_dump(**kwargs)

    def model_dump(self, by_alias=True, exclude_none=True, **kwargs):
        return super().model_dump(by_alias=by_alias, exclude_none=exclude_none, **kwargs)
