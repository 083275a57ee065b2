from typing import Any, Dict, Optional
from pyrsistent import PClass, field

from thngreactor.data import ConfigDict, DataModel, Field


class Rule(PClass):
    ''' A `when` predicate paired with a `create` output producer.

        Fields are deliberately not mandatory. A rule missing either of
        them must still be representable so that the validator can reject
        it with a descriptive error instead of failing at construction.
    '''
    key = field(type=(str, type(None)), initial=None)
    description = field(type=(str, type(None)), initial=None)
    when = field()
    create = field()


class RuleOutcome(PClass):
    ''' Settled result of one rule branch. Exactly one of `result` / `error`
        is meaningful once the rule matched. '''
    rule = field(type=str, mandatory=True)
    matched = field(type=bool, initial=False)
    target = field(type=(str, type(None)), initial=None)
    payload = field(initial=None)
    result = field(initial=None)
    error = field(type=(Exception, type(None)), initial=None)

    @property
    def ok(self):
        return self.error is None


class ActionPayload(DataModel):
    model_config = ConfigDict(extra='allow')

    type: str
    thng_id: Optional[str] = Field(None, alias='thngId')
    custom_fields: Optional[Dict[str, Any]] = Field(None, alias='customFields')

    def serialize(self):
        # Optional fields never given are left out, explicit None values are sent
        unset = set(type(self).model_fields) - self.model_fields_set
        return self.model_dump(mode='json', exclude_none=False, exclude=unset)


class PropertyPayload(DataModel):
    key: str
    value: Any

    def serialize(self):
        return self.model_dump(mode='json', exclude_none=False)


class ActionData(DataModel):
    model_config = ConfigDict(extra='allow')

    type: str
    thng: Optional[str] = None


class ActionEvent(DataModel):
    action: ActionData


class ThngRef(DataModel):
    model_config = ConfigDict(extra='allow')

    id: str


class PropertyChange(DataModel):
    new_value: Any = Field(alias='newValue')
    old_value: Any = Field(None, alias='oldValue')


class PropertyChangeEvent(DataModel):
    thng: ThngRef
    changes: Dict[str, PropertyChange]
