from pyrsistent import pvector

from .condition import FROM_VALUE, create_action, set_property
from .datadef import Rule


class RuleTable(object):
    ''' Immutable, ordered set of rules evaluated together for one event type. '''

    def __init__(self, name, *rules):
        self._name = name
        self._rules = pvector(rules)

    @property
    def name(self):
        return self._name

    def __iter__(self):
        return iter(self._rules)

    def __len__(self):
        return len(self._rules)

    def __getitem__(self, index):
        return self._rules[index]

    def __repr__(self):
        return f"<RuleTable {self._name} ({len(self._rules)} rules)>"


def _is_forecast_of_rain(key, value):
    return key == 'weather_report' and 'rain' in str(value)


ACTION_RULES = RuleTable(
    'action',
    Rule(
        key='left-warehouse',
        description='A thng leaving the warehouse is in transit',
        when=lambda action: action.type == '_LeftWarehouse',
        create=set_property('in_transit', True)
    ),
    Rule(
        key='scans',
        description='A scanned thng is active',
        when='scans',
        create=set_property('active', True)
    ),
)

PROPERTY_RULES = RuleTable(
    'property',
    Rule(
        key='overheating',
        when='temperature_celsius >= 100',
        create=set_property('overheating', True)
    ),
    Rule(
        key='forecast-alert',
        description='Raise a forecast alert when rain is reported',
        when=_is_forecast_of_rain,
        create=create_action('_ForecastAlert', conditions=FROM_VALUE)
    ),
)
