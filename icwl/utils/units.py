from enum import Enum
from typing import Union

import pint

ureg = pint.get_application_registry()

class FlowUnit(Enum):
    """Flow rate units used by the flow tables and the channel records."""
    LITER_PER_SECOND = 'L/s'
    CUBIC_METER_PER_SECOND = 'm3/s'

    @property
    def pint_unit(self) -> str:
        return {'L/s': 'liter / second', 'm3/s': 'meter ** 3 / second'}[self.value]

    @staticmethod
    def convert(value: float, from_unit: Union['FlowUnit', str],
                to_unit: Union['FlowUnit', str]) -> float:
        """Convert a flow rate between units."""
        if isinstance(from_unit, str):
            from_unit = FlowUnit(from_unit)
        if isinstance(to_unit, str):
            to_unit = FlowUnit(to_unit)

        if from_unit == to_unit:
            return value
        return ureg.Quantity(value, from_unit.pint_unit).to(to_unit.pint_unit).magnitude


def flow_volume(flow: float, days: float, unit: Union[FlowUnit, str] = FlowUnit.LITER_PER_SECOND,
                to: str = 'hectometer ** 3') -> pint.Quantity:
    """
    Volume delivered by a constant flow over a number of days.

    One cubic hectometre is one million m³, the unit of the intake volume rows.
    """
    if isinstance(unit, str):
        unit = FlowUnit(unit)
    rate = ureg.Quantity(flow, unit.pint_unit)
    return (rate * ureg.Quantity(days, 'day')).to(to)
