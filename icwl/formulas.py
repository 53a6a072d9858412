"""
Empirical seepage-loss formulas.

    S = 10 × A × L × √(Qin / 1000)

with S and Qin in L/s, L in km and A the filtration coefficient of the
channel bed (Table 3 of the SANIIRI method: weak 1.0-1.30, medium 1.87-2.30,
strong 2.80-3.50). The enhanced variant multiplies S by the adjustment
coefficients of icwl.coefficients.
"""
from dataclasses import dataclass, asdict
import math
from typing import Dict, Optional

from icwl.coefficients import coefficient, groundwater_coefficient

AVERAGE_A = 2.08


def base_loss(q_in: float, length: float, a: float = AVERAGE_A) -> float:
    """
    Seepage loss of a channel reach.

    Args:
        q_in: Inflow [L/s]
        length: Reach length [km]
        a: Filtration coefficient

    Returns:
        float: Seepage loss [L/s], 0 for non-positive inflow or length
    """
    if not q_in > 0 or not length > 0:
        return 0.0
    return 10 * a * length * math.sqrt(q_in / 1000)


@dataclass(frozen=True)
class LossFactors:
    """Adjustment coefficients applied to the base loss"""
    condition: float = 1.0
    vegetation: float = 1.0
    groundwater: float = 1.0
    season: float = 1.0
    soil_type: float = 1.0
    coverage: float = 1.0

    @property
    def product(self) -> float:
        return (self.condition * self.vegetation * self.groundwater *
                self.season * self.soil_type * self.coverage)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def loss_factors(condition: Optional[str] = None, vegetation: Optional[str] = None,
                 groundwater_depth: Optional[float] = None, season: Optional[str] = None,
                 soil_type: Optional[str] = None, coverage: Optional[str] = None) -> LossFactors:
    """Resolve categorical attributes into coefficients (1.0 when absent)."""
    return LossFactors(
        condition=coefficient('condition', condition),
        vegetation=coefficient('vegetation', vegetation),
        groundwater=groundwater_coefficient(groundwater_depth),
        season=coefficient('season', season),
        soil_type=coefficient('soil_type', soil_type),
        coverage=coefficient('coverage', coverage),
    )


def enhanced_loss(q_in: float, length: float, a: float = AVERAGE_A,
                  factors: Optional[LossFactors] = None) -> float:
    """Base loss times the product of all adjustment coefficients."""
    factors = factors or LossFactors()
    return base_loss(q_in, length, a) * factors.product
