"""Live-tunable cart parameters."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from coastersim.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_MASS = 228.6
DEFAULT_FRICTION = 0.015
MIN_TUNING_MASS = 50.0
MAX_TUNING_MASS = 1_000.0
MIN_TUNING_FRICTION = 0.0
MAX_TUNING_FRICTION = 0.1


@dataclass(frozen=True)
class CartParameters:
    """Cart parameters that may be changed between ticks.

    Args:
        mass: Cart mass [kg].
        friction: Rolling-friction coefficient between wheels and rails (-).
    """

    mass: float = DEFAULT_MASS
    friction: float = DEFAULT_FRICTION

    def validate(self) -> None:
        """Validate parameters before they are applied.

        Raises:
            coastersim.utils.exceptions.ConfigurationError: If ``mass`` is not
                positive or ``friction`` is negative.
        """
        if not self.mass > 0.0:
            msg = "mass must be positive"
            raise ConfigurationError(msg)
        if not self.friction >= 0.0:
            msg = "friction must be non-negative"
            raise ConfigurationError(msg)

    def bounded(self) -> CartParameters:
        """Clip parameters into the supported tuning ranges.

        Returns:
            Parameters with ``mass`` in ``[MIN_TUNING_MASS, MAX_TUNING_MASS]``
            and ``friction`` in ``[MIN_TUNING_FRICTION, MAX_TUNING_FRICTION]``.
            Non-finite values are replaced by the defaults.
        """
        mass = DEFAULT_MASS if not np.isfinite(self.mass) else self.mass
        friction = DEFAULT_FRICTION if not np.isfinite(self.friction) else self.friction
        mass = float(np.clip(mass, MIN_TUNING_MASS, MAX_TUNING_MASS))
        friction = float(np.clip(friction, MIN_TUNING_FRICTION, MAX_TUNING_FRICTION))
        if mass != self.mass or friction != self.friction:
            logger.warning(
                "Cart parameters clipped to tuning range: mass %.3g -> %.3g, friction %.3g -> %.3g",
                self.mass,
                mass,
                self.friction,
                friction,
            )
        return CartParameters(mass=mass, friction=friction)
