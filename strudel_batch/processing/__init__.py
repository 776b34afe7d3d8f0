"""Processing layer - Quantization.

This layer snaps continuous measurements onto discrete grids:
- Frequencies onto equal-tempered pitch names
- Durations onto beat multipliers
"""

from .quantize import FrequencyQuantizer, DurationQuantizer

__all__ = [
    "FrequencyQuantizer",
    "DurationQuantizer",
]
