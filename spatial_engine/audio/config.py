"""
Configuration for spatial audio.

Spatial audio only runs when a SpacialAudioConfig is supplied; passing
None to the passes (or to the systems) turns the feature off.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SpacialAudioConfig(BaseModel):
    """
    Spatial audio settings.

    Attributes:
        max_distance: Distance at which a distance rolloff would reach
            silence. Reserved; the attenuation model does not read it yet.
    """

    model_config = ConfigDict(validate_assignment=True, extra='forbid')

    max_distance: float = Field(default=100.0, gt=0.0)
