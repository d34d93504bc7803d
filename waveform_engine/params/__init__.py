"""
Configuration schema, defaults and resolution.
Defaults: single source is canonical_defaults.CONFIG_DEFAULTS; use resolve_configuration() for resolved values.
"""
from waveform_engine.params.schema import PARAM_SCHEMA
from waveform_engine.params.resolve import (
    configuration_from_params,
    resolve_configuration,
    resolved_to_dict,
    scaled,
)
from waveform_engine.params.clamp import clamp_geometry

__all__ = [
    "PARAM_SCHEMA",
    "configuration_from_params",
    "resolve_configuration",
    "resolved_to_dict",
    "scaled",
    "clamp_geometry",
]
