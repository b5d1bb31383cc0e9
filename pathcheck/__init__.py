from .combine import combine_outcomes, sequence_effects, zip_effects
from .context import validation_context
from .effect import Effect, EffectScope, effect
from .state import (
    StateEffect,
    StateEffectScope,
    just,
    sequence_state,
    state_effect,
    zip_state,
)
from .types import Err, Ok, Outcome, concat

__all__ = [
    # Result types
    "Ok",
    "Err",
    "Outcome",
    "concat",
    # Effects
    "Effect",
    "EffectScope",
    "effect",
    "zip_effects",
    "sequence_effects",
    "combine_outcomes",
    # State effects
    "StateEffect",
    "StateEffectScope",
    "state_effect",
    "just",
    "zip_state",
    "sequence_state",
    # Configuration
    "validation_context",
]
