"""
Step classification for multi-step outcomes
"""

from models import StepType


def classify_step(step_index: int) -> StepType:
    """
    Assign a step type by position in the sequence.

    Step 0 is BASE, every later step is FEATURE_STEP. Telling respins apart
    from free-spin steps needs a backend flag the reference payload does not
    carry yet; StepType already has members for both.
    """
    if step_index == 0:
        return StepType.BASE
    return StepType.FEATURE_STEP
