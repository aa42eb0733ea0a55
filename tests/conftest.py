"""Shared test configuration.

Register *and* load a Hypothesis profile without per-example deadlines so the
torch-backed property tests do not fail spuriously on slower CI machines.
"""

from hypothesis import settings

settings.register_profile("qnan_no_deadline", deadline=None)
settings.load_profile("qnan_no_deadline")
