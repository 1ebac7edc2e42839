from __future__ import annotations

# ==============================================================================
# Geometry
# ==============================================================================

# Vectors shorter than this normalize to zero (degenerate aim).
NORMALIZE_EPS = 1.0e-4

# Denominator guard for the slab test along an axis.
AXIS_PARALLEL_EPS = 1.0e-12

# ==============================================================================
# Default Target (used by the CLI)
# ==============================================================================

# Humanoid dimensions, in blocks.
HUMANOID_EYE_HEIGHT = 1.62
HUMANOID_BB_WIDTH = 0.6
HUMANOID_BB_HEIGHT = 1.8

# ==============================================================================
# Particles
# ==============================================================================

# Per-particle speed jitter forwarded to the host particle transport.
PARTICLE_SPEED_JITTER = 0.1
