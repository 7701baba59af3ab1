"""MaeutIC Application Package — university community platform backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Only the version string lives here: explicit imports everywhere else
"""

__version__ = "1.0.0"
