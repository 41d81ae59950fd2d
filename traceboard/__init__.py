"""
Program Dashboard - Traceability & Metrics Engine

Joins the independently edited domain collections of the program dashboard
into one consolidated metrics snapshot.

Package Structure:
    - core: Infrastructure (logging)
    - domain: Domain models (journeys, scenarios, test cases, releases, squads...)
    - storage: Per-domain collection repositories and the overview endpoint source
    - traceability: Hierarchy validation and coverage calculation
    - aggregation: Cross-domain snapshot aggregation
"""

__version__ = "1.0.0"
__author__ = "Program Dashboard Team"
