"""
Housing Office - Source Package

Billing core for a residential utility office: residents, per-service
consumption, tariffs, costs and office statistics.

DESIGN PRINCIPLES:
1. One registry owns all residents and the single tariff table
2. The registry is constructed explicitly and passed where it is needed
3. Domain failures are reported, never fatal
4. Every command outcome is auditable
5. All state lives in memory for the lifetime of the process
"""

__version__ = "1.0.0"
__author__ = "Housing Office Team"
