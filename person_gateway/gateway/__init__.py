"""
Gateway package for the person query gateway.

Holds the SQL for every named operation and the PersonGateway that runs it.
"""

from person_gateway.gateway.person_gateway import DEFAULT_RANGE_SORT, PersonGateway

__all__ = [
    "DEFAULT_RANGE_SORT",
    "PersonGateway",
]
