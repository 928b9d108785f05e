"""
Resolution of criteria to a domain type and construction of the instance.

Shared by the create, fetch and delete operations. Update receives an
existing instance and never resolves.
"""
import functools
import logging
import sys
from typing import Any

from dataportal.core.errors import TypeResolutionError
from dataportal.domain.criteria import CriteriaBase

logger = logging.getLogger(__name__)

ENCLOSING_TYPE_CACHE_SIZE = 256


def resolve_object_type(criteria: Any) -> type:
    """
    Determine the domain type a criteria value refers to.

    CriteriaBase instances name their type explicitly. Any other criteria
    falls back to the legacy convention of nesting the criteria class
    inside the domain class.

    Args:
        criteria: Criteria supplied by the caller

    Returns:
        The domain type

    Raises:
        TypeResolutionError: If no type can be determined
    """
    if criteria is None:
        raise TypeResolutionError("No criteria supplied; cannot determine object type")

    if isinstance(criteria, CriteriaBase):
        object_type = criteria.object_type
    else:
        object_type = enclosing_type(type(criteria))

    if not isinstance(object_type, type):
        raise TypeResolutionError(f"Object type must be a class, not {object_type!r}")
    return object_type


@functools.lru_cache(maxsize=ENCLOSING_TYPE_CACHE_SIZE)
def enclosing_type(criteria_type: type) -> type:
    """
    Legacy resolution: the class that lexically encloses the criteria class.

    `Widget.Criteria` resolves to `Widget`. Classes declared inside a
    function cannot be looked up and are rejected, as are top-level classes
    and classes whose enclosing name now refers to a different class.

    Raises:
        TypeResolutionError: If there is no resolvable enclosing class
    """
    parts = criteria_type.__qualname__.split(".")
    outer_parts = parts[:-1]
    if not outer_parts:
        raise TypeResolutionError(
            f"{criteria_type.__qualname__} is neither a CriteriaBase nor nested "
            f"in a domain type"
        )
    if "<locals>" in outer_parts:
        raise TypeResolutionError(
            f"{criteria_type.__qualname__} is declared inside a function; "
            f"its enclosing type cannot be resolved"
        )

    target: Any = sys.modules.get(criteria_type.__module__)
    for part in outer_parts:
        target = getattr(target, part, None)
    if not isinstance(target, type):
        raise TypeResolutionError(
            f"Enclosing type of {criteria_type.__qualname__} not found in "
            f"{criteria_type.__module__}"
        )
    if getattr(target, parts[-1], None) is not criteria_type:
        raise TypeResolutionError(
            f"{target.__qualname__} no longer declares {criteria_type.__qualname__}; "
            f"the enclosing name was rebound"
        )

    logger.warning(
        f"Resolved {criteria_type.__qualname__} by enclosing type; "
        f"prefer CriteriaBase with an explicit object_type"
    )
    return target


def create_business_object(criteria: Any) -> Any:
    """
    Construct a new instance of the domain type named by the criteria.

    Args:
        criteria: Criteria supplied by the caller

    Returns:
        A new, unpopulated domain object

    Raises:
        TypeResolutionError: If the type cannot be resolved or constructed
    """
    object_type = resolve_object_type(criteria)
    try:
        return object_type()
    except Exception as e:
        raise TypeResolutionError(
            f"Cannot construct {object_type.__qualname__} with its default constructor: {e}"
        ) from e
