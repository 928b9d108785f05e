"""
Lookup and invocation of lifecycle methods on domain objects.
"""
import functools
import inspect
import logging
from typing import Any, Optional

from dataportal.core.errors import MethodNotFound

logger = logging.getLogger(__name__)

# Descriptors that live on the class but do not bind to the instance as methods
_NOT_INSTANCE_METHODS = (staticmethod, classmethod, property, functools.cached_property)


def is_instance_method(attribute: Any) -> bool:
    """
    Check whether a raw class attribute binds to instances as a method.

    Plain functions qualify, and so do decorated methods that remain
    descriptors, such as functools.lru_cache or singledispatchmethod.
    """
    if isinstance(attribute, _NOT_INSTANCE_METHODS):
        return False
    if not hasattr(attribute, "__get__"):
        return False
    return callable(attribute) or inspect.ismethoddescriptor(attribute)


def find_method(object_type: type, method: str) -> Any:
    """
    Find an instance method by name, public or private, anywhere in the MRO.

    The public name wins over its underscore-prefixed private variant.
    Static methods, class methods, properties and plain attributes do not match.

    Returns:
        The raw, unbound class attribute

    Raises:
        MethodNotFound: If neither name is an instance method
    """
    for name in (method, f"_{method}"):
        try:
            attribute = inspect.getattr_static(object_type, name)
        except AttributeError:
            continue
        if is_instance_method(attribute):
            return attribute
    raise MethodNotFound(object_type, method)


def call_method(obj: Any, method: str, *args: Any) -> Any:
    """
    Call a lifecycle method on a domain object exactly once.

    Arguments are checked against the method signature before the call, so
    a TypeError raised by the method body propagates like any other failure.
    Descriptors without a usable signature (singledispatchmethod dispatches
    on argument type itself) are called without the check.

    Args:
        obj: Domain object
        method: Lifecycle method name
        *args: Arguments for the method

    Returns:
        Whatever the method returns

    Raises:
        MethodNotFound: If no method accepts the arguments
        Exception: Any exception raised by the method itself, unwrapped
    """
    object_type = type(obj)
    attribute = find_method(object_type, method)
    bound = attribute.__get__(obj, object_type)
    if not callable(bound):
        raise MethodNotFound(object_type, method, "is not callable")

    signature = _signature(attribute, bound)
    if signature is not None:
        try:
            signature.bind(*args)
        except TypeError:
            raise MethodNotFound(
                object_type, method, f"accepting {len(args)} argument(s) not found"
            ) from None

    logger.debug(f"Calling {object_type.__qualname__}.{method}")
    try:
        return bound(*args)
    except Exception as e:
        logger.debug(f"{object_type.__qualname__}.{method} failed: {type(e).__name__}")
        raise


def _signature(attribute: Any, bound: Any) -> Optional[inspect.Signature]:
    # Non-callable descriptors report the wrapped function's signature, self included
    if not callable(attribute):
        return None
    try:
        return inspect.signature(bound)
    except (TypeError, ValueError):
        return None
