"""multilist — nested lists on top of a flat list store.

Lists of values and lists of lists are persisted as independent flat
store lists.  A slot that holds a sublist stores a reference token
(``"{namespace}:~>{key}"``) instead of the sublist's content.
"""

import logging

from multilist._internal.values import StringConvertible
from multilist.context import ListContext
from multilist.exceptions import (
    ConfigurationError,
    MultiListError,
    NotConfiguredError,
    StoreError,
    TypeNotStorableError,
)
from multilist.keys import DEFAULT_NAMESPACE, KeyCodec
from multilist.nested_list import NestedList
from multilist.registry import (
    configure_store,
    current_namespace,
    current_store,
    get_list,
    set_namespace,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_NAMESPACE",
    "ConfigurationError",
    "KeyCodec",
    "ListContext",
    "MultiListError",
    "NestedList",
    "NotConfiguredError",
    "StoreError",
    "StringConvertible",
    "TypeNotStorableError",
    "configure_store",
    "current_namespace",
    "current_store",
    "get_list",
    "set_namespace",
]
