"""
Operation builders, one per classic operation kind.
"""

from .base import BaseOperationBuilder, VoidOperationBuilder
from .accounts import *
from .payments import *
from .offers import *
from .trust import *
from .claimable import *
from .sponsorship import *
from .liquidity import *
from .registry import (
    BUILDER_REGISTRY,
    resolve_kind,
    get_builder_for,
    compile_operation,
    decompile_operation,
    list_operation_kinds,
    register_builder,
)
