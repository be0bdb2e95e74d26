"""
Base operation builder.

A builder turns the parameter bag of one operation kind into the body of the
matching ``OperationBody`` arm, and decodes such a body back into parameters.
"""

from __future__ import annotations
from typing import Any, Dict, Mapping, Tuple
from abc import ABC, abstractmethod

from ...enums import OperationKind
from ..fields import OperationField, compile_fields, decompile_fields


class BaseOperationBuilder(ABC):
    """
    Base class for all operation builders.

    Subclasses set ``kind`` and usually only declare ``fields``; kinds with a
    non-struct body override ``compile`` / ``decompile``.
    """

    fields: Tuple[OperationField, ...] = ()

    @property
    @abstractmethod
    def kind(self) -> OperationKind:
        """Get the operation kind."""
        pass

    @property
    def is_void(self) -> bool:
        """True for kinds whose body arm carries no value."""
        return False

    def compile(self, params: Mapping[str, Any]) -> Any:
        """
        Compile operation parameters into the wire body.

        Args:
            params: Operation parameters

        Returns:
            Body of the ``OperationBody`` arm for this kind

        Raises:
            TxBuildError: Any primitive codec failure, unchanged
        """
        return compile_fields(self.fields, params, self.kind.value)

    def decompile(self, body: Any) -> Dict[str, Any]:
        """Decode a wire body back into operation parameters."""
        return decompile_fields(self.fields, body)

    def to_body(self, params: Mapping[str, Any]) -> Any:
        """Compile ``params`` and wrap them in the ``OperationBody`` union."""
        if self.is_void:
            return self.kind.value
        return {self.kind.value: self.compile(params)}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.kind.value})"


class VoidOperationBuilder(BaseOperationBuilder):
    """Kinds without parameters; the body is the bare kind tag."""

    @property
    def is_void(self) -> bool:
        return True

    def compile(self, params: Mapping[str, Any]) -> None:
        return None

    def decompile(self, body: Any) -> Dict[str, Any]:
        return {}


__all__ = ["BaseOperationBuilder", "VoidOperationBuilder"]
