"""Context stack tracking the JSON shape opened for each XML element."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from .types import (
    NS_URI,
    Attribute,
    Context,
    ScalarType,
    StackDisciplineError,
)

# Lowest priority first so that later lists override earlier ones
_DECLARATION_ORDER = (
    ScalarType.NULL,
    ScalarType.STRING,
    ScalarType.NUMBER,
    ScalarType.BOOLEAN,
)

_EMPTY_TABLE: Mapping[str, ScalarType] = MappingProxyType({})


def build_type_table(attributes: Iterable[Attribute],
                     namespace_uri: str = NS_URI) -> Mapping[str, ScalarType]:
    """
    Build the type declarations carried by an element's attributes.

    Each of the ``string``, ``number``, ``boolean`` and ``null`` attributes in
    the instruction namespace holds a space-separated list of local names.
    A name listed more than once resolves as boolean, then number, then
    string, then null.

    Args:
        attributes: Attributes of the element, in document order
        namespace_uri: Instruction namespace

    Returns:
        Read-only mapping of local name to declared scalar type
    """
    lists = {}
    for attribute in attributes:
        if attribute.namespace == namespace_uri:
            lists[attribute.local_name] = attribute.value

    table = {}
    for scalar_type in _DECLARATION_ORDER:
        declared = lists.get(scalar_type.value)
        if declared:
            for name in declared.split():
                table[name] = scalar_type

    return MappingProxyType(table) if table else _EMPTY_TABLE


@dataclass(frozen=True)
class Frame:
    """One entry per open XML element."""
    context: Context
    name: Optional[str] = None
    type_table: Mapping[str, ScalarType] = field(default_factory=lambda: _EMPTY_TABLE)
    scalar_type: ScalarType = ScalarType.DEFAULT

    def type_of(self, local_name: str) -> ScalarType:
        """Get the type this element declared for a child or attribute."""
        return self.type_table.get(local_name, ScalarType.DEFAULT)


class ContextStack:
    """
    LIFO of frames owned by a single document conversion.

    The bottom frame is a synthetic root installed before the document
    element; every element start pushes a frame and every element end pops
    one. Type declarations only apply to the immediate children and
    attributes of the element that makes them.
    """

    def __init__(self, namespace_uri: str = NS_URI):
        self.namespace_uri = namespace_uri
        self._frames: List[Frame] = []

    def __len__(self) -> int:
        return len(self._frames)

    @property
    def depth(self) -> int:
        """Number of open elements, excluding the synthetic root."""
        return max(0, len(self._frames) - 1)

    def push_root(self) -> None:
        """Install the synthetic root frame."""
        if self._frames:
            raise StackDisciplineError(
                "Document already started",
                context={"frames": len(self._frames)}
            )
        self._frames.append(Frame(Context.ROOT))

    def push(self, context: Context, attributes: Iterable[Attribute] = (),
             name: Optional[str] = None,
             scalar_type: ScalarType = ScalarType.DEFAULT) -> Frame:
        """
        Push a frame for an element that has just started.

        Args:
            context: JSON role of the element
            attributes: The element's attributes, read for type declarations
            name: Serialization key if the parent is an object
            scalar_type: Declared type of a value frame

        Returns:
            The pushed frame

        Raises:
            StackDisciplineError: If the document has not been started
        """
        if not self._frames:
            raise StackDisciplineError(
                f"Cannot push {context.value} frame before document start",
                context={"name": name}
            )
        frame = Frame(
            context=context,
            name=name,
            type_table=build_type_table(attributes, self.namespace_uri),
            scalar_type=scalar_type
        )
        self._frames.append(frame)
        return frame

    def pop(self) -> Frame:
        """
        Remove and return the frame of the element that has just ended.

        Raises:
            StackDisciplineError: If only the synthetic root remains
        """
        if len(self._frames) <= 1:
            raise StackDisciplineError(
                "Unbalanced element end: no open element to close",
                context={"frames": len(self._frames)}
            )
        return self._frames.pop()

    def pop_root(self) -> Frame:
        """
        Remove the synthetic root at document end.

        Raises:
            StackDisciplineError: If elements are still open or the
                document was never started
        """
        if len(self._frames) != 1:
            raise StackDisciplineError(
                f"Document end with {self.depth} element(s) still open"
                if self._frames else "Document end without document start",
                context={"frames": len(self._frames)}
            )
        return self._frames.pop()

    def _top(self) -> Frame:
        if not self._frames:
            raise StackDisciplineError("Context stack is empty")
        return self._frames[-1]

    def current_context(self) -> Context:
        return self._top().context

    def current_name(self) -> Optional[str]:
        return self._top().name

    def is_context(self, context: Context) -> bool:
        return self._top().context is context

    def type_of(self, local_name: str) -> ScalarType:
        """Get the type declared by the top frame for ``local_name``."""
        return self._top().type_of(local_name)
