"""
Field Registry.

Central storage for the fields of one command. A registry is built once from
a registration table (field name -> descriptor string), then frozen:

    registry = FieldRegistry.from_descriptors({
        "X":    "field,global,last,help=Use field for X axis",
        "Y":    "field,local,list,help=Use field for Y axis",
        "Type": "string,global,last,default=bar,enum=bar:line:area",
    })

    registry.lookup("-type")   # FieldDescriptor for Type
    registry.lookup("+y")      # negated spelling resolves to Y as well

After freezing, all_fields is a read-only view and register() raises
RegistryFrozenError.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union
from types import MappingProxyType

from .descriptor import parse_descriptor
from .errors import GrammarError
from .schema import FieldDescriptor, normalize_flag


class RegistryFrozenError(RuntimeError):
    """Raised when attempting to modify a frozen registry."""


class FieldRegistry:
    """
    Ordered registry of field descriptors, indexed by name and by switch.

    Attributes:
        _fields: Field names to descriptors, in registration order.
        _by_flag: Positive switch spelling to descriptor.
        _frozen: Whether the registry has been frozen (immutable).
        primary_input_name: Name of the field that bare tabular files fill.
    """

    def __init__(self, primary_input_name: str = "Argv"):
        self._fields: Dict[str, FieldDescriptor] = {}
        self._by_flag: Dict[str, FieldDescriptor] = {}
        self._frozen: bool = False
        self._fields_proxy: Mapping[str, FieldDescriptor] = None
        self.primary_input_name = primary_input_name

    @classmethod
    def from_descriptors(
        cls,
        table: Union[Mapping[str, str], Iterable[Tuple[str, str]]],
        primary_input_name: str = "Argv",
    ) -> "FieldRegistry":
        """
        Build and freeze a registry from a registration table.

        Raises:
            GrammarError: on the first malformed descriptor, duplicate name
                or clashing switch spelling.
        """
        registry = cls(primary_input_name)
        items = table.items() if isinstance(table, Mapping) else table
        for name, text in items:
            registry.register(parse_descriptor(name, text))
        registry.freeze()
        return registry

    def freeze(self) -> None:
        """Freeze the registry. Idempotent."""
        if not self._frozen:
            self._frozen = True
            self._fields_proxy = MappingProxyType(self._fields)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def register(self, descriptor: FieldDescriptor) -> None:
        """
        Register a field descriptor.

        Raises:
            RegistryFrozenError: If the registry has been frozen.
            GrammarError: If the name or its switch is already taken.
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{descriptor.name}': registry is frozen. "
                "All fields must be registered before the command is used."
            )

        if descriptor.name in self._fields:
            raise GrammarError("duplicate field name", field=descriptor.name)

        clash = self._by_flag.get(descriptor.flag)
        if clash is not None:
            raise GrammarError(f"switch {descriptor.flag} is already used by field {clash.name}",
                               field=descriptor.name)

        self._fields[descriptor.name] = descriptor
        self._by_flag[descriptor.flag] = descriptor

    @property
    def all_fields(self) -> Mapping[str, FieldDescriptor]:
        if self._frozen and self._fields_proxy is not None:
            return self._fields_proxy
        return self._fields

    def __iter__(self):
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def get(self, name: str) -> Optional[FieldDescriptor]:
        return self._fields.get(name)

    def lookup(self, token: str) -> Optional[FieldDescriptor]:
        """Resolve a -switch or +switch token to its descriptor."""
        flag = normalize_flag(token)
        if flag is None:
            return None
        return self._by_flag.get(flag)

    def flags(self) -> List[str]:
        """All positive switch spellings, in registration order."""
        return [descriptor.flag for descriptor in self._fields.values()]

    @property
    def primary_input(self) -> Optional[FieldDescriptor]:
        return self._fields.get(self.primary_input_name)
