from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(eq=False)
class IdSlot:
    """Shared storage cell for one Core variable.

    Every reference to a name in a program points at the same slot, so
    declaration, assignment and reads all observe one state.
    """
    name: str
    declared: bool = False
    value: Optional[int] = None

    @property
    def is_set(self) -> bool:
        return self.value is not None


@dataclass
class Environment:
    """Name to slot table built while a program is parsed."""
    slots: Dict[str, IdSlot] = field(default_factory=dict)

    def slot(self, name: str) -> IdSlot:
        # First occurrence creates the slot; later ones share it.
        if name not in self.slots:
            self.slots[name] = IdSlot(name)
        return self.slots[name]

    def reset(self) -> None:
        for slot in self.slots.values():
            slot.declared = False
            slot.value = None
