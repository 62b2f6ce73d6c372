"""
ZIL Runtime Object Graph Store

Objects are records keyed by identity. Containment is a back-reference from
child to parent; each container also keeps an insertion-ordered sibling list
so FIRST?/NEXT? traversal is deterministic.

Key classes:
- ObjectRecord: fixed descriptive fields plus an open property map
- ObjectStore: registry, containment, flags, properties, visibility
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set, Union

from zilrt.runtime.signals import ContainmentCycle

logger = logging.getLogger(__name__)

# Well-known flags
TAKEBIT = "TAKEBIT"
CONTBIT = "CONTBIT"
OPENBIT = "OPENBIT"
TRANSBIT = "TRANSBIT"
TOUCHBIT = "TOUCHBIT"
LIGHTBIT = "LIGHTBIT"
INVISIBLE = "INVISIBLE"
NDESCBIT = "NDESCBIT"

OPEN = OPENBIT
TRANSPARENT = TRANSBIT

FIXED_FIELDS = ("desc", "ldesc", "fdesc", "synonyms", "adjectives", "size", "action")

ActionHandler = Union[Callable[[Any], Any], str]


@dataclass
class ObjectRecord:
    """
    A single object: room, item, container or actor.

    action is either a callable taking one message argument or the name of a
    registered routine.
    """
    id: str
    parent: Optional[str] = None
    flags: Set[str] = field(default_factory=set)
    properties: Dict[str, Any] = field(default_factory=dict)
    desc: Optional[str] = None
    ldesc: Optional[str] = None
    fdesc: Optional[str] = None
    synonyms: List[str] = field(default_factory=list)
    adjectives: List[str] = field(default_factory=list)
    size: int = 0
    action: Optional[ActionHandler] = None

    @property
    def name(self) -> str:
        """Printable name: desc when set, else the identity."""
        return self.desc if self.desc else self.id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize every record in definition order."""
        action = self.action
        if action is not None and not isinstance(action, str):
            action = getattr(action, "__name__", repr(action))
        return {
            "id": self.id,
            "parent": self.parent,
            "flags": sorted(self.flags),
            "properties": dict(self.properties),
            "desc": self.desc,
            "ldesc": self.ldesc,
            "fdesc": self.fdesc,
            "synonyms": list(self.synonyms),
            "adjectives": list(self.adjectives),
            "size": self.size,
            "action": action,
        }


class ObjectStore:
    """
    Object registry with containment.

    Unknown identities are lookup misses: reads return None/False/[] and
    writes are ignored.
    """

    def __init__(self):
        self._records: Dict[str, ObjectRecord] = {}
        self._children: Dict[Optional[str], List[str]] = {}

    def __contains__(self, obj_id: str) -> bool:
        return obj_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    # -----------------------------
    # Records
    # -----------------------------

    def define(self, obj_id: str, parent: Optional[str] = None,
               flags: Optional[Set[str]] = None,
               properties: Optional[Dict[str, Any]] = None,
               **attrs: Any) -> ObjectRecord:
        """Create or replace the record for obj_id."""
        unknown = set(attrs) - set(FIXED_FIELDS)
        if unknown:
            raise TypeError(f"unknown object options for {obj_id}: {sorted(unknown)}")
        if parent is not None:
            self._check_cycle(obj_id, parent)

        old = self._records.get(obj_id)
        if old is not None:
            self._detach(obj_id, old.parent)

        record = ObjectRecord(
            id=obj_id,
            parent=parent,
            flags=set(flags or ()),
            properties=dict(properties or {}),
            **attrs,
        )
        self._records[obj_id] = record
        self._attach(obj_id, parent)
        return record

    def get(self, obj_id: Optional[str]) -> Optional[ObjectRecord]:
        """The record for obj_id, or None."""
        if obj_id is None:
            return None
        return self._records.get(obj_id)

    def exists(self, obj_id: Optional[str]) -> bool:
        """True when obj_id has been defined."""
        return obj_id is not None and obj_id in self._records

    def ids(self) -> List[str]:
        """All identities in definition order."""
        return list(self._records)

    # -----------------------------
    # Containment
    # -----------------------------

    def parent(self, obj_id: str) -> Optional[str]:
        """Direct container of obj_id (LOC)."""
        record = self.get(obj_id)
        return record.parent if record else None

    def locate(self, obj_id: str, levels: int = 1) -> Optional[str]:
        """
        Walk up to `levels` containment steps.

        Stops early and returns the last reachable ancestor when the chain is
        shorter than requested.
        """
        if levels < 1:
            raise ValueError("levels must be >= 1")
        current = self.parent(obj_id)
        for _ in range(levels - 1):
            up = self.parent(current) if current is not None else None
            if up is None:
                break
            current = up
        return current

    def move(self, obj_id: str, new_parent: Optional[str]) -> None:
        """
        Reparent obj_id.

        Raises ContainmentCycle, leaving the store unchanged, when new_parent
        is obj_id or one of its descendants.
        """
        record = self.get(obj_id)
        if record is None:
            logger.debug("move of unknown object %s ignored", obj_id)
            return
        if new_parent is not None:
            self._check_cycle(obj_id, new_parent)
        self._detach(obj_id, record.parent)
        record.parent = new_parent
        self._attach(obj_id, new_parent)

    def remove(self, obj_id: str) -> None:
        """Detach obj_id from its container."""
        self.move(obj_id, None)

    def children(self, parent_id: Optional[str]) -> List[str]:
        """Objects whose parent is parent_id, in insertion order."""
        return list(self._children.get(parent_id, ()))

    def first(self, parent_id: Optional[str]) -> Optional[str]:
        """First child of parent_id (FIRST?)."""
        siblings = self._children.get(parent_id)
        return siblings[0] if siblings else None

    def next(self, obj_id: str) -> Optional[str]:
        """The sibling after obj_id, or None when it is last or uncontained."""
        parent_id = self.parent(obj_id)
        if parent_id is None:
            return None
        siblings = self._children.get(parent_id, [])
        idx = siblings.index(obj_id)
        return siblings[idx + 1] if idx + 1 < len(siblings) else None

    def in_(self, obj_id: str, container: Optional[str]) -> bool:
        """True when obj_id sits directly in container (IN?)."""
        return self.exists(obj_id) and self.parent(obj_id) == container

    def held(self, obj_id: str, holder: str) -> bool:
        """True when obj_id is anywhere inside holder."""
        seen = {obj_id}
        current = self.parent(obj_id)
        while current is not None and current not in seen:
            if current == holder:
                return True
            seen.add(current)
            current = self.parent(current)
        return False

    def visible(self, obj_id: str, location: Optional[str]) -> bool:
        """
        Scope test.

        True if obj_id sits directly in location, or inside a container that
        sits directly in location and is open or transparent.
        """
        container = self.parent(obj_id)
        if container is None:
            return False
        if container == location:
            return True
        if self.parent(container) == location:
            return self.has_flag(container, OPENBIT) or self.has_flag(container, TRANSBIT)
        return False

    # -----------------------------
    # Flags and properties
    # -----------------------------

    def has_flag(self, obj_id: str, flag: str) -> bool:
        """Test an attribute flag (FSET?)."""
        record = self.get(obj_id)
        return record is not None and flag in record.flags

    def set_flag(self, obj_id: str, flag: str) -> None:
        """Set an attribute flag (FSET)."""
        record = self.get(obj_id)
        if record is None:
            logger.debug("set_flag %s on unknown object %s ignored", flag, obj_id)
            return
        record.flags.add(flag)

    def clear_flag(self, obj_id: str, flag: str) -> None:
        """Clear an attribute flag (FCLEAR)."""
        record = self.get(obj_id)
        if record is not None:
            record.flags.discard(flag)

    def get_property(self, obj_id: str, key: str, default: Any = None) -> Any:
        """Read a fixed field or a property (GETP)."""
        record = self.get(obj_id)
        if record is None:
            return default
        if key in FIXED_FIELDS:
            value = getattr(record, key)
            return default if value is None else value
        return record.properties.get(key, default)

    def set_property(self, obj_id: str, key: str, value: Any) -> None:
        """Write a fixed field or a property (PUTP)."""
        record = self.get(obj_id)
        if record is None:
            logger.debug("set_property %s on unknown object %s ignored", key, obj_id)
            return
        if key in FIXED_FIELDS:
            setattr(record, key, value)
        else:
            record.properties[key] = value

    # -----------------------------
    # Internals
    # -----------------------------

    def _attach(self, obj_id: str, parent_id: Optional[str]) -> None:
        self._children.setdefault(parent_id, []).append(obj_id)

    def _detach(self, obj_id: str, parent_id: Optional[str]) -> None:
        siblings = self._children.get(parent_id)
        if siblings and obj_id in siblings:
            siblings.remove(obj_id)

    def _check_cycle(self, obj_id: str, new_parent: str) -> None:
        if new_parent == obj_id or self.held(new_parent, obj_id):
            raise ContainmentCycle(obj_id, new_parent)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize every record in definition order."""
        return {"objects": [r.to_dict() for r in self._records.values()]}
