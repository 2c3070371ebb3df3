"""Type hierarchy - "is-a" relation between storage, semantic and entity type tags.

Tags are plain strings ("type/Float", "type/Latitude"). Each tag lists its direct
parents; a tag may have several (City is both a Category and Text), so the
hierarchy is a DAG rooted at ROOT_TYPE.
"""
from typing import Dict, Iterable, List, Optional, Set, Tuple

ROOT_TYPE = 'type/*'

# tag -> direct parents
TYPE_PARENTS: Dict[str, Tuple[str, ...]] = {
    ROOT_TYPE: (),

    # Numeric storage types
    'type/Number': (ROOT_TYPE,),
    'type/Integer': ('type/Number',),
    'type/BigInteger': ('type/Integer',),
    'type/Float': ('type/Number',),
    'type/Decimal': ('type/Float',),

    # Text storage types
    'type/Text': (ROOT_TYPE,),
    'type/UUID': ('type/Text',),
    'type/Description': ('type/Text',),
    'type/Email': ('type/Text',),

    # Temporal storage types
    'type/DateTime': (ROOT_TYPE,),
    'type/Date': ('type/DateTime',),
    'type/Time': ('type/DateTime',),
    'type/UNIXTimestamp': ('type/DateTime', 'type/Integer'),
    'type/UNIXTimestampSeconds': ('type/UNIXTimestamp',),
    'type/UNIXTimestampMilliseconds': ('type/UNIXTimestamp',),

    # Other storage types
    'type/Boolean': (ROOT_TYPE,),
    'type/Collection': (ROOT_TYPE,),
    'type/Dictionary': ('type/Collection',),
    'type/Array': ('type/Collection',),

    # Semantic types
    'type/Special': (ROOT_TYPE,),
    'type/PK': ('type/Special',),
    'type/FK': ('type/Special',),
    'type/Category': ('type/Special',),
    'type/Source': ('type/Category',),
    'type/Address': (ROOT_TYPE,),
    'type/City': ('type/Address', 'type/Category', 'type/Text'),
    'type/State': ('type/Address', 'type/Category', 'type/Text'),
    'type/Country': ('type/Address', 'type/Category', 'type/Text'),
    'type/ZipCode': ('type/Address', 'type/Text'),
    'type/Name': ('type/Category', 'type/Text'),
    'type/URL': ('type/Text',),
    'type/ImageURL': ('type/URL',),
    'type/AvatarURL': ('type/ImageURL',),
    'type/Coordinate': ('type/Float',),
    'type/Latitude': ('type/Coordinate',),
    'type/Longitude': ('type/Coordinate',),
    'type/Currency': ('type/Float',),
    'type/Income': ('type/Currency',),
    'type/Discount': ('type/Currency',),
    'type/Price': ('type/Currency',),
    'type/Cost': ('type/Currency',),
    'type/Quantity': ('type/Integer',),
    'type/Score': ('type/Number',),
    'type/Duration': ('type/Number',),
    'type/CreationTimestamp': ('type/DateTime',),
    'type/JoinTimestamp': ('type/DateTime',),

    # Entity kinds (tables)
    'type/GenericTable': (ROOT_TYPE,),
    'type/TransactionTable': ('type/GenericTable',),
    'type/ProductTable': ('type/GenericTable',),
    'type/UserTable': ('type/GenericTable',),
    'type/EventTable': ('type/GenericTable',),
    'type/GoogleAnalyticsTable': ('type/GenericTable',),
}


class TypeHierarchy:
    """Read-only view over a parent map with subtype queries."""

    def __init__(self, parents: Dict[str, Iterable[str]], root: str = ROOT_TYPE):
        self.root = root
        self._parents: Dict[str, Tuple[str, ...]] = {
            tag: tuple(ps) for tag, ps in parents.items()
        }

    def __contains__(self, tag: str) -> bool:
        return self.is_registered(tag)

    def __len__(self) -> int:
        return len(self._parents)

    @property
    def tags(self) -> List[str]:
        return sorted(self._parents)

    def parents(self, tag: str) -> Tuple[str, ...]:
        return self._parents.get(tag, ())

    def is_registered(self, tag: Optional[str]) -> bool:
        return tag in self._parents

    def ancestors(self, tag: str) -> Set[str]:
        """All transitive parents of `tag` (not including `tag` itself)."""
        seen: Set[str] = set()
        stack = list(self.parents(tag))
        while stack:
            parent = stack.pop()
            if parent in seen:
                continue
            seen.add(parent)
            stack.extend(self.parents(parent))
        return seen

    def is_subtype_or_equal(self, tag: str, ancestor: str) -> bool:
        """
        True if `tag` is `ancestor` or descends from it.

        Unregistered tags have no parents, so they only satisfy themselves.
        """
        if tag == ancestor:
            return True
        return ancestor in self.ancestors(tag)

    def validate(self) -> List[str]:
        """
        Check the parent map is a rooted DAG.

        Returns a list of violations (empty when sound):
        - a parent that is not itself registered
        - a cycle
        - a registered tag that does not reach the root
        """
        violations = []
        if self.root not in self._parents:
            violations.append(f"Root type {self.root} is not registered")

        for tag, parents in self._parents.items():
            for parent in parents:
                if parent not in self._parents:
                    violations.append(f"{tag} has unregistered parent {parent}")

        for cycle in self._find_cycles():
            violations.append(f"Cycle in type hierarchy: {' -> '.join(cycle)}")

        for tag in self._parents:
            if tag != self.root and self.root not in self.ancestors(tag):
                violations.append(f"{tag} does not descend from {self.root}")

        return violations

    def _find_cycles(self) -> List[List[str]]:
        # Iterative DFS with white/grey/black colouring
        WHITE, GREY, BLACK = 0, 1, 2
        colour = {tag: WHITE for tag in self._parents}
        cycles = []

        for start in sorted(self._parents):
            if colour[start] != WHITE:
                continue
            path = [start]
            stack = [iter(self.parents(start))]
            colour[start] = GREY
            while stack:
                parent = next(stack[-1], None)
                if parent is None:
                    colour[path.pop()] = BLACK
                    stack.pop()
                    continue
                if parent not in colour:
                    continue
                if colour[parent] == GREY:
                    cycles.append(path[path.index(parent):] + [parent])
                elif colour[parent] == WHITE:
                    colour[parent] = GREY
                    path.append(parent)
                    stack.append(iter(self.parents(parent)))
        return cycles


# Process-wide default hierarchy
TYPES = TypeHierarchy(TYPE_PARENTS)
