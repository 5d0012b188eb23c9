from storyloom.entities import Item, SceneryObject
from storyloom.openables import Openable

# Placement semantics
INVENTORY = 'inventory'
LOCATION = 'location'

PLACEMENT_PREPOSITIONS = ('in', 'into', 'on', 'onto')


class Container:
    """
    The capability of holding other items.

    Membership is recorded by lower-cased item name, so two items sharing a
    name inside one container cannot be told apart.
    """
    placement = INVENTORY
    default_prepositions = ('in', 'into')

    def __init__(self, capacity=0, allowed_item_names=None, prepositions=None):
        self.capacity = capacity or 0
        self.allowed_item_names = {n.lower() for n in (allowed_item_names or [])}
        self.preferred_prepositions = [p.lower() for p in (prepositions or self.default_prepositions)]
        self._contents = []

    def is_closed(self):
        return False

    def acceptance_failure(self, item):
        """Returns 'closed', 'full' or 'not_allowed', or None if the item fits."""
        if self.is_closed(): return 'closed'
        if self.is_full(): return 'full'
        if self.allowed_item_names and item.name.lower() not in self.allowed_item_names:
            return 'not_allowed'
        return None

    def can_accept(self, item):
        return self.acceptance_failure(item) is None

    def insert_item(self, item, check=True):
        """``check=False`` skips the acceptance rules, for contents a world starts with."""
        if check and not self.can_accept(item):
            return False
        self._contents.append(item.name.lower())
        return True

    def remove_item(self, item):
        name = _name_of(item)
        if name in self._contents:
            self._contents.remove(name)
            return True
        return False

    def contains_item(self, item):
        return _name_of(item) in self._contents

    def inserted_item_names(self):
        return list(self._contents)

    def clear_contents(self):
        self._contents = []

    @property
    def current_count(self):
        return len(self._contents)

    def is_full(self):
        return self.capacity > 0 and self.current_count >= self.capacity

    def accepts_preposition(self, preposition):
        return bool(preposition) and preposition.lower() in self.preferred_prepositions

    def state_description(self):
        if self.is_closed():
            return f"The {self.name} is closed."
        if not self._contents:
            return f"The {self.name} is empty."
        return f"The {self.name} holds: {', '.join(self._contents)}."


def _name_of(item):
    return item.lower() if isinstance(item, str) else item.name.lower()


class Holder:
    """
    Something that keeps items (a player's inventory, a location) and
    remembers which container each held item sits in.
    Subclasses provide ``holds``, ``add_item`` and ``remove_item``.
    """
    def _init_holder(self):
        self.containment = {}

    def set_item_container(self, item, container):
        if not self.holds(item):
            return False
        self.containment[item] = container
        return True

    def release_item(self, item):
        """Takes the item out of its container, if any. Returns that container."""
        container = self.containment.pop(item, None)
        if container is not None:
            container.remove_item(item)
        return container

    def _drop_relation(self, item, release):
        if release:
            self.release_item(item)
        else:
            self.containment.pop(item, None)

    def is_item_in_container(self, item, container=None):
        held_by = self.containment.get(item)
        if held_by is None:
            return False
        return container is None or held_by is container

    def get_container_for_item(self, item):
        return self.containment.get(item)

    def contained_items(self, container):
        return [i for i, c in self.containment.items() if c is container]

    def closed_container_around(self, item):
        """The closed container ``item`` is shut inside, at any depth, or None."""
        seen = set()
        container = self.containment.get(item)
        while container is not None and id(container) not in seen:
            seen.add(id(container))
            if container.is_closed():
                return container
            if not (isinstance(container, Item) and self.holds(container)):
                return None
            container = self.containment.get(container)
        return None

    def is_reachable(self, item):
        return self.closed_container_around(item) is None

    def clear_containment(self):
        self.containment = {}


# ==========================================
# CONCRETE CONTAINERS
# ==========================================
class ItemContainer(Item, Container):
    """A portable container such as a bag or a jar."""
    def __init__(self, name, capacity=0, allowed_item_names=None, prepositions=None, **item_kwargs):
        Item.__init__(self, name, **item_kwargs)
        Container.__init__(self, capacity, allowed_item_names, prepositions)


class OpenableItem(Item, Openable):
    def __init__(self, name, lock=None, targets=None, messages=None, opened=False, **item_kwargs):
        Item.__init__(self, name, **item_kwargs)
        Openable.__init__(self, lock, targets, messages, opened)


class OpenableItemContainer(ItemContainer, Openable):
    def __init__(self, name, lock=None, targets=None, messages=None, opened=False,
                 capacity=0, allowed_item_names=None, prepositions=None, **item_kwargs):
        ItemContainer.__init__(self, name, capacity, allowed_item_names, prepositions, **item_kwargs)
        Openable.__init__(self, lock, targets, messages, opened)

    def is_closed(self):
        return not self.opened


class OpenableScenery(SceneryObject, Openable):
    def __init__(self, name, lock=None, targets=None, messages=None, opened=False, **scenery_kwargs):
        SceneryObject.__init__(self, name, **scenery_kwargs)
        Openable.__init__(self, lock, targets, messages, opened)


class LocationContainer(Container):
    """Container view over a piece of scenery; its contents stay at the location."""
    placement = LOCATION
    default_prepositions = ('on', 'onto')

    def __init__(self, scenery):
        Container.__init__(self, scenery.capacity, scenery.allowed_item_names, scenery.prepositions)
        self.scenery = scenery

    @property
    def name(self):
        return self.scenery.name

    def matches_name(self, name):
        return self.scenery.matches_name(name)

    def is_closed(self):
        return isinstance(self.scenery, Openable) and not self.scenery.opened

    def __repr__(self):
        return f"<LocationContainer {self.scenery.name!r}>"
