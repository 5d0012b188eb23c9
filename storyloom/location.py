from storyloom.containers import Holder, LocationContainer
from storyloom.entities import Nameable
from storyloom.openables import Openable

# Item visibility at a location
HIDDEN = 'hidden'
REVEALED = 'revealed'
NORMAL = 'normal'


class Location(Nameable, Holder):
    def __init__(self, name, long_description, short_description=None, aliases=None):
        Nameable.__init__(self, name, aliases)
        self._init_holder()
        self.long_description = long_description
        self.short_description = short_description or long_description
        self.connections = {}
        self.scenery = []
        self._location_containers = []
        # item -> [visibility, reveal text]
        self._entries = {}
        self.visited = False

    # --- DESCRIPTIONS ---
    def get_long_description(self):
        return self.long_description

    def get_short_description(self):
        return self.short_description

    def item_description(self, item):
        return self.get_revealed_location_description(item) or item.location_description

    # --- CONNECTIONS ---
    def connect(self, direction, location):
        self.connections[direction] = location

    def disconnect(self, direction):
        self.connections.pop(direction, None)

    def get_connection(self, direction):
        return self.connections.get(direction)

    def available_directions(self):
        return sorted(self.connections)

    # --- ITEMS ---
    @property
    def items(self):
        return [item for item, entry in self._entries.items() if entry[0] != HIDDEN]

    def holds(self, item):
        entry = self._entries.get(item)
        return entry is not None and entry[0] != HIDDEN

    def add_item(self, item):
        self._entries[item] = [NORMAL, None]

    def remove_item(self, item, release=True):
        """Removes a visible item; any revealed description goes with it."""
        if not self.holds(item):
            return False
        self._drop_relation(item, release)
        del self._entries[item]
        return True

    def get_item_by_name(self, name):
        for item in self.items:
            if item.matches_name(name):
                return item
        return None

    def clear_items(self):
        self._entries = {}
        self.clear_containment()
        for container in self._location_containers:
            container.clear_contents()

    # --- HIDDEN ITEMS ---
    def add_hidden_item(self, item, revealed_description):
        self._entries[item] = [HIDDEN, revealed_description]

    def reveal_item(self, item):
        entry = self._entries.get(item)
        if entry is None or entry[0] != HIDDEN:
            return False
        entry[0] = REVEALED
        return True

    def reveal_hidden_item_by_name(self, name):
        item = self.get_hidden_item_by_name(name)
        return item is not None and self.reveal_item(item)

    def is_item_hidden(self, item):
        entry = self._entries.get(item)
        return entry is not None and entry[0] == HIDDEN

    def is_item_hidden_by_name(self, name):
        return self.get_hidden_item_by_name(name) is not None

    def get_hidden_item_by_name(self, name):
        for item in self.hidden_items():
            if item.matches_name(name):
                return item
        return None

    def hidden_items(self):
        return [item for item, entry in self._entries.items() if entry[0] == HIDDEN]

    def get_revealed_location_description(self, item):
        entry = self._entries.get(item)
        if entry is not None and entry[0] == REVEALED:
            return entry[1]
        return None

    # --- SCENERY ---
    def add_scenery(self, scenery):
        self.scenery.append(scenery)
        if scenery.is_container:
            self._location_containers.append(LocationContainer(scenery))

    def find_scenery(self, name):
        for obj in self.scenery:
            if obj.matches_name(name):
                return obj
        return None

    @property
    def location_containers(self):
        return list(self._location_containers)

    def get_location_container(self, scenery_or_name):
        for container in self._location_containers:
            if container.scenery is scenery_or_name:
                return container
            if isinstance(scenery_or_name, str) and container.matches_name(scenery_or_name):
                return container
        return None


class OpenableLocation(Location, Openable):
    """
    A location that is itself locked or shut (a shed, a vault). The
    player refers to it through its target names ("door", "shed").
    """
    def __init__(self, name, long_description, short_description=None, aliases=None,
                 lock=None, targets=None, messages=None, opened=False, descriptions=None):
        Location.__init__(self, name, long_description, short_description, aliases)
        Openable.__init__(self, lock, targets, messages, opened)
        self.descriptions = dict(descriptions or {})

    def get_long_description(self):
        if self.opened and 'open_long' in self.descriptions:
            return self.descriptions['open_long']
        if self.unlocked and self.requires_unlocking() and 'unlocked_long' in self.descriptions:
            return self.descriptions['unlocked_long']
        return self.long_description

    def get_short_description(self):
        if self.opened and 'open_short' in self.descriptions:
            return self.descriptions['open_short']
        if self.unlocked and self.requires_unlocking() and 'unlocked_short' in self.descriptions:
            return self.descriptions['unlocked_short']
        return self.short_description
