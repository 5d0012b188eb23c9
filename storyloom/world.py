import logging

from storyloom.containers import Container
from storyloom.errors import WorldDefinitionError
from storyloom.openables import Openable
from storyloom.vocabulary import OPPOSITE_DIRECTIONS

logger = logging.getLogger(__name__)

VISIBLE = 'visible'
HIDDEN = 'hidden'
CONTAINED = 'contained'


class GameMap:
    """
    The world graph: locations, their connections and where every item
    starts out. Everything placed through the map is remembered so
    ``reset_map`` can put the world back the way it was built.
    """
    def __init__(self, title="Untitled"):
        self.title = title
        self.locations = {}
        self.starting_location = None
        self.intro = {}
        self.hint_phases = []
        self.response_overrides = {}
        self._connections = []
        self._placements = []

    # ==========================================
    # BUILDING
    # ==========================================
    def add_location(self, location, start=False):
        if location.name in self.locations:
            raise WorldDefinitionError(f"Duplicate location '{location.name}'")
        self.locations[location.name] = location
        if start or self.starting_location is None:
            self.starting_location = location
        return location

    def get_location(self, name):
        return self.locations.get(name)

    def _require(self, location):
        if isinstance(location, str):
            found = self.locations.get(location)
            if found is None:
                raise WorldDefinitionError(f"Unknown location '{location}'")
            return found
        return location

    def connect(self, origin, direction, target, both_ways=True):
        origin, target = self._require(origin), self._require(target)
        if direction not in OPPOSITE_DIRECTIONS:
            raise WorldDefinitionError(f"Unknown direction '{direction}' from '{origin.name}'")
        self._connections.append((origin, direction, target))
        origin.connect(direction, target)
        if both_ways:
            back = OPPOSITE_DIRECTIONS[direction]
            if target.get_connection(back) is None:
                self._connections.append((target, back, origin))
                target.connect(back, origin)

    def open_passage(self, origin, direction, target):
        """Connects two locations during play. ``reset_map`` takes it away again."""
        origin, target = self._require(origin), self._require(target)
        origin.connect(direction, target)
        back = OPPOSITE_DIRECTIONS.get(direction)
        if back and target.get_connection(back) is None:
            target.connect(back, origin)
        logger.debug("Passage opened %s from %s to %s", direction, origin.name, target.name)

    def place_item(self, item, location):
        location = self._require(location)
        self._placements.append((VISIBLE, item, location, None))
        location.add_item(item)

    def place_hidden_item(self, item, location, revealed_description):
        location = self._require(location)
        self._placements.append((HIDDEN, item, location, revealed_description))
        location.add_hidden_item(item, revealed_description)

    def place_in_container(self, item, container, location):
        """Starts ``item`` inside ``container``; both live at ``location``."""
        location = self._require(location)
        if not isinstance(container, Container):
            raise WorldDefinitionError(f"'{getattr(container, 'name', container)}' is not a container")
        self._placements.append((CONTAINED, item, location, container))
        self._apply_contained(item, location, container)

    def _apply_contained(self, item, location, container):
        location.add_item(item)
        if container.allowed_item_names and item.name.lower() not in container.allowed_item_names:
            raise WorldDefinitionError(f"The {container.name} cannot hold the {item.name}")
        container.insert_item(item, check=False)
        location.set_item_container(item, container)

    # ==========================================
    # QUERIES
    # ==========================================
    def all_items(self):
        return [placement[1] for placement in self._placements]

    def openables(self):
        found = [loc for loc in self.locations.values() if isinstance(loc, Openable)]
        for location in self.locations.values():
            found.extend(s for s in location.scenery if isinstance(s, Openable))
        found.extend(i for i in self.all_items() if isinstance(i, Openable))
        return found

    def find_openable(self, name):
        for openable in self.openables():
            if openable.name == name or openable.matches_open_target(name):
                return openable
        return None

    # ==========================================
    # RESET
    # ==========================================
    def reset_map(self):
        for location in self.locations.values():
            location.clear_items()
            location.connections = {}
            location.visited = False
        for openable in self.openables():
            openable.reset_openable()
        for item in self.all_items():
            if isinstance(item, Container):
                item.clear_contents()

        for origin, direction, target in self._connections:
            origin.connect(direction, target)
        for mode, item, location, extra in self._placements:
            if mode == VISIBLE:
                location.add_item(item)
            elif mode == HIDDEN:
                location.add_hidden_item(item, extra)
            else:
                self._apply_contained(item, location, extra)
        logger.info("World '%s' reset to its initial state", self.title)
