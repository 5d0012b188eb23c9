import logging

import yaml

from storyloom.containers import (ItemContainer, OpenableItem, OpenableItemContainer,
                                  OpenableScenery)
from storyloom.entities import Item, SceneryObject
from storyloom.errors import WorldDefinitionError
from storyloom.hints import HintPhase
from storyloom.location import Location, OpenableLocation
from storyloom.openables import CodeLock, KeyLock
from storyloom.world import GameMap

logger = logging.getLogger(__name__)


def load_world(path):
    """Reads a YAML world file and builds the GameMap it describes."""
    with open(path, "r") as f:
        data = yaml.safe_load(f)
    game_map = build_world(data)
    logger.info("Loaded world '%s' from %s (%d locations)", game_map.title, path, len(game_map.locations))
    return game_map


def build_world(data):
    if not isinstance(data, dict):
        raise WorldDefinitionError("A world file must be a mapping")
    locations = data.get('locations') or []
    if not locations:
        raise WorldDefinitionError("A world needs at least one location")

    game_map = GameMap(data.get('title', 'Untitled'))
    game_map.intro = dict(data.get('intro') or {})
    game_map.response_overrides = dict(data.get('responses') or {})

    # 1. Locations first so exits and effects can refer to any of them
    for spec in locations:
        game_map.add_location(_build_location(spec))

    start = data.get('start')
    if start:
        if start not in game_map.locations:
            raise WorldDefinitionError(f"Start location '{start}' does not exist")
        game_map.starting_location = game_map.locations[start]

    # 2. Exits, scenery, items, effects
    for spec in locations:
        location = game_map.locations[spec['id']]
        for direction, target in (spec.get('exits') or {}).items():
            game_map.connect(location, direction, target)
        for scenery_spec in spec.get('scenery') or []:
            scenery = _build_scenery(scenery_spec)
            location.add_scenery(scenery)
            _attach_effects(game_map, scenery, scenery_spec.get('openable'), location)
            container = location.get_location_container(scenery)
            for child in scenery_spec.get('contents') or []:
                if container is None:
                    raise WorldDefinitionError(f"Scenery '{scenery.name}' holds items but is not a container")
                _place(game_map, _build_item(child), location, child, container)
        for item_spec in spec.get('items') or []:
            _place(game_map, _build_item(item_spec), location, item_spec)
        for hidden_spec in spec.get('hidden_items') or []:
            if 'item' not in hidden_spec or 'reveal' not in hidden_spec:
                raise WorldDefinitionError(f"Hidden items in '{location.name}' need 'item' and 'reveal'")
            game_map.place_hidden_item(_build_item(hidden_spec['item']), location, hidden_spec['reveal'])
        if isinstance(location, OpenableLocation):
            _attach_effects(game_map, location, spec.get('openable'), location)

    game_map.hint_phases = [
        HintPhase(h.get('key', f"phase-{i}"), h.get('hints') or [], h.get('complete_when'))
        for i, h in enumerate(data.get('hints') or [])
    ]
    return game_map


def _place(game_map, item, location, spec, container=None):
    if isinstance(spec, str):
        spec = {'name': spec}
    if container is None:
        game_map.place_item(item, location)
    else:
        game_map.place_in_container(item, container, location)
    _attach_effects(game_map, item, spec.get('openable'), location)
    for child in spec.get('contents') or []:
        if not hasattr(item, 'insert_item'):
            raise WorldDefinitionError(f"'{item.name}' holds items but is not a container")
        _place(game_map, _build_item(child), location, child, item)


# ==========================================
# BUILDERS
# ==========================================
def _build_lock(spec):
    if 'code' in spec:
        return CodeLock(spec['code'])
    if 'key' in spec:
        return KeyLock(spec['key'])
    return None


def _openable_kwargs(spec):
    return {
        'lock': _build_lock(spec),
        'targets': spec.get('targets'),
        'messages': spec.get('messages'),
        'opened': spec.get('open', False),
    }


def _build_location(spec):
    if 'id' not in spec:
        raise WorldDefinitionError("Every location needs an 'id'")
    description = spec.get('description', "")
    args = (spec['id'], description, spec.get('short_description'), spec.get('aliases'))
    openable = spec.get('openable')
    if openable is not None:
        return OpenableLocation(*args, descriptions=openable.get('descriptions'), **_openable_kwargs(openable))
    return Location(*args)


def _build_item(spec):
    if isinstance(spec, str):
        spec = {'name': spec}
    if 'name' not in spec:
        raise WorldDefinitionError(f"Item without a name: {spec!r}")
    kwargs = {
        'aliases': spec.get('aliases'),
        'inventory_description': spec.get('inventory_description'),
        'location_description': spec.get('location_description'),
        'detailed_description': spec.get('detail'),
        'edible': spec.get('edible', False),
    }
    container = spec.get('container')
    openable = spec.get('openable')
    if container is not None:
        container = container if isinstance(container, dict) else {}
        kwargs.update(capacity=container.get('capacity', 0),
                      allowed_item_names=container.get('allowed'),
                      prepositions=container.get('prepositions'))
        if openable is not None:
            return OpenableItemContainer(spec['name'], **_openable_kwargs(openable), **kwargs)
        return ItemContainer(spec['name'], **kwargs)
    if openable is not None:
        return OpenableItem(spec['name'], **_openable_kwargs(openable), **kwargs)
    return Item(spec['name'], **kwargs)


def _build_scenery(spec):
    if 'name' not in spec:
        raise WorldDefinitionError(f"Scenery without a name: {spec!r}")
    kwargs = {
        'aliases': spec.get('aliases'),
        'responses': spec.get('responses'),
        'custom_responses': spec.get('custom_responses'),
    }
    container = spec.get('container')
    if container is not None:
        container = container if isinstance(container, dict) else {}
        kwargs.update(is_container=True,
                      allowed_item_names=container.get('allowed'),
                      prepositions=container.get('prepositions'),
                      capacity=container.get('capacity', 0))
    openable = spec.get('openable')
    if openable is not None:
        return OpenableScenery(spec['name'], **_openable_kwargs(openable), **kwargs)
    return SceneryObject(spec['name'], **kwargs)


# ==========================================
# EFFECTS
# ==========================================
def _attach_effects(game_map, openable, spec, location):
    """Connect effects default to opening a passage from ``location``, where the openable sits."""
    if not spec:
        return
    for hook, effects in (('on_unlock', openable.on_unlock_effects), ('on_open', openable.on_open_effects)):
        for effect_spec in spec.get(hook) or []:
            effects.append(_build_effect(game_map, openable, effect_spec, location))


def _build_effect(game_map, owner, spec, location):
    if 'connect' in spec:
        connect = spec['connect']
        origin = connect.get('from', location.name)
        if origin not in game_map.locations or connect.get('to') not in game_map.locations:
            raise WorldDefinitionError(f"Bad connect effect on '{owner.name}': {connect!r}")
        if not connect.get('direction'):
            raise WorldDefinitionError(f"Connect effect on '{owner.name}' needs a direction")
        return lambda gm: gm.open_passage(origin, connect['direction'], connect['to'])
    if 'reveal' in spec:
        reveal = spec['reveal']
        if reveal.get('location') not in game_map.locations:
            raise WorldDefinitionError(f"Bad reveal effect on '{owner.name}': {reveal!r}")
        return lambda gm: gm.get_location(reveal['location']).reveal_hidden_item_by_name(reveal['item'])
    raise WorldDefinitionError(f"Unknown effect on '{owner.name}': {spec!r}")
