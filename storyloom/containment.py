import logging

from storyloom.containers import Container, LocationContainer, PLACEMENT_PREPOSITIONS

logger = logging.getLogger(__name__)

ACCEPTANCE_MESSAGES = {
    'closed': 'put_container_closed',
    'full': 'put_container_full',
    'not_allowed': 'put_not_allowed',
}


# ==========================================
# TRAVERSAL
# ==========================================
def nested_contents(holder, container, seen=None):
    """All items held (directly or deeper) inside ``container`` under ``holder``."""
    seen = seen if seen is not None else {id(container)}
    found = []
    for item in holder.contained_items(container):
        if id(item) in seen:
            continue
        seen.add(id(item))
        found.append(item)
        if isinstance(item, Container):
            found.extend(nested_contents(holder, item, seen))
    return found


def holder_of(player, item):
    if player.holds(item):
        return player
    if player.current_location.holds(item):
        return player.current_location
    return None


def would_create_cycle(player, item, container):
    """True when ``container`` already sits (at any depth) inside ``item``."""
    if container is item:
        return True
    seen = set()
    current = container
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        holder = holder_of(player, current)
        if holder is None:
            return False
        parent = holder.get_container_for_item(current)
        if parent is item:
            return True
        current = parent
    return False


def transfer_item(item, source, destination):
    """
    Moves ``item`` from one holder to another. A container takes its
    contents along, keeping their containment relations.
    """
    carried = nested_contents(source, item) if isinstance(item, Container) else []
    relations = {c: source.get_container_for_item(c) for c in carried}
    source.remove_item(item)
    for child in carried:
        source.remove_item(child, release=False)
    destination.add_item(item)
    for child in carried:
        destination.add_item(child)
        destination.set_item_container(child, relations[child])
    return [item] + carried


# ==========================================
# PUT PROTOCOL
# ==========================================
def find_container(player, name):
    location = player.current_location
    for item in player.inventory:
        if isinstance(item, Container) and item.matches_name(name):
            return item
    for item in location.items:
        if isinstance(item, Container) and item.matches_name(name):
            return item
    return location.get_location_container(name)


def _find_anything(player, name):
    location = player.current_location
    return (player.get_inventory_item(name)
            or location.get_item_by_name(name)
            or location.find_scenery(name))


def _failure(reason, message):
    return {"event_type": "put", "outcome": "FAILURE", "reason": reason, "message": message}


def put_item_in_container(player, item_name, container_name, preposition, responses):
    """
    Places an item in or on a container. Every check runs before anything
    moves, so a failed attempt leaves inventory, location and containment
    exactly as they were.
    """
    location = player.current_location

    item = player.get_inventory_item(item_name) or location.get_item_by_name(item_name)
    if item is None:
        return _failure("item_not_present", responses.text('put_item_not_present', item=item_name))
    enclosing = holder_of(player, item).closed_container_around(item)
    if enclosing is not None:
        return _failure("item_enclosed", responses.text('put_item_enclosed', container=enclosing.name))

    container = find_container(player, container_name)
    if container is None:
        if _find_anything(player, container_name) is not None:
            return _failure("not_a_container",
                            responses.text('put_not_a_container', container=container_name))
        return _failure("container_not_found",
                        responses.text('put_container_not_found', container=container_name))
    if not isinstance(container, LocationContainer):
        enclosing = holder_of(player, container).closed_container_around(container)
        if enclosing is not None:
            return _failure("closed", responses.text('put_container_closed', container=enclosing.name))

    if would_create_cycle(player, item, container):
        return _failure("circular", responses.text('put_circular'))

    if not preposition or preposition not in PLACEMENT_PREPOSITIONS:
        return _failure("unsupported_preposition",
                        responses.text('put_unsupported_preposition', preposition=preposition or ''))
    if not container.accepts_preposition(preposition):
        return _failure("invalid_preposition",
                        responses.text('put_invalid_preposition',
                                       preposition=container.preferred_prepositions[0],
                                       container=container.name))

    item_holder = holder_of(player, item)
    reason = container.acceptance_failure(item)
    if reason == 'full' and item_holder.is_item_in_container(item, container):
        reason = None
    if reason:
        return _failure(reason, responses.text(ACCEPTANCE_MESSAGES[reason],
                                               container=container.name, item=item.name))

    # --- MOVE ---
    if isinstance(container, LocationContainer):
        destination = location
    else:
        destination = holder_of(player, container)

    item_holder.release_item(item)
    container.insert_item(item)
    if item_holder is not destination:
        transfer_item(item, item_holder, destination)
    destination.set_item_container(item, container)

    logger.debug("Put %s %s %s", item.name, preposition, container.name)
    return {
        "event_type": "put",
        "outcome": "SUCCESS",
        "item": item,
        "container": container,
        "message": responses.text('put_success', item=item.name, preposition=preposition,
                                  container=container.name),
    }
