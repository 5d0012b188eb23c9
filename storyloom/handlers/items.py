from storyloom.containers import Container
from storyloom.containment import put_item_in_container, transfer_item
from storyloom.entities import Item, SceneryObject, TAKE, EAT
from storyloom.handlers.base import GameHandler

ALL_WORDS = ('all', 'everything')


def _top_level(holder, items):
    """Items not riding inside a portable container that the same holder keeps."""
    result = []
    for item in items:
        container = holder.get_container_for_item(item)
        if isinstance(container, Item) and holder.holds(container):
            continue
        result.append(item)
    return result


def _join(results):
    if len(results) == 1:
        return results[0][1]
    return "\n".join(f"{name}: {message}" for name, message in results)


# ==========================================
# TAKE
# ==========================================
class TakeHandler(GameHandler):
    verbs = ('take',)

    def handle(self, player, command):
        location = player.current_location
        if not command.direct_objects:
            items = [i for i in location.items if location.is_reachable(i)]
            if len(items) == 1:
                return self._take(player, items[0])
            if items:
                return self.text('take_need_to_specify')
            return self.text('take_nothing_here')

        if command.first_direct_object in ALL_WORDS:
            return self._take_all(player)

        results = [(name, self._take_named(player, name, command)) for name in command.direct_objects]
        return _join(results)

    def _take(self, player, item):
        transfer_item(item, player.current_location, player)
        return self.text('take_success')

    def _take_all(self, player):
        location = player.current_location
        reachable = [i for i in location.items if location.is_reachable(i)]
        candidates = _top_level(location, reachable)
        if not candidates:
            return self.text('take_nothing_here')
        for item in candidates:
            if location.holds(item):
                transfer_item(item, location, player)
        return self.text('take_all_success')

    def _take_named(self, player, name, command):
        location = player.current_location
        result = self.resolve(name, 'take', player)
        if result["success"]:
            entity = result["entity"]
            if isinstance(entity, Item):
                if player.holds(entity):
                    # "take coin from bag" while carrying both
                    if command.preposition == 'from' and player.is_item_in_container(entity):
                        player.release_item(entity)
                        return self.text('take_success')
                    return self.text('take_already_have')
                if location.holds(entity):
                    container = location.closed_container_around(entity)
                    if container is not None:
                        return self.text('take_container_closed', container=container.name)
                    return self._take(player, entity)

        scenery = result["entity"] if isinstance(result["entity"], SceneryObject) else location.find_scenery(name)
        if scenery is not None:
            response = scenery.get_response(TAKE)
            if response:
                return response
        return self.text('item_not_present', name=name)


# ==========================================
# DROP
# ==========================================
class DropHandler(GameHandler):
    verbs = ('drop',)

    def handle(self, player, command):
        if not command.direct_objects:
            if len(player.inventory) == 1:
                return self._drop(player, player.inventory[0])
            if player.inventory:
                return self.text('drop_need_to_specify')
            return self.text('drop_nothing_carried')

        if command.first_direct_object in ALL_WORDS:
            if not player.inventory:
                return self.text('drop_nothing_carried')
            for item in _top_level(player, player.inventory):
                if player.holds(item):
                    transfer_item(item, player, player.current_location)
            return self.text('drop_all_success')

        results = []
        for name in command.direct_objects:
            result = self.resolve(name, 'drop', player)
            entity = result["entity"]
            if result["success"] and isinstance(entity, Item) and player.holds(entity):
                results.append((name, self._drop(player, entity)))
            else:
                results.append((name, self.text('drop_dont_have', name=name)))
        return _join(results)

    def _drop(self, player, item):
        transfer_item(item, player, player.current_location)
        return self.text('drop_success')


# ==========================================
# PUT
# ==========================================
class PutHandler(GameHandler):
    verbs = ('put',)

    def handle(self, player, command):
        if not command.direct_objects:
            return self.text('put_what')
        first = command.first_direct_object
        if not command.preposition:
            return self.text('put_missing_preposition', item=first)
        if not command.indirect_objects:
            return self.text('put_where', item=first)

        container_name = command.first_indirect_object
        results = []
        for name in command.direct_objects:
            if self.context.is_pronoun(name):
                implied = self.resolver.resolve_implied_object('put', player)
                if implied["success"]:
                    name = implied["entity"].name
            outcome = put_item_in_container(player, name, container_name, command.preposition, self.responses)
            results.append((name, outcome["message"]))
        return _join(results)


# ==========================================
# INVENTORY / EAT
# ==========================================
class InventoryHandler(GameHandler):
    verbs = ('inventory',)

    def handle(self, player, command):
        if not player.inventory:
            return self.text('inventory_empty')
        return self.text('inventory', items=player.formatted_inventory())


class EatHandler(GameHandler):
    verbs = ('eat',)

    def handle(self, player, command):
        location = player.current_location
        if not command.direct_objects:
            implied = self.resolver.resolve_implied_object('eat', player)
            if implied["success"] and isinstance(implied["entity"], Item):
                return self._eat(player, implied["entity"])
            if any(i.edible for i in player.inventory):
                return self.text('eat_what')
            return self.text('eat_nothing')

        name = command.first_direct_object
        item = player.get_inventory_item(name)
        if item is not None:
            return self._eat(player, item)
        if location.get_item_by_name(name) is not None:
            return self.text('eat_dont_have', name=name)
        scenery = location.find_scenery(name)
        if scenery is not None and scenery.get_response(EAT):
            return scenery.get_response(EAT)
        return self.text('eat_dont_have', name=name)

    def _eat(self, player, item):
        if not item.edible:
            return self.text('eat_not_edible')
        if isinstance(item, Container):
            # whatever was inside stays with the player
            for child in player.contained_items(item):
                player.containment.pop(child, None)
        player.remove_item(item)
        return self.text('eat_success')
