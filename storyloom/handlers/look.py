from storyloom.containers import Container
from storyloom.entities import Item, SceneryObject, LOOK
from storyloom.formatting import describe_location
from storyloom.handlers.base import GameHandler
from storyloom.location import Location


class LookHandler(GameHandler):
    verbs = ('look',)

    def handle(self, player, command):
        if command.preposition == 'around' and not command.direct_objects and not command.indirect_objects:
            return describe_location(player.current_location)

        name = command.first_direct_object or command.first_indirect_object
        if not name:
            return describe_location(player.current_location)

        result = self.resolve(name, 'look', player)
        entity = result["entity"]
        if not result["success"]:
            return self.text('look_not_present', name=name)

        if isinstance(entity, Item):
            description = entity.detailed_description
            if isinstance(entity, Container):
                description += "\n" + entity.state_description()
            return description

        if isinstance(entity, SceneryObject):
            response = entity.get_response(LOOK)
            container = player.current_location.get_location_container(entity)
            if container is not None and container.current_count and not container.is_closed():
                preposition = container.preferred_prepositions[0].replace('onto', 'on').replace('into', 'in')
                listing = f"{preposition.capitalize()} the {entity.name}: {', '.join(container.inserted_item_names())}."
                return f"{response}\n{listing}" if response else listing
            return response or self.text('look_nothing_special', name=name)

        if isinstance(entity, Location):
            return entity.get_long_description()

        return self.text('look_not_present', name=name)
