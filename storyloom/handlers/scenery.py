from storyloom.entities import CLIMB, DRINK, KICK, PUNCH, READ, SWIM
from storyloom.handlers.base import GameHandler


class SceneryInteractionHandler(GameHandler):
    """climb/kick/punch/drink/swim/read answered from scenery response tables."""
    verbs = (CLIMB, DRINK, KICK, PUNCH, READ, SWIM)

    def handle(self, player, command):
        verb = command.verb
        name = command.first_direct_object or command.first_indirect_object
        if not name:
            return self.text(f'{verb}_what')

        location = player.current_location
        scenery = location.find_scenery(name)
        if scenery is not None:
            response = scenery.get_custom_response(verb) or scenery.get_response(verb)
            return response or self.text(f'{verb}_cant', name=scenery.name)

        result = self.resolver.resolve_object(name, player)
        if result["success"]:
            return self.text(f'{verb}_cant', name=result["entity"].name)
        return self.text(f'{verb}_not_present')
