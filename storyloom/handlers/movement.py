import logging

from storyloom.formatting import describe_location
from storyloom.handlers.base import GameHandler
from storyloom.vocabulary import DIRECTIONS

logger = logging.getLogger(__name__)

CANONICAL_DIRECTIONS = set(DIRECTIONS.values())


class MovementHandler(GameHandler):
    verbs = ('go',)

    def handle(self, player, command):
        direction = command.first_direct_object
        if not direction:
            return self.text('go_where')

        current = player.current_location
        if direction not in current.connections and direction not in CANONICAL_DIRECTIONS:
            return self.text('direction_not_understood', direction=direction)

        destination = current.get_connection(direction)
        if destination is None:
            return self.text('cant_go_that_way')

        first_visit = not destination.visited
        destination.visited = True
        player.current_location = destination
        self.context.update_location(player.session_id, destination)
        logger.debug("Session %s moved %s to %s", player.session_id, direction, destination.name)
        return describe_location(destination, long=first_visit)
