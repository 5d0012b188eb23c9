import logging

from storyloom.handlers.base import GameHandler
from storyloom.openables import Openable
from storyloom.player import GameState

logger = logging.getLogger(__name__)


class OpenableHandler(GameHandler):
    """
    Common flow for "open" and "unlock".

    Targets are searched by priority: openables carried, openables lying
    at the location, openable scenery, then the location itself. Several
    matches in the first non-empty group ask the player to be specific.
    """
    action = None
    prompt_state = None

    def handle(self, player, command):
        answer = " ".join(command.indirect_objects) if command.indirect_objects else None

        if not command.direct_objects:
            implied = self.resolver.resolve_implied_object(self.action, player)
            if implied["success"] and isinstance(implied["entity"], Openable):
                return self.attempt(player, implied["entity"], answer)
            return self.text(f'{self.action}_nothing')

        name = command.first_direct_object
        if self.context.is_pronoun(name):
            implied = self.resolver.resolve_implied_object(self.action, player)
            if implied["success"] and isinstance(implied["entity"], Openable):
                return self.attempt(player, implied["entity"], answer)

        matches = self.find_targets(player, name)
        if len(matches) > 1:
            return self.text(f'{self.action}_need_to_specify', name=name)
        if matches:
            return self.attempt(player, matches[0], answer)

        if self.resolver.resolve_object(name, player)["success"]:
            return self.text(f'{self.action}_cant', name=name)
        return self.text('item_not_present', name=name)

    def matches(self, openable, name):
        raise NotImplementedError

    def find_targets(self, player, name):
        location = player.current_location
        groups = (player.inventory, location.items, location.scenery)
        for group in groups:
            found = [o for o in group if isinstance(o, Openable) and self.matches(o, name)]
            if found:
                return found
        if isinstance(location, Openable) and self.matches(location, name):
            return [location]
        return []

    def try_target(self, openable, player, answer):
        raise NotImplementedError

    def attempt(self, player, openable, answer):
        result = self.try_target(openable, player, answer)
        prompt = (answer is None
                  and not result["success"]
                  and not openable.unlocked
                  and openable.requires_unlocking()
                  and openable.uses_code_based_unlocking())
        if prompt:
            player.pending_target = openable
            player.game_state = self.prompt_state
            logger.debug("Session %s waiting for a code for %s", player.session_id, openable.openable_name)
        return result["message"]


class OpenHandler(OpenableHandler):
    verbs = ('open',)
    action = 'open'
    prompt_state = GameState.WAITING_FOR_OPEN_CODE

    def matches(self, openable, name):
        return openable.matches_open_target(name)

    def try_target(self, openable, player, answer):
        return openable.try_open(player, answer, self.game_map)


class UnlockHandler(OpenableHandler):
    verbs = ('unlock',)
    action = 'unlock'
    prompt_state = GameState.WAITING_FOR_UNLOCK_CODE

    def matches(self, openable, name):
        return openable.matches_unlock_target(name)

    def try_target(self, openable, player, answer):
        return openable.try_unlock(player, answer, self.game_map)
